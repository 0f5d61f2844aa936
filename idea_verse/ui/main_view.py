"""Main view UI components (camera controls, map, error banner)."""

import logging
import streamlit as st
from typing import TYPE_CHECKING

from idea_verse.core.controller import DragMode
from idea_verse.visualization.figure import IdeaMapFigureBuilder
from idea_verse.visualization.scene import SceneBuilder
from idea_verse.ui.state import AppState
from idea_verse.ui.styles import render_error, render_info
import config

if TYPE_CHECKING:
    from idea_verse.core.controller import InteractionController
    from idea_verse.core.idea_map import IdeaMap

logger = logging.getLogger(__name__)

ROTATE_STEP_PX = 40
PAN_STEP_PX = 80


def render_error_banner(idea_map: "IdeaMap") -> None:
    """Show store failures and UI errors until dismissed."""
    notice = AppState.pop_notice()
    if notice:
        st.toast(notice)

    message = idea_map.last_error or st.session_state.last_error
    if not message:
        return

    col1, col2 = st.columns([5, 1])
    with col1:
        render_error(message)
    with col2:
        if st.button("Dismiss", key="dismiss_error", use_container_width=True):
            idea_map.clear_error()
            AppState.clear_error()
            st.rerun()


def render_camera_controls(controller: "InteractionController") -> None:
    """Render rotate/pan/zoom buttons and the wheel slider."""
    rotate_cols = st.columns(8)
    buttons = [
        ("⟲", "Rotate left", lambda: controller.drag_by(-ROTATE_STEP_PX, 0, DragMode.ROTATE)),
        ("⟳", "Rotate right", lambda: controller.drag_by(ROTATE_STEP_PX, 0, DragMode.ROTATE)),
        ("⤒", "Tilt up", lambda: controller.drag_by(0, -ROTATE_STEP_PX, DragMode.ROTATE)),
        ("⤓", "Tilt down", lambda: controller.drag_by(0, ROTATE_STEP_PX, DragMode.ROTATE)),
        ("←", "Pan left", lambda: controller.drag_by(-PAN_STEP_PX, 0, DragMode.PAN)),
        ("→", "Pan right", lambda: controller.drag_by(PAN_STEP_PX, 0, DragMode.PAN)),
        ("↑", "Pan up", lambda: controller.drag_by(0, -PAN_STEP_PX, DragMode.PAN)),
        ("↓", "Pan down", lambda: controller.drag_by(0, PAN_STEP_PX, DragMode.PAN)),
    ]
    for col, (label, help_text, action) in zip(rotate_cols, buttons):
        with col:
            if st.button(label, help=help_text, key=f"cam_{help_text}", use_container_width=True):
                action()

    col1, col2, col3, col4 = st.columns([1, 1, 1, 3])
    with col1:
        if st.button("Zoom +", use_container_width=True):
            controller.zoom_in()
    with col2:
        if st.button("Zoom −", use_container_width=True):
            controller.zoom_out()
    with col3:
        if st.button("Fit", help="Reset rotation, pan and zoom", use_container_width=True):
            controller.fit_to_screen()
    with col4:
        st.slider(
            "Wheel",
            min_value=-500,
            max_value=500,
            value=0,
            step=50,
            key="wheel_delta",
            on_change=_apply_wheel,
            args=(controller,),
            help="Scroll-wheel zoom: positive zooms out, negative zooms in",
        )

    camera = controller.camera
    st.caption(
        f"pitch {camera.pitch:.0f}° · yaw {camera.yaw:.0f}° · "
        f"roll {camera.roll:.0f}° · zoom {camera.scale:.2f}×"
    )


def _apply_wheel(controller: "InteractionController") -> None:
    # One wheel event per slider move; snap back so the next move is relative
    controller.wheel(st.session_state.wheel_delta)
    st.session_state.wheel_delta = 0


def render_visualization(idea_map: "IdeaMap", controller: "InteractionController") -> None:
    """Render the idea map, animated when the float toggle is on."""
    if idea_map.graph.is_empty:
        render_info(
            "Your map is empty. Add an idea from the sidebar or load the sample set."
        )
        return

    run_every = config.ANIMATION_INTERVAL_SECONDS if AppState.is_animating() else None

    @st.fragment(run_every=run_every)
    def _map_fragment():
        animate = AppState.is_animating()
        if animate:
            controller.tick()
        _render_map(idea_map, controller, animate)

    _map_fragment()


def _render_map(idea_map: "IdeaMap", controller: "InteractionController", animate: bool) -> None:
    scene = SceneBuilder(width=config.PLOT_WIDTH, height=config.PLOT_HEIGHT).build(
        idea_map.graph,
        controller.camera,
        controller=controller,
        animate=animate,
    )
    builder = IdeaMapFigureBuilder(
        show_boxes=st.session_state.show_boxes,
        show_edges=st.session_state.show_edges,
        show_labels=st.session_state.show_labels,
    )
    fig = builder.build(scene, selected_id=st.session_state.selected_idea_id)

    selection = st.plotly_chart(
        fig,
        use_container_width=True,
        key="idea_map_plot",
        on_select="rerun",
        selection_mode="points",
    )

    idea_id = IdeaMapFigureBuilder.get_selected_id(selection)
    if idea_id and idea_id != st.session_state.selected_idea_id:
        logger.debug(f"Selected idea {idea_id} from map")
        AppState.set_selected_idea(idea_id)
        st.rerun()
