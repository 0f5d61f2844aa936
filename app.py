"""
Idea-Verse: Semantic Idea Map
Main Streamlit application.

Run with: streamlit run app.py
"""

import logging

import streamlit as st

from idea_verse.core.controller import InteractionController
from idea_verse.core.idea_map import IdeaMap
from idea_verse.store.base import get_store
from idea_verse.ui import AppState, init_session_state, inject_styles, render_header
from idea_verse.ui import details, docs, main_view, sidebar
import config

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Page Configuration
# -----------------------------------------------------------------------------

st.set_page_config(
    page_title="Idea-Verse",
    page_icon="✨",
    layout="wide",
    initial_sidebar_state="expanded"
)


# -----------------------------------------------------------------------------
# Data Loading - One IdeaMap per session
# -----------------------------------------------------------------------------

def get_idea_map(backend: str, owner_id: str) -> IdeaMap:
    """
    Get or create this session's IdeaMap for one owner.
    Kept in session state: edits and store errors belong to the session
    that made them.
    """
    idea_map = st.session_state.idea_map
    if idea_map is not None and (idea_map.store.name, idea_map.store.owner_id) == (backend, owner_id):
        return idea_map

    kwargs = {"owner_id": owner_id}
    if backend == "json":
        kwargs["path"] = config.IDEA_STORE_PATH
    store = get_store(backend, **kwargs)
    logger.info(f"Using '{store.name}' idea store for owner {owner_id}")
    idea_map = IdeaMap(store=store)
    st.session_state.idea_map = idea_map
    return idea_map


def get_controller(idea_map: IdeaMap) -> InteractionController:
    """Get or create this session's InteractionController."""
    controller = st.session_state.controller
    if controller is None or controller.idea_map is not idea_map:
        controller = InteractionController(idea_map=idea_map)
        st.session_state.controller = controller
    return controller


# -----------------------------------------------------------------------------
# Main App
# -----------------------------------------------------------------------------

def main():
    init_session_state()
    inject_styles()
    render_header()

    tab_explore, tab_methodology, tab_architecture = st.tabs([
        "🔭 Explore", "📚 Methodology", "🏗️ Architecture"
    ])

    with tab_explore:
        idea_map = get_idea_map(config.STORE_BACKEND, config.DEFAULT_OWNER_ID)
        if not idea_map.is_loaded:
            with st.spinner("Loading ideas..."):
                if not idea_map.refresh():
                    AppState.set_error(idea_map.last_error)

        controller = get_controller(idea_map)

        sidebar.render_sidebar(idea_map, controller)
        main_view.render_error_banner(idea_map)

        col_viz, col_details = st.columns([3, 2])

        with col_viz:
            st.markdown("### Idea Space")
            main_view.render_camera_controls(controller)
            main_view.render_visualization(idea_map, controller)

        with col_details:
            details.render_idea_details(idea_map, controller)

    with tab_methodology:
        docs.render_methodology_tab()

    with tab_architecture:
        docs.render_architecture_tab()


if __name__ == "__main__":
    main()
