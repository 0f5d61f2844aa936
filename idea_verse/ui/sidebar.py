"""Sidebar UI components for Idea-Verse."""

import logging
import streamlit as st
import pandas as pd
from typing import TYPE_CHECKING

from idea_verse.core.models import IdeaDraft
from idea_verse.store.base import IdeaStoreError
from idea_verse.store.seed import load_seed_ideas
from idea_verse.ui.state import AppState
import config

if TYPE_CHECKING:
    from idea_verse.core.controller import InteractionController
    from idea_verse.core.idea_map import IdeaMap

logger = logging.getLogger(__name__)

MAX_BROWSE_ITEMS = 500


def render_sidebar(idea_map: "IdeaMap", controller: "InteractionController") -> None:
    """Render the complete sidebar."""
    with st.sidebar:
        render_idea_form(controller)
        st.markdown("---")
        render_map_info(idea_map)
        st.markdown("---")
        render_view_toggles()
        st.markdown("---")
        render_seed_controls(idea_map)
        st.markdown("---")
        render_browse_ideas(idea_map)


def render_idea_form(controller: "InteractionController") -> None:
    """Render the new-idea form."""
    st.markdown("### New Idea")

    with st.form("idea_form", clear_on_submit=True):
        title = st.text_input("Title", placeholder="What's the idea?")
        body = st.text_area("Notes", placeholder="Optional details...", height=100)
        keywords = st.multiselect(
            "Keywords",
            list(config.AVAILABLE_KEYWORDS),
            max_selections=config.MAX_KEYWORDS_PER_IDEA,
            help=f"Up to {config.MAX_KEYWORDS_PER_IDEA} keywords; the first one places the idea",
        )
        source_url = st.text_input("Source URL", placeholder="https://...")
        submitted = st.form_submit_button("Add to map", type="primary")

    if submitted:
        draft = IdeaDraft(
            title=title,
            body=body,
            keywords=keywords,
            source_url=source_url.strip() or None,
        )
        try:
            idea = controller.create_idea(draft)
        except ValueError as e:
            st.error(str(e))
            return

        AppState.set_selected_idea(idea.id)
        AppState.set_notice(f"Added \"{idea.title}\"")
        st.rerun()


def render_map_info(idea_map: "IdeaMap") -> None:
    """Render map statistics."""
    st.markdown("### Map")
    graph = idea_map.graph
    col1, col2 = st.columns(2)
    with col1:
        st.metric("Ideas", idea_map.n_ideas)
        st.metric("Groups", len(graph.groups))
    with col2:
        st.metric("Links", len(graph.edges))
        st.metric("Bookmarked", len(idea_map.bookmarked_ideas()))


def render_view_toggles() -> None:
    """Render display toggles."""
    st.markdown("### View")
    st.session_state.show_boxes = st.toggle("Keyword boxes", value=st.session_state.show_boxes)
    st.session_state.show_edges = st.toggle("Connections", value=st.session_state.show_edges)
    st.session_state.show_labels = st.toggle("Labels", value=st.session_state.show_labels)
    st.session_state.animate = st.toggle(
        "Float animation",
        value=st.session_state.animate,
        help="Gently bob the ideas while the map is idle",
    )


def render_seed_controls(idea_map: "IdeaMap") -> None:
    """Render sample-data controls."""
    st.markdown("### Sample Data")

    store = idea_map.store
    try:
        count = store.count()
    except IdeaStoreError as e:
        logger.exception("Failed to count ideas")
        st.caption(f"Store unavailable: {e}")
        return
    st.caption(f"{count} ideas stored in **{store.name}**")

    col1, col2 = st.columns(2)
    with col1:
        replace_clicked = st.button(
            "Load samples",
            use_container_width=True,
            help="Replace your ideas with the sample set",
        )
    with col2:
        append_clicked = st.button(
            "Add samples",
            use_container_width=True,
            help="Add the sample set next to your ideas",
        )
    clear_clicked = st.button("Clear all ideas", use_container_width=True)

    if replace_clicked or append_clicked:
        try:
            seeded = store.seed(load_seed_ideas(), append=append_clicked)
        except (IdeaStoreError, ValueError) as e:
            logger.exception("Seeding failed")
            AppState.set_error(f"Could not load sample ideas: {e}")
            st.rerun()
        AppState.clear_selection()
        AppState.set_notice(f"Loaded {seeded} sample ideas")
        idea_map.refresh()
        st.rerun()

    if clear_clicked:
        try:
            store.clear()
        except IdeaStoreError as e:
            logger.exception("Clearing failed")
            AppState.set_error(f"Could not clear ideas: {e}")
            st.rerun()
        AppState.clear_selection()
        idea_map.refresh()
        st.rerun()


def render_browse_ideas(idea_map: "IdeaMap") -> None:
    """Render idea browser dropdown."""
    st.markdown("### Browse Ideas")

    ideas_df = idea_map.to_dataframe()
    if ideas_df.empty:
        st.caption("No ideas yet")
        return

    only_bookmarked = st.checkbox("Bookmarked only", key="browse_bookmarked")
    if only_bookmarked:
        ideas_df = ideas_df[ideas_df["bookmarked"]]

    total = len(ideas_df)
    if total > MAX_BROWSE_ITEMS:
        st.caption(f"Showing first {MAX_BROWSE_ITEMS} of {total:,} ideas")

    browse_df = ideas_df.head(MAX_BROWSE_ITEMS)
    options = ["-- Select an idea --"] + [
        _format_idea_label(row) for _, row in browse_df.iterrows()
    ]

    selected_idx = st.selectbox(
        "Select idea:",
        range(len(options)),
        format_func=lambda x: options[x],
        key="idea_selector"
    )

    if selected_idx > 0:
        idea_id = browse_df.iloc[selected_idx - 1]["id"]
        if idea_id != st.session_state.selected_idea_id:
            AppState.set_selected_idea(idea_id)
            st.rerun()


def _format_idea_label(row: pd.Series) -> str:
    """Format a single idea for the dropdown."""
    title = str(row["title"])[:50]
    if len(str(row["title"])) > 50:
        title += "..."
    marker = "★ " if row["bookmarked"] else ""
    return f"{marker}{title} ({row['group']})"
