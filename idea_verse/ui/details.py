"""Idea details panel components."""

import html

import streamlit as st
import pandas as pd
from typing import TYPE_CHECKING

from idea_verse.core.models import Idea
from idea_verse.ui.state import AppState
from idea_verse.ui.styles import keyword_chips
import config

if TYPE_CHECKING:
    from idea_verse.core.controller import InteractionController
    from idea_verse.core.idea_map import IdeaMap


def render_idea_details(idea_map: "IdeaMap", controller: "InteractionController") -> None:
    """Render the selected idea panel."""
    idea_id = st.session_state.selected_idea_id
    if not idea_id:
        render_getting_started(idea_map)
        return

    try:
        idea = idea_map.get_idea(idea_id)
    except KeyError:
        # Deleted or reloaded away
        AppState.clear_selection()
        render_getting_started(idea_map)
        return

    render_idea_card(idea_map, idea)
    render_idea_actions(idea_map, controller, idea)
    render_related_list(idea_map.related_ideas(idea.id, k=config.DEFAULT_K_RELATED))


def render_idea_card(idea_map: "IdeaMap", idea: Idea) -> None:
    """Render a single idea card."""
    graph = idea_map.graph
    node = graph.node(idea.id) if graph.has_node(idea.id) else None

    meta = [idea.created_at.strftime("%Y-%m-%d %H:%M")]
    if node is not None:
        meta.append(f"{node.connection_count} connections")
        if not idea.keywords:
            meta.append(f"placed in <b>{html.escape(node.keyword)}</b>")
    bookmark = " <span class='iv-bookmark'>★</span>" if idea.bookmarked else ""
    source = ""
    if idea.source_url:
        url = html.escape(idea.source_url)
        source = f"<div class='iv-card-meta'><a href='{url}' target='_blank'>{url}</a></div>"

    st.markdown(f"""
    <div class="iv-card">
        <div class="iv-card-title">{html.escape(idea.title)}{bookmark}</div>
        <div class="iv-card-meta">{" · ".join(meta)}</div>
        <div class="iv-card-meta">{keyword_chips(idea.keywords)}</div>
        {source}
        <div class="iv-card-text">{html.escape(idea.body)}</div>
    </div>
    """, unsafe_allow_html=True)


def render_idea_actions(
    idea_map: "IdeaMap",
    controller: "InteractionController",
    idea: Idea,
) -> None:
    """Render bookmark, keyword edit and delete controls."""
    col1, col2 = st.columns(2)
    with col1:
        label = "Remove bookmark" if idea.bookmarked else "Bookmark"
        if st.button(label, key=f"bookmark_{idea.id}", use_container_width=True):
            controller.toggle_bookmark(idea.id)
            st.rerun()
    with col2:
        if st.button("Delete", key=f"delete_{idea.id}", use_container_width=True):
            idea_map.delete_idea(idea.id)
            AppState.clear_selection()
            st.rerun()

    with st.expander("Edit keywords"):
        current = [k for k in idea.keywords if k in config.AVAILABLE_KEYWORDS]
        keywords = st.multiselect(
            "Keywords",
            list(config.AVAILABLE_KEYWORDS),
            default=current,
            max_selections=config.MAX_KEYWORDS_PER_IDEA,
            key=f"keywords_{idea.id}",
        )
        if st.button("Save keywords", key=f"save_keywords_{idea.id}"):
            try:
                idea_map.update_keywords(idea.id, keywords)
            except ValueError as e:
                st.error(str(e))
                return
            st.rerun()


def render_related_list(related: pd.DataFrame, title: str = "Related Ideas") -> None:
    """Render a list of related ideas."""
    st.markdown(f"### {title}")
    if related.empty:
        st.caption("No ideas share words with this one yet")
        return

    for idx, (_, row) in enumerate(related.iterrows()):
        title_text = str(row["title"])[:50]
        if len(str(row["title"])) > 50:
            title_text += "..."

        col1, col2 = st.columns([4, 1])
        with col1:
            if st.button(
                title_text,
                key=f"related_{idx}_{row['id']}",
                use_container_width=True
            ):
                AppState.set_selected_idea(row["id"])
                st.rerun()
            if row["keywords"]:
                st.markdown(keyword_chips(row["keywords"]), unsafe_allow_html=True)

        with col2:
            st.markdown(
                f"<span class='iv-badge'>{row['similarity']:.2f}</span>",
                unsafe_allow_html=True
            )


def render_getting_started(idea_map: "IdeaMap") -> None:
    """Render getting started guide."""
    st.markdown(f"""
    ### Getting Started

    **Ideas on the map:** {idea_map.n_ideas}

    **Add:** Write an idea in the sidebar and tag it with up to two keywords

    **Select:** Click a node on the map, or pick one from *Browse Ideas*

    **Move around:** Rotate, pan and zoom with the buttons above the map

    **Samples:** Load the sample set from the sidebar to see a full map

    Ideas with the same keyword share a colored box. Ideas with two keywords
    sit where their boxes overlap, and lines connect ideas that use the same words.
    """)
