"""
IdeaMap: Central orchestrator for Idea-Verse.
Holds the idea snapshot, rebuilds the laid-out graph on every idea-set
change, and writes user edits through to the idea store.
"""

import logging
from dataclasses import replace
from typing import Optional

import pandas as pd

from idea_verse.core.graph_builder import GraphBuilder
from idea_verse.core.keywords import validate_keywords
from idea_verse.core.layout import SpatialLayoutEngine
from idea_verse.core.models import Graph, Idea, IdeaDraft
from idea_verse.core.similarity import similarity
from idea_verse.store.base import BaseIdeaStore, IdeaStoreError, new_idea_id
import config

logger = logging.getLogger(__name__)


class IdeaMap:
    """
    Central orchestrator for the semantic idea map.

    Responsibilities:
    - Load the owner's ideas from the store
    - Rebuild graph + layout from scratch whenever the idea set changes
    - Apply edits optimistically, then write them to the store

    A failed store write is logged and recorded in `last_error`; the local
    snapshot and graph keep the optimistic change (no rollback).
    """

    def __init__(
        self,
        store: BaseIdeaStore,
        graph_builder: Optional[GraphBuilder] = None,
        layout_engine: Optional[SpatialLayoutEngine] = None,
    ):
        """
        Initialize the IdeaMap.

        Args:
            store: Idea store scoped to the current owner
            graph_builder: Graph builder (defaults to GraphBuilder())
            layout_engine: Layout engine (defaults to SpatialLayoutEngine())
        """
        self.store = store
        self.graph_builder = graph_builder or GraphBuilder()
        self.layout_engine = layout_engine or SpatialLayoutEngine()

        self._ideas: list[Idea] = []
        self.graph: Graph = Graph()
        self.last_error: Optional[str] = None
        self._loaded = False

    @property
    def ideas(self) -> list[Idea]:
        """Current idea snapshot (newest first)."""
        return list(self._ideas)

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def n_ideas(self) -> int:
        return len(self._ideas)

    # -------------------------------------------------------------------------
    # Loading and rebuilding
    # -------------------------------------------------------------------------

    def refresh(self) -> bool:
        """
        Reload ideas from the store and rebuild.

        Returns:
            True on success; on store failure the previous snapshot is kept.
        """
        try:
            ideas = self.store.list()
        except IdeaStoreError as e:
            logger.exception("Failed to load ideas")
            self.last_error = f"Could not load ideas: {e}"
            return False

        self._set_ideas(ideas)
        self._loaded = True
        return True

    def _set_ideas(self, ideas: list[Idea]) -> None:
        self._ideas = sorted(ideas, key=lambda i: i.created_at, reverse=True)
        self.rebuild()

    def rebuild(self) -> Graph:
        """Recompute groups, nodes, edges and positions from the snapshot."""
        graph = self.graph_builder.build(self._ideas)
        self.graph = self.layout_engine.layout(graph)
        logger.debug(
            f"Rebuilt map: {len(self.graph.groups)} groups, "
            f"{len(self.graph.nodes)} nodes, {len(self.graph.edges)} edges"
        )
        return self.graph

    def _write(self, action: str, func, *args, **kwargs) -> bool:
        """Run a store write, recording failures instead of raising."""
        try:
            func(*args, **kwargs)
        except IdeaStoreError as e:
            logger.exception(f"Store {action} failed")
            self.last_error = f"Could not {action}: {e}"
            return False
        return True

    def clear_error(self) -> None:
        self.last_error = None

    # -------------------------------------------------------------------------
    # Edits
    # -------------------------------------------------------------------------

    def create_idea(self, draft: IdeaDraft) -> Idea:
        """
        Add an idea locally, rebuild, then insert it into the store.

        Raises:
            ValueError: If the title is empty or the keywords are invalid
        """
        title = (draft.title or "").strip()
        if not title:
            raise ValueError("Idea title must not be empty")
        keywords = validate_keywords(draft.keywords)

        idea_id = draft.id or new_idea_id({i.id for i in self._ideas})
        idea = Idea(
            id=idea_id,
            title=title,
            body=draft.body or "",
            keywords=keywords,
            owner_id=self.store.owner_id,
            source_url=draft.source_url or None,
        )
        self._set_ideas([idea] + self._ideas)

        self._write("save the idea", self.store.insert, replace(draft, id=idea_id, title=title))
        return idea

    def update_keywords(self, idea_id: str, keywords: list[str]) -> Idea:
        """
        Change an idea's keywords locally, rebuild, then update the store.

        Raises:
            KeyError: If the idea is not in the snapshot
            ValueError: If the keywords are invalid
        """
        keywords = validate_keywords(keywords)
        idea = replace(self.get_idea(idea_id), keywords=keywords)
        self._set_ideas([idea if i.id == idea_id else i for i in self._ideas])

        self._write("update keywords", self.store.update, idea_id, keywords=keywords)
        return idea

    def toggle_bookmark(self, idea_id: str) -> bool:
        """
        Flip the bookmark flag. Bookmarks are not a layout input, so the
        nodes are patched in place without a rebuild.

        Returns:
            The new bookmark state
        """
        current = self.get_idea(idea_id)
        idea = replace(current, bookmarked=not current.bookmarked)
        self._ideas = [idea if i.id == idea_id else i for i in self._ideas]
        if self.graph.has_node(idea_id):
            self.graph.node(idea_id).idea = idea

        self._write("update the bookmark", self.store.update, idea_id, bookmarked=idea.bookmarked)
        return idea.bookmarked

    def delete_idea(self, idea_id: str) -> None:
        """Remove an idea locally, rebuild, then delete it from the store."""
        self.get_idea(idea_id)
        self._set_ideas([i for i in self._ideas if i.id != idea_id])
        self._write("delete the idea", self.store.delete, idea_id)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_idea(self, idea_id: str) -> Idea:
        """
        Get a single idea by id.

        Raises:
            KeyError: If the idea is not in the snapshot
        """
        for idea in self._ideas:
            if idea.id == idea_id:
                return idea
        raise KeyError(f"Idea not found: {idea_id}")

    def bookmarked_ideas(self) -> list[Idea]:
        """Bookmarked ideas, newest first."""
        return [idea for idea in self._ideas if idea.bookmarked]

    def related_ideas(self, idea_id: str, k: int = config.DEFAULT_K_RELATED) -> pd.DataFrame:
        """
        Most similar other ideas.

        Args:
            idea_id: Id of the idea
            k: Number of related ideas to return

        Returns:
            DataFrame with columns id, title, keywords, similarity, sorted by
            similarity (descending), only ideas with similarity > 0
        """
        target = self.get_idea(idea_id)
        rows = []
        for idea in self._ideas:
            if idea.id == idea_id:
                continue
            score = similarity(target.text, idea.text)
            if score > 0:
                rows.append({
                    "id": idea.id,
                    "title": idea.title,
                    "keywords": list(idea.keywords),
                    "similarity": score,
                })

        results = pd.DataFrame(rows, columns=["id", "title", "keywords", "similarity"])
        if results.empty:
            return results
        results = results.sort_values(["similarity", "id"], ascending=[False, True])
        return results.head(k).reset_index(drop=True)

    def to_dataframe(self) -> pd.DataFrame:
        """Idea snapshot as a DataFrame (one row per idea)."""
        rows = []
        for idea in self._ideas:
            node = self.graph.node(idea.id) if self.graph.has_node(idea.id) else None
            rows.append({
                "id": idea.id,
                "title": idea.title,
                "keywords": list(idea.keywords),
                "bookmarked": idea.bookmarked,
                "created_at": idea.created_at,
                "group": node.keyword if node else None,
                "connections": node.connection_count if node else 0,
            })
        return pd.DataFrame(
            rows,
            columns=["id", "title", "keywords", "bookmarked", "created_at", "group", "connections"],
        )
