"""
GraphBuilder: derive keyword groups, idea nodes and connections from an
idea snapshot.

The output depends only on the set of ideas, not on their input order:
ideas are processed sorted by id and groups sorted by vocabulary order.
"""

import logging
from itertools import combinations
from typing import Callable, Optional

import config
from idea_verse.core.keywords import effective_keywords, keyword_color, keyword_sort_key
from idea_verse.core.models import (
    Connection,
    ConnectionType,
    Graph,
    Idea,
    IdeaNode,
    KeywordGroup,
    NodeSize,
)
from idea_verse.core.similarity import similarity_matrix

logger = logging.getLogger(__name__)


def node_size_for(connection_count: int) -> NodeSize:
    """Size tier for a node with `connection_count` edges."""
    if connection_count >= config.BIG_NODE_MIN_CONNECTIONS:
        return NodeSize.BIG
    if connection_count == config.MID_NODE_MIN_CONNECTIONS:
        return NodeSize.MID
    return NodeSize.SMALL


class GraphBuilder:
    """
    Builds the connection graph for a set of ideas.

    Pairs sharing a keyword connect when similarity >= same_threshold and
    are dotted below weak_tie_threshold. Pairs in different groups connect
    when similarity >= cross_threshold and are never dotted.

    Similarity is computed for every pair of ideas, so building is O(n^2)
    in the idea count.
    """

    def __init__(
        self,
        same_threshold: float = config.SAME_KEYWORD_THRESHOLD,
        cross_threshold: float = config.CROSS_KEYWORD_THRESHOLD,
        weak_tie_threshold: float = config.WEAK_TIE_THRESHOLD,
        color_for: Callable[[str], str] = keyword_color,
    ):
        """
        Initialize the builder.

        Args:
            same_threshold: Minimum similarity for same-keyword edges (default: 0.15)
            cross_threshold: Minimum similarity for cross-keyword edges (default: 0.20)
            weak_tie_threshold: Same-keyword edges below this are dotted (default: 0.25)
            color_for: Keyword -> hex color function
        """
        self.same_threshold = same_threshold
        self.cross_threshold = cross_threshold
        self.weak_tie_threshold = weak_tie_threshold
        self.color_for = color_for

    def build(self, ideas: list[Idea]) -> Graph:
        """
        Build groups, nodes and edges. Positions are left at the origin;
        the SpatialLayoutEngine fills them in.
        """
        ideas = self._dedupe(ideas)
        keywords_by_id = {idea.id: effective_keywords(idea) for idea in ideas}

        groups = self._build_groups(ideas, keywords_by_id)
        edges = self._build_edges(ideas, keywords_by_id)

        counts = {idea.id: 0 for idea in ideas}
        for edge in edges:
            counts[edge.source] += 1
            counts[edge.target] += 1

        nodes = []
        for idea in ideas:
            keywords = keywords_by_id[idea.id]
            nodes.append(IdeaNode(
                idea=idea,
                keyword=keywords[0],
                secondary_keyword=keywords[1] if len(keywords) > 1 else None,
                connection_count=counts[idea.id],
                size=node_size_for(counts[idea.id]),
            ))

        logger.debug(
            f"Built graph: {len(groups)} groups, {len(nodes)} nodes, {len(edges)} edges"
        )
        return Graph(groups=groups, nodes=nodes, edges=edges)

    @staticmethod
    def _dedupe(ideas: list[Idea]) -> list[Idea]:
        """Sort by id and keep the first idea for each id."""
        seen: dict[str, Idea] = {}
        for idea in ideas:
            if idea.id in seen:
                logger.warning(f"Duplicate idea id {idea.id!r} ignored")
                continue
            seen[idea.id] = idea
        return [seen[idea_id] for idea_id in sorted(seen)]

    def _build_groups(
        self,
        ideas: list[Idea],
        keywords_by_id: dict[str, list[str]],
    ) -> list[KeywordGroup]:
        members: dict[str, list[str]] = {}
        for idea in ideas:
            for keyword in keywords_by_id[idea.id]:
                members.setdefault(keyword, []).append(idea.id)

        return [
            KeywordGroup(
                keyword=keyword,
                color=self.color_for(keyword),
                idea_ids=members[keyword],
            )
            for keyword in sorted(members, key=keyword_sort_key)
        ]

    def _build_edges(
        self,
        ideas: list[Idea],
        keywords_by_id: dict[str, list[str]],
    ) -> list[Connection]:
        scores = similarity_matrix([idea.text for idea in ideas])
        edges = []

        for i, j in combinations(range(len(ideas)), 2):
            a, b = ideas[i], ideas[j]
            score = float(scores[i, j])
            edge = self._classify(a.id, b.id, keywords_by_id, score)
            if edge is not None:
                edges.append(edge)

        return edges

    def _classify(
        self,
        id_a: str,
        id_b: str,
        keywords_by_id: dict[str, list[str]],
        score: float,
    ) -> Optional[Connection]:
        shared = set(keywords_by_id[id_a]) & set(keywords_by_id[id_b])
        source, target = sorted((id_a, id_b))

        if shared:
            if score < self.same_threshold:
                return None
            return Connection(
                source=source,
                target=target,
                type=ConnectionType.SAME_KEYWORD,
                similarity=score,
                dotted=score < self.weak_tie_threshold,
            )

        if score < self.cross_threshold:
            return None
        return Connection(
            source=source,
            target=target,
            type=ConnectionType.CROSS_KEYWORD,
            similarity=score,
        )


def build_graph(ideas: list[Idea]) -> Graph:
    """Build the (unpositioned) graph with default thresholds."""
    return GraphBuilder().build(ideas)
