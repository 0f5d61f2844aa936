"""
Data model for ideas and the derived semantic graph.
Ideas are owned by the idea store; groups, nodes and connections are
rebuilt from scratch on every idea-set change.
"""

from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

import numpy as np


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Idea:
    """A user-authored short note with up to two keyword tags."""
    id: str
    title: str
    body: str = ""
    keywords: list[str] = field(default_factory=list)
    bookmarked: bool = False
    created_at: datetime = field(default_factory=_utcnow)
    owner_id: Optional[str] = None
    source_url: Optional[str] = None

    @property
    def text(self) -> str:
        """Text compared by the similarity engine (title plus body)."""
        if self.body and self.body.strip():
            return f"{self.title}\n{self.body}"
        return self.title or ""

    def to_dict(self) -> dict:
        data = asdict(self)
        data["created_at"] = self.created_at.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Idea":
        created_at = data.get("created_at") or data.get("createdAt")
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at.replace("Z", "+00:00"))
        elif created_at is None:
            created_at = _utcnow()

        return cls(
            id=str(data["id"]),
            title=data.get("title", "") or "",
            body=data.get("body", data.get("content", "")) or "",
            keywords=list(data.get("keywords") or []),
            bookmarked=bool(data.get("bookmarked", False)),
            created_at=created_at,
            owner_id=data.get("owner_id"),
            source_url=data.get("source_url") or data.get("sourceUrl"),
        )


@dataclass
class IdeaDraft:
    """Insert payload for a new idea. `id` may be assigned client-side."""
    title: str
    body: str = ""
    keywords: list[str] = field(default_factory=list)
    source_url: Optional[str] = None
    id: Optional[str] = None


class NodeSize(str, Enum):
    SMALL = "small"
    MID = "mid"
    BIG = "big"


class ConnectionType(str, Enum):
    SAME_KEYWORD = "same-keyword"
    CROSS_KEYWORD = "cross-keyword"


@dataclass(eq=False)
class KeywordGroup:
    """All ideas carrying one keyword, rendered as a box in 3D space."""
    keyword: str
    color: str
    idea_ids: list[str] = field(default_factory=list)
    center: np.ndarray = field(default_factory=lambda: np.zeros(3))
    size: np.ndarray = field(default_factory=lambda: np.zeros(3))

    @property
    def half_extent(self) -> np.ndarray:
        return self.size / 2.0

    @property
    def min_corner(self) -> np.ndarray:
        return self.center - self.half_extent

    @property
    def max_corner(self) -> np.ndarray:
        return self.center + self.half_extent

    def contains(self, point: np.ndarray, margin: float = 0.0) -> bool:
        """Check if a point lies inside the box shrunk by `margin` per side."""
        tol = 1e-6
        lo = self.min_corner + margin
        hi = self.max_corner - margin
        return bool(np.all(point >= lo - tol) and np.all(point <= hi + tol))


@dataclass(eq=False)
class IdeaNode:
    """Placement state for one idea."""
    idea: Idea
    keyword: str                          # home group the node renders under
    secondary_keyword: Optional[str] = None
    connection_count: int = 0
    size: NodeSize = NodeSize.SMALL
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))

    @property
    def id(self) -> str:
        return self.idea.id

    @property
    def is_shared(self) -> bool:
        """True for ideas that belong to two keyword groups."""
        return self.secondary_keyword is not None


@dataclass(frozen=True)
class Connection:
    """Undirected edge between two nodes; `source` < `target` by id."""
    source: str
    target: str
    type: ConnectionType
    similarity: float
    dotted: bool = False

    @property
    def key(self) -> tuple[str, str]:
        return (self.source, self.target)

    @property
    def style(self) -> str:
        return "dotted" if self.dotted else "solid"


@dataclass(eq=False)
class Graph:
    """Groups, nodes and edges derived from one idea snapshot."""
    groups: list[KeywordGroup] = field(default_factory=list)
    nodes: list[IdeaNode] = field(default_factory=list)
    edges: list[Connection] = field(default_factory=list)

    def __post_init__(self):
        self._node_index = {node.id: node for node in self.nodes}
        self._group_index = {group.keyword: group for group in self.groups}

    def node(self, idea_id: str) -> IdeaNode:
        return self._node_index[idea_id]

    def group(self, keyword: str) -> KeywordGroup:
        return self._group_index[keyword]

    def has_node(self, idea_id: str) -> bool:
        return idea_id in self._node_index

    def edge_keys(self) -> set[tuple[str, str]]:
        return {edge.key for edge in self.edges}

    def neighbors(self, idea_id: str) -> list[str]:
        """Ids of nodes connected to `idea_id`."""
        result = []
        for edge in self.edges:
            if edge.source == idea_id:
                result.append(edge.target)
            elif edge.target == idea_id:
                result.append(edge.source)
        return result

    @property
    def is_empty(self) -> bool:
        return not self.nodes
