"""
SpatialLayoutEngine: deterministic 3D placement of keyword groups and ideas.

Group centers are spread over a sphere with the golden-angle spiral. Ideas
are placed on a spiral inside their group's box, seeded by a stable hash of
the idea id, then nudged apart by a bounded greedy repulsion pass. Ideas
with two keywords are placed once, in the intersection of their two group
boxes (or near the midpoint when the boxes are apart).
"""

import logging
import math
from dataclasses import dataclass, replace
from typing import Optional

import numpy as np

import config
from idea_verse.core.keywords import keyword_sort_key
from idea_verse.core.models import Graph, IdeaNode, KeywordGroup

logger = logging.getLogger(__name__)

GOLDEN_ANGLE = math.pi * (3.0 - math.sqrt(5.0))


def id_hash(idea_id: str) -> int:
    """Stable hash of an id string: the sum of its character codes."""
    return sum(ord(char) for char in idea_id)


def golden_spiral(index: int, count: int) -> tuple[float, float, float]:
    """
    Point `index` of `count` on the unit-sphere golden-angle spiral.

    Returns:
        (y, ring radius, angle) with y in [-1, 1]
    """
    y = 1.0 - (index / (count - 1)) * 2.0 if count > 1 else 0.0
    ring = math.sqrt(max(0.0, 1.0 - y * y))
    theta = index * GOLDEN_ANGLE
    return y, ring, theta


def group_anchor(index: int, count: int, radius: float, height_scale: float) -> np.ndarray:
    """World-space anchor of group `index` of `count` on the group sphere."""
    y, ring, theta = golden_spiral(index, count)
    return np.array([
        ring * math.cos(theta) * radius,
        y * radius * height_scale,
        ring * math.sin(theta) * radius,
    ])


@dataclass
class SpiralSlot:
    """Spherical placement parameters of one node around an anchor point."""
    anchor: np.ndarray
    y: float
    theta: float
    radius: np.ndarray  # per-axis radius (ellipsoid)

    @classmethod
    def for_member(
        cls,
        anchor: np.ndarray,
        index: int,
        count: int,
        seed: int,
        radius: np.ndarray,
    ) -> "SpiralSlot":
        y, _, theta = golden_spiral(index, count)
        # Seed jitter keeps placement tied to the id, not the index alone
        theta += seed * GOLDEN_ANGLE
        scale = 0.6 + 0.4 * ((seed * 37) % 100) / 100.0
        return cls(anchor=anchor, y=y, theta=theta, radius=radius * scale)

    def point(self, attempt: int = 0) -> np.ndarray:
        """Candidate position for a placement attempt (0 = initial)."""
        theta = self.theta + attempt * config.PERTURB_ANGLE_STEP
        radius = self.radius * (1.0 + attempt * config.PERTURB_RADIUS_STEP)
        ring = math.sqrt(max(0.0, 1.0 - self.y * self.y))
        offset = np.array([
            ring * math.cos(theta),
            self.y,
            ring * math.sin(theta),
        ])
        return self.anchor + offset * radius


@dataclass
class Region:
    """Axis-aligned box given by its center and half extents."""
    center: np.ndarray
    half: np.ndarray

    def clip(self, point: np.ndarray, margin: float = 0.0) -> np.ndarray:
        inner = np.maximum(self.half - margin, 0.0)
        return np.clip(point, self.center - inner, self.center + inner)


class SpatialLayoutEngine:
    """
    Places every group box and idea node of a Graph in 3D space.

    The result is fully determined by the node ids, keywords and the
    constants below; no random state is involved.
    """

    def __init__(
        self,
        sphere_radius: float = config.GROUP_SPHERE_RADIUS,
        height_scale: float = config.GROUP_HEIGHT_SCALE,
        min_distance: float = config.NODE_MIN_DISTANCE,
        shared_min_distance: float = config.SHARED_NODE_MIN_DISTANCE,
        detached_min_distance: float = config.DETACHED_NODE_MIN_DISTANCE,
        max_attempts: int = config.MAX_PLACEMENT_ATTEMPTS,
        box_padding: float = config.BOX_PADDING,
        safety_margin: float = config.BOX_SAFETY_MARGIN,
        intersection_padding: float = config.INTERSECTION_PADDING,
    ):
        self.sphere_radius = sphere_radius
        self.height_scale = height_scale
        self.min_distance = min_distance
        self.shared_min_distance = shared_min_distance
        self.detached_min_distance = detached_min_distance
        self.max_attempts = max_attempts
        self.box_padding = box_padding
        self.safety_margin = safety_margin
        self.intersection_padding = intersection_padding

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def layout(self, graph: Graph) -> Graph:
        """
        Return a new Graph with group boxes and node positions filled in.

        The input graph is not modified.
        """
        nodes = {node.id: replace(node, position=np.zeros(3)) for node in graph.nodes}
        groups = [replace(group) for group in graph.groups]

        singles_by_group: dict[str, list[IdeaNode]] = {g.keyword: [] for g in groups}
        shared: list[IdeaNode] = []
        for node_id in sorted(nodes):
            node = nodes[node_id]
            if node.is_shared:
                shared.append(node)
            else:
                singles_by_group.setdefault(node.keyword, []).append(node)

        placed: dict[str, list[np.ndarray]] = {g.keyword: [] for g in groups}

        for index, group in enumerate(groups):
            anchor = group_anchor(index, len(groups), self.sphere_radius, self.height_scale)
            members = singles_by_group.get(group.keyword, [])
            self._place_group(group, anchor, members)
            placed[group.keyword] = [node.position for node in members]

        self._place_shared(shared, {g.keyword: g for g in groups}, placed)

        return Graph(
            groups=groups,
            nodes=[nodes[node.id] for node in graph.nodes],
            edges=list(graph.edges),
        )

    # -------------------------------------------------------------------------
    # Single-keyword nodes
    # -------------------------------------------------------------------------

    @staticmethod
    def spread_radius(member_count: int) -> float:
        """Radius of the initial spiral for a group with `member_count` nodes."""
        if member_count <= 1:
            return 0.0
        return config.NODE_SPREAD_BASE + config.NODE_SPREAD_PER_MEMBER * math.sqrt(member_count)

    @staticmethod
    def min_half_extent(member_count: int) -> float:
        """Smallest half extent a group box may have."""
        return config.MIN_BOX_HALF_EXTENT + config.MIN_BOX_HALF_EXTENT_PER_MEMBER * member_count

    def _place_group(
        self,
        group: KeywordGroup,
        anchor: np.ndarray,
        members: list[IdeaNode],
    ) -> None:
        count = len(members)
        floor = self.min_half_extent(count)

        if count == 0:
            # Only two-keyword ideas (or none) in this group
            group.center = anchor.copy()
            group.size = np.full(3, floor * 2.0)
            return

        radius = np.full(3, self.spread_radius(count))
        slots = [
            SpiralSlot.for_member(anchor, index, count, id_hash(node.id), radius)
            for index, node in enumerate(members)
        ]
        intended = np.array([slot.point() for slot in slots])

        center = intended.mean(axis=0)
        half = np.abs(intended - center).max(axis=0) + self.box_padding
        half = np.maximum(half, floor)
        group.center = center
        group.size = half * 2.0

        region = Region(center=center, half=half)
        placed: list[np.ndarray] = []
        for node, slot in zip(members, slots):
            node.position = self._relax(
                slot, region, placed, self.min_distance, self.safety_margin, node.id
            )
            placed.append(node.position)

    def _relax(
        self,
        slot: SpiralSlot,
        region: Region,
        placed: list[np.ndarray],
        min_distance: float,
        margin: float,
        node_id: str,
    ) -> np.ndarray:
        """
        Greedy repulsion: perturb the slot until the node is at least
        `min_distance` from every placed node or the attempt budget runs out.
        Falls back to the candidate that was farthest from its nearest
        neighbor.
        """
        candidate = region.clip(slot.point(0), margin)
        if not placed:
            return candidate

        others = np.array(placed)
        best = candidate
        best_gap = -1.0

        for attempt in range(self.max_attempts + 1):
            if attempt > 0:
                candidate = region.clip(slot.point(attempt), margin)
            gap = float(np.linalg.norm(others - candidate, axis=1).min())
            if gap >= min_distance:
                return candidate
            if gap > best_gap:
                best, best_gap = candidate, gap

        logger.debug(
            f"Node {node_id}: spacing budget exhausted, nearest neighbor at {best_gap:.1f}"
        )
        return best

    # -------------------------------------------------------------------------
    # Two-keyword nodes
    # -------------------------------------------------------------------------

    def shared_region(
        self,
        group_a: KeywordGroup,
        group_b: KeywordGroup,
    ) -> Optional[Region]:
        """
        Padded intersection of two group boxes, or None if the boxes are
        apart even with the padding.
        """
        pad = self.intersection_padding
        lo = np.maximum(group_a.min_corner, group_b.min_corner) - pad
        hi = np.minimum(group_a.max_corner, group_b.max_corner) + pad
        if np.any(lo >= hi):
            return None
        return Region(center=(lo + hi) / 2.0, half=(hi - lo) / 2.0)

    def _place_shared(
        self,
        shared: list[IdeaNode],
        groups: dict[str, KeywordGroup],
        placed: dict[str, list[np.ndarray]],
    ) -> None:
        by_pair: dict[tuple[str, str], list[IdeaNode]] = {}
        for node in shared:
            pair = tuple(sorted((node.keyword, node.secondary_keyword), key=keyword_sort_key))
            by_pair.setdefault(pair, []).append(node)

        placed_shared: list[np.ndarray] = []

        for pair in sorted(by_pair, key=lambda p: (keyword_sort_key(p[0]), keyword_sort_key(p[1]))):
            members = by_pair[pair]
            group_a, group_b = groups[pair[0]], groups[pair[1]]
            region = self.shared_region(group_a, group_b)

            if region is not None:
                radius = region.half * 0.8
                min_distance = self.shared_min_distance
            else:
                midpoint = (group_a.center + group_b.center) / 2.0
                spread = config.DETACHED_NODE_SPREAD * max(1.0, math.sqrt(len(members)))
                region = Region(center=midpoint, half=np.full(3, spread))
                # A lone node still needs a spiral to move along when relaxed
                radius = region.half * (0.8 if len(members) > 1 else 0.5)
                min_distance = self.detached_min_distance

            for index, node in enumerate(members):
                slot = SpiralSlot.for_member(
                    region.center, index, len(members), id_hash(node.id), radius
                )
                neighbors = placed[pair[0]] + placed[pair[1]] + placed_shared
                node.position = self._relax(
                    slot, region, neighbors, min_distance, 0.0, node.id
                )
                placed_shared.append(node.position)


def layout_graph(graph: Graph) -> Graph:
    """Lay out a graph with the default engine settings."""
    return SpatialLayoutEngine().layout(graph)
