"""
2D scene description of the idea map.
Projects group boxes, idea nodes and curved edges through the camera and
orders everything back to front. Rendering backends consume the Scene.
"""

from dataclasses import dataclass, field
from itertools import product
from typing import Optional

import numpy as np

from idea_verse.core.camera import CameraProjector, CameraState
from idea_verse.core.controller import InteractionController
from idea_verse.core.keywords import keyword_color, keyword_sort_key
from idea_verse.core.models import ConnectionType, Graph, NodeSize
import config

# Box corners as (x, y, z) sign bits; edges join corners that differ in one bit
BOX_CORNER_SIGNS = np.array(list(product((-1.0, 1.0), repeat=3)))
BOX_EDGES = [
    (i, j)
    for i in range(8)
    for j in range(i + 1, 8)
    if np.count_nonzero(BOX_CORNER_SIGNS[i] != BOX_CORNER_SIGNS[j]) == 1
]

_SIZE_RANK = {NodeSize.SMALL: 0, NodeSize.MID: 1, NodeSize.BIG: 2}


def _node_keywords(graph: Graph, node_id: str) -> set[str]:
    node = graph.node(node_id)
    return {node.keyword, node.secondary_keyword} - {None}


@dataclass
class SceneBox:
    keyword: str
    color: str
    corners: np.ndarray  # (8, 2) screen coordinates
    label_x: float
    label_y: float
    depth: float
    member_count: int

    def segments(self) -> list[tuple[np.ndarray, np.ndarray]]:
        return [(self.corners[i], self.corners[j]) for i, j in BOX_EDGES]


@dataclass
class SceneNode:
    id: str
    label: str
    title: str
    x: float
    y: float
    radius: float
    color: str
    secondary_color: Optional[str]
    size: NodeSize
    keyword: str
    connection_count: int
    bookmarked: bool
    depth: float


@dataclass
class SceneEdge:
    source: str
    target: str
    start: tuple[float, float]
    control: tuple[float, float]
    end: tuple[float, float]
    width: float
    dotted: bool
    color: str
    type: ConnectionType
    depth: float

    def svg_path(self) -> str:
        """Quadratic curve as an SVG path string."""
        (x0, y0), (cx, cy), (x1, y1) = self.start, self.control, self.end
        return f"M {x0:.2f},{y0:.2f} Q {cx:.2f},{cy:.2f} {x1:.2f},{y1:.2f}"


@dataclass
class Scene:
    width: float
    height: float
    boxes: list[SceneBox] = field(default_factory=list)
    nodes: list[SceneNode] = field(default_factory=list)
    edges: list[SceneEdge] = field(default_factory=list)


def curve_control_point(
    start: tuple[float, float],
    end: tuple[float, float],
    ratio: float = config.EDGE_CURVE_RATIO,
) -> tuple[float, float]:
    """
    Control point of a quadratic edge curve: the segment midpoint offset
    along the perpendicular by `ratio` times the segment length.
    """
    (x0, y0), (x1, y1) = start, end
    mx, my = (x0 + x1) / 2.0, (y0 + y1) / 2.0
    dx, dy = x1 - x0, y1 - y0
    length = float(np.hypot(dx, dy))
    if length == 0:
        return (mx, my)
    # Unit perpendicular (-dy, dx) / length scaled by ratio * length
    return (mx - dy * ratio, my + dx * ratio)


def truncate_label(text: str, max_chars: int = config.LABEL_MAX_CHARS) -> str:
    text = (text or "").strip().replace("\n", " ")
    if len(text) > max_chars:
        return text[:max_chars - 1] + "…"
    return text


class SceneBuilder:
    """
    Builds a Scene from a laid-out Graph and the current camera.

    Everything is re-sorted farthest first on every build, since depth
    order changes whenever the camera moves.
    """

    def __init__(
        self,
        width: float = config.PLOT_WIDTH,
        height: float = config.PLOT_HEIGHT,
        projector: Optional[CameraProjector] = None,
    ):
        self.width = width
        self.height = height
        self.projector = projector or CameraProjector(width=width, height=height)

    def build(
        self,
        graph: Graph,
        camera: CameraState,
        controller: Optional[InteractionController] = None,
        animate: bool = False,
    ) -> Scene:
        """
        Build the scene.

        Args:
            graph: Graph with positions filled in by the layout engine
            camera: Camera state to project with
            controller: Source of the idle float offsets (optional)
            animate: Apply the idle float offset to node y coordinates

        Returns:
            Scene with boxes, nodes and edges in painter's order
        """
        scene = Scene(width=self.width, height=self.height)
        if graph.is_empty:
            return scene

        scene.boxes = self._build_boxes(graph, camera)
        scene.nodes = self._build_nodes(graph, camera, controller, animate)
        scene.edges = self._build_edges(graph, scene.nodes)

        scene.boxes.sort(key=lambda b: -b.depth)
        scene.nodes.sort(key=lambda n: -n.depth)
        scene.edges.sort(key=lambda e: -e.depth)
        return scene

    def _build_boxes(self, graph: Graph, camera: CameraState) -> list[SceneBox]:
        boxes = []
        for group in graph.groups:
            corners_3d = group.center + BOX_CORNER_SIGNS * group.half_extent
            projected = self.projector.project_many(corners_3d, camera)
            center = self.projector.project(group.center, camera)
            top = projected[:, 1].min()

            boxes.append(SceneBox(
                keyword=group.keyword,
                color=group.color,
                corners=projected[:, :2],
                label_x=center.screen_x,
                label_y=float(top),
                depth=center.depth,
                member_count=len(group.idea_ids),
            ))
        return boxes

    def _build_nodes(
        self,
        graph: Graph,
        camera: CameraState,
        controller: Optional[InteractionController],
        animate: bool,
    ) -> list[SceneNode]:
        positions = np.array([node.position for node in graph.nodes])
        projected = self.projector.project_many(positions, camera)

        nodes = []
        for node, (sx, sy, depth, factor) in zip(graph.nodes, projected):
            offset = controller.float_offset(node.id) if (animate and controller) else 0.0
            secondary = keyword_color(node.secondary_keyword) if node.secondary_keyword else None
            nodes.append(SceneNode(
                id=node.id,
                label=truncate_label(node.idea.title),
                title=node.idea.title,
                x=float(sx),
                y=float(sy + offset),
                radius=config.NODE_RADIUS[node.size.value] * float(factor) * camera.scale,
                color=graph.group(node.keyword).color,
                secondary_color=secondary,
                size=node.size,
                keyword=node.keyword,
                connection_count=node.connection_count,
                bookmarked=node.idea.bookmarked,
                depth=float(depth),
            ))
        return nodes

    def _build_edges(self, graph: Graph, scene_nodes: list[SceneNode]) -> list[SceneEdge]:
        by_id = {node.id: node for node in scene_nodes}
        edges = []
        for edge in graph.edges:
            a, b = by_id[edge.source], by_id[edge.target]
            start, end = (a.x, a.y), (b.x, b.y)
            thicker = a.size if _SIZE_RANK[a.size] >= _SIZE_RANK[b.size] else b.size

            if edge.type is ConnectionType.SAME_KEYWORD:
                shared = _node_keywords(graph, edge.source) & _node_keywords(graph, edge.target)
                color = graph.group(min(shared, key=keyword_sort_key)).color if shared else a.color
            else:
                color = config.CROSS_EDGE_COLOR

            edges.append(SceneEdge(
                source=edge.source,
                target=edge.target,
                start=start,
                control=curve_control_point(start, end),
                end=end,
                width=config.EDGE_WIDTH[thicker.value],
                dotted=edge.dotted,
                color=color,
                type=edge.type,
                depth=(a.depth + b.depth) / 2.0,
            ))
        return edges
