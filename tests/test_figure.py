import plotly.graph_objects as go
import pytest

from idea_verse.core.camera import CameraState
from idea_verse.visualization.figure import IdeaMapFigureBuilder
from idea_verse.visualization.scene import SceneBuilder


@pytest.fixture
def scene(idea_map):
    return SceneBuilder(width=1000, height=700).build(idea_map.graph, CameraState())


def _trace(fig: go.Figure, name: str):
    return [t for t in fig.data if t.name == name][0]


def test_nodes_trace_in_painters_order(scene) -> None:
    fig = IdeaMapFigureBuilder().build(scene)
    nodes = _trace(fig, "Ideas")

    assert list(nodes.customdata) == [n.id for n in scene.nodes]
    assert list(nodes.x) == pytest.approx([n.x for n in scene.nodes])
    assert nodes.mode == "markers+text"


def test_boxes_and_edges(scene) -> None:
    fig = IdeaMapFigureBuilder().build(scene)

    box_traces = [t for t in fig.data if t.mode == "lines"]
    assert len(box_traces) == len(scene.boxes)
    assert len(fig.layout.shapes) == len(scene.edges)

    for shape, edge in zip(fig.layout.shapes, scene.edges):
        assert shape.type == "path"
        assert shape.path == edge.svg_path()
        assert shape.line.dash == ("dot" if edge.dotted else "solid")
        assert shape.layer == "below"


def test_edges_drawn_farthest_first_beneath_traces(scene) -> None:
    fig = IdeaMapFigureBuilder().build(scene)
    by_path = {edge.svg_path(): edge.depth for edge in scene.edges}

    depths = [by_path[shape.path] for shape in fig.layout.shapes]
    assert depths == sorted(depths, reverse=True)
    assert {shape.layer for shape in fig.layout.shapes} == {"below"}


def test_toggles_hide_layers(scene) -> None:
    fig = IdeaMapFigureBuilder(show_boxes=False, show_edges=False, show_labels=False).build(scene)

    assert not [t for t in fig.data if t.mode == "lines"]
    assert len(fig.layout.shapes) == 0
    assert _trace(fig, "Ideas").mode == "markers"


def test_screen_axes(scene) -> None:
    fig = IdeaMapFigureBuilder().build(scene)

    assert list(fig.layout.xaxis.range) == [0, 1000]
    assert list(fig.layout.yaxis.range) == [700, 0]
    assert fig.layout.xaxis.showticklabels is False
    assert fig.layout.height == 700


def test_selection_ring(scene) -> None:
    fig = IdeaMapFigureBuilder().build(scene, selected_id="a1")
    ring = _trace(fig, "Selected")
    assert list(ring.customdata) == ["a1"]

    fig = IdeaMapFigureBuilder().build(scene, selected_id="missing")
    assert not [t for t in fig.data if t.name == "Selected"]


def test_bookmarked_nodes_are_stars(idea_map) -> None:
    idea_map.toggle_bookmark("a2")
    scene = SceneBuilder().build(idea_map.graph, CameraState())
    nodes = _trace(IdeaMapFigureBuilder().build(scene), "Ideas")

    symbols = dict(zip(nodes.customdata, nodes.marker.symbol))
    assert symbols["a2"] == "star"
    assert symbols["a1"] == "circle"


@pytest.mark.parametrize(
    "selection, expected",
    [
        (None, None),
        ({}, None),
        ({"selection": {"points": []}}, None),
        ({"selection": {"points": [{"customdata": "a1"}]}}, "a1"),
        ({"selection": {"points": [{"customdata": ["a2"]}]}}, "a2"),
        ({"selection": {"points": [{"x": 1}, {"customdata": "a3"}]}}, "a3"),
    ],
)
def test_get_selected_id(selection, expected) -> None:
    assert IdeaMapFigureBuilder.get_selected_id(selection) == expected
