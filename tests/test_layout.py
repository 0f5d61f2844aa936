import math

import numpy as np
import pytest

import config
from idea_verse.core.graph_builder import build_graph
from idea_verse.core.layout import (
    GOLDEN_ANGLE,
    SpatialLayoutEngine,
    golden_spiral,
    group_anchor,
    id_hash,
    layout_graph,
)
from idea_verse.core.models import Graph
from conftest import make_idea


def test_id_hash_sums_character_codes() -> None:
    assert id_hash("") == 0
    assert id_hash("ab") == 97 + 98


def test_golden_spiral_endpoints() -> None:
    y0, ring0, theta0 = golden_spiral(0, 5)
    y4, _, theta4 = golden_spiral(4, 5)

    assert y0 == 1.0
    assert ring0 == 0.0
    assert theta0 == 0.0
    assert y4 == -1.0
    assert theta4 == pytest.approx(4 * GOLDEN_ANGLE)


def test_single_group_anchor_sits_on_equator() -> None:
    anchor = group_anchor(0, 1, radius=1400.0, height_scale=0.6)
    assert np.allclose(anchor, [1400.0, 0.0, 0.0])


def test_group_anchor_height_is_scaled() -> None:
    anchor = group_anchor(0, 3, radius=1000.0, height_scale=0.5)
    assert anchor[1] == pytest.approx(500.0)


def test_single_idea_is_placed_at_its_anchor() -> None:
    graph = layout_graph(build_graph([make_idea("1", "lonely idea", ["Data"])]))
    assert np.allclose(graph.node("1").position, [config.GROUP_SPHERE_RADIUS, 0.0, 0.0])


def test_spread_radius_and_box_floor() -> None:
    assert SpatialLayoutEngine.spread_radius(0) == 0.0
    assert SpatialLayoutEngine.spread_radius(1) == 0.0
    assert SpatialLayoutEngine.spread_radius(4) == pytest.approx(
        config.NODE_SPREAD_BASE + config.NODE_SPREAD_PER_MEMBER * 2.0
    )
    assert SpatialLayoutEngine.min_half_extent(5) == pytest.approx(
        config.MIN_BOX_HALF_EXTENT + 5 * config.MIN_BOX_HALF_EXTENT_PER_MEMBER
    )


def test_group_members_stay_inside_box_minus_margin() -> None:
    ideas = [make_idea(f"idea-{i}", f"note number {i}", ["Research"]) for i in range(5)]
    graph = layout_graph(build_graph(ideas))
    group = graph.group("Research")

    assert np.all(group.size >= 2 * SpatialLayoutEngine.min_half_extent(5) - 1e-6)
    for node in graph.nodes:
        assert group.contains(node.position, margin=config.BOX_SAFETY_MARGIN)


def test_members_are_spread_out() -> None:
    ideas = [make_idea(f"idea-{i}", f"note number {i}", ["Research"]) for i in range(5)]
    graph = layout_graph(build_graph(ideas))
    positions = np.array([node.position for node in graph.nodes])

    for i in range(len(positions)):
        for j in range(i + 1, len(positions)):
            assert np.linalg.norm(positions[i] - positions[j]) > 1.0


def test_layout_is_deterministic(sample_ideas) -> None:
    a = layout_graph(build_graph(sample_ideas))
    b = layout_graph(build_graph(list(reversed(sample_ideas))))

    for node in a.nodes:
        assert np.allclose(node.position, b.node(node.id).position)
    for group in a.groups:
        assert np.allclose(group.center, b.group(group.keyword).center)
        assert np.allclose(group.size, b.group(group.keyword).size)


def test_layout_does_not_mutate_input(sample_ideas) -> None:
    graph = build_graph(sample_ideas)
    laid_out = SpatialLayoutEngine().layout(graph)

    assert laid_out is not graph
    for node in graph.nodes:
        assert np.allclose(node.position, 0.0)
    for group in graph.groups:
        assert np.allclose(group.size, 0.0)


def test_every_node_placed_once_with_finite_position(sample_ideas) -> None:
    graph = layout_graph(build_graph(sample_ideas))

    ids = [node.id for node in graph.nodes]
    assert sorted(ids) == sorted(i.id for i in sample_ideas)
    for node in graph.nodes:
        assert np.all(np.isfinite(node.position))
    assert graph.edge_keys() == build_graph(sample_ideas).edge_keys()


def test_shared_nodes_sit_in_the_shared_region(sample_ideas) -> None:
    engine = SpatialLayoutEngine()
    graph = engine.layout(build_graph(sample_ideas))

    for node in graph.nodes:
        if not node.is_shared:
            continue
        group_a = graph.group(node.keyword)
        group_b = graph.group(node.secondary_keyword)
        region = engine.shared_region(group_a, group_b)
        if region is not None:
            assert np.all(np.abs(node.position - region.center) <= region.half + 1e-6)
        else:
            midpoint = (group_a.center + group_b.center) / 2.0
            spread = config.DETACHED_NODE_SPREAD
            assert np.all(np.abs(node.position - midpoint) <= spread + 1e-6)


def test_shared_region_none_when_boxes_are_apart() -> None:
    graph = layout_graph(build_graph([
        make_idea("1", "one", ["Data"]),
        make_idea("2", "two", ["Design"]),
    ]))
    engine = SpatialLayoutEngine()
    a, b = graph.group("Data"), graph.group("Design")

    # Two groups sit on opposite poles of the sphere
    assert engine.shared_region(a, b) is None

    b.center = a.center.copy()
    region = engine.shared_region(a, b)
    assert region is not None
    assert np.allclose(region.center, a.center)


def test_group_with_only_shared_members_gets_a_box() -> None:
    graph = layout_graph(build_graph([make_idea("1", "both", ["Data", "Design"])]))

    for group in graph.groups:
        assert np.all(group.size > 0)
    assert np.all(np.isfinite(graph.node("1").position))


def test_empty_graph() -> None:
    graph = layout_graph(Graph())
    assert graph.is_empty
    assert graph.groups == []


def test_golden_angle_value() -> None:
    assert GOLDEN_ANGLE == pytest.approx(math.pi * (3 - math.sqrt(5)))


def test_two_keyword_ideas_do_not_size_group_boxes() -> None:
    singles = [
        make_idea("d1", "data lake", ["Data"]),
        make_idea("d2", "data mesh", ["Data"]),
        make_idea("g1", "type scale", ["Design"]),
        make_idea("g2", "grid system", ["Design"]),
    ]
    before = layout_graph(build_graph(singles))
    after = layout_graph(build_graph(singles + [make_idea("x", "dashboard kit", ["Data", "Design"])]))

    for keyword in ("Data", "Design"):
        assert np.allclose(after.group(keyword).center, before.group(keyword).center)
        assert np.allclose(after.group(keyword).size, before.group(keyword).size)


def test_lone_detached_two_keyword_ideas_keep_their_distance() -> None:
    keywords = config.AVAILABLE_KEYWORDS
    pairs = [
        (a, b)
        for i, a in enumerate(keywords)
        for b in keywords[i + 1:]
    ]
    ideas = [
        make_idea(f"s{index}", f"bridge idea {index}", list(pair))
        for index, pair in enumerate(pairs)
    ]
    engine = SpatialLayoutEngine()
    graph = engine.layout(build_graph(ideas))

    # Technology/Development and Innovation/Research midpoints are ~91 apart
    for node in graph.nodes:
        assert engine.shared_region(
            graph.group(node.keyword), graph.group(node.secondary_keyword)
        ) is None

    positions = np.array([node.position for node in graph.nodes])
    for i in range(len(positions)):
        for j in range(i + 1, len(positions)):
            assert np.linalg.norm(positions[i] - positions[j]) >= config.DETACHED_NODE_MIN_DISTANCE


def test_lone_detached_node_moves_off_the_midpoint() -> None:
    graph = layout_graph(build_graph([make_idea("1", "both", ["Data", "Design"])]))
    node = graph.node("1")
    midpoint = (graph.group("Data").center + graph.group("Design").center) / 2.0

    offset = np.abs(node.position - midpoint)
    assert np.linalg.norm(offset) > 0.0
    assert np.all(offset <= config.DETACHED_NODE_SPREAD + 1e-6)
