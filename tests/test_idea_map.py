import pytest

import config
from idea_verse.core.idea_map import IdeaMap
from idea_verse.core.models import IdeaDraft
from conftest import OWNER, FailingReadStore, FailingWriteStore


def test_refresh_loads_newest_first(idea_map, sample_ideas) -> None:
    assert idea_map.is_loaded
    assert idea_map.n_ideas == len(sample_ideas)
    assert [i.id for i in idea_map.ideas] == ["a7", "a6", "a5", "a4", "a3", "a2", "a1"]
    assert len(idea_map.graph.nodes) == len(sample_ideas)
    assert idea_map.last_error is None


def test_refresh_failure_keeps_snapshot(sample_ideas) -> None:
    idea_map = IdeaMap(store=FailingReadStore(owner_id=OWNER, ideas=sample_ideas))

    assert idea_map.refresh() is False
    assert not idea_map.is_loaded
    assert idea_map.graph.is_empty
    assert "connection refused" in idea_map.last_error


def test_create_idea_updates_graph_and_store(idea_map) -> None:
    idea = idea_map.create_idea(IdeaDraft(
        title="  sensor data pipeline  ",
        body="machine learning on the edge",
        keywords=["Technology"],
    ))

    assert idea.title == "sensor data pipeline"
    assert idea.owner_id == OWNER
    assert idea_map.ideas[0].id == idea.id
    assert idea_map.graph.has_node(idea.id)
    assert idea_map.graph.node(idea.id).keyword == "Technology"
    assert idea_map.store.get(idea.id).title == "sensor data pipeline"


@pytest.mark.parametrize(
    "draft",
    [
        IdeaDraft(title=""),
        IdeaDraft(title="too many", keywords=["Data", "Design", "Business"]),
    ],
)
def test_create_idea_validates_before_any_change(idea_map, draft) -> None:
    before = idea_map.n_ideas
    with pytest.raises(ValueError):
        idea_map.create_idea(draft)
    assert idea_map.n_ideas == before
    assert idea_map.store.count() == before


def test_failed_write_keeps_optimistic_change(sample_ideas) -> None:
    idea_map = IdeaMap(store=FailingWriteStore(owner_id=OWNER, ideas=sample_ideas))
    idea_map.refresh()

    idea = idea_map.create_idea(IdeaDraft(title="offline idea", keywords=["Data"]))

    assert idea_map.graph.has_node(idea.id)
    assert idea_map.n_ideas == len(sample_ideas) + 1
    assert idea_map.store.count() == len(sample_ideas)
    assert "disk full" in idea_map.last_error

    idea_map.clear_error()
    assert idea_map.last_error is None


def test_toggle_bookmark_patches_without_rebuild(idea_map) -> None:
    graph = idea_map.graph
    position = graph.node("a1").position.copy()

    assert idea_map.toggle_bookmark("a1") is True
    assert idea_map.graph is graph
    assert graph.node("a1").idea.bookmarked
    assert (graph.node("a1").position == position).all()
    assert idea_map.store.get("a1").bookmarked
    assert [i.id for i in idea_map.bookmarked_ideas()] == ["a1"]

    assert idea_map.toggle_bookmark("a1") is False
    assert not idea_map.store.get("a1").bookmarked


def test_update_keywords_rebuilds(idea_map) -> None:
    idea_map.update_keywords("a7", ["Business"])

    assert idea_map.get_idea("a7").keywords == ["Business"]
    assert idea_map.graph.node("a7").keyword == "Business"
    assert not any(g.keyword == config.DEFAULT_GROUP for g in idea_map.graph.groups)
    assert idea_map.store.get("a7").keywords == ["Business"]

    with pytest.raises(ValueError):
        idea_map.update_keywords("a7", ["Cooking"])
    with pytest.raises(KeyError):
        idea_map.update_keywords("missing", ["Data"])


def test_delete_idea(idea_map) -> None:
    idea_map.delete_idea("a1")

    assert not idea_map.graph.has_node("a1")
    assert all("a1" not in edge.key for edge in idea_map.graph.edges)
    assert idea_map.store.count() == 6
    with pytest.raises(KeyError):
        idea_map.get_idea("a1")


def test_related_ideas(idea_map) -> None:
    related = idea_map.related_ideas("a1")

    assert list(related.columns) == ["id", "title", "keywords", "similarity"]
    assert related["id"].tolist() == ["a2", "a3", "a6"]
    assert related["similarity"].tolist() == pytest.approx([0.5, 0.5, 0.125])
    assert (related["similarity"] > 0).all()

    assert idea_map.related_ideas("a1", k=1)["id"].tolist() == ["a2"]


def test_related_ideas_empty(idea_map) -> None:
    related = idea_map.related_ideas("a7")
    assert related.empty
    assert list(related.columns) == ["id", "title", "keywords", "similarity"]


def test_to_dataframe(idea_map) -> None:
    df = idea_map.to_dataframe()

    assert len(df) == idea_map.n_ideas
    row = df.set_index("id").loc["a7"]
    assert row["group"] == config.DEFAULT_GROUP
    assert df.set_index("id").loc["a1", "connections"] == 2
