from pathlib import Path

import pytest

import config
from idea_verse.core.keywords import validate_keywords
from idea_verse.store.seed import load_seed_ideas, parse_keywords


def test_bundled_seed_file_loads() -> None:
    ideas = load_seed_ideas()

    assert len(ideas) == 14
    assert ideas[0].id == "1"
    assert ideas[2].keywords == ["Design", "Research"]
    assert ideas[4].body.startswith("Stream sensor readings")
    for idea in ideas:
        assert idea.title
        validate_keywords(idea.keywords)


def test_seed_timestamps_follow_file_order() -> None:
    ideas = load_seed_ideas(config.SEED_IDEAS_PATH)
    created = [idea.created_at for idea in ideas]
    assert created == sorted(created, reverse=True)


def test_missing_file_returns_empty(tmp_path: Path) -> None:
    assert load_seed_ideas(tmp_path / "missing.csv") == []


def test_alternate_columns_and_empty_titles(tmp_path: Path) -> None:
    path = tmp_path / "ideas.csv"
    path.write_text(
        "Idea,Tags,Bookmarked,URL\n"
        "Hello map,Data;Design,yes,https://example.test\n"
        ",Data,no,\n"
        "Second,,0,\n",
        encoding="utf-8",
    )
    ideas = load_seed_ideas(path)

    assert [i.title for i in ideas] == ["Hello map", "Second"]
    assert [i.id for i in ideas] == ["seed_0", "seed_1"]
    assert ideas[0].keywords == ["Data", "Design"]
    assert ideas[0].bookmarked
    assert ideas[0].source_url == "https://example.test"
    assert ideas[1].keywords == []
    assert not ideas[1].bookmarked
    assert ideas[1].source_url is None


def test_explicit_dates_are_parsed(tmp_path: Path) -> None:
    path = tmp_path / "ideas.csv"
    path.write_text("title,created_at\nDated,2023-01-02T03:04:05Z\n", encoding="utf-8")

    idea = load_seed_ideas(path)[0]
    assert (idea.created_at.year, idea.created_at.month, idea.created_at.day) == (2023, 1, 2)
    assert idea.created_at.tzinfo is not None


def test_missing_title_column_raises(tmp_path: Path) -> None:
    path = tmp_path / "ideas.csv"
    path.write_text("name,keywords\nfoo,Data\n", encoding="utf-8")

    with pytest.raises(ValueError):
        load_seed_ideas(path)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("Data|Design", ["Data", "Design"]),
        (" Data ; Design , Business ", ["Data", "Design"]),
        ("Data,Data", ["Data"]),
        ("", []),
        (None, []),
    ],
)
def test_parse_keywords(value, expected) -> None:
    assert parse_keywords(value) == expected
