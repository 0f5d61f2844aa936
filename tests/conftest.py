"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta, timezone

import pytest

from idea_verse.core.idea_map import IdeaMap
from idea_verse.core.models import Idea
from idea_verse.store.base import IdeaStoreError
from idea_verse.store.memory import InMemoryIdeaStore

OWNER = "owner-1"
BASE_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def make_idea(idea_id: str, title: str, keywords=None, minutes: int = 0, **kwargs) -> Idea:
    return Idea(
        id=idea_id,
        title=title,
        keywords=list(keywords or []),
        created_at=BASE_TIME + timedelta(minutes=minutes),
        owner_id=kwargs.pop("owner_id", OWNER),
        **kwargs,
    )


class FailingWriteStore(InMemoryIdeaStore):
    """Reads work, every write fails."""

    def _save_all(self, ideas):
        raise IdeaStoreError("disk full")


class FailingReadStore(InMemoryIdeaStore):
    def _load_all(self):
        raise IdeaStoreError("connection refused")


@pytest.fixture
def sample_ideas() -> list[Idea]:
    """A small idea set with known similarities.

    a1/a3 share Technology (0.5), a1/a2 and a2/a3 cross groups (0.5, 0.33),
    a4/a5 share Design (0.29), a6 is shared Data+Technology, a7 has no keyword.
    """
    return [
        make_idea("a1", "machine learning pipeline for sensor data", ["Technology"], 1),
        make_idea("a2", "machine learning pipeline for customer churn", ["Data"], 2),
        make_idea("a3", "machine learning model for sensor anomalies", ["Technology"], 3),
        make_idea("a4", "pendulum clock motion study", ["Design"], 4),
        make_idea("a5", "clock motion in kinetic typography", ["Design", "Innovation"], 5),
        make_idea("a6", "weekly data dashboard", ["Data", "Technology"], 6),
        make_idea("a7", "untagged note about gardening", [], 7),
    ]


@pytest.fixture
def memory_store(sample_ideas) -> InMemoryIdeaStore:
    return InMemoryIdeaStore(owner_id=OWNER, ideas=sample_ideas)


@pytest.fixture
def idea_map(memory_store) -> IdeaMap:
    idea_map = IdeaMap(store=memory_store)
    assert idea_map.refresh()
    return idea_map
