"""
In-memory idea store for tests and throwaway sessions.
"""

import copy
from typing import Optional

from idea_verse.core.models import Idea
from .base import BaseIdeaStore, register_store


@register_store("memory")
class InMemoryIdeaStore(BaseIdeaStore):
    """
    Keeps ideas in a process-local list.

    Reads and writes go through deep copies so callers never share
    mutable records with the store, the same as a real backend.
    """

    def __init__(self, owner_id: str, ideas: Optional[list[Idea]] = None):
        super().__init__(owner_id)
        self._ideas: list[Idea] = copy.deepcopy(ideas or [])

    @property
    def name(self) -> str:
        return "memory"

    def _load_all(self) -> list[Idea]:
        return copy.deepcopy(self._ideas)

    def _save_all(self, ideas: list[Idea]) -> None:
        self._ideas = copy.deepcopy(ideas)
