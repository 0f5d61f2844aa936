"""
Idea stores for Idea-Verse.
"""

from .base import (
    BaseIdeaStore,
    IdeaNotFoundError,
    IdeaStoreError,
    get_store,
    list_stores,
    register_store,
)
from .memory import InMemoryIdeaStore
from .json_store import JsonFileIdeaStore
from .seed import load_seed_ideas

__all__ = [
    "BaseIdeaStore",
    "IdeaNotFoundError",
    "IdeaStoreError",
    "get_store",
    "list_stores",
    "register_store",
    "InMemoryIdeaStore",
    "JsonFileIdeaStore",
    "load_seed_ideas",
]
