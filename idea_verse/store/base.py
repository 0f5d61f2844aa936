"""
Base class for idea stores.
Defines the interface all persistence backends must implement.
"""

import logging
import uuid
from abc import ABC, abstractmethod
from typing import List, Optional

from idea_verse.core.keywords import validate_keywords
from idea_verse.core.models import Idea, IdeaDraft

logger = logging.getLogger(__name__)


class IdeaStoreError(Exception):
    """Raised when a store backend fails to read or write ideas."""


class IdeaNotFoundError(IdeaStoreError):
    """Raised when an idea id does not exist for the store's owner."""


# Fields a caller may change through update()
UPDATABLE_FIELDS = {"title", "body", "keywords", "bookmarked", "source_url"}


class BaseIdeaStore(ABC):
    """
    Abstract base class for idea stores.

    Every store is scoped to one owner: list/get/update/delete only see
    that owner's ideas, and insert stamps new ideas with the owner id.
    Backends implement the four storage primitives; validation and id
    assignment live here.
    """

    def __init__(self, owner_id: str):
        """
        Initialize the store.

        Args:
            owner_id: Id of the authenticated user whose ideas are visible
        """
        self.owner_id = owner_id

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique name for this backend."""
        pass

    @abstractmethod
    def _load_all(self) -> List[Idea]:
        """Return every stored idea across all owners."""
        pass

    @abstractmethod
    def _save_all(self, ideas: List[Idea]) -> None:
        """Replace the stored ideas across all owners."""
        pass

    # -------------------------------------------------------------------------
    # Store contract
    # -------------------------------------------------------------------------

    def list(self) -> List[Idea]:
        """Return the owner's ideas, newest first."""
        ideas = [i for i in self._load_all() if i.owner_id == self.owner_id]
        return sorted(ideas, key=lambda i: i.created_at, reverse=True)

    def get(self, idea_id: str) -> Idea:
        for idea in self.list():
            if idea.id == idea_id:
                return idea
        raise IdeaNotFoundError(f"Idea not found: {idea_id}")

    def insert(self, draft: IdeaDraft) -> Idea:
        """
        Insert a new idea.

        Raises:
            ValueError: If the title is empty or the keywords are invalid
            IdeaStoreError: If the backend fails
        """
        title = (draft.title or "").strip()
        if not title:
            raise ValueError("Idea title must not be empty")

        idea = Idea(
            id=draft.id or uuid.uuid4().hex,
            title=title,
            body=draft.body or "",
            keywords=validate_keywords(draft.keywords),
            owner_id=self.owner_id,
            source_url=draft.source_url or None,
        )

        ideas = self._load_all()
        if any(existing.id == idea.id for existing in ideas):
            raise IdeaStoreError(f"Idea id already exists: {idea.id}")
        ideas.append(idea)
        self._save_all(ideas)

        logger.info(f"Inserted idea {idea.id} for owner {self.owner_id}")
        return idea

    def update(self, idea_id: str, **partial) -> Idea:
        """
        Update fields of an existing idea.

        Raises:
            ValueError: If a field is not updatable or keywords are invalid
            IdeaNotFoundError: If the idea does not exist for this owner
        """
        unknown = set(partial) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update fields: {sorted(unknown)}")
        if "keywords" in partial:
            partial["keywords"] = validate_keywords(partial["keywords"])

        ideas = self._load_all()
        for idea in ideas:
            if idea.id == idea_id and idea.owner_id == self.owner_id:
                for key, value in partial.items():
                    setattr(idea, key, value)
                self._save_all(ideas)
                return idea

        raise IdeaNotFoundError(f"Idea not found: {idea_id}")

    def delete(self, idea_id: str) -> None:
        ideas = self._load_all()
        remaining = [
            i for i in ideas if not (i.id == idea_id and i.owner_id == self.owner_id)
        ]
        if len(remaining) == len(ideas):
            raise IdeaNotFoundError(f"Idea not found: {idea_id}")
        self._save_all(remaining)
        logger.info(f"Deleted idea {idea_id}")

    # -------------------------------------------------------------------------
    # Sample data helpers
    # -------------------------------------------------------------------------

    def count(self) -> int:
        return len(self.list())

    def seed(self, ideas: List[Idea], append: bool = False) -> int:
        """
        Load sample ideas for this owner.

        Args:
            ideas: Ideas to store (re-stamped with this owner)
            append: Keep the owner's existing ideas instead of replacing them

        Returns:
            Number of ideas the owner has afterwards
        """
        stored = self._load_all()
        others = [i for i in stored if i.owner_id != self.owner_id]
        mine = [i for i in stored if i.owner_id == self.owner_id] if append else []

        taken = {i.id for i in mine}
        for idea in ideas:
            idea_id = idea.id if idea.id not in taken else uuid.uuid4().hex
            taken.add(idea_id)
            mine.append(Idea(
                id=idea_id,
                title=idea.title,
                body=idea.body,
                keywords=list(idea.keywords),
                bookmarked=idea.bookmarked,
                created_at=idea.created_at,
                owner_id=self.owner_id,
                source_url=idea.source_url,
            ))

        self._save_all(others + mine)
        logger.info(f"Seeded {len(ideas)} ideas (append={append}), owner now has {len(mine)}")
        return len(mine)

    def clear(self) -> None:
        """Remove all of the owner's ideas."""
        self._save_all([i for i in self._load_all() if i.owner_id != self.owner_id])


# Registry for available stores
_STORE_REGISTRY: dict[str, type[BaseIdeaStore]] = {}


def register_store(name: str):
    """
    Decorator to register a store class.

    Usage:
        @register_store("json")
        class JsonFileIdeaStore(BaseIdeaStore):
            ...

    Raises:
        TypeError: If class doesn't inherit from BaseIdeaStore
        ValueError: If name is already registered
    """
    def decorator(cls: type[BaseIdeaStore]):
        if not issubclass(cls, BaseIdeaStore):
            raise TypeError(f"{cls.__name__} must inherit from BaseIdeaStore")
        if name in _STORE_REGISTRY:
            raise ValueError(
                f"Store '{name}' already registered by {_STORE_REGISTRY[name].__name__}"
            )
        _STORE_REGISTRY[name] = cls
        return cls
    return decorator


def get_store(name: str, **kwargs) -> BaseIdeaStore:
    """
    Get a store instance by name.

    Raises:
        ValueError: If store name not found
    """
    if name not in _STORE_REGISTRY:
        available = list(_STORE_REGISTRY.keys())
        raise ValueError(f"Unknown store '{name}'. Available: {available}")

    return _STORE_REGISTRY[name](**kwargs)


def list_stores() -> list[str]:
    """Return list of registered store names."""
    return list(_STORE_REGISTRY.keys())


def new_idea_id(existing: Optional[set[str]] = None) -> str:
    """Fresh client-side idea id."""
    existing = existing or set()
    idea_id = uuid.uuid4().hex
    while idea_id in existing:
        idea_id = uuid.uuid4().hex
    return idea_id
