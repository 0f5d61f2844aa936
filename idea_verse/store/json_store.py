"""
JSON file idea store for local persistence.
All owners' ideas live in one JSON document on disk.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from idea_verse.core.models import Idea
from .base import BaseIdeaStore, IdeaStoreError, register_store
import config

logger = logging.getLogger(__name__)


@register_store("json")
class JsonFileIdeaStore(BaseIdeaStore):
    """
    Stores ideas as a JSON document: {"ideas": [...]}.

    Features:
    - Missing file reads as an empty store
    - Atomic writes (temp file + replace) so a crash never truncates the file
    - I/O and decode failures surface as IdeaStoreError
    """

    def __init__(self, owner_id: str, path: Optional[Path] = None):
        """
        Initialize the JSON store.

        Args:
            owner_id: Id of the user whose ideas are visible
            path: JSON file path (defaults to config.IDEA_STORE_PATH)
        """
        super().__init__(owner_id)
        self.path = Path(path) if path else config.IDEA_STORE_PATH

    @property
    def name(self) -> str:
        return "json"

    def _load_all(self) -> list[Idea]:
        if not self.path.exists():
            return []

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                payload = json.load(f)
            return [Idea.from_dict(item) for item in payload.get("ideas", [])]
        except (OSError, ValueError, KeyError, TypeError) as e:
            raise IdeaStoreError(f"Failed to read ideas from {self.path}: {e}") from e

    def _save_all(self, ideas: list[Idea]) -> None:
        payload = {"ideas": [idea.to_dict() for idea in ideas]}

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(payload, f, ensure_ascii=False, indent=2)
                os.replace(tmp_path, self.path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except OSError as e:
            raise IdeaStoreError(f"Failed to write ideas to {self.path}: {e}") from e

        logger.debug(f"Saved {len(ideas)} ideas to {self.path}")
