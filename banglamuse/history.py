"""Repository for the persisted list of past generations.

The whole list lives under a single named key in one JSON file. The file is
read once at startup and overwritten wholesale after every change.
"""

import json
import logging
import os
import tempfile
import time
from pathlib import Path
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from banglamuse.categories import CategoryId

logger = logging.getLogger(__name__)


class HistoryItemNotFoundError(KeyError):
    """Raised when a history entry id does not exist."""


def _now_ms() -> int:
    return int(time.time() * 1000)


class HistoryItem(BaseModel):
    """One past successful generation or refinement."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid4().hex)
    category: CategoryId
    topic: str
    content: str
    timestamp: int = Field(default_factory=_now_ms, description="Epoch milliseconds")


class HistoryStore:
    """Ordered, most-recent-first history backed by a JSON file."""

    def __init__(self, path: Path | str, key: str = "banglamuse_history") -> None:
        """Initialize the store.

        Args:
            path: JSON file holding the serialized history.
            key: Name of the key the list is stored under.
        """
        self.path = Path(path)
        self.key = key
        self._items: list[HistoryItem] = []

    @property
    def items(self) -> list[HistoryItem]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def load(self) -> list[HistoryItem]:
        """Read the history file into memory.

        A missing file gives an empty history. An unreadable file is logged
        and also gives an empty history.
        """
        self._items = []
        if not self.path.exists():
            return self.items

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            raw_items = data.get(self.key, []) if isinstance(data, dict) else []
            if not isinstance(raw_items, list):
                raise TypeError(f"'{self.key}' holds {type(raw_items).__name__}, expected a list")
            self._items = [HistoryItem.model_validate(item) for item in raw_items]
        except (OSError, TypeError, json.JSONDecodeError, ValidationError) as e:
            logger.error(f"Failed to parse history from {self.path}: {e}")
            self._items = []

        logger.info(f"Loaded {len(self._items)} history items from {self.path}")
        return self.items

    def save(self) -> None:
        """Overwrite the history file with the in-memory list."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {self.key: [item.model_dump(mode="json") for item in self._items]}

        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".history-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def add(self, category: CategoryId | str, topic: str, content: str) -> HistoryItem:
        """Prepend a new entry and persist.

        The entry is dropped again if the file cannot be written.

        Returns:
            The created HistoryItem.
        """
        item = HistoryItem(category=CategoryId(category), topic=topic, content=content)
        self._items.insert(0, item)
        try:
            self.save()
        except Exception:
            self._items.remove(item)
            raise
        return item

    def get(self, item_id: str) -> HistoryItem:
        """Get an entry by id.

        Raises:
            HistoryItemNotFoundError: If no entry has that id.
        """
        for item in self._items:
            if item.id == item_id:
                return item
        raise HistoryItemNotFoundError(item_id)

    def delete(self, item_id: str) -> bool:
        """Remove an entry by id and persist.

        Returns:
            True if an entry was removed, False if not found.
        """
        remaining = [item for item in self._items if item.id != item_id]
        if len(remaining) == len(self._items):
            return False
        self._items = remaining
        self.save()
        return True

    def clear(self) -> None:
        """Remove every entry and persist."""
        self._items = []
        self.save()
