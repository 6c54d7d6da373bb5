"""JSON key-value storage for the conversation collection."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from .config import STORAGE_KEY
from .models import Conversation

logger = logging.getLogger(__name__)

_collection_adapter = TypeAdapter(list[Conversation])


class LocalStorage:
    """String key-value store backed by one JSON file per key."""

    def __init__(self, directory: Path):
        self.directory = directory

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get_item(self, key: str) -> str | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str):
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.path_for(key)
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(value, encoding="utf-8")
        tmp.replace(path)

    def remove_item(self, key: str):
        self.path_for(key).unlink(missing_ok=True)


class ConversationPersistence:
    """Loads and saves the full conversation collection under a single key."""

    def __init__(self, storage: LocalStorage, key: str = STORAGE_KEY):
        self.storage = storage
        self.key = key

    def load(self) -> list[Conversation]:
        """Return the stored collection, or an empty one if absent or unreadable."""
        try:
            raw = self.storage.get_item(self.key)
        except UnicodeDecodeError:
            logger.warning("Ignoring conversation data under '%s': not valid UTF-8", self.key)
            return []
        if raw is None:
            return []

        try:
            return _collection_adapter.validate_json(raw)
        except ValidationError as exc:
            # validate_json reports invalid JSON as a ValidationError too
            logger.warning(
                "Ignoring unreadable conversation data under '%s' (%d errors)",
                self.key,
                exc.error_count(),
            )
            return []

    def save(self, conversations: list[Conversation]):
        payload = [c.model_dump(mode="json", by_alias=True) for c in conversations]
        self.storage.set_item(self.key, json.dumps(payload, ensure_ascii=False, indent=2))
