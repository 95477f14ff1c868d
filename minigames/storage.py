"""
storage.py - Key-value persistence for high scores.

The engines never touch the filesystem themselves: they receive a store
implementing get()/set() and read their high score once at construction.

Classes:
    KeyValueStore  - the port both engines depend on
    MemoryStore    - dict-backed store (tests, throwaway sessions)
    JsonFileStore  - every key kept in one JSON object on disk
"""

import json
import logging
import os
from typing import Protocol

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStore:
    """In-process store. Values are kept as strings, like a browser cache."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = str(value)


class JsonFileStore:
    """
    Persist all keys to a single JSON file.

    The file is read once on construction and rewritten on every set().
    A missing file starts empty; an unreadable or corrupt file is logged
    and also starts empty. Failed writes are logged and the in-memory
    value is kept, so a read-only disk never stops a game.
    """

    def __init__(self, path: str):
        self.path = path
        self._data: dict[str, str] = self._load()

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = str(value)
        self._save()

    def _load(self) -> dict[str, str]:
        if not os.path.isfile(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Could not read high scores from %s: %s", self.path, exc)
            return {}
        if not isinstance(raw, dict):
            logger.warning("Ignoring high score file %s: not a JSON object", self.path)
            return {}
        return {str(k): str(v) for k, v in raw.items()}

    def _save(self) -> None:
        tmp = self.path + ".tmp"
        try:
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(self._data, f, indent=2, sort_keys=True)
            os.replace(tmp, self.path)
        except OSError as exc:
            logger.warning("Could not write high scores to %s: %s", self.path, exc)


def read_high_score(store: KeyValueStore, key: str) -> int:
    """Stored integer under key, 0 when absent or malformed."""
    raw = store.get(key)
    if raw is None:
        return 0
    try:
        return max(0, int(raw))
    except (TypeError, ValueError):
        logger.warning("Ignoring malformed high score %r under %s", raw, key)
        return 0
