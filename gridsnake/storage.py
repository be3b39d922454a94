"""
storage.py — Persistent key-value store for the high score.

Both stores speak the same tiny interface, a string-to-string mapping:

    store.get(key)        -> str | None
    store.set(key, value) -> None

JsonFileStore keeps every key in one JSON object on disk. Reads never
raise: a missing or damaged file reads as empty. Writes raise OSError and
the caller decides whether that matters (the engine treats it as
best-effort).
"""

import json
import logging
import os
from typing import Dict, Optional

log = logging.getLogger(__name__)


class MemoryStore:
    """Dict-backed store; nothing survives the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = str(value)


class JsonFileStore:
    """Store backed by a JSON object in ``path``."""

    def __init__(self, path: str) -> None:
        self.path = path

    def get(self, key: str) -> Optional[str]:
        value = self._read().get(key)
        return None if value is None else str(value)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = str(value)
        parent = os.path.dirname(self.path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        tmp_path = self.path + ".tmp"
        with open(tmp_path, "w", encoding="utf-8") as fh:
            json.dump(data, fh, indent=2, sort_keys=True)
        os.replace(tmp_path, self.path)

    def _read(self) -> Dict[str, object]:
        if not os.path.isfile(self.path):
            return {}
        try:
            with open(self.path, encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, ValueError) as exc:
            log.warning("could not read store %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            log.warning("store %s does not hold a JSON object; ignoring it", self.path)
            return {}
        return data
