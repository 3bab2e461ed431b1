"""Small JSON-file key-value store used to keep the high score between runs."""

from __future__ import annotations

import json
import logging
import os
from typing import Any

logger = logging.getLogger(__name__)


class JsonStore:
    """Key-value persistence backed by a single JSON object on disk."""

    def __init__(self, path: str) -> None:
        self.path = path
        self._data = self._load()

    def _load(self) -> dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable store %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring store %s: expected a JSON object", self.path)
            return {}
        return data

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(self._data, f)
        except OSError as e:
            logger.error("Could not write %s: %s", self.path, e)
