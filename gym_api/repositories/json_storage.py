"""
JSON file persistence adapter.

The whole store is one JSON object (key -> record). Every call loads the file
and writes it back, so it is only meant for small deployments and local runs.
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Optional

from gym_api.core.errors import StoreError

logger = logging.getLogger(__name__)


class JSONFileKeyValueStore:
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def _load(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            logger.error("could not read %s: %s", self.path, exc)
            raise StoreError("Failed to read JSON store") from exc
        if not isinstance(data, dict):
            raise StoreError("JSON store must contain an object")
        return data

    def _save(self, data: dict) -> None:
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
            tmp.replace(self.path)
        except OSError as exc:
            logger.error("could not write %s: %s", self.path, exc)
            raise StoreError("Failed to write JSON store") from exc

    def get(self, key: str) -> Optional[dict]:
        with self._lock:
            return self._load().get(key)

    def set(self, key: str, value: dict) -> None:
        with self._lock:
            data = self._load()
            data[key] = value
            self._save(data)

    def delete(self, key: str) -> None:
        with self._lock:
            data = self._load()
            if key in data:
                del data[key]
                self._save(data)

    def scan_by_prefix(self, prefix: str) -> list[dict]:
        with self._lock:
            return [v for k, v in self._load().items() if k.startswith(prefix)]
