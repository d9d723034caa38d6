"""
Key-value persistence contract.

Services only rely on get/set/delete/scan_by_prefix; the backend behind it
(SQL table, JSON file, process memory) is chosen at app start.
"""

from __future__ import annotations

import copy
import threading
from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[dict]:
        ...

    def set(self, key: str, value: dict) -> None:
        ...

    def delete(self, key: str) -> None:
        ...

    def scan_by_prefix(self, prefix: str) -> list[dict]:
        ...


class InMemoryKeyValueStore:
    """Process-local store. Values are deep-copied in and out."""

    def __init__(self) -> None:
        self._data: dict[str, dict] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[dict]:
        with self._lock:
            value = self._data.get(key)
            return copy.deepcopy(value) if value is not None else None

    def set(self, key: str, value: dict) -> None:
        with self._lock:
            self._data[key] = copy.deepcopy(value)

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def scan_by_prefix(self, prefix: str) -> list[dict]:
        with self._lock:
            return [copy.deepcopy(v) for k, v in self._data.items() if k.startswith(prefix)]
