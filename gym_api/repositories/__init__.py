"""
Persistence adapters.

Services depend on the KeyValueStore contract; ``build_store`` picks the
backend named by STORAGE_BACKEND.
"""

from __future__ import annotations

from gym_api.core.config import Settings
from gym_api.repositories.kv_store import InMemoryKeyValueStore, KeyValueStore


def build_store(settings: Settings) -> KeyValueStore:
    backend = settings.storage_backend
    if backend == "sql":
        from gym_api.repositories.sql_repository import SQLKeyValueStore

        if settings.auto_create_tables:
            from gym_api.db.create_tables import create_all

            create_all(settings.database_url)
        return SQLKeyValueStore(settings.database_url)
    if backend == "json":
        from gym_api.repositories.json_storage import JSONFileKeyValueStore

        return JSONFileKeyValueStore(settings.json_store_path)
    if backend == "memory":
        return InMemoryKeyValueStore()
    raise RuntimeError(f"Unknown STORAGE_BACKEND: {backend!r}")


__all__ = ["KeyValueStore", "InMemoryKeyValueStore", "build_store"]
