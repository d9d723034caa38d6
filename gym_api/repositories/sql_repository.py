"""Key-value store backed by a SQLAlchemy table."""
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from gym_api.core.errors import StoreError
from gym_api.db.models import KVEntry
from gym_api.db.session import get_session

logger = logging.getLogger(__name__)


class SQLKeyValueStore:
    """get/set/delete/scan helpers wrapping the SQLAlchemy session."""

    def __init__(self, database_url: Optional[str] = None) -> None:
        self.database_url = database_url

    def get(self, key: str) -> Optional[dict]:
        try:
            with get_session(self.database_url) as session:
                entry = session.get(KVEntry, key)
                return dict(entry.value) if entry else None
        except SQLAlchemyError as exc:
            logger.error("kv get failed for %s: %s", key, exc)
            raise StoreError(f"Failed to read {key}") from exc

    def set(self, key: str, value: dict) -> None:
        try:
            with get_session(self.database_url) as session:
                entry = session.get(KVEntry, key)
                if not entry:
                    session.add(KVEntry(key=key, value=value))
                else:
                    entry.value = value
                session.commit()
        except SQLAlchemyError as exc:
            logger.error("kv set failed for %s: %s", key, exc)
            raise StoreError(f"Failed to write {key}") from exc

    def delete(self, key: str) -> None:
        try:
            with get_session(self.database_url) as session:
                session.execute(delete(KVEntry).where(KVEntry.key == key))
                session.commit()
        except SQLAlchemyError as exc:
            logger.error("kv delete failed for %s: %s", key, exc)
            raise StoreError(f"Failed to delete {key}") from exc

    def scan_by_prefix(self, prefix: str) -> list[dict]:
        try:
            with get_session(self.database_url) as session:
                stmt = select(KVEntry.value).where(KVEntry.key.startswith(prefix, autoescape=True))
                return [dict(value) for value in session.execute(stmt).scalars().all()]
        except SQLAlchemyError as exc:
            logger.error("kv scan failed for prefix %s: %s", prefix, exc)
            raise StoreError(f"Failed to scan {prefix}") from exc
