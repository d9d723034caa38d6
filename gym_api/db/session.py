"""
Engine/session helpers for the SQL backend.

Engines are cached per database URL. Callers that hold a Settings object pass
its ``database_url``; without one the environment's DATABASE_URL is used.
"""
from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from gym_api.core.config import get_settings

Base = declarative_base()

_engines: dict[str, tuple[Engine, sessionmaker]] = {}
_lock = threading.Lock()


def _resolve_url(url: Optional[str]) -> str:
    resolved = (url or get_settings().database_url or "").strip()
    if not resolved:
        raise RuntimeError("DATABASE_URL must be configured to use the SQL backend.")
    return resolved


def _entry(url: Optional[str]) -> tuple[Engine, sessionmaker]:
    resolved = _resolve_url(url)
    with _lock:
        entry = _engines.get(resolved)
        if entry is None:
            engine = create_engine(resolved, future=True, pool_pre_ping=True)
            entry = (engine, sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True))
            _engines[resolved] = entry
        return entry


def get_engine(url: Optional[str] = None) -> Engine:
    return _entry(url)[0]


def dispose_engines() -> None:
    """Dispose and forget every cached engine."""
    with _lock:
        entries = list(_engines.values())
        _engines.clear()
    for engine, _ in entries:
        engine.dispose()


@contextmanager
def get_session(url: Optional[str] = None) -> Iterator[Session]:
    session: Session = _entry(url)[1]()
    try:
        yield session
    finally:
        session.close()
