"""SQLAlchemy models backing the key-value store."""
from __future__ import annotations

from sqlalchemy import Column, DateTime, JSON, String, func

from .session import Base


class KVEntry(Base):
    __tablename__ = "kv_store"

    key = Column(String(255), primary_key=True)
    value = Column(JSON, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
