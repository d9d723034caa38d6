"""
Configuration helpers for the gym directory backend.

Routers/services read a Settings object instead of fetching os.environ
directly, so tests can swap the environment and clear the cache.
"""

from dataclasses import dataclass
from functools import lru_cache
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    database_url: str
    storage_backend: str
    json_store_path: str
    auth_url: str
    auth_service_key: str
    auth_anon_key: str
    auth_timeout_seconds: float
    route_prefix: str
    cors_origins: tuple[str, ...]
    log_level: str
    auto_create_tables: bool


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _float(value: str, default: float = 0.0) -> float:
        try:
            return float(value)
        except (TypeError, ValueError):
            return default

    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    def _prefix(value: str) -> str:
        value = (value or "").strip().rstrip("/")
        if value and not value.startswith("/"):
            value = "/" + value
        return value

    service_key = os.getenv("AUTH_SERVICE_KEY", "")
    origins = tuple(o.strip() for o in (os.getenv("CORS_ORIGINS") or "*").split(",") if o.strip())
    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        database_url=os.getenv("DATABASE_URL", "sqlite:///gym_api.db"),
        storage_backend=(os.getenv("STORAGE_BACKEND") or "sql").strip().lower(),
        json_store_path=os.getenv("JSON_STORE_PATH", "data.json"),
        auth_url=os.getenv("AUTH_URL", "").rstrip("/"),
        auth_service_key=service_key,
        auth_anon_key=os.getenv("AUTH_ANON_KEY", "") or service_key,
        auth_timeout_seconds=_float(os.getenv("AUTH_TIMEOUT_SECONDS", "10"), 10.0),
        route_prefix=_prefix(os.getenv("ROUTE_PREFIX", "")),
        cors_origins=origins,
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        auto_create_tables=_bool(os.getenv("AUTO_CREATE_TABLES"), True),
    )
