from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Garante que o pacote gym_api seja importavel durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from gym_api.core import config as core_config  # noqa: E402
from gym_api.core.errors import IdentityProviderError, Unauthenticated  # noqa: E402
from gym_api.db import models  # noqa: E402
from gym_api.db import session as db_session  # noqa: E402
from gym_api.domain.members import Role  # noqa: E402
from gym_api.repositories.kv_store import InMemoryKeyValueStore  # noqa: E402
from gym_api.services.authorization import AuthorizationGate  # noqa: E402
from gym_api.services.identity_provider import Identity  # noqa: E402
from gym_api.services.member_service import MemberDirectory  # noqa: E402
from gym_api.services.profile_service import ProfileStore  # noqa: E402


class FakeIdentityProvider:
    """In-memory stand-in for the external identity provider."""

    def __init__(self) -> None:
        self.tokens: dict[str, Identity] = {}
        self.users: dict[str, Identity] = {}
        self.verify_calls = 0
        self._next = 0

    def issue(self, token: str, email: str, user_id: str | None = None) -> Identity:
        self._next += 1
        identity = Identity(id=user_id or f"user-{self._next}", email=email)
        self.tokens[token] = identity
        self.users[email] = identity
        return identity

    def verify(self, token: str) -> Identity:
        self.verify_calls += 1
        if not token:
            raise Unauthenticated("Unauthorized - no token provided")
        identity = self.tokens.get(token)
        if identity is None:
            raise Unauthenticated("Unauthorized - invalid token")
        return identity

    def create_user(self, email: str, password: str, name: str, role: str) -> Identity:
        if email in self.users:
            raise IdentityProviderError("A user with this email address has already been registered")
        self._next += 1
        identity = Identity(id=f"user-{self._next}", email=email)
        self.users[email] = identity
        return identity


@pytest.fixture()
def temp_db(tmp_path, monkeypatch):
    """Configura um SQLite temporario e reseta caches de settings/engine."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    core_config.get_settings.cache_clear()
    db_session.dispose_engines()

    engine = db_session.get_engine()
    models.Base.metadata.drop_all(bind=engine)
    models.Base.metadata.create_all(bind=engine)

    yield db_file

    models.Base.metadata.drop_all(bind=engine)
    db_session.dispose_engines()
    core_config.get_settings.cache_clear()


@pytest.fixture()
def store():
    return InMemoryKeyValueStore()


@pytest.fixture()
def identity_provider():
    return FakeIdentityProvider()


@pytest.fixture()
def profiles(store):
    return ProfileStore(store)


@pytest.fixture()
def directory(store):
    return MemberDirectory(store)


@pytest.fixture()
def gate(identity_provider, profiles, directory):
    return AuthorizationGate(identity_provider, profiles, directory)


@pytest.fixture()
def admin_token(identity_provider, profiles):
    identity = identity_provider.issue("admin-token", "boss@gym.test")
    profiles.create_profile(identity.id, identity.email, "Boss", Role.ADMIN)
    return "admin-token"


@pytest.fixture()
def member_token(identity_provider, profiles):
    identity = identity_provider.issue("member-token", "asha@x.com")
    profiles.create_profile(identity.id, identity.email, "Asha", Role.MEMBER)
    return "member-token"
