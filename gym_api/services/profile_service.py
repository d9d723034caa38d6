"""Profile Store: role records keyed by identity id."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from gym_api.core.errors import ProfileExistsError
from gym_api.domain.members import Role, profile_key
from gym_api.repositories.kv_store import KeyValueStore
from gym_api.schemas import Profile


class ProfileStore:
    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def get_profile(self, user_id: str) -> Optional[Profile]:
        if not user_id:
            return None
        record = self.store.get(profile_key(user_id))
        return Profile.model_validate(record) if record else None

    def create_profile(self, user_id: str, email: str, name: str, role: Role | str = Role.MEMBER) -> Profile:
        """Store the profile for a freshly created identity. Profiles are written once."""
        key = profile_key(user_id)
        if self.store.get(key) is not None:
            raise ProfileExistsError(f"Profile already exists for {user_id}")
        profile = Profile(
            id=user_id,
            email=email,
            name=name,
            role=Role(role),
            created_at=datetime.now(timezone.utc),
        )
        self.store.set(key, profile.to_record())
        return profile
