"""
Signup flow: create the identity at the provider, then store the profile.

The two steps are not atomic. When the profile write fails the identity
already exists at the provider and is left without a profile; nothing rolls
it back.
"""

from __future__ import annotations

import logging

from gym_api.core.errors import InternalError
from gym_api.schemas import Profile, SignupRequest
from gym_api.services.identity_provider import IdentityProvider
from gym_api.services.profile_service import ProfileStore

logger = logging.getLogger(__name__)


class SignupService:
    def __init__(self, identity_provider: IdentityProvider, profiles: ProfileStore) -> None:
        self.identity_provider = identity_provider
        self.profiles = profiles

    def signup(self, request: SignupRequest) -> Profile:
        identity = self.identity_provider.create_user(
            request.email,
            request.password,
            request.name,
            request.role.value,
        )
        try:
            profile = self.profiles.create_profile(identity.id, request.email, request.name, request.role)
        except Exception as exc:
            logger.exception("identity %s created but profile write failed; identity is orphaned", identity.id)
            raise InternalError("Failed to create user profile") from exc
        logger.info("signed up %s as %s", identity.id, profile.role.value)
        return profile
