"""
Authorization Gate.

Every call walks the same states: verify the bearer token (401 on failure,
before any store access), load the caller's profile, then check the role
when the operation is admin-only (403). Nothing is cached between calls.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from gym_api.core.errors import Forbidden, NotFound, Unauthenticated
from gym_api.domain.members import Role
from gym_api.schemas import Member, MemberInput, Profile, decode_json_body, parse_payload
from gym_api.services.identity_provider import Identity, IdentityProvider
from gym_api.services.member_service import MemberDirectory
from gym_api.services.profile_service import ProfileStore

logger = logging.getLogger(__name__)


@dataclass
class Caller:
    identity: Identity
    profile: Optional[Profile]

    @property
    def is_admin(self) -> bool:
        return bool(self.profile and self.profile.role == Role.ADMIN)


class AuthorizationGate:
    def __init__(self, identity_provider: IdentityProvider, profiles: ProfileStore, directory: MemberDirectory) -> None:
        self.identity_provider = identity_provider
        self.profiles = profiles
        self.directory = directory

    # -------------------------------------- states --------------------------------------
    def authenticate(self, token: Optional[str]) -> Identity:
        if not token:
            raise Unauthenticated("Unauthorized - no token provided")
        return self.identity_provider.verify(token)

    def load_caller(self, token: Optional[str]) -> Caller:
        identity = self.authenticate(token)
        return Caller(identity=identity, profile=self.profiles.get_profile(identity.id))

    def require_admin(self, token: Optional[str]) -> Caller:
        caller = self.load_caller(token)
        if not caller.is_admin:
            logger.info("non-admin %s refused admin operation", caller.identity.id)
            raise Forbidden("Forbidden - admin access required")
        return caller

    # -------------------------------------- admin --------------------------------------
    def save_member(self, token: Optional[str], data: MemberInput | Any) -> Member:
        """Create or update a member. Raw bodies are validated only after the role check."""
        self.require_admin(token)
        if isinstance(data, (bytes, str)):
            data = decode_json_body(data)
        if not isinstance(data, MemberInput):
            data = parse_payload(MemberInput, data)
        return self.directory.upsert_member(data, existing_id=data.id)

    def delete_member(self, token: Optional[str], member_id: str) -> None:
        self.require_admin(token)
        self.directory.delete_member(member_id)

    def list_members(self, token: Optional[str], search: Optional[str] = None) -> list[Member]:
        self.require_admin(token)
        return self.directory.list_members(search=search)

    def member_stats(self, token: Optional[str]) -> dict[str, int]:
        self.require_admin(token)
        return self.directory.stats()

    # -------------------------------------- any caller --------------------------------------
    def my_subscription(self, token: Optional[str]) -> Member:
        identity = self.authenticate(token)
        member = self.directory.find_member_by_email(identity.email)
        if not member:
            raise NotFound("No subscription found for this account")
        return member

    def my_profile(self, token: Optional[str]) -> Profile:
        identity = self.authenticate(token)
        profile = self.profiles.get_profile(identity.id)
        if not profile:
            raise NotFound("Profile not found")
        return profile
