"""
Member Directory use cases: upsert, delete, list and lookups.

Lookups by email are a linear scan over every member record. That is fine at
gym scale; a larger directory would keep a secondary ``email:`` index instead.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from gym_api.core.errors import ValidationError
from gym_api.domain.members import (
    MEMBER_KEY_PREFIX,
    MembershipType,
    MemberStatus,
    matches_search,
    member_key,
    summarize,
)
from gym_api.repositories.kv_store import KeyValueStore
from gym_api.schemas import Member, MemberInput

logger = logging.getLogger(__name__)

# attributes a caller may write; id and timestamps are managed here
_WRITABLE_FIELDS = (
    "name",
    "email",
    "phone_number",
    "subscription_start",
    "subscription_end",
    "status",
    "membership_type",
)


class MemberDirectory:
    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def _now(self) -> datetime:
        return datetime.now(timezone.utc)

    def _new_id(self) -> str:
        while True:
            candidate = str(uuid.uuid4())
            if self.store.get(member_key(candidate)) is None:
                return candidate

    def get_member(self, member_id: str) -> Optional[Member]:
        if not member_id:
            return None
        record = self.store.get(member_key(member_id))
        return Member.model_validate(record) if record else None

    def upsert_member(self, data: MemberInput, existing_id: Optional[str] = None) -> Member:
        """
        Create a member, or update the one stored under ``existing_id``.

        On update only the fields present in ``data`` change; createdAt is kept
        and updatedAt never moves backwards. Blank optional fields fall back to
        their defaults (phone "", status active, membership basic).
        """
        member_id = (existing_id or data.id or "").strip()
        existing = self.get_member(member_id) if member_id else None
        now = self._now()

        values = {field: None for field in _WRITABLE_FIELDS}
        if existing:
            values.update({field: getattr(existing, field) for field in _WRITABLE_FIELDS})
        values.update({field: getattr(data, field) for field in _WRITABLE_FIELDS if field in data.model_fields_set})

        if not values["name"] or not values["email"]:
            raise ValidationError("Name and email are required")

        if existing:
            created_at = existing.created_at
            updated_at = max(now, existing.updated_at)
        else:
            member_id = member_id or self._new_id()
            created_at = updated_at = now

        member = Member(
            id=member_id,
            name=values["name"],
            email=values["email"],
            phone_number=values["phone_number"] or "",
            subscription_start=values["subscription_start"],
            subscription_end=values["subscription_end"],
            status=values["status"] or MemberStatus.ACTIVE,
            membership_type=values["membership_type"] or MembershipType.BASIC,
            created_at=created_at,
            updated_at=updated_at,
        )
        self.store.set(member_key(member_id), member.to_record())
        logger.info("%s member %s", "updated" if existing else "created", member_id)
        return member

    def delete_member(self, member_id: str) -> None:
        """Remove the record if present. Deleting an unknown id is a no-op."""
        self.store.delete(member_key(member_id))
        logger.info("deleted member %s", member_id)

    def list_members(self, search: Optional[str] = None) -> list[Member]:
        members = [Member.model_validate(record) for record in self.store.scan_by_prefix(MEMBER_KEY_PREFIX)]
        if search:
            members = [m for m in members if matches_search(m, search)]
        return members

    def find_member_by_email(self, email: str) -> Optional[Member]:
        # several members may share an email; the first in store order wins
        if not email:
            return None
        for member in self.list_members():
            if member.email == email:
                return member
        return None

    def stats(self) -> dict[str, int]:
        return summarize(self.list_members())
