"""Domain helpers for member records: enums, search and subscription math."""
from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any, Iterable, Optional

MEMBER_KEY_PREFIX = "member:"
PROFILE_KEY_PREFIX = "user:"


class Role(str, Enum):
    MEMBER = "member"
    ADMIN = "admin"


class MemberStatus(str, Enum):
    ACTIVE = "active"
    EXPIRED = "expired"
    PENDING = "pending"


class MembershipType(str, Enum):
    BASIC = "basic"
    PREMIUM = "premium"
    VIP = "vip"


def member_key(member_id: str) -> str:
    return f"{MEMBER_KEY_PREFIX}{member_id}"


def profile_key(user_id: str) -> str:
    return f"{PROFILE_KEY_PREFIX}{user_id}"


def days_remaining(subscription_end: Optional[date], today: Optional[date] = None) -> Optional[int]:
    """Whole days until the subscription ends; negative once it is past, None without an end date."""
    if subscription_end is None:
        return None
    today = today or date.today()
    return (subscription_end - today).days


def matches_search(member: Any, query: str | None) -> bool:
    """Case-insensitive substring match over name, email and phone number."""
    needle = (query or "").strip().lower()
    if not needle:
        return True
    haystack = (member.name, member.email, member.phone_number or "")
    return any(needle in (value or "").lower() for value in haystack)


def summarize(members: Iterable[Any]) -> dict[str, int]:
    counts = {"total": 0, **{status.value: 0 for status in MemberStatus}}
    for member in members:
        counts["total"] += 1
        counts[MemberStatus(member.status).value] += 1
    return counts
