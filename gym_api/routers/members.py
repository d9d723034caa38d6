from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends

from gym_api.core.errors import error_boundary
from gym_api.domain.members import days_remaining
from gym_api.routers._deps import bearer_token, get_gate, raw_body
from gym_api.services.authorization import AuthorizationGate

router = APIRouter(tags=["members"])


@router.post("/members")
def save_member(
    payload: bytes = Depends(raw_body),
    token: Optional[str] = Depends(bearer_token),
    gate: AuthorizationGate = Depends(get_gate),
):
    with error_boundary("Failed to save member"):
        member = gate.save_member(token, payload)
    return {"success": True, "member": member.to_record()}


@router.get("/members")
def list_members(
    search: str = "",
    token: Optional[str] = Depends(bearer_token),
    gate: AuthorizationGate = Depends(get_gate),
):
    with error_boundary("Failed to get members"):
        members = gate.list_members(token, search=search or None)
    return {"members": [m.to_record() for m in members]}


@router.get("/members/stats")
def member_stats(token: Optional[str] = Depends(bearer_token), gate: AuthorizationGate = Depends(get_gate)):
    with error_boundary("Failed to get members"):
        stats = gate.member_stats(token)
    return {"stats": stats}


@router.delete("/members/{member_id}")
def delete_member(
    member_id: str,
    token: Optional[str] = Depends(bearer_token),
    gate: AuthorizationGate = Depends(get_gate),
):
    with error_boundary("Failed to delete member"):
        gate.delete_member(token, member_id)
    return {"success": True}


@router.get("/my-subscription")
def my_subscription(token: Optional[str] = Depends(bearer_token), gate: AuthorizationGate = Depends(get_gate)):
    with error_boundary("Failed to get subscription"):
        member = gate.my_subscription(token)
    return {"member": member.to_record(), "daysRemaining": days_remaining(member.subscription_end)}
