from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends

from gym_api.core.errors import error_boundary
from gym_api.routers._deps import bearer_token, get_gate, get_signup_service
from gym_api.schemas import SignupRequest, parse_payload
from gym_api.services.authorization import AuthorizationGate
from gym_api.services.signup_service import SignupService

router = APIRouter(tags=["auth"])


@router.post("/signup")
def signup(payload: Any = Body(None), service: SignupService = Depends(get_signup_service)):
    with error_boundary("Failed to sign up user"):
        request = parse_payload(SignupRequest, payload)
        profile = service.signup(request)
    return {"success": True, "user": profile.to_record()}


@router.get("/profile")
def profile(token: Optional[str] = Depends(bearer_token), gate: AuthorizationGate = Depends(get_gate)):
    with error_boundary("Failed to get profile"):
        found = gate.my_profile(token)
    return {"profile": found.to_record()}
