"""Helpers shared by routers: services from app.state and the bearer token."""

from __future__ import annotations

from typing import Optional

from fastapi import Request

from gym_api.services.authorization import AuthorizationGate
from gym_api.services.signup_service import SignupService


def get_gate(request: Request) -> AuthorizationGate:
    gate = getattr(getattr(request.app, "state", None), "gate", None)
    if not gate:
        raise RuntimeError("AuthorizationGate not configured")
    return gate


def get_signup_service(request: Request) -> SignupService:
    svc = getattr(getattr(request.app, "state", None), "signup_service", None)
    if not svc:
        raise RuntimeError("SignupService not configured")
    return svc


def bearer_token(request: Request) -> Optional[str]:
    """Token from ``Authorization: Bearer <token>``, or None."""
    header = (request.headers.get("authorization") or "").strip()
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


async def raw_body(request: Request) -> bytes:
    """Undecoded request body, so gated routes can authenticate before parsing it."""
    return await request.body()
