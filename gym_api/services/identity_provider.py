"""
Client for the external identity provider (GoTrue-compatible REST API).

The core never stores credentials: it asks the provider who a bearer token
belongs to, and asks it to create accounts at signup.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Protocol

import httpx

from gym_api.core.config import Settings
from gym_api.core.errors import IdentityProviderError, InternalError, Unauthenticated

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    id: str
    email: str


class IdentityProvider(Protocol):
    def verify(self, token: str) -> Identity:
        ...

    def create_user(self, email: str, password: str, name: str, role: str) -> Identity:
        ...


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or f"HTTP {resp.status_code}"
    if isinstance(body, dict):
        for key in ("msg", "message", "error_description", "error"):
            if body.get(key):
                return str(body[key])
    return f"HTTP {resp.status_code}"


def _identity_from(body: Any) -> Optional[Identity]:
    # admin endpoints may wrap the user object
    if isinstance(body, dict) and isinstance(body.get("user"), dict):
        body = body["user"]
    if not isinstance(body, dict) or not body.get("id"):
        return None
    return Identity(id=str(body["id"]), email=str(body.get("email") or ""))


class GoTrueIdentityProvider:
    """Talks to ``{AUTH_URL}/auth/v1`` with httpx."""

    def __init__(
        self,
        base_url: str,
        service_key: str,
        anon_key: str | None = None,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.service_key = service_key
        self.anon_key = anon_key or service_key
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "GoTrueIdentityProvider":
        return cls(
            settings.auth_url,
            settings.auth_service_key,
            anon_key=settings.auth_anon_key,
            timeout=settings.auth_timeout_seconds,
        )

    def _request(self, method: str, path: str, *, bearer: str, json_body: dict | None = None) -> httpx.Response:
        if not self.base_url:
            raise InternalError("AUTH_URL is not configured")
        headers = {
            "apikey": self.anon_key,
            "Authorization": f"Bearer {bearer}",
            "Accept": "application/json",
        }
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                return client.request(method, f"{self.base_url}/auth/v1{path}", headers=headers, json=json_body)
        except httpx.RequestError as exc:
            logger.error("identity provider unreachable (%s %s): %s", method, path, exc)
            raise InternalError("Identity provider unreachable") from exc

    def verify(self, token: str) -> Identity:
        if not token:
            raise Unauthenticated("Unauthorized - no token provided")
        resp = self._request("GET", "/user", bearer=token)
        if resp.status_code >= 500:
            logger.error("identity provider failed verifying token: HTTP %s", resp.status_code)
            raise InternalError("Identity provider failed")
        identity = _identity_from(resp.json()) if resp.status_code == 200 else None
        if identity is None:
            logger.info("token rejected by identity provider: %s", _error_message(resp))
            raise Unauthenticated("Unauthorized - invalid token")
        return identity

    def create_user(self, email: str, password: str, name: str, role: str) -> Identity:
        payload = {
            "email": email,
            "password": password,
            "user_metadata": {"name": name, "role": role},
            # no mail server: accounts are confirmed on creation
            "email_confirm": True,
        }
        resp = self._request("POST", "/admin/users", bearer=self.service_key, json_body=payload)
        if resp.status_code >= 500:
            logger.error("identity provider failed creating %s: HTTP %s %s", email, resp.status_code, resp.text[:200])
            raise InternalError("Identity provider failed")
        if resp.status_code >= 400:
            message = _error_message(resp)
            logger.info("identity provider refused signup for %s: %s", email, message)
            raise IdentityProviderError(message)
        identity = _identity_from(resp.json())
        if identity is None:
            raise InternalError("Identity provider returned no user id")
        return identity
