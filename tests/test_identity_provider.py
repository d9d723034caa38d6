from __future__ import annotations

import json

import httpx
import pytest

from gym_api.core.errors import IdentityProviderError, InternalError, Unauthenticated
from gym_api.services.identity_provider import GoTrueIdentityProvider


def _provider(handler) -> GoTrueIdentityProvider:
    return GoTrueIdentityProvider(
        "https://auth.gym.test/",
        "service-key",
        anon_key="anon-key",
        transport=httpx.MockTransport(handler),
    )


def test_verify_returns_identity_for_valid_token():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["authorization"]
        seen["apikey"] = request.headers["apikey"]
        return httpx.Response(200, json={"id": "u-1", "email": "asha@x.com"})

    identity = _provider(handler).verify("user-jwt")

    assert identity.id == "u-1"
    assert identity.email == "asha@x.com"
    assert seen == {"url": "https://auth.gym.test/auth/v1/user", "auth": "Bearer user-jwt", "apikey": "anon-key"}


@pytest.mark.parametrize("status", [401, 403])
def test_verify_rejected_token_is_unauthenticated(status):
    provider = _provider(lambda request: httpx.Response(status, json={"msg": "invalid JWT"}))
    with pytest.raises(Unauthenticated, match="invalid token"):
        provider.verify("bad")


def test_verify_without_token_does_not_call_provider():
    def handler(request):
        raise AssertionError("provider should not be called")

    with pytest.raises(Unauthenticated, match="no token"):
        _provider(handler).verify("")


def test_verify_provider_outage_is_internal():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(InternalError):
        _provider(handler).verify("user-jwt")

    with pytest.raises(InternalError):
        _provider(lambda request: httpx.Response(503, text="down")).verify("user-jwt")


@pytest.mark.parametrize("status", [500, 502, 503])
def test_create_user_provider_outage_is_internal(status):
    body = "<html><body>Bad Gateway nginx/1.2 internal-host-10.0.0.5</body></html>"
    provider = _provider(lambda request: httpx.Response(status, text=body))

    with pytest.raises(InternalError) as excinfo:
        provider.create_user("asha@x.com", "pw", "Asha", "member")

    assert not isinstance(excinfo.value, IdentityProviderError)
    assert excinfo.value.status_code == 500
    assert "internal-host" not in excinfo.value.message


def test_create_user_sends_confirmed_account_with_metadata():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["auth"] = request.headers["authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"id": "u-9", "email": "asha@x.com"})

    identity = _provider(handler).create_user("asha@x.com", "pw123456", "Asha", "member")

    assert identity.id == "u-9"
    assert seen["path"] == "/auth/v1/admin/users"
    assert seen["auth"] == "Bearer service-key"
    assert seen["body"] == {
        "email": "asha@x.com",
        "password": "pw123456",
        "user_metadata": {"name": "Asha", "role": "member"},
        "email_confirm": True,
    }


def test_create_user_accepts_wrapped_user_object():
    provider = _provider(lambda request: httpx.Response(200, json={"user": {"id": "u-3", "email": "a@x.com"}}))
    assert provider.create_user("a@x.com", "pw", "A", "member").id == "u-3"


def test_create_user_rejection_surfaces_provider_message():
    provider = _provider(
        lambda request: httpx.Response(422, json={"msg": "A user with this email address has already been registered"})
    )
    with pytest.raises(IdentityProviderError) as excinfo:
        provider.create_user("asha@x.com", "pw", "Asha", "member")
    assert excinfo.value.message == "A user with this email address has already been registered"
    assert excinfo.value.status_code == 400


def test_missing_auth_url_is_internal():
    provider = GoTrueIdentityProvider("", "service-key")
    with pytest.raises(InternalError):
        provider.verify("user-jwt")
