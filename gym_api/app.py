from __future__ import annotations

import logging
import time
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from gym_api.core.config import Settings, get_settings
from gym_api.core.errors import GymApiError
from gym_api.core.log_config import configure_logging
from gym_api.repositories import build_store
from gym_api.repositories.kv_store import KeyValueStore
from gym_api.routers import auth as auth_router
from gym_api.routers import members as members_router
from gym_api.services.authorization import AuthorizationGate
from gym_api.services.identity_provider import GoTrueIdentityProvider, IdentityProvider
from gym_api.services.member_service import MemberDirectory
from gym_api.services.profile_service import ProfileStore
from gym_api.services.signup_service import SignupService

logger = logging.getLogger("gym_api")


class RequestLogMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and latency of every request."""

    async def dispatch(self, request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info("%s %s -> %s (%.1f ms)", request.method, request.url.path, response.status_code, elapsed_ms)
        return response


async def _gym_error_handler(request: Request, exc: GymApiError) -> JSONResponse:
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("malformed request to %s: %s", request.url.path, exc.errors())
    return JSONResponse({"error": "Invalid request body"}, status_code=400)


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse({"error": "Internal server error"}, status_code=500)


def create_app(
    settings: Optional[Settings] = None,
    *,
    store: Optional[KeyValueStore] = None,
    identity_provider: Optional[IdentityProvider] = None,
) -> FastAPI:
    """Build the API. Store and identity provider default to the configured backends."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    store = store if store is not None else build_store(settings)
    identity_provider = identity_provider or GoTrueIdentityProvider.from_settings(settings)
    profiles = ProfileStore(store)
    directory = MemberDirectory(store)

    app = FastAPI(title="Gym Directory API")
    app.state.settings = settings
    app.state.store = store
    app.state.gate = AuthorizationGate(identity_provider, profiles, directory)
    app.state.signup_service = SignupService(identity_provider, profiles)

    app.add_middleware(RequestLogMiddleware)
    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.cors_origins),
            allow_credentials="*" not in settings.cors_origins,
            allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
            allow_headers=["*"],
        )

    app.add_exception_handler(GymApiError, _gym_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)

    @app.get(f"{settings.route_prefix}/health")
    def health():
        return {"ok": True}

    app.include_router(auth_router.router, prefix=settings.route_prefix)
    app.include_router(members_router.router, prefix=settings.route_prefix)

    logger.info("gym directory API ready (env=%s, storage=%s)", settings.app_env, settings.storage_backend)
    return app
