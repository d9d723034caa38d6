"""
Error taxonomy shared by services and routers.

Every failure that leaves a route is one of these; the app renders them as
``{"error": message}`` with ``status_code``.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

logger = logging.getLogger(__name__)


class GymApiError(Exception):
    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class Unauthenticated(GymApiError):
    """Missing or rejected bearer credential."""

    status_code = 401


class Forbidden(GymApiError):
    """Authenticated, but the profile role does not allow the operation."""

    status_code = 403


class ValidationError(GymApiError):
    status_code = 400


class NotFound(GymApiError):
    status_code = 404


class IdentityProviderError(GymApiError):
    """The identity provider refused an operation; its message is surfaced."""

    status_code = 400


class InternalError(GymApiError):
    status_code = 500


class StoreError(InternalError):
    """Key-value backend I/O failure."""


class ProfileExistsError(InternalError):
    pass


@contextmanager
def error_boundary(failure_message: str) -> Iterator[None]:
    """
    Route boundary: client-facing errors pass through untouched, anything
    internal is logged and replaced by a generic InternalError.
    """
    try:
        yield
    except InternalError as exc:
        logger.exception("%s: %s", failure_message, exc.message)
        raise InternalError(failure_message) from exc
    except GymApiError:
        raise
    except Exception as exc:
        logger.exception("%s: %s", failure_message, exc)
        raise InternalError(failure_message) from exc
