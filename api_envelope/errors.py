"""HTTP-aware error hierarchy.

All package errors extend HttpError, which carries its own status code. Any
exception exposing an integer ``status_code`` (including Starlette's and
FastAPI's ``HTTPException``) is treated as HTTP-aware by the response builder.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from starlette.exceptions import HTTPException as StarletteHTTPException


@runtime_checkable
class HttpAware(Protocol):
    """Capability of a failure that knows its HTTP status code."""

    status_code: int


class HttpError(Exception):
    """Base error carrying an HTTP status code and a user-facing message."""

    status_code: int = 500
    default_message: str = "Internal Server Error"

    def __init__(self, message: str | None = None, **kwargs: object) -> None:
        # Only caller-supplied text counts as the error's own message.
        self.message = message or ""
        self.details = kwargs
        super().__init__(self.message or self.default_message)


class BadRequestError(HttpError):
    """Malformed or unacceptable request."""

    status_code = 400
    default_message = "Bad Request"


class AuthorizationError(HttpError):
    """Missing or invalid credentials."""

    status_code = 401
    default_message = "Unauthorized"


class ForbiddenError(HttpError):
    """Authenticated but not allowed."""

    status_code = 403
    default_message = "Forbidden"


class NotFoundError(HttpError):
    """Requested entity does not exist."""

    status_code = 404
    default_message = "Not Found"


class ConflictError(HttpError):
    """Request conflicts with the current state of the entity."""

    status_code = 409
    default_message = "Conflict"


class UnprocessableEntityError(HttpError):
    """Well-formed request with semantically invalid content."""

    status_code = 422
    default_message = "Unprocessable Entity"


class ServiceUnavailableError(HttpError):
    """Dependency or service temporarily unavailable."""

    status_code = 503
    default_message = "Service Unavailable"


def embedded_status_code(exc: BaseException | None) -> int | None:
    """Return the status code carried by *exc*, or None if it carries none."""
    if isinstance(exc, HttpAware):
        code = exc.status_code
        if isinstance(code, int) and not isinstance(code, bool):
            return code
    return None


def exception_message(exc: BaseException) -> str:
    """Return the human-readable message of *exc* (may be empty)."""
    if isinstance(exc, HttpError):
        return exc.message
    if isinstance(exc, StarletteHTTPException):
        return exc.detail if isinstance(exc.detail, str) else ""
    return str(exc)
