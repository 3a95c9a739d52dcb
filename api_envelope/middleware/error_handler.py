"""FastAPI exception handlers.

Every failure that escapes a route handler is rendered through
``ResponseBuilder``, so error bodies share the success envelope's shape:
{ status: "error", message, error }.
"""

from __future__ import annotations

import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api_envelope.builder import ResponseBuilder
from api_envelope.config.settings import EnvelopeSettings
from api_envelope.errors import AuthorizationError, HttpError, UnprocessableEntityError

logger = logging.getLogger(__name__)


def register_error_handlers(
    app: FastAPI,
    builder: ResponseBuilder,
    settings: EnvelopeSettings,
) -> None:
    """Wire up all exception handlers on the FastAPI application."""

    async def _authorization_error_handler(
        _request: Request, exc: AuthorizationError
    ) -> JSONResponse:
        return builder.unauthorized(exc, headers=getattr(exc, "headers", None))

    async def _http_error_handler(_request: Request, exc: Exception) -> JSONResponse:
        # HTTPException carries WWW-Authenticate, Allow and similar headers.
        return builder.error(exc, headers=getattr(exc, "headers", None))

    async def _validation_error_handler(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        fields = [
            " -> ".join(str(loc) for loc in err["loc"]) for err in exc.errors()
        ]
        message = UnprocessableEntityError.default_message
        if fields:
            message = f"{message}: {', '.join(fields)}"
        return builder.error(UnprocessableEntityError(message, fields=fields))

    async def _unhandled_error_handler(_request: Request, exc: Exception) -> JSONResponse:
        """Catch-all: log traceback, hide internals unless debugging."""
        logger.error(
            "Unhandled exception: %s\n%s",
            exc,
            traceback.format_exc(),
        )
        if settings.debug:
            return builder.error(exc)
        return builder.error()

    app.add_exception_handler(AuthorizationError, _authorization_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(HttpError, _http_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _unhandled_error_handler)
