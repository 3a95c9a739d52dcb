"""Standardized JSON response construction.

``ResponseBuilder`` is the single place where route handlers and exception
handlers turn payloads and caught failures into envelopes:

- ``success`` / ``created`` emit ``{status: "success", message, data, meta?}``
- ``error`` / ``unauthorized`` emit ``{status: "error", message, error}``

Two behaviours are kept on purpose and covered by tests:

- The default success message is always the phrase for 200, whatever status
  code the response is sent with.
- ``error`` lets a status code carried by the exception replace the
  ``status_code`` argument; ``unauthorized`` never does.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Mapping

from fastapi.responses import JSONResponse

from api_envelope.errors import embedded_status_code, exception_message
from api_envelope.models.envelope import ErrorEnvelope, PaginationMeta, SuccessEnvelope
from api_envelope.pagination import Paginator, is_paginator, pagination_meta
from api_envelope.resources import Resolvable
from api_envelope.status_messages import status_message

logger = logging.getLogger(__name__)


class ResponseBuilder:
    """Stateless factory for envelope responses.

    One instance can be shared by every request.
    """

    def success(
        self,
        data: Any = None,
        message: str | None = None,
        status_code: int = 200,
    ) -> JSONResponse:
        """Build a success response.

        Parameters
        ----------
        data:
            Raw serializable value, or a resource wrapper. Wrappers are
            resolved; a wrapper around a paginator also yields ``meta``.
            Paginators must be wrapped, e.g. with
            ``JsonResource.collection(paginator)``; a bare paginator is passed
            through unresolved and fails JSON serialization.
        message:
            Overrides the default ``"OK"``.
        status_code:
            HTTP status for the response line. Does not affect the default
            message.
        """
        envelope = SuccessEnvelope(
            message=message or status_message(200),
            data=data.resolve() if isinstance(data, Resolvable) else data,
        )

        if isinstance(data, Resolvable) and self._is_paginator(data.resource):
            envelope.meta = self._pagination_meta(data.resource)

        return JSONResponse(content=envelope.to_content(), status_code=status_code)

    def created(
        self,
        data: Any = None,
        message: str | None = None,
        status_code: int = 201,
    ) -> JSONResponse:
        """Build a resource-creation response (default message ``"Created"``)."""
        return self.success(data, message or status_message(201), status_code)

    def error(
        self,
        exception: BaseException | None = None,
        message: str | None = None,
        status_code: int = 500,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> JSONResponse:
        """Build an error response from an optional caught failure.

        A status code embedded in *exception* takes precedence over
        *status_code*, even when the latter was passed explicitly. *headers*
        are set on the response as given.
        """
        embedded = embedded_status_code(exception)
        if embedded is not None:
            status_code = embedded

        final_message = message or status_message(status_code)
        if exception is not None:
            final_message = exception_message(exception) or final_message

        return self._error_response(
            exception,
            final_message,
            status_code,
            default_error="RuntimeError",
            headers=headers,
        )

    def unauthorized(
        self,
        exception: BaseException | None = None,
        message: str | None = None,
        status_code: int = 401,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> JSONResponse:
        """Build an authorization-failure response.

        Unlike ``error``, the status code is never taken from *exception*.
        """
        final_message = message or status_message(401)
        if exception is not None:
            final_message = exception_message(exception) or final_message

        return self._error_response(
            exception,
            final_message,
            status_code,
            default_error="AuthorizationException",
            headers=headers,
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _error_response(
        self,
        exception: BaseException | None,
        message: str,
        status_code: int,
        *,
        default_error: str,
        headers: Mapping[str, str] | None = None,
    ) -> JSONResponse:
        error_class = type(exception).__name__ if exception is not None else default_error
        envelope = ErrorEnvelope(message=message, error=error_class)

        logger.log(
            logging.ERROR if status_code >= 500 else logging.WARNING,
            "Responding with error envelope: %s",
            message,
            extra={"status_code": status_code, "error_class": error_class},
        )
        return JSONResponse(
            content=envelope.to_content(),
            status_code=status_code,
            headers=dict(headers) if headers else None,
        )

    @staticmethod
    def _is_paginator(value: Any) -> bool:
        return is_paginator(value)

    @staticmethod
    def _pagination_meta(paginator: Paginator) -> PaginationMeta:
        return pagination_meta(paginator)


@lru_cache(maxsize=1)
def get_response_builder() -> ResponseBuilder:
    """FastAPI dependency returning the shared builder."""
    return ResponseBuilder()
