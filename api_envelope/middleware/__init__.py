"""Middleware package: exception handlers and request ID."""

from api_envelope.middleware.error_handler import register_error_handlers
from api_envelope.middleware.request_id import RequestIdMiddleware

__all__ = [
    "RequestIdMiddleware",
    "register_error_handlers",
]
