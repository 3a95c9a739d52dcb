"""Canonical HTTP status phrases used as default envelope messages.

Only a curated subset of status codes is mapped. Any other integer resolves
to ``UNKNOWN_STATUS``.
"""

from __future__ import annotations

from types import MappingProxyType

UNKNOWN_STATUS = "Unknown Status"

STATUS_MESSAGES: MappingProxyType[int, str] = MappingProxyType(
    {
        # Success
        200: "OK",
        201: "Created",
        202: "Accepted",
        204: "No Content",
        # Client errors
        400: "Bad Request",
        401: "Unauthorized",
        402: "Payment Required",
        403: "Forbidden",
        404: "Not Found",
        405: "Method Not Allowed",
        409: "Conflict",
        410: "Gone",
        422: "Unprocessable Entity",
        # Server errors
        500: "Internal Server Error",
        502: "Bad Gateway",
        503: "Service Unavailable",
        504: "Gateway Timeout",
    }
)


def status_message(code: int) -> str:
    """Return the phrase for *code*, or ``"Unknown Status"`` when unmapped."""
    return STATUS_MESSAGES.get(code, UNKNOWN_STATUS)
