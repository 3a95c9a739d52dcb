"""Public envelope models."""

from api_envelope.models.envelope import (
    ErrorEnvelope,
    PaginationLinks,
    PaginationMeta,
    SuccessEnvelope,
)

__all__ = [
    "ErrorEnvelope",
    "PaginationLinks",
    "PaginationMeta",
    "SuccessEnvelope",
]
