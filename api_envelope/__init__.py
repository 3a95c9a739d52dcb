"""Standardized JSON response envelopes for FastAPI services."""

from api_envelope.builder import ResponseBuilder, get_response_builder
from api_envelope.errors import (
    AuthorizationError,
    BadRequestError,
    ConflictError,
    ForbiddenError,
    HttpError,
    NotFoundError,
    ServiceUnavailableError,
    UnprocessableEntityError,
)
from api_envelope.pagination import PagePaginator, PageParams, Paginator, page_params
from api_envelope.resources import JsonResource, Resolvable, ResourceCollection
from api_envelope.status_messages import STATUS_MESSAGES, status_message

__all__ = [
    "STATUS_MESSAGES",
    "AuthorizationError",
    "BadRequestError",
    "ConflictError",
    "ForbiddenError",
    "HttpError",
    "JsonResource",
    "NotFoundError",
    "PagePaginator",
    "PageParams",
    "Paginator",
    "Resolvable",
    "ResourceCollection",
    "ResponseBuilder",
    "ServiceUnavailableError",
    "UnprocessableEntityError",
    "get_response_builder",
    "page_params",
    "status_message",
]
