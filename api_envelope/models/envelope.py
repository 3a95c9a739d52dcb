"""Response envelope models.

Success responses:  { status: "success", message, data, meta? }
Error responses:    { status: "error", message, error }

``meta`` is only ever emitted for paginated payloads; it is dropped from the
serialized body rather than sent as ``null``.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class PaginationLinks(BaseModel):
    """Navigation URLs for a paginated collection."""

    first: str
    last: str
    prev: str | None = None
    next: str | None = None


class PaginationMeta(BaseModel):
    """Position of the current page within the full result set."""

    current_page: int = Field(ge=0)
    last_page: int = Field(ge=0)
    per_page: int = Field(ge=0)
    total: int = Field(ge=0)
    links: PaginationLinks


class SuccessEnvelope(BaseModel):
    """JSON envelope for success and creation responses."""

    status: Literal["success"] = "success"
    message: str = Field(min_length=1)
    data: Any = None
    meta: PaginationMeta | None = None

    def to_content(self) -> dict:
        """Serializable body; ``meta`` is omitted when absent."""
        exclude = {"meta"} if self.meta is None else None
        return self.model_dump(mode="json", exclude=exclude)


class ErrorEnvelope(BaseModel):
    """JSON envelope for error and authorization-failure responses."""

    status: Literal["error"] = "error"
    message: str = Field(min_length=1)
    error: str

    def to_content(self) -> dict:
        return self.model_dump(mode="json")
