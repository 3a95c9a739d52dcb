"""Paginated collections and pagination metadata.

Anything implementing the ``Paginator`` protocol can be wrapped in a resource
and handed to ``ResponseBuilder.success``; the builder then attaches a
``meta`` block built by ``pagination_meta``. ``PagePaginator`` is the
length-aware implementation used by route handlers, and ``PageParams`` is the
FastAPI dependency that reads the requested page from the query string.
"""

from __future__ import annotations

import math
from typing import Any, Iterable, Iterator, Mapping, Protocol, Sequence, runtime_checkable
from urllib.parse import urlencode

from fastapi import Depends, Query, Request
from starlette.datastructures import URL

from api_envelope.config.settings import EnvelopeSettings, get_settings
from api_envelope.models.envelope import PaginationLinks, PaginationMeta


@runtime_checkable
class Paginator(Protocol):
    """Capability of a page-partitioned collection."""

    def current_page(self) -> int: ...

    def last_page(self) -> int: ...

    def per_page(self) -> int: ...

    def total(self) -> int: ...

    def url(self, page: int) -> str: ...

    def previous_page_url(self) -> str | None: ...

    def next_page_url(self) -> str | None: ...


def is_paginator(value: Any) -> bool:
    """Return True if *value* exposes the full ``Paginator`` capability."""
    return isinstance(value, Paginator)


def pagination_meta(paginator: Paginator) -> PaginationMeta:
    """Extract pagination metadata from *paginator*.

    Links are regenerated on every call. Errors raised by the paginator's
    URL generation propagate to the caller.
    """
    return PaginationMeta(
        current_page=paginator.current_page(),
        last_page=paginator.last_page(),
        per_page=paginator.per_page(),
        total=paginator.total(),
        links=PaginationLinks(
            first=paginator.url(1),
            last=paginator.url(paginator.last_page()),
            prev=paginator.previous_page_url(),
            next=paginator.next_page_url(),
        ),
    )


class PagePaginator:
    """Length-aware paginator over one page of already-fetched items.

    ``items`` holds only the current page; ``total`` is the size of the full
    result set. Page URLs are built from ``path`` plus ``query`` (a mapping
    or key/value pairs, so repeated keys survive), with the page number
    written under ``page_name``.
    """

    def __init__(
        self,
        items: Sequence[Any],
        total: int,
        per_page: int,
        current_page: int = 1,
        *,
        path: str = "/",
        query: Mapping[str, Any] | Iterable[tuple[str, Any]] | None = None,
        page_name: str = "page",
    ) -> None:
        if per_page <= 0:
            raise ValueError("per_page must be a positive integer")
        if total < 0:
            raise ValueError("total must not be negative")

        self._items = list(items)
        self._total = total
        self._per_page = per_page
        self._current_page = max(current_page, 1)
        self._path = path
        pairs = query.items() if isinstance(query, Mapping) else (query or ())
        self._query = [(k, v) for k, v in pairs if k != page_name]
        self._page_name = page_name

    @classmethod
    def from_request(
        cls,
        request: Request,
        items: Sequence[Any],
        total: int,
        params: "PageParams",
    ) -> "PagePaginator":
        """Build a paginator whose links point back at *request*'s URL."""
        return cls(
            items,
            total,
            params.per_page,
            params.page,
            path=str(request.url.replace(query="")),
            query=request.query_params.multi_items(),
            page_name=params.page_name,
        )

    # -- Paginator protocol ---------------------------------------------

    def current_page(self) -> int:
        return self._current_page

    def last_page(self) -> int:
        return max(math.ceil(self._total / self._per_page), 1)

    def per_page(self) -> int:
        return self._per_page

    def total(self) -> int:
        return self._total

    def url(self, page: int) -> str:
        page = max(page, 1)
        params = [*self._query, (self._page_name, page)]
        return str(URL(self._path).replace(query=urlencode(params)))

    def previous_page_url(self) -> str | None:
        if self._current_page > 1:
            return self.url(self._current_page - 1)
        return None

    def next_page_url(self) -> str | None:
        if self.has_more_pages():
            return self.url(self._current_page + 1)
        return None

    # -- Convenience ----------------------------------------------------

    def items(self) -> list[Any]:
        return list(self._items)

    def count(self) -> int:
        return len(self._items)

    def has_more_pages(self) -> bool:
        return self._current_page < self.last_page()

    def on_first_page(self) -> bool:
        return self._current_page <= 1

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return (
            f"PagePaginator(page={self._current_page}/{self.last_page()}, "
            f"per_page={self._per_page}, total={self._total})"
        )


class PageParams:
    """Requested page and page size, bounded by settings."""

    def __init__(self, page: int = 1, per_page: int = 15, page_name: str = "page") -> None:
        self.page = page
        self.per_page = per_page
        self.page_name = page_name

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page

    @property
    def limit(self) -> int:
        return self.per_page

    def slice(self, sequence: Sequence[Any]) -> Sequence[Any]:
        """Return the part of *sequence* that falls on the requested page."""
        return sequence[self.offset:self.offset + self.limit]

    def __repr__(self) -> str:
        return f"PageParams(page={self.page}, per_page={self.per_page})"


def page_params(
    page: int = Query(default=1, ge=1),
    per_page: int | None = Query(default=None, ge=1),
    settings: EnvelopeSettings = Depends(get_settings),
) -> PageParams:
    """FastAPI dependency: read ``page`` / ``per_page`` from the query string."""
    size = per_page if per_page is not None else settings.default_per_page
    return PageParams(
        page=page,
        per_page=min(size, settings.max_per_page),
    )
