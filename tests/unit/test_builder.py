"""Unit tests for ResponseBuilder."""

from __future__ import annotations

import json
import logging

import pytest
from fastapi import HTTPException
from pydantic_core import PydanticSerializationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from api_envelope.builder import ResponseBuilder, get_response_builder
from api_envelope.errors import AuthorizationError, ConflictError, ForbiddenError, NotFoundError
from api_envelope.pagination import PagePaginator
from api_envelope.resources import JsonResource

BASE = "https://api.example.com/v1/users"


def _body(response) -> dict:
    return json.loads(response.body)


class FirstPagePaginator:
    """Paginator whose previous page URL is always missing."""

    def __init__(self, items: list) -> None:
        self._items = items

    def current_page(self) -> int:
        return 1

    def last_page(self) -> int:
        return 2

    def per_page(self) -> int:
        return 2

    def total(self) -> int:
        return 4

    def url(self, page: int) -> str:
        return f"https://api.example.com/v1/posts?page={page}"

    def previous_page_url(self) -> str | None:
        return None

    def next_page_url(self) -> str | None:
        return self.url(2)

    def __iter__(self):
        return iter(self._items)


# ---------------------------------------------------------------------------
# success
# ---------------------------------------------------------------------------


class TestSuccess:
    def test_defaults(self, builder: ResponseBuilder):
        resp = builder.success()

        assert resp.status_code == 200
        assert _body(resp) == {"status": "success", "message": "OK", "data": None}
        assert "meta" not in _body(resp)

    def test_raw_data_passes_through(self, builder: ResponseBuilder):
        resp = builder.success({"items": [1, 2, 3]}, "Fetched")
        assert _body(resp) == {
            "status": "success",
            "message": "Fetched",
            "data": {"items": [1, 2, 3]},
        }

    def test_default_message_ignores_status_code(self, builder: ResponseBuilder):
        # Documented quirk: the default is always the phrase for 200.
        resp = builder.success({"partial": True}, status_code=206)
        assert resp.status_code == 206
        assert _body(resp)["message"] == "OK"

        resp = builder.success(status_code=202)
        assert _body(resp)["message"] == "OK"

    def test_resource_is_resolved(self, builder: ResponseBuilder):
        class ProfileResource(JsonResource):
            def to_dict(self) -> dict:
                return {"name": self.resource["name"].title()}

        resp = builder.success(ProfileResource({"name": "ada lovelace"}))
        body = _body(resp)
        assert body["data"] == {"name": "Ada Lovelace"}
        assert "meta" not in body

    def test_paginated_resource_adds_meta(self, builder: ResponseBuilder, paginator: PagePaginator):
        resp = builder.success(JsonResource.collection(paginator))
        body = _body(resp)

        assert body["status"] == "success"
        assert len(body["data"]) == 10
        assert body["meta"] == {
            "current_page": 2,
            "last_page": 5,
            "per_page": 10,
            "total": 42,
            "links": {
                "first": f"{BASE}?page=1",
                "last": f"{BASE}?page=5",
                "prev": f"{BASE}?page=1",
                "next": f"{BASE}?page=3",
            },
        }

    def test_prev_link_is_null_on_first_page(self, builder: ResponseBuilder):
        resp = builder.success(JsonResource.collection(FirstPagePaginator([{"id": 1}, {"id": 2}])))
        links = _body(resp)["meta"]["links"]

        assert links["prev"] is None
        assert links["next"] == "https://api.example.com/v1/posts?page=2"

    def test_non_paginated_collection_has_no_meta(self, builder: ResponseBuilder):
        resp = builder.success(JsonResource.collection([{"id": 1}]))
        assert "meta" not in _body(resp)

    def test_slashes_are_not_escaped(self, builder: ResponseBuilder, paginator: PagePaginator):
        resp = builder.success(JsonResource.collection(paginator))
        assert b"https://api.example.com/v1/users?page=1" in resp.body
        assert b"\\/" not in resp.body

    def test_bare_paginator_must_be_wrapped(self, builder: ResponseBuilder, paginator: PagePaginator):
        with pytest.raises(PydanticSerializationError):
            builder.success(paginator)


# ---------------------------------------------------------------------------
# created
# ---------------------------------------------------------------------------


class TestCreated:
    def test_defaults(self, builder: ResponseBuilder):
        resp = builder.created({"id": 1})

        assert resp.status_code == 201
        assert _body(resp) == {"status": "success", "message": "Created", "data": {"id": 1}}

    def test_explicit_message(self, builder: ResponseBuilder):
        resp = builder.created({"id": 1}, "User registered")
        assert _body(resp)["message"] == "User registered"

    def test_explicit_status_code(self, builder: ResponseBuilder):
        resp = builder.created(None, status_code=202)
        assert resp.status_code == 202
        assert _body(resp)["message"] == "Created"

    def test_paginated_resource_adds_meta(self, builder: ResponseBuilder, paginator: PagePaginator):
        resp = builder.created(JsonResource.collection(paginator))
        assert resp.status_code == 201
        assert _body(resp)["meta"]["total"] == 42


# ---------------------------------------------------------------------------
# error
# ---------------------------------------------------------------------------


class TestError:
    def test_defaults(self, builder: ResponseBuilder):
        resp = builder.error()

        assert resp.status_code == 500
        assert _body(resp) == {
            "status": "error",
            "message": "Internal Server Error",
            "error": "RuntimeError",
        }

    def test_embedded_status_code_overrides_parameter(self, builder: ResponseBuilder):
        resp = builder.error(ForbiddenError("Forbidden here"), status_code=500)

        assert resp.status_code == 403
        assert _body(resp) == {
            "status": "error",
            "message": "Forbidden here",
            "error": "ForbiddenError",
        }

    def test_starlette_http_exception_is_http_aware(self, builder: ResponseBuilder):
        resp = builder.error(StarletteHTTPException(status_code=404))

        assert resp.status_code == 404
        assert _body(resp)["message"] == "Not Found"
        assert _body(resp)["error"] == "HTTPException"

    def test_fastapi_http_exception_detail(self, builder: ResponseBuilder):
        resp = builder.error(HTTPException(status_code=409, detail="Email taken"), status_code=400)

        assert resp.status_code == 409
        assert _body(resp)["message"] == "Email taken"

    def test_plain_exception_keeps_parameter(self, builder: ResponseBuilder):
        resp = builder.error(ValueError("bad input"), status_code=400)

        assert resp.status_code == 400
        assert _body(resp) == {"status": "error", "message": "bad input", "error": "ValueError"}

    def test_empty_exception_message_falls_back_to_explicit_message(self, builder: ResponseBuilder):
        resp = builder.error(ValueError(""), message="Could not process", status_code=400)
        assert _body(resp)["message"] == "Could not process"

    def test_empty_exception_message_falls_back_to_table(self, builder: ResponseBuilder):
        resp = builder.error(KeyError(), status_code=404)
        assert _body(resp)["message"] == "Not Found"
        assert _body(resp)["error"] == "KeyError"

    def test_exception_message_wins_over_explicit_message(self, builder: ResponseBuilder):
        resp = builder.error(ValueError("specific"), message="generic")
        assert _body(resp)["message"] == "specific"

    def test_unmapped_status_code(self, builder: ResponseBuilder):
        resp = builder.error(status_code=418)
        assert resp.status_code == 418
        assert _body(resp)["message"] == "Unknown Status"

    def test_message_without_exception(self, builder: ResponseBuilder):
        resp = builder.error(message="Upstream down", status_code=502)
        assert resp.status_code == 502
        assert _body(resp) == {"status": "error", "message": "Upstream down", "error": "RuntimeError"}

    def test_http_error_without_text_lets_explicit_message_win(self, builder: ResponseBuilder):
        resp = builder.error(NotFoundError(), message="User 7 not found")

        assert resp.status_code == 404
        assert _body(resp) == {
            "status": "error",
            "message": "User 7 not found",
            "error": "NotFoundError",
        }

    def test_http_error_without_text_falls_back_to_table(self, builder: ResponseBuilder):
        resp = builder.error(ConflictError(), status_code=500)
        assert resp.status_code == 409
        assert _body(resp)["message"] == "Conflict"

    def test_headers_are_passed_through(self, builder: ResponseBuilder):
        resp = builder.error(status_code=405, headers={"Allow": "GET, HEAD"})
        assert resp.headers["allow"] == "GET, HEAD"

    def test_bool_status_code_is_not_embedded(self, builder: ResponseBuilder):
        class Flagged(Exception):
            status_code = True

        resp = builder.error(Flagged("odd"), status_code=400)
        assert resp.status_code == 400

    def test_logs_error_class_and_status(self, builder: ResponseBuilder, caplog: pytest.LogCaptureFixture):
        with caplog.at_level(logging.WARNING, logger="api_envelope.builder"):
            builder.error(NotFoundError("No such user"))

        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert record.status_code == 404  # type: ignore[attr-defined]
        assert record.error_class == "NotFoundError"  # type: ignore[attr-defined]

    def test_server_errors_log_at_error_level(self, builder: ResponseBuilder, caplog: pytest.LogCaptureFixture):
        with caplog.at_level(logging.WARNING, logger="api_envelope.builder"):
            builder.error()

        assert caplog.records[-1].levelno == logging.ERROR


# ---------------------------------------------------------------------------
# unauthorized
# ---------------------------------------------------------------------------


class TestUnauthorized:
    def test_defaults(self, builder: ResponseBuilder):
        resp = builder.unauthorized()

        assert resp.status_code == 401
        assert _body(resp) == {
            "status": "error",
            "message": "Unauthorized",
            "error": "AuthorizationException",
        }

    def test_empty_exception_message_uses_table(self, builder: ResponseBuilder):
        resp = builder.unauthorized(Exception(""), status_code=401)

        assert resp.status_code == 401
        assert _body(resp)["message"] == "Unauthorized"
        assert _body(resp)["error"] == "Exception"

    def test_embedded_status_code_is_ignored(self, builder: ResponseBuilder):
        # Unlike error(), the parameter always wins here.
        resp = builder.unauthorized(StarletteHTTPException(status_code=403, detail=""), status_code=401)

        assert resp.status_code == 401
        assert _body(resp)["message"] == "Unauthorized"
        assert _body(resp)["error"] == "HTTPException"

    def test_exception_message_wins(self, builder: ResponseBuilder):
        resp = builder.unauthorized(AuthorizationError("Token expired"), message="Please log in")
        assert _body(resp)["message"] == "Token expired"
        assert _body(resp)["error"] == "AuthorizationError"

    def test_explicit_message_and_status(self, builder: ResponseBuilder):
        resp = builder.unauthorized(message="Session expired", status_code=419)

        assert resp.status_code == 419
        assert _body(resp)["message"] == "Session expired"

    def test_forbidden_error_keeps_parameter(self, builder: ResponseBuilder):
        resp = builder.unauthorized(ForbiddenError("nope"))
        assert resp.status_code == 401
        assert _body(resp)["message"] == "nope"

    def test_http_error_with_empty_text_uses_table(self, builder: ResponseBuilder):
        resp = builder.unauthorized(ForbiddenError(""))

        assert resp.status_code == 401
        assert _body(resp) == {
            "status": "error",
            "message": "Unauthorized",
            "error": "ForbiddenError",
        }

    def test_headers_are_passed_through(self, builder: ResponseBuilder):
        resp = builder.unauthorized(headers={"WWW-Authenticate": "Bearer"})
        assert resp.headers["www-authenticate"] == "Bearer"


class TestGetResponseBuilder:
    def test_returns_shared_instance(self):
        assert get_response_builder() is get_response_builder()
        assert isinstance(get_response_builder(), ResponseBuilder)
