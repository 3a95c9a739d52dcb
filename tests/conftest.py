"""Shared test fixtures for the envelope test suite."""

from __future__ import annotations

import os

import pytest

from api_envelope.builder import ResponseBuilder
from api_envelope.config.settings import EnvelopeSettings, get_settings
from api_envelope.pagination import PagePaginator


# ---------------------------------------------------------------------------
# Keep the environment out of settings-driven tests
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _clear_settings_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop ENVELOPE_* variables and the cached settings instance."""
    for key in list(os.environ):
        if key.startswith("ENVELOPE_"):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()


# ---------------------------------------------------------------------------
# Component fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def settings() -> EnvelopeSettings:
    """Test settings with plain-text logs."""
    return EnvelopeSettings(json_logs=False, log_level="WARNING")


@pytest.fixture
def builder() -> ResponseBuilder:
    return ResponseBuilder()


@pytest.fixture
def paginator() -> PagePaginator:
    """Page 2 of 5, ten items per page, 42 items in total."""
    return PagePaginator(
        [{"id": i} for i in range(11, 21)],
        total=42,
        per_page=10,
        current_page=2,
        path="https://api.example.com/v1/users",
    )
