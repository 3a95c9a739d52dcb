"""Pydantic Settings for the envelope layer.

All environment variables use the ENVELOPE_ prefix.
Example: ENVELOPE_DEBUG=true, ENVELOPE_DEFAULT_PER_PAGE=25
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings


class EnvelopeSettings(BaseSettings):
    """Envelope and pagination configuration validated from environment variables."""

    # Service
    app_name: str = "api-envelope"
    version: str = "1.0.0"
    log_level: str = "INFO"
    json_logs: bool = True
    debug: bool = False  # Expose unhandled exception messages in 500 envelopes

    # Pagination
    default_per_page: int = Field(default=15, ge=1)
    max_per_page: int = Field(default=100, ge=1)

    model_config = {"env_prefix": "ENVELOPE_"}

    @model_validator(mode="after")
    def _default_within_max(self) -> "EnvelopeSettings":
        if self.default_per_page > self.max_per_page:
            raise ValueError("default_per_page must not exceed max_per_page")
        return self


@lru_cache(maxsize=1)
def get_settings() -> EnvelopeSettings:
    """Return the process-wide settings instance."""
    return EnvelopeSettings()
