"""Configuration module: environment-driven settings."""

from api_envelope.config.settings import EnvelopeSettings, get_settings

__all__ = [
    "EnvelopeSettings",
    "get_settings",
]
