"""FastAPI application factory.

Wires settings, logging, the shared ResponseBuilder, exception handlers and
request-ID middleware into an application that host services extend with
their own routers. Run with:

    uvicorn api_envelope.main:create_app --factory
"""

from __future__ import annotations

import logging

from fastapi import FastAPI

from api_envelope.builder import get_response_builder
from api_envelope.config.settings import EnvelopeSettings, get_settings
from api_envelope.logging_config import configure_logging
from api_envelope.middleware.error_handler import register_error_handlers
from api_envelope.middleware.request_id import RequestIdMiddleware
from api_envelope.routers.health import create_health_router

logger = logging.getLogger(__name__)


def create_app(settings: EnvelopeSettings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    When *settings* is given it replaces the environment-derived settings
    for every ``Depends(get_settings)`` in the app.
    """
    if settings is None:
        settings = get_settings()

    configure_logging(settings.log_level, json_format=settings.json_logs)

    app = FastAPI(
        title=settings.app_name,
        version=settings.version,
    )
    app.dependency_overrides[get_settings] = lambda: settings

    register_error_handlers(app, get_response_builder(), settings)
    app.add_middleware(RequestIdMiddleware)
    app.include_router(create_health_router())

    logger.info("Application %s %s configured", settings.app_name, settings.version)
    return app
