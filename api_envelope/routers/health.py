"""Health endpoint.

- GET /health: service status and version, wrapped in a success envelope
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from api_envelope.builder import ResponseBuilder, get_response_builder
from api_envelope.config.settings import EnvelopeSettings, get_settings


def create_health_router() -> APIRouter:
    """Factory that creates the health router."""

    health_router = APIRouter(tags=["health"])

    @health_router.get("/health")
    async def health(
        builder: ResponseBuilder = Depends(get_response_builder),
        settings: EnvelopeSettings = Depends(get_settings),
    ) -> JSONResponse:
        """Service health check."""
        return builder.success(
            {
                "status": "healthy",
                "service": settings.app_name,
                "version": settings.version,
            }
        )

    return health_router
