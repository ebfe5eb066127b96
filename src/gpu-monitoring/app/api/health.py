"""Health check endpoints."""

from __future__ import annotations

import asyncio

from fastapi import APIRouter, Request

from shared.config import get_settings
from shared.models import APIResponse
from shared.observability import get_logger

from ..clients.prometheus import PrometheusClient, PrometheusError
from ..collectors.series import capture_time
from .gpu import error_response

logger = get_logger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check(request: Request) -> dict:
    """Basic liveness check, no I/O."""
    return {"status": "healthy", "service": get_settings().app_name}


@router.get(
    "/api/healthz",
    response_model=APIResponse,
    response_model_exclude_none=True,
)
async def prometheus_health_check(request: Request):
    """Readiness check - runs a trivial query against Prometheus."""
    settings = get_settings()
    client: PrometheusClient = request.app.state.prometheus

    try:
        async with asyncio.timeout(settings.prometheus.health_timeout_seconds):
            await client.query("up")
    except (PrometheusError, TimeoutError) as e:
        logger.warning("Prometheus health check failed", error=str(e) or type(e).__name__)
        return error_response(503, "Prometheus connection failed")

    return APIResponse(
        success=True,
        message="Service is healthy",
        data={
            "status": "healthy",
            "timestamp": capture_time().isoformat(),
            "version": settings.app_version,
        },
    )
