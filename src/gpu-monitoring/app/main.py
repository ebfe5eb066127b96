"""GPU Monitoring Service main application."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config import get_settings
from shared.observability import get_logger, setup_logging

from .api import gpu, health
from .clients.prometheus import create_prometheus_client
from .middleware import RequestContextMiddleware
from .services.gpu_service import GPUService

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Creates the Prometheus client and GPU service, closes the client on
    shutdown.
    """
    settings = get_settings()

    logger.info(
        "Starting GPU Monitoring service",
        version=settings.app_version,
        prometheus_url=settings.prometheus.url,
    )

    prometheus = create_prometheus_client(settings.prometheus)
    app.state.prometheus = prometheus
    app.state.gpu_service = GPUService(
        prometheus,
        query_timeout=settings.prometheus.query_timeout_seconds,
    )

    logger.info("GPU Monitoring service started successfully")

    yield

    logger.info("Shutting down GPU Monitoring service")
    await prometheus.close()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    setup_logging(log_level=settings.log_level, log_format=settings.log_format)

    app = FastAPI(
        title="GPU Monitoring",
        description="GPU and GPU process metrics aggregated from Prometheus",
        version=settings.app_version,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        lifespan=lifespan,
    )

    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router, tags=["Health"])
    app.include_router(gpu.router, prefix="/api/v1", tags=["GPU"])

    return app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn using the configured bind address."""
    settings = get_settings()

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.value.lower(),
    )


if __name__ == "__main__":
    run()
