"""Clients for the GPU monitoring service."""

from .prometheus import (
    PrometheusClient,
    PrometheusConnectionError,
    PrometheusError,
    PrometheusHTTPError,
    PrometheusQueryError,
    create_prometheus_client,
)

__all__ = [
    "PrometheusClient",
    "PrometheusConnectionError",
    "PrometheusError",
    "PrometheusHTTPError",
    "PrometheusQueryError",
    "create_prometheus_client",
]
