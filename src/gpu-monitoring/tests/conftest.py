"""Test fixtures for GPU Monitoring tests."""

from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone
from typing import Any
from unittest.mock import AsyncMock

# Set test environment before importing settings
os.environ.setdefault("ENV", "development")
os.environ.setdefault("LOG_LEVEL", "DEBUG")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest
from fastapi.testclient import TestClient

from app.main import app
from shared.models import PrometheusResponse

FIXED_TIME = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone(timedelta(hours=9)))


def build_response(*points: tuple[dict[str, str], Any]) -> PrometheusResponse:
    """Build a successful vector response from (labels, value) pairs."""
    return PrometheusResponse.model_validate({
        "status": "success",
        "data": {
            "resultType": "vector",
            "result": [
                {"metric": labels, "value": [1704078000.0, value]}
                for labels, value in points
            ],
        },
    })


@pytest.fixture
def make_response():
    """Factory for Prometheus vector responses."""
    return build_response


@pytest.fixture
def fixed_now():
    """Deterministic capture timestamp source."""
    return lambda: FIXED_TIME


@pytest.fixture
def mock_gpu_service():
    """Create mock GPU service."""
    service = AsyncMock()
    service.get_gpu_metrics = AsyncMock(return_value=[])
    service.get_gpu_processes = AsyncMock(return_value=[])
    return service


@pytest.fixture
def mock_prometheus():
    """Create mock Prometheus client."""
    client = AsyncMock()
    client.query = AsyncMock(return_value=build_response())
    return client


@pytest.fixture
def client(mock_gpu_service, mock_prometheus):
    """Create test client with mocked dependencies on app.state."""
    app.state.gpu_service = mock_gpu_service
    app.state.prometheus = mock_prometheus
    yield TestClient(app)
    del app.state.gpu_service
    del app.state.prometheus
