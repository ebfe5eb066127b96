"""Pytest configuration and shared fixtures."""

import os
from collections.abc import Generator
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

# Set test environment before importing settings
os.environ.setdefault("ENV", "development")
os.environ.setdefault("LOG_LEVEL", "DEBUG")
os.environ.setdefault("LOG_FORMAT", "text")

from shared.config import get_settings  # noqa: E402

JST = timezone(timedelta(hours=9))


@pytest.fixture
def clean_settings() -> Generator[None, None, None]:
    """Drop the cached settings around a test that changes the environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def capture_time() -> datetime:
    return datetime(2024, 1, 1, 12, 0, tzinfo=JST)


@pytest.fixture
def sample_gpu_metrics_data(capture_time: datetime) -> dict[str, Any]:
    """Sample GPU metrics record for testing."""
    return {
        "node_name": "gpu-node-01",
        "gpu_index": 0,
        "gpu_name": "NVIDIA A100-SXM4-80GB",
        "gpu_memory_used": 40 * 2**30,
        "gpu_memory_total": 80 * 2**30,
        "memory_free": 40 * 2**30,
        "gpu_utilization": 85,
        "temperature": 62,
        "cpu_utilization": 30,
        "memory_utilization": 45,
        "timestamp": capture_time,
    }


@pytest.fixture
def sample_gpu_process_data(capture_time: datetime) -> dict[str, Any]:
    """Sample GPU process record for testing."""
    return {
        "node_name": "gpu-node-01",
        "gpu_index": 0,
        "pid": 12345,
        "process_name": "python",
        "user": "trainer",
        "command": "python train.py --epochs 10",
        "gpu_memory": 8 * 2**30,
        "timestamp": capture_time,
    }


# =============================================================================
# Markers
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line(
        "markers", "integration: Integration tests (require external services)"
    )
