"""Shared data models for the GPU monitoring backend.

All models follow these conventions:
- Timestamps: ISO 8601 format with timezone
- Field names: lowercase snake_case, identical to the JSON names
"""

# Base
from .base import GPUMonBaseModel

# API envelope
from .api import APIResponse

# GPU domain
from .gpu import GPUMetrics, GPUProcess

# Prometheus wire format
from .prometheus import PrometheusData, PrometheusResponse, SeriesPoint

__all__ = [
    # Base
    "GPUMonBaseModel",
    # API
    "APIResponse",
    # GPU
    "GPUMetrics",
    "GPUProcess",
    # Prometheus
    "PrometheusData",
    "PrometheusResponse",
    "SeriesPoint",
]
