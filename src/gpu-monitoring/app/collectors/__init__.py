"""Correlators turning Prometheus series into GPU records."""

from .gpu_metrics import GPU_METRIC_QUERIES, correlate_gpu_metrics
from .gpu_processes import GPU_PROCESS_QUERIES, correlate_gpu_processes
from .presentation import (
    MemoryUnit,
    bytes_to_mib,
    convert_gpu_metrics,
    convert_gpu_processes,
    sort_gpu_metrics,
    sort_gpu_processes,
)
from .series import CorrelationStats

__all__ = [
    "CorrelationStats",
    "GPU_METRIC_QUERIES",
    "GPU_PROCESS_QUERIES",
    "MemoryUnit",
    "bytes_to_mib",
    "convert_gpu_metrics",
    "convert_gpu_processes",
    "correlate_gpu_metrics",
    "correlate_gpu_processes",
    "sort_gpu_metrics",
    "sort_gpu_processes",
]
