"""GPU metrics correlator.

Joins per-GPU series (keyed by hostname + gpu_id) with node-scoped series
(keyed by hostname only) into one GPUMetrics record per GPU.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

from shared.models import GPUMetrics, PrometheusResponse
from shared.observability import get_logger

from .series import CorrelationStats, capture_time, parse_index, sample_value

logger = get_logger(__name__)

GPU_METRIC_QUERIES: dict[str, str] = {
    "gpu_mem_free": "gpu_metrics_free_memory",
    "gpu_mem_used": "gpu_metrics_used_memory",
    "gpu_mem_total": "gpu_metrics_total_memory",
    "gpu_utilization": "gpu_metrics_utilization_percent",
    "gpu_temperature": "gpu_metrics_temperature",
    "cpu_utilization": "gpu_metrics_cpu_utilization",
    "memory_utilization": "gpu_metrics_memory_utilization",
}

# Per-GPU metric -> GPUMetrics field
GPU_FIELDS: dict[str, str] = {
    "gpu_mem_free": "memory_free",
    "gpu_mem_used": "gpu_memory_used",
    "gpu_mem_total": "gpu_memory_total",
    "gpu_utilization": "gpu_utilization",
    "gpu_temperature": "temperature",
}

# Node-scoped metric -> GPUMetrics field, applied to every GPU of the node
NODE_FIELDS: dict[str, str] = {
    "cpu_utilization": "cpu_utilization",
    "memory_utilization": "memory_utilization",
}


def correlate_gpu_metrics(
    responses: Mapping[str, PrometheusResponse | None],
    stats: CorrelationStats | None = None,
    now: Callable[[], datetime] = capture_time,
) -> list[GPUMetrics]:
    """Build one record per (node, GPU) from the query responses.

    Points without a hostname are dropped, as are per-GPU points without a
    numeric gpu_id. A point whose value cannot be parsed is skipped on its
    own; the record it belongs to is still created with the field left at
    zero. Node CPU/memory utilization is copied onto the GPU records after
    all points are processed.

    Args:
        responses: Logical metric name -> query response
        stats: Optional counters of seen and skipped points
        now: Capture timestamp source

    Returns:
        Records in no particular order
    """
    if stats is None:
        stats = CorrelationStats()

    gpus: dict[tuple[str, int], dict[str, Any]] = {}
    node_usage: dict[str, dict[str, float]] = {}

    for metric_name, response in responses.items():
        if response is None:
            continue

        points = response.data.result
        gpu_field = GPU_FIELDS.get(metric_name)
        node_field = NODE_FIELDS.get(metric_name)

        if gpu_field is None and node_field is None:
            logger.debug("Ignoring unknown GPU metric", metric=metric_name, points=len(points))
            stats.ignored_metric += len(points)
            continue

        for point in points:
            stats.points += 1

            node_name = point.label("hostname")
            if not node_name:
                stats.missing_identity += 1
                continue

            if node_field is not None:
                value = sample_value(point)
                if value is None:
                    stats.invalid_value += 1
                    continue
                node_usage.setdefault(node_name, {})[node_field] = value
                continue

            gpu_index = parse_index(point.label("gpu_id"))
            if gpu_index is None:
                stats.missing_identity += 1
                continue

            key = (node_name, gpu_index)
            record = gpus.get(key)
            if record is None:
                record = gpus[key] = {
                    "node_name": node_name,
                    "gpu_index": gpu_index,
                    "gpu_name": point.label("gpu_name"),
                    "timestamp": now(),
                }

            value = sample_value(point)
            if value is None:
                stats.invalid_value += 1
                continue

            record[gpu_field] = int(value)

    for record in gpus.values():
        for field, value in node_usage.get(record["node_name"], {}).items():
            record[field] = int(value)

    return [GPUMetrics(**record) for record in gpus.values()]
