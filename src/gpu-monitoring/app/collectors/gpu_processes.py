"""GPU process correlator.

Joins process series keyed by (hostname, gpu_id, pid) into GPUProcess
records, sorted by node, GPU index and pid.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

from shared.models import GPUProcess, PrometheusResponse
from shared.observability import get_logger

from .presentation import sort_gpu_processes
from .series import CorrelationStats, capture_time, parse_index, sample_value

logger = get_logger(__name__)

GPU_PROCESS_QUERIES: dict[str, str] = {
    "gpu_memory": "gpu_process_gpu_memory",
}

# Process metric -> GPUProcess field
PROCESS_FIELDS: dict[str, str] = {
    "gpu_memory": "gpu_memory",
}


def correlate_gpu_processes(
    responses: Mapping[str, PrometheusResponse | None],
    stats: CorrelationStats | None = None,
    now: Callable[[], datetime] = capture_time,
) -> list[GPUProcess]:
    """Build one record per (node, GPU, pid) from the query responses.

    A point missing any identity label is dropped. Descriptive labels
    (process_name, user, command) are taken from the first point seen for
    a key. An unparseable value skips only that point.

    Returns:
        Records sorted by (node_name, gpu_index, pid); empty list if none
    """
    if stats is None:
        stats = CorrelationStats()

    processes: dict[tuple[str, int, int], dict[str, Any]] = {}

    for metric_name, response in responses.items():
        if response is None:
            continue

        points = response.data.result
        field = PROCESS_FIELDS.get(metric_name)
        if field is None:
            logger.debug("Ignoring unknown process metric", metric=metric_name, points=len(points))
            stats.ignored_metric += len(points)
            continue

        for point in points:
            stats.points += 1

            node_name = point.label("hostname")
            gpu_index = parse_index(point.label("gpu_id"))
            pid = parse_index(point.label("pid"))
            if not node_name or gpu_index is None or pid is None:
                stats.missing_identity += 1
                continue

            key = (node_name, gpu_index, pid)
            record = processes.get(key)
            if record is None:
                record = processes[key] = {
                    "node_name": node_name,
                    "gpu_index": gpu_index,
                    "pid": pid,
                    "process_name": point.label("process_name"),
                    "user": point.label("user"),
                    "command": point.label("command"),
                    "timestamp": now(),
                }

            value = sample_value(point)
            if value is None:
                stats.invalid_value += 1
                continue

            record[field] = int(value)

    if not processes:
        return []

    return sort_gpu_processes(GPUProcess(**record) for record in processes.values())
