"""Ordering and display conversion of correlated records."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from shared.models import GPUMetrics, GPUProcess

MIB = 2**20

GPU_MEMORY_FIELDS = ("gpu_memory_used", "gpu_memory_total", "memory_free")
PROCESS_MEMORY_FIELDS = ("gpu_memory",)


class MemoryUnit(str, Enum):
    """Unit of memory fields in API responses."""

    BYTES = "bytes"
    MIB = "mib"


def sort_gpu_metrics(records: Iterable[GPUMetrics]) -> list[GPUMetrics]:
    """Sort by node name, then GPU index."""
    return sorted(records, key=lambda m: (m.node_name, m.gpu_index))


def sort_gpu_processes(records: Iterable[GPUProcess]) -> list[GPUProcess]:
    """Sort by node name, then GPU index, then pid."""
    return sorted(records, key=lambda p: (p.node_name, p.gpu_index, p.pid))


def bytes_to_mib(value: int) -> int:
    """Convert bytes to MiB, rounding half up (toward positive infinity).

    -2.5 MiB becomes -2, matching JavaScript's Math.round.
    """
    return (value + MIB // 2) // MIB


def convert_gpu_metrics(records: list[GPUMetrics], unit: MemoryUnit) -> list[GPUMetrics]:
    if unit == MemoryUnit.BYTES:
        return records
    return [
        m.model_copy(update={f: bytes_to_mib(getattr(m, f)) for f in GPU_MEMORY_FIELDS})
        for m in records
    ]


def convert_gpu_processes(records: list[GPUProcess], unit: MemoryUnit) -> list[GPUProcess]:
    if unit == MemoryUnit.BYTES:
        return records
    return [
        p.model_copy(update={f: bytes_to_mib(getattr(p, f)) for f in PROCESS_MEMORY_FIELDS})
        for p in records
    ]
