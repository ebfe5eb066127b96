"""GPU domain models.

Records are built once per aggregation call and never mutated afterwards.
"""

from datetime import datetime

from pydantic import ConfigDict, Field

from .base import GPUMonBaseModel


class GPUMetrics(GPUMonBaseModel):
    """Metrics of a single GPU, joined with its node's CPU/memory usage.

    Identified by (node_name, gpu_index).
    """

    model_config = ConfigDict(frozen=True)

    node_name: str = Field(min_length=1)
    gpu_index: int = Field(description="GPU index on the node")
    gpu_name: str = ""
    gpu_memory_used: int = 0
    gpu_memory_total: int = 0
    memory_free: int = Field(default=0, description="Free GPU memory")
    gpu_utilization: int = 0
    temperature: int = 0
    cpu_utilization: int = Field(default=0, description="Node CPU utilization percent")
    memory_utilization: int = Field(default=0, description="Node memory utilization percent")
    timestamp: datetime


class GPUProcess(GPUMonBaseModel):
    """A process holding memory on a GPU.

    Identified by (node_name, gpu_index, pid). A process spanning several
    GPUs yields one record per GPU.
    """

    model_config = ConfigDict(frozen=True)

    node_name: str = Field(min_length=1)
    gpu_index: int
    pid: int
    process_name: str = ""
    user: str = ""
    command: str = ""
    gpu_memory: int = 0
    timestamp: datetime
