"""Services for the GPU monitoring backend."""

from .gpu_service import GPUService
from .query_executor import (
    QueryBatchError,
    QueryFailedError,
    QueryTimeoutError,
    execute_queries,
)

__all__ = [
    "GPUService",
    "QueryBatchError",
    "QueryFailedError",
    "QueryTimeoutError",
    "execute_queries",
]
