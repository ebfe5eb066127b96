"""GPU service: query Prometheus and correlate the results."""

from __future__ import annotations

from shared.models import GPUMetrics, GPUProcess
from shared.observability import get_logger

from ..clients.prometheus import PrometheusClient
from ..collectors.gpu_metrics import GPU_METRIC_QUERIES, correlate_gpu_metrics
from ..collectors.gpu_processes import GPU_PROCESS_QUERIES, correlate_gpu_processes
from ..collectors.presentation import sort_gpu_metrics
from ..collectors.series import CorrelationStats
from .query_executor import execute_queries

logger = get_logger(__name__)


class GPUService:
    """Point-in-time GPU metrics and processes.

    Each call fans out its queries, waits for all of them and joins the
    results. Nothing is cached between calls.
    """

    def __init__(
        self,
        client: PrometheusClient,
        query_timeout: float | None = 30.0,
    ):
        self.client = client
        self.query_timeout = query_timeout

    async def get_gpu_metrics(self) -> list[GPUMetrics]:
        """Get one record per GPU, sorted by node and GPU index.

        Raises:
            QueryBatchError: if any query failed or the deadline expired
        """
        responses = await execute_queries(self.client, GPU_METRIC_QUERIES, self.query_timeout)

        stats = CorrelationStats()
        metrics = correlate_gpu_metrics(responses, stats=stats)
        self._log_stats("gpu_metrics", stats, len(metrics))

        return sort_gpu_metrics(metrics)

    async def get_gpu_processes(self) -> list[GPUProcess]:
        """Get running GPU processes, sorted by node, GPU index and pid.

        Raises:
            QueryBatchError: if the query failed or the deadline expired
        """
        responses = await execute_queries(self.client, GPU_PROCESS_QUERIES, self.query_timeout)

        stats = CorrelationStats()
        processes = correlate_gpu_processes(responses, stats=stats)
        self._log_stats("gpu_processes", stats, len(processes))

        return processes

    def _log_stats(self, kind: str, stats: CorrelationStats, records: int) -> None:
        if stats.skipped:
            logger.debug(
                "Skipped malformed series points",
                kind=kind,
                records=records,
                **stats.as_dict(),
            )
