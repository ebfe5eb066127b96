"""Concurrent execution of a batch of named PromQL queries.

Every query runs in its own task and returns into its own result slot; the
batch is joined with asyncio.gather under one shared deadline. The first
failure fails the whole batch and cancels the queries still in flight.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Mapping

from shared.models import PrometheusResponse
from shared.observability import get_logger, log_external_call_end

from ..clients.prometheus import PrometheusClient, PrometheusError

logger = get_logger(__name__)


class QueryBatchError(Exception):
    """A batch of queries did not complete."""


class QueryFailedError(QueryBatchError):
    """One query of the batch failed."""

    def __init__(self, name: str, cause: PrometheusError):
        self.name = name
        self.cause = cause
        super().__init__(f"query {name} failed: {cause}")


class QueryTimeoutError(QueryBatchError):
    """The batch deadline expired before every query completed."""

    def __init__(self, timeout: float | None):
        self.timeout = timeout
        super().__init__(f"queries did not complete within {timeout}s")


async def _run_query(
    client: PrometheusClient,
    name: str,
    promql: str,
) -> PrometheusResponse:
    start = time.perf_counter()
    try:
        response = await client.query(promql)
    except PrometheusError as e:
        log_external_call_end(
            logger,
            "prometheus",
            name,
            success=False,
            duration_ms=(time.perf_counter() - start) * 1000,
            error=str(e),
        )
        raise QueryFailedError(name, e) from e

    log_external_call_end(
        logger,
        "prometheus",
        name,
        success=True,
        duration_ms=(time.perf_counter() - start) * 1000,
    )
    return response


async def execute_queries(
    client: PrometheusClient,
    queries: Mapping[str, str],
    timeout: float | None = None,
) -> dict[str, PrometheusResponse]:
    """Run all queries concurrently.

    Args:
        client: Prometheus client
        queries: Logical metric name -> PromQL expression
        timeout: Deadline in seconds for the whole batch (None = no deadline)

    Returns:
        Logical metric name -> response, one entry per query

    Raises:
        QueryFailedError: the first query that failed
        QueryTimeoutError: the deadline expired
    """
    if not queries:
        return {}

    names = list(queries)
    tasks = [
        asyncio.create_task(_run_query(client, name, queries[name]), name=f"promql:{name}")
        for name in names
    ]

    try:
        async with asyncio.timeout(timeout):
            responses = await asyncio.gather(*tasks)
    except TimeoutError as e:
        logger.warning("Query batch timed out", timeout=timeout, queries=names)
        raise QueryTimeoutError(timeout) from e
    finally:
        for task in tasks:
            if not task.done():
                task.cancel()

    return dict(zip(names, responses))
