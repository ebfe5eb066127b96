"""Prometheus HTTP API query client.

Every failure mode is raised as a PrometheusError subclass:
- transport failures and timeouts (PrometheusConnectionError)
- non-200 responses (PrometheusHTTPError)
- undecodable bodies and non-success statuses (PrometheusQueryError)
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

import httpx

from shared.config import PrometheusSettings
from shared.models import PrometheusResponse
from shared.observability import get_logger

logger = get_logger(__name__)

# Max characters of an error body carried in exception messages
ERROR_BODY_LIMIT = 512


class PrometheusError(Exception):
    """Base error for failed Prometheus queries."""


class PrometheusConnectionError(PrometheusError):
    """Prometheus could not be reached or did not answer in time."""


class PrometheusHTTPError(PrometheusError):
    """Prometheus answered with a non-200 status."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"prometheus API error: status {status_code}, body: {body}")


class PrometheusQueryError(PrometheusError):
    """Prometheus rejected the query or returned an unreadable response."""

    def __init__(self, message: str, error_type: str | None = None):
        self.error_type = error_type
        super().__init__(message)


class PrometheusClient:
    """Prometheus instant query client."""

    def __init__(self, base_url: str, timeout: float = 30.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def query(self, promql: str, time: datetime | None = None) -> PrometheusResponse:
        """Execute an instant query.

        Args:
            promql: PromQL query string
            time: Optional evaluation timestamp (defaults to server time)

        Returns:
            Decoded response with status "success"

        Raises:
            PrometheusError: on any transport, HTTP or query failure
        """
        client = await self._get_client()

        params: dict[str, Any] = {"query": promql}
        if time:
            params["time"] = time.timestamp()

        try:
            response = await client.get(f"{self.base_url}/api/v1/query", params=params)
        except httpx.TimeoutException as e:
            logger.error("Prometheus query timeout", url=self.base_url, query=promql)
            raise PrometheusConnectionError(f"query timeout: {promql}") from e
        except httpx.HTTPError as e:
            logger.error("Prometheus query failed", url=self.base_url, query=promql, error=str(e))
            raise PrometheusConnectionError(f"executing request: {e}") from e

        if response.status_code != 200:
            logger.error(
                "Prometheus returned error status",
                url=self.base_url,
                query=promql,
                status=response.status_code,
            )
            raise PrometheusHTTPError(response.status_code, response.text[:ERROR_BODY_LIMIT])

        try:
            result = PrometheusResponse.model_validate(response.json())
        except ValueError as e:
            raise PrometheusQueryError(f"unmarshaling response: {e}") from e

        if result.status != "success":
            raise PrometheusQueryError(
                f"prometheus query failed: {result.error_type} - {result.error}",
                error_type=result.error_type,
            )

        return result

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None


def create_prometheus_client(settings: PrometheusSettings) -> PrometheusClient:
    """Create a client from Prometheus settings."""
    logger.info("Creating Prometheus client", url=settings.url)

    return PrometheusClient(
        base_url=settings.url,
        timeout=settings.timeout_seconds,
    )
