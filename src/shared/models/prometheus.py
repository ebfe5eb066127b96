"""Prometheus HTTP API response models.

Sample values are kept as received; callers parse them.
"""

from typing import Any

from pydantic import Field

from .base import GPUMonBaseModel


class SeriesPoint(GPUMonBaseModel):
    """One labeled sample of an instant vector: labels plus [timestamp, "value"]."""

    metric: dict[str, str] = Field(default_factory=dict)
    value: list[Any] = Field(default_factory=list)

    def label(self, name: str) -> str:
        """Label value, or an empty string if the label is absent."""
        return self.metric.get(name, "")


class PrometheusData(GPUMonBaseModel):
    """The `data` member of a query response."""

    result_type: str = Field(default="vector", alias="resultType")
    result: list[SeriesPoint] = Field(default_factory=list)


class PrometheusResponse(GPUMonBaseModel):
    """Decoded /api/v1/query response."""

    status: str
    data: PrometheusData = Field(default_factory=PrometheusData)
    error: str | None = None
    error_type: str | None = Field(default=None, alias="errorType")
