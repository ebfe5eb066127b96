"""API response envelope shared by all endpoints."""

from typing import Any

from .base import GPUMonBaseModel


class APIResponse(GPUMonBaseModel):
    """Standard API response.

    `data` and `message` accompany success; `error` accompanies failure.
    """

    success: bool
    data: Any | None = None
    error: str | None = None
    message: str | None = None
