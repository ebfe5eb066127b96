"""Request ID and access logging middleware."""

from __future__ import annotations

import time
from uuid import uuid4

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from shared.observability import (
    RequestContextManager,
    get_logger,
    log_request_end,
    log_request_start,
)

logger = get_logger(__name__)

REQUEST_ID_HEADER = "x-request-id"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind a request ID to the logging context and log each request."""

    # Paths to skip logging
    SKIP_PATHS = {"/health"}

    async def dispatch(self, request: Request, call_next):
        if request.url.path in self.SKIP_PATHS:
            return await call_next(request)

        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        start = time.perf_counter()

        async with RequestContextManager(request_id=request_id):
            client_ip = request.client.host if request.client else None
            log_request_start(logger, request.method, request.url.path, client_ip)

            response = await call_next(request)

            log_request_end(
                logger,
                request.method,
                request.url.path,
                response.status_code,
                (time.perf_counter() - start) * 1000,
            )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
