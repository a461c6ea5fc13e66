"""Prometheus metrics middleware for HTTP request instrumentation.

Instruments all HTTP requests with Prometheus metrics:
- Request counts by method and status
- Request duration histograms by method

Paths are not used as labels: every path is served by the same handler.
"""

from __future__ import annotations

import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from packages.common.metrics import http_request_duration_seconds, http_requests_total


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Middleware to instrument HTTP requests with Prometheus metrics.

    Example:
        >>> app = FastAPI()
        >>> app.add_middleware(PrometheusMiddleware)
    """

    async def dispatch(self, request: Request, call_next) -> Response:  # type: ignore
        """Process request and record metrics.

        Args:
            request: Incoming HTTP request.
            call_next: Next middleware or route handler.

        Returns:
            Response: HTTP response from downstream handler.
        """
        start_time = time.perf_counter()

        response = await call_next(request)

        duration = time.perf_counter() - start_time

        http_requests_total.labels(method=request.method, status=response.status_code).inc()
        http_request_duration_seconds.labels(method=request.method).observe(duration)

        return response


# Export public API
__all__ = ["PrometheusMiddleware"]
