"""Request logging middleware for the OpenIE API.

Provides structured JSON logging for all HTTP requests with:
- Request ID correlation (reuses an inbound X-Request-ID header)
- Method and path
- Response status code
- Elapsed time in milliseconds
- Error details on failures
"""

import logging
import time
from typing import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from packages.common.tracing import TracingContext

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging all HTTP requests with correlation IDs."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Process request and log details.

        Args:
            request: Incoming HTTP request.
            call_next: Next middleware/handler in chain.

        Returns:
            Response: HTTP response from handler.
        """
        with TracingContext(request.headers.get(REQUEST_ID_HEADER)) as request_id:
            start_ns = time.perf_counter_ns()

            # Query strings carry user text; only its size is logged
            logger.info(
                "Request started",
                extra={
                    "request_id": request_id,
                    "method": request.method,
                    "path": request.url.path,
                    "query_length": len(request.scope.get("query_string", b"")),
                    "client_host": request.client.host if request.client else None,
                },
            )

            request.state.request_id = request_id

            try:
                response = await call_next(request)
            except Exception:
                elapsed_ms = (time.perf_counter_ns() - start_ns) // 1_000_000
                logger.exception(
                    "Request failed",
                    extra={
                        "request_id": request_id,
                        "method": request.method,
                        "path": request.url.path,
                        "elapsed_ms": elapsed_ms,
                    },
                )
                raise

            elapsed_ms = (time.perf_counter_ns() - start_ns) // 1_000_000
            logger.info(
                "Request completed",
                extra={
                    "request_id": request_id,
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "elapsed_ms": elapsed_ms,
                },
            )

            response.headers[REQUEST_ID_HEADER] = request_id
            return response
