"""Middleware for the OpenIE API."""

from apps.api.middleware.logging import RequestLoggingMiddleware
from apps.api.middleware.metrics import PrometheusMiddleware

__all__ = ["PrometheusMiddleware", "RequestLoggingMiddleware"]
