"""Common utilities for the OpenIE server.

This package provides reusable utilities like logging, config, tracing,
metrics, and query string decoding.
"""

from packages.common.query_string import QueryStringDecodeError, parse_query
from packages.common.tracing import TracingContext, get_correlation_id

__all__ = [
    "QueryStringDecodeError",
    "TracingContext",
    "get_correlation_id",
    "parse_query",
]
