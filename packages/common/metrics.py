"""Prometheus metrics for the OpenIE server.

Defines HTTP request metrics and extraction metrics. Because every path on the
main server is routed to the extraction handler, metrics are exposed on a
separate port started with :func:`start_metrics_server`.
"""

from __future__ import annotations

from prometheus_client import REGISTRY, Counter, Histogram, start_http_server

from packages.common.logging import get_logger

logger = get_logger(__name__)

# HTTP request metrics
http_requests_total = Counter(
    "openie_http_requests_total",
    "Total HTTP requests",
    ["method", "status"],
    registry=REGISTRY,
)

http_request_duration_seconds = Histogram(
    "openie_http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method"],
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
    registry=REGISTRY,
)

# Extraction metrics
extraction_duration_seconds = Histogram(
    "openie_extraction_duration_seconds",
    "Extraction engine latency in seconds",
    ["backend"],
    buckets=[0.001, 0.01, 0.05, 0.1, 0.25, 0.5, 0.75, 1.0, 2.5, 5.0, 10.0],
    registry=REGISTRY,
)

extractions_total = Counter(
    "openie_extractions_total",
    "Total extractions returned by the engine",
    ["backend"],
    registry=REGISTRY,
)

extraction_failures_total = Counter(
    "openie_extraction_failures_total",
    "Total failed extraction calls",
    ["backend", "reason"],
    registry=REGISTRY,
)


def start_metrics_server(port: int, addr: str = "localhost") -> None:
    """Expose the default registry in Prometheus text format.

    Args:
        port: Port for the exposition server.
        addr: Interface to bind.
    """
    start_http_server(port, addr=addr, registry=REGISTRY)
    logger.info("Prometheus metrics server started", extra={"port": port, "addr": addr})


# Export public API
__all__ = [
    "extraction_duration_seconds",
    "extraction_failures_total",
    "extractions_total",
    "http_request_duration_seconds",
    "http_requests_total",
    "start_metrics_server",
]
