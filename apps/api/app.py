"""FastAPI application for the OpenIE server with lifecycle management and middleware."""

from __future__ import annotations

import logging
import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from anyio import to_thread
from fastapi import FastAPI, Request, Response, status
from fastapi.exception_handlers import http_exception_handler
from starlette.exceptions import HTTPException as StarletteHTTPException

from apps.api.middleware.logging import RequestLoggingMiddleware
from apps.api.middleware.metrics import PrometheusMiddleware
from apps.api.routes import openie
from packages.common.config import OpenIEConfig, get_config
from packages.common.metrics import start_metrics_server
from packages.core.ports.extraction_engine import ExtractionEngine
from packages.extraction.engines import build_engine

logger = logging.getLogger(__name__)

# Single source of truth for version
try:
    from importlib.metadata import version as get_version

    VERSION = get_version("openie-server")
except Exception:
    # Fallback for development or when package not installed
    VERSION = os.getenv("OPENIE_VERSION", "0.1.0")


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
    """Answer unsupported methods with an empty 405; defer everything else to FastAPI."""
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        return openie.method_not_allowed()
    return await http_exception_handler(request, exc)


def create_app(
    config: OpenIEConfig | None = None,
    engine: ExtractionEngine | None = None,
) -> FastAPI:
    """Build the OpenIE FastAPI application.

    Args:
        config: Startup configuration; defaults to the environment-derived config.
        engine: Preloaded extraction engine. When omitted, the engine named by
            ``config.extraction_backend`` is built during startup.

    Returns:
        FastAPI: Configured application.
    """
    config = config or get_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Manage application lifecycle: startup and shutdown.

        Startup:
            - Load the extraction engine (blocking model load runs in a thread)
            - Start the Prometheus exposition server if configured

        Shutdown:
            - Release the engine reference
        """
        logger.info(
            "Starting OpenIE server",
            extra={"version": VERSION, "host": config.host, "port": config.port},
        )

        built_here = False
        if getattr(app.state, "engine", None) is None:
            try:
                app.state.engine = await to_thread.run_sync(build_engine, config)
            except Exception as e:
                logger.exception("Failed to load extraction engine", extra={"error": str(e)})
                raise
            built_here = True

        logger.info(
            "Finished loading extraction engine",
            extra={"backend": getattr(app.state.engine, "name", None)},
        )

        if config.metrics_port is not None:
            start_metrics_server(config.metrics_port, addr=config.host)

        logger.info("OpenIE server startup complete")

        yield

        logger.info("Shutting down OpenIE server")
        if built_here:
            app.state.engine = None
        logger.info("OpenIE server shutdown complete")

    # Every path is the extraction endpoint, so the docs routes are disabled
    app = FastAPI(
        title="OpenIE Server",
        version=VERSION,
        description="Open information extraction over HTTP",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.config = config
    app.state.engine = engine

    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)

    # Add request logging middleware
    app.add_middleware(RequestLoggingMiddleware)

    # Add Prometheus metrics middleware
    app.add_middleware(PrometheusMiddleware)

    app.include_router(openie.router)

    return app


app = create_app()
