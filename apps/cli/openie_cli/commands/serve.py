"""CLI serve command implementation.

Runs the extraction API under uvicorn with the startup configuration passed
explicitly into the application.
"""

from __future__ import annotations

import logging

import typer
import uvicorn
from rich.console import Console
from rich.markup import escape

from packages.common.config import OpenIEConfig
from packages.common.logging import setup_logging

console = Console()
logger = logging.getLogger(__name__)


def serve_command(
    config: OpenIEConfig,
    port: int | None = None,
    host: str | None = None,
    log_level: str | None = None,
) -> None:
    """Start the OpenIE HTTP server.

    Args:
        config: Base configuration loaded from the environment.
        port: Port override (the single optional positional argument).
        host: Host override.
        log_level: Log level override.
    """
    overrides: dict[str, object] = {}
    if port is not None:
        overrides["port"] = port
    if host is not None:
        overrides["host"] = host
    if log_level is not None:
        overrides["log_level"] = log_level

    try:
        config = OpenIEConfig.model_validate({**config.model_dump(), **overrides})
    except ValueError as e:
        console.print(f"[red]Invalid configuration:[/red] {escape(str(e))}")
        raise typer.Exit(1) from None

    setup_logging(config.log_level)

    from apps.api.app import create_app

    logger.info(
        "Serving OpenIE",
        extra={"host": config.host, "port": config.port, "backend": config.extraction_backend},
    )
    console.print(
        f"[bold cyan]Serving OpenIE[/bold cyan] on http://{config.host}:{config.port} "
        f"(backend: {config.extraction_backend})"
    )

    # log_config=None keeps uvicorn on the JSON handlers installed above
    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        log_config=None,
        log_level=config.log_level.lower(),
    )
