"""OpenIE CLI - Typer command-line interface for serving and running extractions."""

from __future__ import annotations

import logging
from typing import get_args

import typer

from apps.cli.openie_cli.utils import async_command
from packages.common.config import ExtractionBackend, get_config

app = typer.Typer(
    name="openie",
    help="OpenIE - open information extraction over HTTP",
    add_completion=False,
)
logger = logging.getLogger(__name__)


@app.command()
def serve(
    port: int | None = typer.Argument(
        None, help="Port to listen on (default: OPENIE_PORT or 8080)"
    ),
    host: str | None = typer.Option(
        None, "--host", help="Interface to bind (default: OPENIE_HOST or localhost)"
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="Log level override"),
) -> None:
    """
    Serve the extraction API.

    Examples:
        openie serve
        openie serve 9000
        openie serve 9000 --host 0.0.0.0
    """
    from apps.cli.openie_cli.commands.serve import serve_command

    serve_command(get_config(), port=port, host=host, log_level=log_level)


@app.command()
@async_command
async def extract(
    text: str = typer.Argument(..., help="Text to extract relations from"),
    backend: str | None = typer.Option(
        None, "--backend", "-b", help="Extraction backend (spacy or pattern)"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the JSON array instead of a table"),
) -> None:
    """
    Extract relations from text without starting the server.

    Examples:
        openie extract "Obama gave a speech on Tuesday."
        openie extract "Obama gave a speech." --backend pattern --json
    """
    from apps.cli.openie_cli.commands.extract import extract_command

    config = get_config()
    if backend is not None:
        if backend not in get_args(ExtractionBackend):
            raise typer.BadParameter(
                f"must be one of: {', '.join(get_args(ExtractionBackend))}",
                param_hint="--backend",
            )
        config = config.model_copy(update={"extraction_backend": backend})

    await extract_command(config, text=text, as_json=as_json)


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
