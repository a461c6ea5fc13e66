"""CLI extract command implementation.

Runs the configured extraction engine in-process and prints the result either
as a table or as the same JSON array the HTTP endpoint returns.
"""

from __future__ import annotations

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from packages.common.config import OpenIEConfig
from packages.common.tracing import TracingContext
from packages.core.use_cases.extract_relations import ExtractRelationsUseCase
from packages.extraction.engines import build_engine
from packages.extraction.serializer import serialize_extractions
from packages.schemas.extraction import Extraction

console = Console()


def _render_table(extractions: list[Extraction]) -> Table:
    table = Table(title=f"Extractions ({len(extractions)})")
    table.add_column("Confidence", justify="right", style="cyan")
    table.add_column("Subject", style="bold")
    table.add_column("Relation", style="green")
    table.add_column("Objects")
    table.add_column("Flags", style="magenta")
    table.add_column("Context", style="dim")

    for extraction in extractions:
        flags = [name for name in ("negated", "passive") if getattr(extraction, name)]
        table.add_row(
            f"{extraction.confidence:.2f}",
            escape(extraction.subject),
            escape(extraction.relation),
            escape("; ".join(extraction.objects)),
            ", ".join(flags),
            escape(extraction.context),
        )
    return table


async def extract_command(config: OpenIEConfig, text: str, as_json: bool = False) -> None:
    """Extract relations from text and print them.

    Args:
        config: Configuration selecting the extraction backend.
        text: Input text.
        as_json: Print the wire JSON array instead of a table.
    """
    try:
        engine = build_engine(config)
    except Exception as e:
        console.print(f"[red]Failed to load extraction engine:[/red] {escape(str(e))}")
        raise typer.Exit(1) from None

    use_case = ExtractRelationsUseCase(engine=engine, timeout=config.request_timeout)

    try:
        with TracingContext():
            extractions = await use_case.execute(text)
    except Exception as e:
        console.print(f"[red]Extraction failed:[/red] {escape(str(e))}")
        raise typer.Exit(1) from None

    if as_json:
        # plain print keeps the JSON free of Rich markup handling
        print(serialize_extractions(extractions))
        return

    if not extractions:
        console.print("[yellow]No extractions found[/yellow]")
        return

    console.print(_render_table(extractions))
