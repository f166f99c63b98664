"""LCOM4 command — shows the blocks behind each file's cohesion score."""

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from ..analysis.models import MemberKind, decode_evidence
from ..exceptions import NDepsGraphError
from ..graph.store import InMemoryDependencyStore
from ..infrastructure.entities import EntityType
from ..infrastructure.metrics import Metric
from ..logging_config import setup_logging
from . import app
from ._common import console, resolve_settings, run_parse


@app.command()
def lcom4(
    report: Path = typer.Argument(
        ...,
        help="NDeps XML result file",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    manifest: Path = typer.Option(
        ...,
        "--manifest",
        "-m",
        help="Solution manifest (JSON)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    project: str = typer.Option(..., "--project", "-p", help="Project being analysed"),
    minimum: int = typer.Option(
        2,
        "--min",
        help="Only show files whose LCOM4 is at least this value",
        min=1,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
):
    """
    Show the LCOM4 blocks of every file of a project.

    Each block is a group of fields and methods connected to each other but
    not to the rest of the type; more than one block hints the type could
    be split.
    """
    setup_logging(verbose=verbose, quiet=not verbose)

    try:
        settings = resolve_settings(config, verbose=verbose)
        store = InMemoryDependencyStore()
        run_parse(report, manifest, project, None, settings, store)
    except NDepsGraphError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    shown = 0
    for measure in store.measures:
        if measure.metric != Metric.LCOM4_BLOCKS or measure.entity.type != EntityType.FILE:
            continue
        # A file can hold several types; the score is derived from this measure's own blocks
        blocks = decode_evidence(str(measure.value))
        score = len(blocks) or 1
        if score < minimum:
            continue
        shown += 1
        console.print(f"[bold]{measure.entity.name}[/bold]  LCOM4 {score}")
        table = Table(show_header=True, header_style="bold")
        table.add_column("Block", justify="right")
        table.add_column("Fields")
        table.add_column("Methods")
        for i, block in enumerate(blocks, start=1):
            fields = [m.name for m in block if m.kind == MemberKind.FIELD]
            methods = [m.name for m in block if m.kind == MemberKind.METHOD]
            table.add_row(str(i), "\n".join(fields), "\n".join(methods))
        console.print(table)

    if not shown:
        console.print(f"[green]No file with LCOM4 >= {minimum}[/green]")
