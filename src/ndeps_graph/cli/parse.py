"""Parse command — dependency graph from one NDeps report."""

import json
from pathlib import Path
from typing import Optional

import click
import typer
from rich.table import Table

from ..analysis.models import ParseReport
from ..analysis.summary import GraphSummary, summarize
from ..exceptions import NDepsGraphError
from ..logging_config import setup_logging
from . import app
from ._common import console, open_store, resolve_settings, run_parse


@app.command()
def parse(
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
    project: str = typer.Option(
        ...,
        "--project",
        "-p",
        help="Project being analysed (name or assembly name)",
    ),
    scope: Optional[str] = typer.Option(
        None,
        "--scope",
        "-s",
        help="Usage tag for assembly dependencies (default from config: compile)",
    ),
    db: Optional[Path] = typer.Option(
        None,
        "--db",
        help="Write dependencies and measures to this SQLite database",
        dir_okay=False,
    ),
    fmt: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help="Output format: rich (human-readable) or json",
        click_type=click.Choice(["rich", "json"], case_sensitive=False),
    ),
    key_strategy: Optional[str] = typer.Option(
        None,
        "--key-strategy",
        help="Project key generation: safe or default",
    ),
    branch: Optional[str] = typer.Option(
        None,
        "--branch",
        help="Branch suffix for project keys",
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
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every saved dependency"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress logging"),
):
    """
    Build the dependency graph of one project from an NDeps report.

    [bold cyan]Examples:[/bold cyan]

      ndeps-graph parse ndeps.xml -m solution.json -p Acme.Core

      ndeps-graph parse ndeps.xml -m solution.json -p Acme.Core --scope test --db graph.db

      ndeps-graph parse ndeps.xml -m solution.json -p Acme.Core --format json
    """
    logger = setup_logging(verbose=verbose, quiet=quiet)

    try:
        settings = resolve_settings(config, key_strategy, branch, verbose, quiet)
        with open_store(db) as store:
            result = run_parse(report, manifest, project, scope, settings, store)
            summary = summarize(store.dependencies, store.measures)

        if fmt.lower() == "json":
            _output_json(result, summary)
        else:
            _output_rich(result, summary)

    except typer.Exit:
        raise
    except NDepsGraphError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except Exception as e:
        logger.exception("Unexpected error")
        console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)


def _output_json(result: ParseReport, summary: GraphSummary):
    output = {"report": result.to_dict(), "summary": summary.to_dict()}
    print(json.dumps(output, indent=2))


def _output_rich(result: ParseReport, summary: GraphSummary):
    console.print()
    console.print(f"[bold cyan]NDEPS GRAPH[/bold cyan] — {result.source}")
    console.print(
        f"  [bold]{result.assemblies}[/bold] assemblies read, "
        f"[bold]{result.skipped_assemblies}[/bold] left to their own project"
    )
    console.print()

    table = Table(title="Dependencies", show_header=True, header_style="bold")
    table.add_column("Level")
    table.add_column("Edges", justify="right")
    table.add_column("Weight", justify="right")
    table.add_row("assembly", str(summary.assembly_edges), "")
    table.add_row("folder", str(summary.folder_edges), str(summary.folder_weight))
    table.add_row("file", str(summary.file_edges), "")
    console.print(table)

    unresolved = result.unresolved_references + result.unresolved_type_pairs
    if unresolved:
        console.print(
            f"  [dim]{result.unresolved_references} references and "
            f"{result.unresolved_type_pairs} type pairs outside the solution were ignored[/dim]"
        )

    stats = summary.cohesion
    if stats.count:
        console.print()
        console.print(
            f"  LCOM4 over [bold]{stats.count}[/bold] types: mean {stats.mean:.2f}, "
            f"median {stats.median:g}, max {stats.max:g}"
        )
        if stats.incohesive:
            console.print(f"  [yellow]{stats.incohesive} types split into several blocks[/yellow]")
    console.print()
