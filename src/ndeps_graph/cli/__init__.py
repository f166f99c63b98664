"""CLI entry point — registers all subcommands."""

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="ndeps-graph",
    help=f"ndeps-graph {__version__} - dependency graph and LCOM4 from NDeps reports",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import subcommands to register them
from .parse import parse as _parse  # noqa: F401, E402
from .lcom4 import lcom4 as _lcom4  # noqa: F401, E402

__all__ = ["app", "console"]
