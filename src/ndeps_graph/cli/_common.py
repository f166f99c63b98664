"""Shared CLI helpers."""

from contextlib import nullcontext
from pathlib import Path
from typing import ContextManager, Optional, Union

from rich.console import Console

from ..analysis.models import ParseReport
from ..analysis.parser import ResultParser
from ..config import ParserConfig, load_config
from ..exceptions import ConfigurationError
from ..graph.store import InMemoryDependencyStore
from ..persistence.database import SqliteDependencyStore
from ..resolution.manifest import load_manifest
from ..resolution.resolver import SolutionResolver

console = Console()

Store = Union[InMemoryDependencyStore, SqliteDependencyStore]


def resolve_settings(
    config: Optional[Path] = None,
    key_strategy: Optional[str] = None,
    branch: Optional[str] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> ParserConfig:
    """Build settings from CLI options."""
    return load_config(
        config_file=config,
        key_generation_strategy=key_strategy,
        branch=branch,
        verbose=verbose,
        quiet=quiet,
    )


def open_store(db: Optional[Path]) -> ContextManager[Store]:
    """SQLite store when a database path is given, in-memory otherwise."""
    if db is None:
        return nullcontext(InMemoryDependencyStore())
    return SqliteDependencyStore(db)


def run_parse(
    report: Path,
    manifest: Path,
    project: str,
    scope: Optional[str],
    settings: ParserConfig,
    store: Store,
) -> ParseReport:
    """Resolve the project and feed ``report`` into ``store``.

    Raises:
        ConfigurationError: If ``project`` is not part of the manifest
    """
    resolver = SolutionResolver(load_manifest(manifest), settings)
    try:
        context = resolver.context_for(project)
    except KeyError:
        raise ConfigurationError(
            f"Project '{project}' is not part of the solution",
            details={"manifest": str(manifest)},
        )
    return ResultParser(resolver, store).parse(scope or settings.default_scope, report, context)
