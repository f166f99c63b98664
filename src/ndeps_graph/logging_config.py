"""
Logging configuration for ndeps-graph.

Provides rich-formatted terminal logging plus an optional plain log file.

What each level carries:
    DEBUG    every saved dependency ("Saving dependency from X to Y"), every
             LCOM4 type parsed, libraries indexed, assemblies skipped
    INFO     one summary line per parsed report
    WARNING  default CLI level
    ERROR    only level left with --quiet
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Configure logging with rich handler for colored output.

    Args:
        verbose: Enable DEBUG level logging (every saved dependency is logged)
        quiet: Suppress all but ERROR level logging
        log_file: Optional file path to write logs to

    Returns:
        Configured logger instance for ndeps_graph
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    console = Console(stderr=True)

    handlers: list[logging.Handler] = [
        RichHandler(
            console=console,
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            markup=False,
            show_time=True,
            show_path=verbose,
        )
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        handlers.append(file_handler)

    logging.basicConfig(level=level, format="%(message)s", datefmt="[%X]", handlers=handlers, force=True)

    logger = logging.getLogger("ndeps_graph")
    logger.setLevel(level)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Module name (e.g., 'ndeps_graph.analysis.parser')
              If None, returns the root ndeps_graph logger

    Returns:
        Logger instance
    """
    if name is None:
        return logging.getLogger("ndeps_graph")

    if not name.startswith("ndeps_graph"):
        name = f"ndeps_graph.{name}"

    return logging.getLogger(name)
