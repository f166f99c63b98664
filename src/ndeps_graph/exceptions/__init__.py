"""Exception hierarchy for ndeps-graph."""

from .analysis import AnalysisError, MalformedInputError
from .base import NDepsGraphError
from .config import ConfigurationError, InvalidConfigError, ManifestError

__all__ = [
    "NDepsGraphError",
    "AnalysisError",
    "MalformedInputError",
    "ConfigurationError",
    "InvalidConfigError",
    "ManifestError",
]
