"""Turning report names into entities."""

from .manifest import ProjectManifest, SolutionManifest, load_manifest
from .resolver import AnalysisContext, EntityResolver, SolutionResolver

__all__ = [
    "AnalysisContext",
    "EntityResolver",
    "ProjectManifest",
    "SolutionManifest",
    "SolutionResolver",
    "load_manifest",
]
