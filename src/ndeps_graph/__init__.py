"""
ndeps-graph - dependency graph and cohesion metrics from NDeps reports

Reads the XML produced by the NDeps analyser for a .NET solution and turns
it into project, folder and file dependencies with rolled-up weights, plus
an LCOM4 score and its evidence blocks for every type.
"""

__version__ = "0.1.0"

from .analysis import ParseReport, ResultParser
from .graph import DependencyStore, InMemoryDependencyStore
from .resolution import AnalysisContext, SolutionResolver, load_manifest

__all__ = [
    "ResultParser",  # Main entry point
    "ParseReport",
    "DependencyStore",
    "InMemoryDependencyStore",
    "AnalysisContext",
    "SolutionResolver",
    "load_manifest",
]
