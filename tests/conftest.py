"""Shared test fixtures for ndeps-graph tests."""

from pathlib import Path

import pytest

from ndeps_graph.config import ParserConfig
from ndeps_graph.graph.store import InMemoryDependencyStore
from ndeps_graph.resolution.manifest import ProjectManifest, SolutionManifest
from ndeps_graph.resolution.resolver import SolutionResolver

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding the sample report and manifest."""
    return FIXTURES


@pytest.fixture
def manifest():
    """Two-project solution.

    Acme.Core:
        A -> a/A.cs, B -> b/B.cs, C -> b/C.cs, Root -> Root.cs
    Acme.Web:
        W -> web/W.cs
    """
    return SolutionManifest(
        solution_key="acme:platform",
        projects=[
            ProjectManifest(
                name="Acme.Core",
                assembly="Acme.Core",
                types={"A": "a/A.cs", "B": "b/B.cs", "C": "b/C.cs", "Root": "Root.cs"},
            ),
            ProjectManifest(name="Acme.Web", assembly="Acme.Web", types={"W": "web/W.cs"}),
        ],
    )


@pytest.fixture
def resolver(manifest):
    return SolutionResolver(manifest, ParserConfig())


@pytest.fixture
def store():
    return InMemoryDependencyStore()


@pytest.fixture
def core_context(resolver):
    return resolver.context_for("Acme.Core")
