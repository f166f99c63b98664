"""Resolution of report names (assemblies, types) to entities."""

from __future__ import annotations

import posixpath
import re
from dataclasses import dataclass
from typing import Optional, Protocol

from ..config import ParserConfig
from ..infrastructure.entities import Entity
from ..infrastructure.registry import EntityRegistry
from ..logging_config import get_logger
from .manifest import ProjectManifest, SolutionManifest

logger = get_logger(__name__)

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class AnalysisContext:
    """The project a report is being parsed for."""

    project: Entity
    assembly: str


class EntityResolver(Protocol):
    """What the parser needs to turn report names into entities."""

    def resolve_type(self, full_name: str) -> Optional[Entity]: ...

    def resolve_assembly(self, name: str, version: Optional[str]) -> Optional[Entity]: ...

    def project_for_assembly(self, name: str) -> Optional[Entity]: ...

    def parent_of(self, entity: Entity) -> Optional[Entity]: ...


class SolutionResolver:
    """Resolver backed by a SolutionManifest.

    Solution projects, their directories and files are indexed up front.
    Assemblies outside the solution become libraries, indexed the first
    time they are seen and shared afterwards.
    """

    def __init__(
        self,
        manifest: SolutionManifest,
        config: Optional[ParserConfig] = None,
        registry: Optional[EntityRegistry] = None,
    ) -> None:
        self.manifest = manifest
        self.config = config or ParserConfig()
        self.registry = registry or EntityRegistry()
        self._projects: dict[str, Entity] = {}
        self._types: dict[str, Entity] = {}
        for project in manifest.projects:
            self._index_project(project)

    # ── keys ──────────────────────────────────────────────────────

    def project_key(self, project_name: str) -> str:
        """Key of a solution project under the configured strategy."""
        if self.config.safe_keys:
            prefix = self.manifest.solution_key
        else:
            prefix = self.manifest.solution_key.split(":", 1)[0]
        key = f"{prefix}:{_WHITESPACE.sub('', project_name)}"
        if self.config.branch:
            key += f":{self.config.branch}"
        return key

    def _index_project(self, project: ProjectManifest) -> None:
        project_key = self.project_key(project.name)
        entity = self.registry.index(Entity.project(project_key, project.name))
        self._projects[project.assembly] = entity

        for type_name, path in project.types.items():
            path = posixpath.normpath(path.replace("\\", "/").strip("/"))
            folder = posixpath.dirname(path)
            if folder:
                parent = self.registry.index(
                    Entity.directory(f"{project_key}:{folder}", folder), parent=entity
                )
            else:
                parent = entity
            file = self.registry.index(Entity.file(f"{project_key}:{path}", path), parent=parent)
            self._types[type_name] = file

    # ── EntityResolver ────────────────────────────────────────────

    def context_for(self, project_name: str) -> AnalysisContext:
        """Build the parse context for one solution project.

        Raises:
            KeyError: If the solution has no such project
        """
        project = self.manifest.project(project_name)
        return AnalysisContext(project=self._projects[project.assembly], assembly=project.assembly)

    def project_for_assembly(self, name: str) -> Optional[Entity]:
        return self._projects.get(name)

    def resolve_assembly(self, name: str, version: Optional[str]) -> Optional[Entity]:
        project = self._projects.get(name)
        if project is not None:
            return project
        library = Entity.library(name, version)
        if library.id not in self.registry:
            logger.debug("Indexing library %s", library.key)
        return self.registry.index(library)

    def resolve_type(self, full_name: str) -> Optional[Entity]:
        """File declaring ``full_name``; nested types map to their outer type."""
        name = full_name
        while True:
            file = self._types.get(name)
            if file is not None:
                return file
            cut = max(name.rfind("+"), name.rfind("/"))
            if cut <= 0:
                return None
            name = name[:cut]

    def parent_of(self, entity: Entity) -> Optional[Entity]:
        return self.registry.parent_of(entity)
