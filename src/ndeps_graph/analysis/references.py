"""Assembly and type reference aggregation.

Assembly references become one edge per reference. Type references become
file-to-file edges, each rolled up into a single directory-to-directory edge
per ancestor pair whose weight counts the file edges beneath it.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET

from ..graph.store import DependencyStore
from ..infrastructure.entities import Entity
from ..infrastructure.relations import USES, Dependency
from ..logging_config import get_logger
from ..parsing.cursor import child_elements
from ..resolution.resolver import EntityResolver
from .models import ParseReport

logger = get_logger(__name__)


class ReferenceAggregator:
    def __init__(self, resolver: EntityResolver, store: DependencyStore, report: ParseReport) -> None:
        self.resolver = resolver
        self.store = store
        self.report = report
        self._folder_dependencies: set[int] = set()

    def parse_references(self, scope: str, section: ET.Element, source: Entity) -> None:
        """``<References><Reference name version/>``: one new edge each, never merged."""
        for reference in child_elements(section):
            name = reference.get("name")
            target = self.resolver.resolve_assembly(name, reference.get("version")) if name else None
            if target is None:
                logger.debug("Unresolved reference %s from %s", name, source.name)
                self.report.unresolved_references += 1
                continue

            dependency = Dependency(source, target, usage=scope, weight=1)
            self.store.save_dependency(dependency)
            self.report.assembly_dependencies += 1
            logger.debug("Saving dependency from %s to %s", source.name, target.name)

    def parse_type_references(self, section: ET.Element) -> None:
        """``<TypeReferences><From fullname><To fullname/>``: file edges plus their folder edge."""
        for from_element in child_elements(section):
            from_type = from_element.get("fullname")
            for to_element in child_elements(from_element):
                self._save_type_reference(from_type, to_element.get("fullname"))

    def _save_type_reference(self, from_type: str | None, to_type: str | None) -> None:
        from_file = self.resolver.resolve_type(from_type) if from_type else None
        to_file = self.resolver.resolve_type(to_type) if to_type else None
        # Filtered or third-party types are dropped, not reported
        if from_file is None or to_file is None:
            self.report.unresolved_type_pairs += 1
            return

        from_parent = self.resolver.parent_of(from_file)
        to_parent = self.resolver.parent_of(to_file)
        if from_parent is None or to_parent is None:
            self.report.unresolved_type_pairs += 1
            return

        folder_dependency = self.find_folder_dependency(from_parent, to_parent)

        file_dependency = Dependency(from_file, to_file, usage=USES, weight=1, parent=folder_dependency)
        self.store.save_dependency(file_dependency)
        self.report.file_dependencies += 1
        logger.debug("Saving dependency from %s to %s", from_file.name, to_file.name)

    def find_folder_dependency(self, from_parent: Entity, to_parent: Entity) -> Dependency:
        """Fetch or create the USES edge between two ancestors and bump its weight."""
        folder_dependency = self.store.find_dependency(from_parent, to_parent, USES)
        if folder_dependency is None:
            folder_dependency = Dependency(from_parent, to_parent, usage=USES, weight=0)

        folder_dependency.weight += 1
        self.store.save_dependency(folder_dependency)
        if id(folder_dependency) not in self._folder_dependencies:
            self._folder_dependencies.add(id(folder_dependency))
            self.report.folder_dependencies += 1
        logger.debug("Saving dependency from %s to %s", from_parent.name, to_parent.name)
        return folder_dependency
