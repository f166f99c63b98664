"""Top-level walk over an NDeps report."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Optional

from ..graph.store import DependencyStore
from ..infrastructure.entities import Entity
from ..logging_config import get_logger
from ..parsing.cursor import AssemblyCursor, ReportSource, child_elements, local_name
from ..resolution.resolver import AnalysisContext, EntityResolver
from .cohesion import CohesionExtractor
from .models import ParseReport
from .references import ReferenceAggregator

logger = get_logger(__name__)

REFERENCES = "References"
TYPE_REFERENCES = "TypeReferences"
LCOM4 = "lcom4"


class ResultParser:
    """Feeds an NDeps report into a DependencyStore.

    The parser keeps no state between calls: everything specific to one
    report lives in the ParseReport and helpers built inside ``parse``.

    Assemblies that belong to another project of the solution are skipped.
    Their dependencies are saved when that project is parsed in turn, so the
    caller is expected to run ``parse`` for every project of the solution
    against the same report.
    """

    def __init__(self, resolver: EntityResolver, store: DependencyStore) -> None:
        self.resolver = resolver
        self.store = store

    def parse(self, scope: str, source: ReportSource, context: AnalysisContext) -> ParseReport:
        """Walk ``source`` and save its dependencies and LCOM4 measures.

        Raises:
            MalformedInputError: If the report is unreadable or not well-formed.
                Anything saved before the error stays saved.
        """
        with AssemblyCursor(source) as cursor:
            report = ParseReport(scope=scope, source=cursor.name)
            references = ReferenceAggregator(self.resolver, self.store, report)
            cohesion = CohesionExtractor(self.resolver, self.store, report)

            for assembly in cursor:
                report.assemblies += 1
                origin = self._origin(assembly, context)
                if origin is None:
                    report.skipped_assemblies += 1
                    report.skipped_names.append(assembly.get("name", ""))
                    continue

                for section in child_elements(assembly):
                    name = local_name(section)
                    if name == REFERENCES:
                        references.parse_references(scope, section, origin)
                    elif name == TYPE_REFERENCES:
                        references.parse_type_references(section)
                    elif name == LCOM4:
                        cohesion.extract(section)

        logger.info(
            "Parsed %s for %s: %d assemblies (%d skipped), %d assembly, %d folder and %d file dependencies, "
            "%d LCOM4 records",
            report.source,
            context.project.name,
            report.assemblies,
            report.skipped_assemblies,
            report.assembly_dependencies,
            report.folder_dependencies,
            report.file_dependencies,
            report.cohesion_records,
        )
        return report

    def _origin(self, assembly: ET.Element, context: AnalysisContext) -> Optional[Entity]:
        """Entity an assembly's dependencies start from, or None to skip it."""
        name = assembly.get("name", "")
        if not name:
            logger.debug("Skipping assembly without a name")
            return None
        project = self.resolver.project_for_assembly(name)
        if project is not None and project.id == context.project.id:
            # direct dependencies of the current project
            return context.project
        if project is None:
            # indirect dependencies, through an external library
            return self.resolver.resolve_assembly(name, assembly.get("version"))
        logger.debug("Skipping assembly %s, covered by the analysis of %s", name, project.name)
        return None
