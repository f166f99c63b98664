"""LCOM4 extraction from the ``lcom4`` section of an assembly."""

from __future__ import annotations

import xml.etree.ElementTree as ET

from ..graph.store import DependencyStore
from ..infrastructure.metrics import Metric
from ..logging_config import get_logger
from ..parsing.cursor import child_elements
from ..resolution.resolver import EntityResolver
from .models import Block, CohesionRecord, Member, MemberKind, ParseReport

logger = get_logger(__name__)


def parse_block(block: ET.Element) -> Block:
    """Members of one connected block, in document order."""
    return tuple(
        Member(MemberKind.from_report(member.get("type")), member.get("name", ""))
        for member in child_elements(block)
    )


class CohesionExtractor:
    """Turns ``<lcom4><type fullName=..>`` entries into LCOM4 measures.

    Every resolved type gets exactly two measures: LCOM4 (the score) and
    LCOM4_BLOCKS (the JSON evidence). Types that do not resolve to a file
    are skipped.
    """

    def __init__(self, resolver: EntityResolver, store: DependencyStore, report: ParseReport) -> None:
        self.resolver = resolver
        self.store = store
        self.report = report

    def extract(self, section: ET.Element) -> list[CohesionRecord]:
        records: list[CohesionRecord] = []
        for type_element in child_elements(section):
            full_name = type_element.get("fullName")
            logger.debug("Parsing LCOM4 data for type %s", full_name)
            entity = self.resolver.resolve_type(full_name) if full_name else None
            if entity is None:
                self.report.unresolved_cohesion_types += 1
                continue

            record = CohesionRecord(entity, tuple(parse_block(b) for b in child_elements(type_element)))
            self.store.save_measure(entity, Metric.LCOM4, float(record.score))
            self.store.save_measure(entity, Metric.LCOM4_BLOCKS, record.evidence)
            self.report.cohesion_records += 1
            records.append(record)
        return records
