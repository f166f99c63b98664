"""Records produced while parsing a report."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum

from ..infrastructure.entities import Entity


class MemberKind(Enum):
    """Kind of a type member inside an LCOM4 block, by its evidence code."""

    FIELD = "FLD"
    METHOD = "MET"

    @classmethod
    def from_report(cls, value: str | None) -> MemberKind:
        # Only the literal "Field" is a field; everything else counts as a method.
        return cls.FIELD if value == "Field" else cls.METHOD


@dataclass(frozen=True)
class Member:
    kind: MemberKind
    name: str

    def to_dict(self) -> dict[str, str]:
        return {"q": self.kind.value, "n": self.name}


Block = tuple[Member, ...]


@dataclass(frozen=True)
class CohesionRecord:
    """LCOM4 result for one type.

    A type with no connected blocks at all is trivially cohesive: its score
    is 1 and its evidence is an empty array.
    """

    entity: Entity
    blocks: tuple[Block, ...] = ()

    @property
    def score(self) -> int:
        return len(self.blocks) or 1

    @property
    def evidence(self) -> str:
        """Compact JSON: one array of ``{"q", "n"}`` objects per block."""
        return json.dumps(
            [[m.to_dict() for m in block] for block in self.blocks],
            separators=(",", ":"),
            ensure_ascii=False,
        )


def decode_evidence(evidence: str) -> list[Block]:
    """Inverse of CohesionRecord.evidence."""
    return [
        tuple(Member(MemberKind(item["q"]), item["n"]) for item in block)
        for block in json.loads(evidence)
    ]


@dataclass
class ParseReport:
    """Counters for one ``parse`` call.

    Attributes:
        scope: Usage tag the report was parsed with.
        source: Absolute path or stream name of the report.
        assemblies: Assembly blocks read.
        skipped_assemblies: Blocks left to the analysis of another project.
        assembly_dependencies: Assembly-level edges saved.
        file_dependencies: File-level edges saved.
        folder_dependencies: Distinct ancestor-level edges touched.
        unresolved_references: Assembly references with no entity.
        unresolved_type_pairs: Type reference pairs dropped on resolution.
        cohesion_records: Types that received LCOM4 measures.
        unresolved_cohesion_types: lcom4 types with no entity.
    """

    scope: str
    source: str
    assemblies: int = 0
    skipped_assemblies: int = 0
    assembly_dependencies: int = 0
    file_dependencies: int = 0
    folder_dependencies: int = 0
    unresolved_references: int = 0
    unresolved_type_pairs: int = 0
    cohesion_records: int = 0
    unresolved_cohesion_types: int = 0
    skipped_names: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "scope": self.scope,
            "source": self.source,
            "assemblies": self.assemblies,
            "skipped_assemblies": self.skipped_assemblies,
            "assembly_dependencies": self.assembly_dependencies,
            "file_dependencies": self.file_dependencies,
            "folder_dependencies": self.folder_dependencies,
            "unresolved_references": self.unresolved_references,
            "unresolved_type_pairs": self.unresolved_type_pairs,
            "cohesion_records": self.cohesion_records,
            "unresolved_cohesion_types": self.unresolved_cohesion_types,
            "skipped_names": list(self.skipped_names),
        }
