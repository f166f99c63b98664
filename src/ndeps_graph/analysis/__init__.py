"""Report parsing: the document walk, reference aggregation and LCOM4."""

from .cohesion import CohesionExtractor
from .models import CohesionRecord, Member, MemberKind, ParseReport, decode_evidence
from .parser import ResultParser
from .references import ReferenceAggregator
from .summary import CohesionStats, GraphSummary, summarize

__all__ = [
    "ResultParser",
    "ReferenceAggregator",
    "CohesionExtractor",
    "CohesionRecord",
    "Member",
    "MemberKind",
    "ParseReport",
    "decode_evidence",
    "GraphSummary",
    "CohesionStats",
    "summarize",
]
