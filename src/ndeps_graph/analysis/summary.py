"""Aggregate view of what a store holds after one or more parses."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, Union

import numpy as np

from ..infrastructure.entities import EntityType
from ..infrastructure.metrics import Measure, Metric
from ..infrastructure.relations import Dependency


@dataclass
class CohesionStats:
    """Distribution of LCOM4 scores. All zero when no type was measured."""

    count: int = 0
    mean: float = 0.0
    median: float = 0.0
    max: float = 0.0
    incohesive: int = 0  # LCOM4 > 1

    def to_dict(self) -> dict[str, Union[int, float]]:
        return {
            "count": self.count,
            "mean": self.mean,
            "median": self.median,
            "max": self.max,
            "incohesive": self.incohesive,
        }


@dataclass
class GraphSummary:
    """Edge counts per level plus LCOM4 statistics.

    Levels:
        assembly: edges between projects and libraries (scope usage)
        folder:   ancestor edges, weight = number of file edges rolled up
        file:     file-to-file edges
    """

    assembly_edges: int = 0
    folder_edges: int = 0
    file_edges: int = 0
    folder_weight: int = 0
    usages: dict[str, int] = field(default_factory=dict)
    cohesion: CohesionStats = field(default_factory=CohesionStats)

    def to_dict(self) -> dict:
        return {
            "assembly_edges": self.assembly_edges,
            "folder_edges": self.folder_edges,
            "file_edges": self.file_edges,
            "folder_weight": self.folder_weight,
            "usages": dict(self.usages),
            "cohesion": self.cohesion.to_dict(),
        }


def summarize(dependencies: Iterable[Dependency], measures: Iterable[Measure]) -> GraphSummary:
    """Classify edges by level and compute LCOM4 statistics.

    An edge is a folder edge when some file edge names it as parent.
    """
    summary = GraphSummary()
    usages: Counter[str] = Counter()
    file_parents: set[int] = set()
    dependencies = list(dependencies)

    for d in dependencies:
        if d.parent is not None:
            file_parents.add(id(d.parent))

    for d in dependencies:
        usages[d.usage] += 1
        if d.source.type == EntityType.FILE:
            summary.file_edges += 1
        elif id(d) in file_parents:
            summary.folder_edges += 1
            summary.folder_weight += d.weight
        else:
            summary.assembly_edges += 1
    summary.usages = dict(usages)

    scores = np.array(
        [float(m.value) for m in measures if m.metric == Metric.LCOM4], dtype=float
    )
    if scores.size:
        summary.cohesion = CohesionStats(
            count=int(scores.size),
            mean=round(float(np.mean(scores)), 3),
            median=float(np.median(scores)),
            max=float(np.max(scores)),
            incohesive=int(np.count_nonzero(scores > 1)),
        )
    return summary
