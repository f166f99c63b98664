"""Dependency model for ndeps-graph.

Dependencies are directed, weighted edges between entities at three levels:

    Project/Library -> Project/Library   usage = caller scope (compile, test...)
    Directory       -> Directory         usage = USES, weight = file edge count
    File            -> File              usage = USES, weight = 1, parent = the
                                         directory edge it rolls up into
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .entities import Entity

USES = "USES"


@dataclass(eq=False)
class Dependency:
    """A directed, weighted edge between two entities.

    Compared by identity: two discoveries of the same pair are two edges
    unless the caller deliberately reuses the first one.

    Attributes:
        source:  Entity the dependency originates from.
        target:  Entity it points to.
        usage:   Scope tag for assembly edges, USES for directory/file edges.
        weight:  Number of underlying references this edge stands for.
        parent:  Ancestor-level edge this edge rolls up into (file edges).
    """

    source: Entity
    target: Entity
    usage: str = USES
    weight: int = 1
    parent: Optional[Dependency] = None

    def connects(self, source: Entity, target: Entity) -> bool:
        return self.source.id == source.id and self.target.id == target.id

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dict."""
        return {
            "from": self.source.key,
            "from_type": self.source.type.value,
            "to": self.target.key,
            "to_type": self.target.type.value,
            "usage": self.usage,
            "weight": self.weight,
            "parent": (
                {"from": self.parent.source.key, "to": self.parent.target.key}
                if self.parent is not None
                else None
            ),
        }

    def __repr__(self) -> str:
        return f"Dependency({self.source.key} -> {self.target.key}, usage={self.usage}, weight={self.weight})"
