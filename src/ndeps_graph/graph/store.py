"""Dependency store contract and the in-memory implementation."""

from __future__ import annotations

from typing import Optional, Protocol, Union

from ..infrastructure.entities import Entity
from ..infrastructure.metrics import Measure, Metric
from ..infrastructure.relations import Dependency


class DependencyStore(Protocol):
    """Where parsed dependencies and measures end up.

    Callers assume exclusive, serialized access for the duration of one
    ``parse`` call. A store shared between concurrent parses must lock
    on its own.
    """

    def save_dependency(self, dependency: Dependency) -> None: ...

    def find_dependency(
        self, source: Entity, target: Entity, usage: Optional[str] = None
    ) -> Optional[Dependency]: ...

    def save_measure(self, entity: Entity, metric: Metric, value: Union[float, str]) -> None: ...


class InMemoryDependencyStore:
    """List-backed store.

    Saving an edge object that is already stored is a no-op, so an edge
    whose weight is bumped and re-saved stays a single record. Distinct
    objects for the same pair are kept as distinct records.
    """

    def __init__(self) -> None:
        self._dependencies: list[Dependency] = []
        self._stored: set[int] = set()
        self._measures: list[Measure] = []

    def save_dependency(self, dependency: Dependency) -> None:
        if id(dependency) in self._stored:
            return
        self._stored.add(id(dependency))
        self._dependencies.append(dependency)

    def find_dependency(
        self, source: Entity, target: Entity, usage: Optional[str] = None
    ) -> Optional[Dependency]:
        """First stored edge from ``source`` to ``target`` (linear scan)."""
        for d in self._dependencies:
            if d.connects(source, target) and (usage is None or d.usage == usage):
                return d
        return None

    def save_measure(self, entity: Entity, metric: Metric, value: Union[float, str]) -> None:
        self._measures.append(Measure(entity, metric, value))

    @property
    def dependencies(self) -> list[Dependency]:
        return list(self._dependencies)

    @property
    def measures(self) -> list[Measure]:
        return list(self._measures)

    def measures_for(self, entity: Entity) -> dict[Metric, Union[float, str]]:
        """Latest value of every metric saved against ``entity``."""
        return {m.metric: m.value for m in self._measures if m.entity.id == entity.id}
