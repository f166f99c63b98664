"""Entity, dependency and measure model shared by every layer."""

from .entities import Entity, EntityId, EntityType
from .metrics import Measure, Metric
from .registry import EntityRegistry
from .relations import USES, Dependency

__all__ = [
    "Entity",
    "EntityId",
    "EntityType",
    "EntityRegistry",
    "Dependency",
    "USES",
    "Measure",
    "Metric",
]
