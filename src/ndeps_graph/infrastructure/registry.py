"""Registry of known entities and their nearest-ancestor index."""

from __future__ import annotations

from typing import Iterator, Optional

from .entities import Entity, EntityId, EntityType


class EntityRegistry:
    """Owns every entity seen during resolution.

    Parents are stored as an index (child id -> parent id) rather than as a
    reference on the entity, so an entity value never pins its container.
    """

    def __init__(self) -> None:
        self._entities: dict[EntityId, Entity] = {}
        self._parents: dict[EntityId, EntityId] = {}

    def index(self, entity: Entity, parent: Optional[Entity] = None) -> Entity:
        """Register ``entity`` (and its parent link) if not already known.

        Returns the registered instance, which is the first one indexed
        under that id.
        """
        existing = self._entities.get(entity.id)
        if existing is None:
            self._entities[entity.id] = entity
            existing = entity
        if parent is not None:
            if parent.id not in self._entities:
                self._entities[parent.id] = parent
            self._parents[entity.id] = parent.id
        return existing

    def get(self, entity_id: EntityId) -> Optional[Entity]:
        return self._entities.get(entity_id)

    def parent_of(self, entity: Entity) -> Optional[Entity]:
        """Nearest ancestor of ``entity``, or None for roots and unknowns."""
        parent_id = self._parents.get(entity.id)
        if parent_id is None:
            return None
        return self._entities.get(parent_id)

    def by_type(self, type: EntityType) -> list[Entity]:
        return [e for e in self._entities.values() if e.type == type]

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._entities

    def __iter__(self) -> Iterator[Entity]:
        return iter(self._entities.values())

    def __len__(self) -> int:
        return len(self._entities)
