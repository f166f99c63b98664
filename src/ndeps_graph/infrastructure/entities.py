"""Entity model for ndeps-graph.

Entities are the things dependencies are drawn between. They form a
hierarchy, but the hierarchy lives in the EntityRegistry, not on the
entities themselves:

    Project
        ├── Directory
        │       └── File
        └── File            (files at the project root)
    Library                 (external assembly, no parent)

Each entity has a unique EntityId (type + key).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class EntityType(Enum):
    """The four kinds of entity a report can resolve to."""

    PROJECT = "project"
    LIBRARY = "library"
    DIRECTORY = "directory"
    FILE = "file"


@dataclass(frozen=True)
class EntityId:
    """Unique identifier for any entity.

    Key conventions:
        PROJECT    - solution key + name    e.g. acme:Acme.Core
        LIBRARY    - assembly name:version  e.g. log4net:1.2.10.0
        DIRECTORY  - project key:dir        e.g. acme:Acme.Core:Services
        FILE       - project key:path       e.g. acme:Acme.Core:Services/Mailer.cs
    """

    type: EntityType
    key: str

    def __str__(self) -> str:
        return f"{self.type.value}:{self.key}"


@dataclass(frozen=True)
class Entity:
    """A resolved entity.

    Equality and hashing go through every field, so two lookups of the same
    key produce interchangeable values.
    """

    id: EntityId
    name: str
    version: Optional[str] = None

    @property
    def type(self) -> EntityType:
        """Shortcut to self.id.type."""
        return self.id.type

    @property
    def key(self) -> str:
        """Shortcut to self.id.key."""
        return self.id.key

    @classmethod
    def project(cls, key: str, name: str) -> Entity:
        return cls(EntityId(EntityType.PROJECT, key), name)

    @classmethod
    def library(cls, name: str, version: Optional[str]) -> Entity:
        key = f"{name}:{version}" if version else name
        return cls(EntityId(EntityType.LIBRARY, key), name, version)

    @classmethod
    def directory(cls, key: str, name: str) -> Entity:
        return cls(EntityId(EntityType.DIRECTORY, key), name)

    @classmethod
    def file(cls, key: str, name: str) -> Entity:
        return cls(EntityId(EntityType.FILE, key), name)
