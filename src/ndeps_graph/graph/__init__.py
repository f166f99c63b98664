"""Dependency graph storage."""

from .store import DependencyStore, InMemoryDependencyStore

__all__ = ["DependencyStore", "InMemoryDependencyStore"]
