"""Durable dependency storage."""

from .database import SqliteDependencyStore

__all__ = ["SqliteDependencyStore"]
