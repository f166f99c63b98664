"""Configuration exceptions: settings and solution manifests."""

from pathlib import Path
from typing import Any

from .base import NDepsGraphError


class ConfigurationError(NDepsGraphError):
    """Base class for configuration-related errors."""

    pass


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "value": str(value), "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason


class ManifestError(ConfigurationError):
    """Raised when a solution manifest cannot be loaded."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Invalid solution manifest: {path}", details={"path": str(path), "reason": reason})
        self.path = path
        self.reason = reason
