"""Configuration loading for ndeps-graph.

Configuration sources are merged in priority order (lowest to highest):
    1. Defaults (defined in ParserConfig)
    2. Project config (./ndeps-graph.toml)
    3. Explicit config file (--config)
    4. Environment variables (NDEPS_* prefix)
    5. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(key_generation_strategy="safe")
    >>> config.key_generation_strategy
    'safe'
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

KeyGenerationStrategy = Literal["safe", "default"]
Verbosity = Literal["quiet", "normal", "verbose"]

_STRATEGIES = ("safe", "default")
_VERBOSITIES = ("quiet", "normal", "verbose")

PROJECT_CONFIG_NAME = "ndeps-graph.toml"
ENV_PREFIX = "NDEPS_"


@dataclass(frozen=True)
class ParserConfig:
    """Settings for report parsing and project key generation.

    Attributes:
        key_generation_strategy: "safe" keys projects under the full solution
            key, "default" keeps only the part before the first ':'.
        branch: Appended to project keys as ":<branch>" when non-empty.
        default_scope: Usage tag for assembly-level dependencies when the
            caller does not pass one.
        verbosity: Logging verbosity level.
    """

    key_generation_strategy: KeyGenerationStrategy = "default"
    branch: str = ""
    default_scope: str = "compile"
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        if self.key_generation_strategy not in _STRATEGIES:
            raise InvalidConfigError(
                "key_generation_strategy",
                self.key_generation_strategy,
                f"expected one of {', '.join(_STRATEGIES)}",
            )
        if not self.default_scope.strip():
            raise InvalidConfigError("default_scope", self.default_scope, "must not be empty")
        if self.verbosity not in _VERBOSITIES:
            raise InvalidConfigError(
                "verbosity", self.verbosity, f"expected one of {', '.join(_VERBOSITIES)}"
            )

    @property
    def safe_keys(self) -> bool:
        return self.key_generation_strategy == "safe"


def load_config(config_file: Optional[Path] = None, **overrides) -> ParserConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options never mask a file value.

    Returns:
        Validated ParserConfig instance

    Raises:
        ConfigurationError: If a config file is missing or unreadable
        InvalidConfigError: If a value fails validation
    """
    merged: dict = {}

    project_config = Path.cwd() / PROJECT_CONFIG_NAME
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_load_toml_file(config_file))

    merged.update(_load_env_vars())

    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"

    merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return ParserConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise ConfigurationError(f"Invalid configuration: {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from NDEPS_* environment variables.

    Supported environment variables:
        NDEPS_KEY_GENERATION_STRATEGY: safe/default
        NDEPS_BRANCH: str
        NDEPS_DEFAULT_SCOPE: str
        NDEPS_VERBOSITY: quiet/normal/verbose
    """
    type_hints = get_type_hints(ParserConfig)
    result: dict[str, Any] = {}

    for field_name in ParserConfig.__dataclass_fields__:
        env_value = os.environ.get(f"{ENV_PREFIX}{field_name.upper()}")
        if env_value is None:
            continue
        type_hint = type_hints.get(field_name)
        origin = getattr(type_hint, "__origin__", None)
        if type_hint is str or origin is Literal:
            result[field_name] = env_value

    return result


def _load_toml_file(path: Path) -> dict:
    """Load a TOML file, reading the optional [ndeps] table if present."""
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid config file '{path}': {e}")
    return data.get("ndeps", data)
