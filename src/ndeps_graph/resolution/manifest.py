"""Solution manifest: which assemblies belong to the analysed solution.

A manifest is a JSON document::

    {
      "solution": "acme:platform",
      "projects": [
        {
          "name": "Acme Core",
          "assembly": "Acme.Core",
          "types": {"Acme.Core.Mailer": "Services/Mailer.cs"}
        }
      ]
    }

``assembly`` defaults to ``name``. Type paths are relative to the project
directory and may use either slash.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..exceptions import ManifestError


@dataclass(frozen=True)
class ProjectManifest:
    """One project of the solution."""

    name: str
    assembly: str
    types: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class SolutionManifest:
    """The analysed solution: its key and its projects."""

    solution_key: str
    projects: list[ProjectManifest] = field(default_factory=list)

    def project(self, name: str) -> ProjectManifest:
        """Look a project up by display name or assembly name."""
        for p in self.projects:
            if name in (p.name, p.assembly):
                return p
        raise KeyError(name)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SolutionManifest:
        solution_key = data.get("solution")
        if not isinstance(solution_key, str) or not solution_key:
            raise ValueError("'solution' must be a non-empty string")
        projects = []
        for raw in data.get("projects", []):
            name = raw.get("name")
            if not isinstance(name, str) or not name:
                raise ValueError("every project needs a non-empty 'name'")
            types = raw.get("types", {})
            if not isinstance(types, dict):
                raise ValueError(f"'types' of project {name} must be an object")
            projects.append(
                ProjectManifest(
                    name=name,
                    assembly=raw.get("assembly") or name,
                    types={str(k): str(v).replace("\\", "/") for k, v in types.items()},
                )
            )
        return cls(solution_key=solution_key, projects=projects)


def load_manifest(path: Path) -> SolutionManifest:
    """Read and validate a manifest file.

    Raises:
        ManifestError: If the file is missing, not JSON, or has the wrong shape
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        raise ManifestError(path, str(e))
    except json.JSONDecodeError as e:
        raise ManifestError(path, f"not valid JSON: {e}")
    if not isinstance(data, dict):
        raise ManifestError(path, "top level must be an object")
    try:
        return SolutionManifest.from_dict(data)
    except (ValueError, AttributeError) as e:
        raise ManifestError(path, str(e))
