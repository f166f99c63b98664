"""Tests for solution manifest loading."""

import json

import pytest

from ndeps_graph.exceptions import ManifestError
from ndeps_graph.resolution.manifest import load_manifest


class TestLoadManifest:
    def test_sample(self, fixtures_dir):
        manifest = load_manifest(fixtures_dir / "solution.json")
        assert manifest.solution_key == "acme:platform"
        assert [p.assembly for p in manifest.projects] == ["Acme.Core", "Acme.Web"]
        assert manifest.project("Acme Core").types["Acme.Core.Program"] == "Program.cs"

    def test_assembly_defaults_to_name(self, tmp_path):
        path = tmp_path / "m.json"
        path.write_text(json.dumps({"solution": "s", "projects": [{"name": "P"}]}))
        assert load_manifest(path).projects[0].assembly == "P"

    @pytest.mark.parametrize(
        "content",
        [
            "not json",
            "[]",
            json.dumps({"projects": []}),
            json.dumps({"solution": "s", "projects": [{"assembly": "X"}]}),
            json.dumps({"solution": "s", "projects": [{"name": "P", "types": []}]}),
        ],
    )
    def test_invalid(self, tmp_path, content):
        path = tmp_path / "m.json"
        path.write_text(content)
        with pytest.raises(ManifestError):
            load_manifest(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ManifestError) as exc_info:
            load_manifest(tmp_path / "absent.json")
        assert exc_info.value.details["path"].endswith("absent.json")
