"""Tests for the SQLite dependency store."""

import tempfile
from pathlib import Path

import pytest

from ndeps_graph.analysis.parser import ResultParser
from ndeps_graph.infrastructure.entities import Entity
from ndeps_graph.infrastructure.metrics import Metric
from ndeps_graph.infrastructure.relations import Dependency
from ndeps_graph.persistence.database import SqliteDependencyStore
from ndeps_graph.resolution.manifest import load_manifest
from ndeps_graph.resolution.resolver import SolutionResolver


class TestSchema:
    def test_creates_tables(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            with SqliteDependencyStore(Path(tmpdir) / "graph.db") as store:
                tables = store.conn.execute(
                    "SELECT name FROM sqlite_master WHERE type='table' ORDER BY name"
                ).fetchall()
                table_names = {r["name"] for r in tables}

                assert {"schema_version", "dependencies", "measures"} <= table_names

    def test_reopen_keeps_schema_version(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            db = Path(tmpdir) / "graph.db"
            with SqliteDependencyStore(db):
                pass
            with SqliteDependencyStore(db) as store:
                rows = store.conn.execute("SELECT version FROM schema_version").fetchall()
                assert [r["version"] for r in rows] == [1]

    def test_not_connected_raises(self):
        store = SqliteDependencyStore("unused.db")
        with pytest.raises(RuntimeError):
            store.conn


class TestWrites:
    def test_resaved_edge_updates_row(self):
        a, b = Entity.directory("p:a", "a"), Entity.directory("p:b", "b")
        with tempfile.TemporaryDirectory() as tmpdir:
            with SqliteDependencyStore(Path(tmpdir) / "graph.db") as store:
                dep = Dependency(a, b, weight=0)
                for _ in range(2):
                    dep.weight += 1
                    store.save_dependency(dep)

                rows = store.dependency_rows()
                assert len(rows) == 1
                assert rows[0]["weight"] == 2
                assert store.find_dependency(a, b) is dep

    def test_parent_link(self):
        a, b = Entity.directory("p:a", "a"), Entity.directory("p:b", "b")
        fa, fb = Entity.file("p:a/A.cs", "a/A.cs"), Entity.file("p:b/B.cs", "b/B.cs")
        with tempfile.TemporaryDirectory() as tmpdir:
            with SqliteDependencyStore(Path(tmpdir) / "graph.db") as store:
                folder = Dependency(a, b)
                store.save_dependency(folder)
                store.save_dependency(Dependency(fa, fb, parent=folder))

                folder_row, file_row = store.dependency_rows()
                assert file_row["parent_id"] == folder_row["id"]
                assert folder_row["parent_id"] is None

    def test_measures(self):
        entity = Entity.file("p:a/A.cs", "a/A.cs")
        with tempfile.TemporaryDirectory() as tmpdir:
            with SqliteDependencyStore(Path(tmpdir) / "graph.db") as store:
                store.save_measure(entity, Metric.LCOM4, 2.0)
                store.save_measure(entity, Metric.LCOM4_BLOCKS, "[[]]")

                score, blocks = store.measure_rows("p:a/A.cs")
                assert score["metric"] == "lcom4"
                assert score["value"] == 2.0
                assert blocks["text_value"] == "[[]]"
                assert blocks["value"] is None
                assert len(store.measures) == 2


class TestParseIntoSqlite:
    def test_sample_report(self, fixtures_dir):
        resolver = SolutionResolver(load_manifest(fixtures_dir / "solution.json"))
        context = resolver.context_for("Acme.Core")
        with tempfile.TemporaryDirectory() as tmpdir:
            with SqliteDependencyStore(Path(tmpdir) / "graph.db") as store:
                ResultParser(resolver, store).parse("compile", fixtures_dir / "report.xml", context)

                rows = store.dependency_rows()
                # 3 assembly, 3 folder, 4 file edges
                assert len(rows) == 10
                weights = {
                    (r["from_key"], r["to_key"]): r["weight"]
                    for r in rows
                    if r["from_type"] == "directory"
                }
                assert weights[("acme:AcmeCore:Mail", "acme:AcmeCore:Storage")] == 2
