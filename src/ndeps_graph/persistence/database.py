"""SQLite-backed dependency store."""

import sqlite3
from pathlib import Path
from typing import Optional, Union

from ..infrastructure.entities import Entity
from ..infrastructure.metrics import Measure, Metric
from ..infrastructure.relations import Dependency
from ..logging_config import get_logger

logger = get_logger(__name__)

# Current schema version (bump when tables change).
_SCHEMA_VERSION = 1


class SqliteDependencyStore:
    """Writes every saved dependency and measure straight to SQLite.

    Usage::

        with SqliteDependencyStore("graph.db") as store:
            ResultParser(resolver, store).parse("compile", report, context)

    ``find_dependency`` only sees edges saved through this instance; a
    re-saved edge updates its existing row instead of adding one.
    """

    def __init__(self, db_path: Union[str, Path]) -> None:
        self.db_path: Path = Path(db_path)
        self._conn: Optional[sqlite3.Connection] = None
        self._dependencies: list[Dependency] = []
        self._rows: dict[int, int] = {}
        self._measures: list[Measure] = []

    @property
    def conn(self) -> sqlite3.Connection:
        """Return the active connection. Raises if not connected."""
        if self._conn is None:
            raise RuntimeError("SqliteDependencyStore is not connected. Use as context manager or call connect().")
        return self._conn

    # ── lifecycle ─────────────────────────────────────────────────

    def connect(self) -> sqlite3.Connection:
        """Open (or create) the database and run migrations."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(self.db_path))
        conn.execute("PRAGMA journal_mode=WAL")
        conn.execute("PRAGMA foreign_keys=ON")
        conn.row_factory = sqlite3.Row
        self._conn = conn
        self._migrate()
        logger.debug("Dependency DB connected at %s", self.db_path)
        return conn

    def close(self) -> None:
        """Close the connection if open."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def __enter__(self) -> "SqliteDependencyStore":
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # ── migration ─────────────────────────────────────────────────

    def _migrate(self) -> None:
        """Idempotently create all tables."""
        c = self.conn

        c.execute(
            """
            CREATE TABLE IF NOT EXISTS schema_version (
                version INTEGER NOT NULL
            )
            """
        )
        row = c.execute("SELECT version FROM schema_version").fetchone()
        if row is None:
            c.execute(
                "INSERT INTO schema_version (version) VALUES (?)",
                (_SCHEMA_VERSION,),
            )

        # ── dependencies ─────────────────────────────────────────
        c.execute(
            """
            CREATE TABLE IF NOT EXISTS dependencies (
                id          INTEGER PRIMARY KEY AUTOINCREMENT,
                from_key    TEXT    NOT NULL,
                from_type   TEXT    NOT NULL,
                to_key      TEXT    NOT NULL,
                to_type     TEXT    NOT NULL,
                usage       TEXT    NOT NULL,
                weight      INTEGER NOT NULL,
                parent_id   INTEGER REFERENCES dependencies(id)
            )
            """
        )

        # ── measures ─────────────────────────────────────────────
        c.execute(
            """
            CREATE TABLE IF NOT EXISTS measures (
                id          INTEGER PRIMARY KEY AUTOINCREMENT,
                entity_key  TEXT    NOT NULL,
                entity_type TEXT    NOT NULL,
                metric      TEXT    NOT NULL,
                value       REAL,
                text_value  TEXT
            )
            """
        )

        c.execute("CREATE INDEX IF NOT EXISTS idx_dependencies_pair ON dependencies(from_key, to_key)")
        c.execute("CREATE INDEX IF NOT EXISTS idx_measures_entity ON measures(entity_key)")

        c.commit()

    # ── DependencyStore ───────────────────────────────────────────

    def save_dependency(self, dependency: Dependency) -> None:
        parent_id = self._rows.get(id(dependency.parent)) if dependency.parent is not None else None
        row_id = self._rows.get(id(dependency))
        if row_id is not None:
            self.conn.execute(
                "UPDATE dependencies SET weight = ?, parent_id = ? WHERE id = ?",
                (dependency.weight, parent_id, row_id),
            )
        else:
            cur = self.conn.execute(
                """
                INSERT INTO dependencies (from_key, from_type, to_key, to_type, usage, weight, parent_id)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    dependency.source.key,
                    dependency.source.type.value,
                    dependency.target.key,
                    dependency.target.type.value,
                    dependency.usage,
                    dependency.weight,
                    parent_id,
                ),
            )
            self._rows[id(dependency)] = cur.lastrowid
            self._dependencies.append(dependency)
        self.conn.commit()

    def find_dependency(
        self, source: Entity, target: Entity, usage: Optional[str] = None
    ) -> Optional[Dependency]:
        for d in self._dependencies:
            if d.connects(source, target) and (usage is None or d.usage == usage):
                return d
        return None

    def save_measure(self, entity: Entity, metric: Metric, value: Union[float, str]) -> None:
        if isinstance(value, str):
            numeric, text = None, value
        else:
            numeric, text = float(value), None
        self.conn.execute(
            "INSERT INTO measures (entity_key, entity_type, metric, value, text_value) VALUES (?, ?, ?, ?, ?)",
            (entity.key, entity.type.value, metric.value, numeric, text),
        )
        self.conn.commit()
        self._measures.append(Measure(entity, metric, value))

    # ── queries ───────────────────────────────────────────────────

    @property
    def dependencies(self) -> list[Dependency]:
        """Edges saved through this instance."""
        return list(self._dependencies)

    @property
    def measures(self) -> list[Measure]:
        """Measures saved through this instance."""
        return list(self._measures)

    def dependency_rows(self) -> list[sqlite3.Row]:
        return self.conn.execute("SELECT * FROM dependencies ORDER BY id").fetchall()

    def measure_rows(self, entity_key: Optional[str] = None) -> list[sqlite3.Row]:
        if entity_key is None:
            return self.conn.execute("SELECT * FROM measures ORDER BY id").fetchall()
        return self.conn.execute(
            "SELECT * FROM measures WHERE entity_key = ? ORDER BY id", (entity_key,)
        ).fetchall()
