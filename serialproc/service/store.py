# -*- coding: utf-8 -*-
"""
Local Process Store - SQLite-backed process settings and variables.

Implements ProcessService on a local SQLite database, for offline
administration, the command line, and tests.

License
-------
MIT License
Copyright (c) 2026 serialproc contributors
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

# Standard library
import logging
import sqlite3
from pathlib import Path
from typing import Dict, List, Optional, Sequence

logger = logging.getLogger(__name__)

# serialproc internal
from serialproc.core.coercion import ConversionError, parse_canonical
from serialproc.core.records import ConfigRecord, ProcessVariables
from serialproc.service.base import FetchError, ProcessService, SaveError


_SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS process_settings (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    active INTEGER NOT NULL DEFAULT 0,
    group_name TEXT,
    handler_class TEXT DEFAULT '',
    target_object TEXT DEFAULT '',
    sort_order INTEGER,
    updated_at TEXT NOT NULL DEFAULT (datetime('now'))
);

CREATE TABLE IF NOT EXISTS process_variables (
    singleton INTEGER PRIMARY KEY CHECK(singleton = 1),
    engine_on INTEGER NOT NULL DEFAULT 0,
    engine_timestamp TEXT
);

CREATE TABLE IF NOT EXISTS variable_labels (
    variable TEXT PRIMARY KEY CHECK(variable IN ('engine_on', 'timestamp')),
    label TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER NOT NULL
);
"""

_CURRENT_SCHEMA_VERSION = 1


class LocalProcessStore(ProcessService):
    """SQLite store for process settings and variables.

    Parameters
    ----------
    db_path : Path
        Path to the SQLite database file. ``":memory:"`` is accepted.
    """

    def __init__(self, db_path) -> None:
        self._db_path = str(db_path)
        if self._db_path != ':memory:':
            Path(self._db_path).parent.mkdir(parents=True, exist_ok=True)

        # Background round trips run on pool threads
        self._conn = sqlite3.connect(self._db_path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._init_schema()

    def _init_schema(self) -> None:
        """Create tables if they don't exist."""
        self._conn.executescript(_SCHEMA_SQL)
        row = self._conn.execute(
            "SELECT version FROM schema_version"
        ).fetchone()
        if row is None:
            self._conn.execute(
                "INSERT INTO schema_version (version) VALUES (?)",
                (_CURRENT_SCHEMA_VERSION,),
            )
        self._conn.execute(
            "INSERT OR IGNORE INTO process_variables (singleton) VALUES (1)"
        )
        self._conn.commit()

    @property
    def schema_version(self) -> int:
        row = self._conn.execute(
            "SELECT version FROM schema_version"
        ).fetchone()
        return row['version'] if row else 0

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()

    # ------------------------------------------------------------------
    # Process settings
    # ------------------------------------------------------------------

    def fetch_config_records(self) -> List[ConfigRecord]:
        try:
            rows = self._conn.execute(
                "SELECT * FROM process_settings"
            ).fetchall()
        except sqlite3.Error as e:
            raise FetchError(str(e)) from e
        return [self._row_to_record(r) for r in rows]

    def persist_config_records(self, records: Sequence[ConfigRecord]) -> None:
        """Upsert records by identifier in a single transaction."""
        try:
            with self._conn:
                for record in records:
                    if not record.name:
                        raise SaveError("Name is required")
                    self._conn.execute(
                        """INSERT INTO process_settings
                        (id, name, active, group_name, handler_class,
                         target_object, sort_order)
                        VALUES (?, ?, ?, ?, ?, ?, ?)
                        ON CONFLICT(id) DO UPDATE SET
                            name = excluded.name,
                            active = excluded.active,
                            group_name = excluded.group_name,
                            handler_class = excluded.handler_class,
                            target_object = excluded.target_object,
                            sort_order = excluded.sort_order,
                            updated_at = datetime('now')""",
                        (
                            record.key, record.name, int(record.active),
                            record.group, record.handler_class,
                            record.target_object, record.order,
                        ),
                    )
        except sqlite3.Error as e:
            raise SaveError(str(e)) from e
        logger.info("Stored %d process settings", len(records))

    def _row_to_record(self, row: sqlite3.Row) -> ConfigRecord:
        return ConfigRecord(
            id=row['id'],
            name=row['name'],
            active=bool(row['active']),
            group=row['group_name'],
            handler_class=row['handler_class'] or '',
            target_object=row['target_object'] or '',
            order=row['sort_order'],
        )

    # ------------------------------------------------------------------
    # Process variables
    # ------------------------------------------------------------------

    def fetch_process_variables(self) -> ProcessVariables:
        try:
            row = self._conn.execute(
                "SELECT engine_on, engine_timestamp FROM process_variables"
            ).fetchone()
        except sqlite3.Error as e:
            raise FetchError(str(e)) from e
        return ProcessVariables(
            engine_on=bool(row['engine_on']),
            timestamp=row['engine_timestamp'],
        )

    def fetch_label_overrides(self) -> Dict[str, str]:
        try:
            rows = self._conn.execute(
                "SELECT variable, label FROM variable_labels"
            ).fetchall()
        except sqlite3.Error as e:
            raise FetchError(str(e)) from e
        return {r['variable']: r['label'] for r in rows if r['label']}

    def set_label(self, variable: str, label: str) -> None:
        """Override the display label of 'engine_on' or 'timestamp'."""
        with self._conn:
            self._conn.execute(
                "INSERT OR REPLACE INTO variable_labels (variable, label) "
                "VALUES (?, ?)",
                (variable, label),
            )

    def persist_process_variables(
        self,
        engine_on: bool,
        timestamp_iso: Optional[str],
    ) -> Optional[ProcessVariables]:
        if timestamp_iso:
            try:
                parse_canonical(timestamp_iso)
            except ConversionError as e:
                raise SaveError(str(e)) from e
        try:
            with self._conn:
                self._conn.execute(
                    "UPDATE process_variables "
                    "SET engine_on = ?, engine_timestamp = ?",
                    (int(bool(engine_on)), timestamp_iso or None),
                )
        except sqlite3.Error as e:
            raise SaveError(str(e)) from e
        return self.fetch_process_variables()
