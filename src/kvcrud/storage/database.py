# Copyright (c) EGOGE - All Rights Reserved.
# This software may be used and distributed according to the terms of the MIT license.

"""SQLite connection manager with schema initialization."""

import logging
import sqlite3
from pathlib import Path
from typing import Optional, List

from kvcrud.domain.exceptions import EngineError

logger = logging.getLogger(__name__)

MEMORY_PATH = ":memory:"

_SCHEMA_SQL = "CREATE TABLE IF NOT EXISTS data (key TEXT PRIMARY KEY, value TEXT);"

# Binding raises OverflowError and UnicodeEncodeError before SQLite sees the statement
_ENGINE_ERRORS = (sqlite3.Error, OverflowError, UnicodeEncodeError)

JOURNAL_MODES = {"DELETE", "TRUNCATE", "PERSIST", "MEMORY", "WAL", "OFF"}


def get_default_db_path() -> Path:
    """Return the default database path: ~/.kvcrud/data.db"""
    return Path.home() / ".kvcrud" / "data.db"


def _is_memory(db_path: str) -> bool:
    return db_path == MEMORY_PATH or (
        db_path.startswith("file:") and "mode=memory" in db_path
    )


class Database:
    """SQLite connection manager with schema initialization.

    Holds one connection for its whole lifetime. Every ``sqlite3.Error``,
    and every parameter that cannot be bound, is re-raised as
    :class:`EngineError`.

    Args:
        db_path: File path, ``":memory:"`` or a ``file:`` URI. If None,
            uses the default path (~/.kvcrud/data.db).
        journal_mode: SQLite journal mode for file databases.
        busy_timeout_ms: How long to wait on a locked database.
    """

    def __init__(
        self,
        db_path: Optional[str | Path] = None,
        journal_mode: Optional[str] = "WAL",
        busy_timeout_ms: int = 5000,
    ):
        if journal_mode and journal_mode.upper() not in JOURNAL_MODES:
            raise ValueError(f"Unsupported journal mode: {journal_mode}")
        if db_path is None:
            db_path = get_default_db_path()
        self.db_path = str(db_path)
        self.journal_mode = journal_mode
        self.busy_timeout_ms = busy_timeout_ms
        self._conn: Optional[sqlite3.Connection] = None
        self._open()

    def _open(self) -> None:
        """Open the connection and create the ``data`` table if missing."""
        is_uri = self.db_path.startswith("file:")
        if not _is_memory(self.db_path) and not is_uri:
            try:
                Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise EngineError(f"SQLite error: cannot create {self.db_path}: {exc}") from exc

        try:
            conn = sqlite3.connect(self.db_path, check_same_thread=False, uri=is_uri)
        except sqlite3.Error as exc:
            raise EngineError(f"SQLite error: {exc}") from exc

        try:
            conn.execute(f"PRAGMA busy_timeout = {int(self.busy_timeout_ms)}")
            if self.journal_mode and not _is_memory(self.db_path):
                conn.execute(f"PRAGMA journal_mode={self.journal_mode}")
            conn.execute(_SCHEMA_SQL)
            conn.commit()
        except sqlite3.Error as exc:
            conn.close()
            raise EngineError(f"SQLite error: {exc}") from exc

        self._conn = conn
        logger.debug("Opened SQLite store at %s", self.db_path)

    @property
    def closed(self) -> bool:
        return self._conn is None

    def connect(self) -> sqlite3.Connection:
        """Return the open connection."""
        if self._conn is None:
            raise EngineError(f"SQLite error: connection to {self.db_path} is closed")
        return self._conn

    def execute(self, sql: str, params: tuple = ()) -> int:
        """Execute a single SQL statement, commit, and return the affected row count."""
        conn = self.connect()
        try:
            cursor = conn.execute(sql, params)
            conn.commit()
        except _ENGINE_ERRORS as exc:
            conn.rollback()
            raise EngineError(f"SQLite error: {exc}") from exc
        return cursor.rowcount

    def fetchone(self, sql: str, params: tuple = ()) -> Optional[tuple]:
        """Execute and return a single row."""
        try:
            return self.connect().execute(sql, params).fetchone()
        except _ENGINE_ERRORS as exc:
            raise EngineError(f"SQLite error: {exc}") from exc

    def fetchall(self, sql: str, params: tuple = ()) -> List[tuple]:
        """Execute and return all rows."""
        try:
            return self.connect().execute(sql, params).fetchall()
        except _ENGINE_ERRORS as exc:
            raise EngineError(f"SQLite error: {exc}") from exc

    def close(self) -> None:
        """Close the database connection."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None
            logger.debug("Closed SQLite store at %s", self.db_path)
