"""SQLite storage adapter: stores entities as JSON text under their
identifier and implements :class:`CrudPort`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Generic, Iterable, List, Optional, TypeVar

from kvcrud.config import StorageConfig
from kvcrud.domain.entities import Entity, Page, Sort, SortDirection
from kvcrud.domain.exceptions import NotFoundError, UnimplementedError
from kvcrud.storage.codecs import Codec
from kvcrud.storage.database import Database

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Entity)

_UPSERT_SQL = """INSERT INTO data (key, value) VALUES (?, ?)
   ON CONFLICT (key) DO UPDATE SET value = excluded.value"""
_SELECT_BY_KEY_SQL = "SELECT value FROM data WHERE key = ?"
_SELECT_PAGE_SQL = "SELECT value FROM data LIMIT ? OFFSET ?"
_DELETE_BY_KEY_SQL = "DELETE FROM data WHERE key = ?"


class SQLiteStorageAdapter(Generic[E]):
    """Key-value CRUD over a single ``data(key, value)`` table.

    Each entity is stored under ``str(entity.get_id())`` with the
    codec's text form as the value. The adapter owns one connection and
    holds no locks; share it between threads only through
    :class:`SynchronizedStorageAdapter`.

    Args:
        db_path: File path, ``":memory:"`` or a ``file:`` URI. If None,
            uses the default path (~/.kvcrud/data.db).
        codec: Serializer/deserializer for the entity type.
        sortable_fields: Top-level entity fields that
            :meth:`find_all_with_page_and_sort` may order by. Sorting is
            unavailable when empty.
        journal_mode: SQLite journal mode for file databases.
        busy_timeout_ms: How long to wait on a locked database.
    """

    def __init__(
        self,
        db_path: Optional[str | Path],
        codec: Codec[E],
        *,
        sortable_fields: Optional[Iterable[str]] = None,
        journal_mode: Optional[str] = "WAL",
        busy_timeout_ms: int = 5000,
    ) -> None:
        self._codec = codec
        self._sortable_fields = frozenset(sortable_fields or ())
        self._db = Database(
            db_path, journal_mode=journal_mode, busy_timeout_ms=busy_timeout_ms
        )

    @classmethod
    def from_config(
        cls,
        codec: Codec[E],
        config: Optional[StorageConfig] = None,
        *,
        sortable_fields: Optional[Iterable[str]] = None,
    ) -> SQLiteStorageAdapter[E]:
        """Open an adapter using a :class:`StorageConfig` (loaded if None)."""
        if config is None:
            config = StorageConfig.load()
        return cls(
            config.db_path,
            codec,
            sortable_fields=sortable_fields,
            journal_mode=config.journal_mode,
            busy_timeout_ms=config.busy_timeout_ms,
        )

    @property
    def db_path(self) -> str:
        return self._db.db_path

    # -- Create / Update --

    def save(self, entity: E) -> None:
        """Insert the entity, or replace the stored value for its identifier."""
        key = str(_entity_id(entity))
        value = self._codec.encode(entity)
        self._db.execute(_UPSERT_SQL, (key, value))
        logger.debug("Saved key=%s", key)

    def update(self, entity: E) -> None:
        """Same as :meth:`save`; an unknown identifier is created."""
        self.save(entity)

    # -- Read --

    def find_by_id(self, id: Any) -> E:
        """Load the entity stored under ``id``.

        Raises:
            NotFoundError: If no record exists for ``str(id)``.
            FormattingError: If the stored value cannot be decoded.
        """
        key = str(id)
        row = self._db.fetchone(_SELECT_BY_KEY_SQL, (key,))
        if row is None:
            raise NotFoundError(key)
        return self._codec.decode(row[0])

    def find_all_with_page(self, page: Page) -> List[E]:
        """Return one page of entities in SQLite's default scan order."""
        rows = self._db.fetchall(_SELECT_PAGE_SQL, (page.size, page.offset))
        logger.debug(
            "Page number=%d size=%d returned %d rows", page.number, page.size, len(rows)
        )
        return [self._codec.decode(row[0]) for row in rows]

    def find_all_with_page_and_sort(self, page: Page, sort: Sort) -> List[E]:
        """Return one page ordered by a top-level JSON field of the stored value.

        Raises:
            UnimplementedError: If the adapter was built without
                ``sortable_fields``.
            ValueError: If ``sort.field`` is not an allowed field.
        """
        if not self._sortable_fields:
            logger.warning("Sorted page requested but no sortable fields are configured")
            raise UnimplementedError("Sorting is not supported without sortable_fields")
        if sort.field not in self._sortable_fields:
            raise ValueError(
                f"Cannot sort by {sort.field!r}; allowed fields: "
                f"{sorted(self._sortable_fields)}"
            )
        direction = "DESC" if sort.direction is SortDirection.DESC else "ASC"
        # Invalid JSON sorts as NULL so the codec reports it
        sql = (
            "SELECT value FROM data "
            "ORDER BY CASE WHEN json_valid(value) THEN json_extract(value, ?) END "
            f"{direction}, key LIMIT ? OFFSET ?"
        )
        rows = self._db.fetchall(sql, (f'$."{sort.field}"', page.size, page.offset))
        return [self._codec.decode(row[0]) for row in rows]

    # -- Delete --

    def remove_by_id(self, id: Any) -> None:
        """Remove the record for ``id``; succeeds even if none existed."""
        key = str(id)
        removed = self._db.execute(_DELETE_BY_KEY_SQL, (key,))
        logger.debug("Removed key=%s (rows=%d)", key, removed)

    def remove(self, entity: E) -> None:
        """Remove the record for ``entity.get_id()``."""
        self.remove_by_id(_entity_id(entity))

    # -- Lifecycle --

    def close(self) -> None:
        """Close the underlying database connection."""
        self._db.close()

    def __enter__(self) -> SQLiteStorageAdapter[E]:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def _entity_id(entity: Any) -> Any:
    if not isinstance(entity, Entity):
        raise TypeError(f"{type(entity).__name__} does not implement get_id()")
    return entity.get_id()
