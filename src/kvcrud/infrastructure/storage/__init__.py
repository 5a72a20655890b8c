"""Storage infrastructure adapters implementing CrudPort."""

from .sqlite_adapter import SQLiteStorageAdapter
from .synchronized import SynchronizedStorageAdapter

__all__ = [
    "SQLiteStorageAdapter",
    "SynchronizedStorageAdapter",
]
