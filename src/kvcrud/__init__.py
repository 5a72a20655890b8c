"""
kvcrud: key-value CRUD storage on SQLite

Stores any entity exposing ``get_id()`` as a JSON document in a single
``data(key, value)`` table, with upsert, point lookup, paginated scans
and idempotent deletes.
"""

from .domain import (
    Entity,
    Page,
    Sort,
    SortDirection,
    StorageError,
    NotFoundError,
    FormattingError,
    EngineError,
    UnimplementedError,
    ConfigurationError,
)
from .application.ports import CrudPort
from .config import StorageConfig, configure_logging, get_default_config, set_default_config
from .storage import Codec, JsonCodec, PydanticCodec, MEMORY_PATH
from .infrastructure.storage import SQLiteStorageAdapter, SynchronizedStorageAdapter

__version__ = "0.1.0"

__all__ = [
    # Adapters
    "SQLiteStorageAdapter",
    "SynchronizedStorageAdapter",
    "CrudPort",
    "MEMORY_PATH",
    # Entities
    "Entity",
    "Page",
    "Sort",
    "SortDirection",
    # Codecs
    "Codec",
    "JsonCodec",
    "PydanticCodec",
    # Configuration
    "StorageConfig",
    "configure_logging",
    "get_default_config",
    "set_default_config",
    # Errors
    "StorageError",
    "NotFoundError",
    "FormattingError",
    "EngineError",
    "UnimplementedError",
    "ConfigurationError",
]
