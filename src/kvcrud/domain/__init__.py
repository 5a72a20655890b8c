"""Domain layer: entity contract, pagination types, and exceptions.

This layer has no dependencies on storage engines or codecs.
"""

from .entities import Entity, Page, Sort, SortDirection
from .exceptions import (
    StorageError,
    NotFoundError,
    FormattingError,
    EngineError,
    UnimplementedError,
    ConfigurationError,
)

__all__ = [
    # Entities
    "Entity",
    "Page",
    "Sort",
    "SortDirection",
    # Exceptions
    "StorageError",
    "NotFoundError",
    "FormattingError",
    "EngineError",
    "UnimplementedError",
    "ConfigurationError",
]
