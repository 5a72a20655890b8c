# Copyright (c) EGOGE - All Rights Reserved.
# This software may be used and distributed according to the terms of the MIT license.

"""Storage exceptions: the closed set of failures an adapter reports.

The hierarchy is rooted at ``StorageError``. Engine and codec failures
are wrapped at the point they occur, with the original exception chained
as ``__cause__``.
"""


class StorageError(Exception):
    """Base exception for all kvcrud storage errors."""


class NotFoundError(StorageError):
    """Raised when a lookup by identifier finds no record."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Value not found for key {key}")
        self.key = key


class FormattingError(StorageError):
    """Raised when an entity cannot be serialized or a stored value cannot be decoded."""


class EngineError(StorageError):
    """Raised when the embedded SQLite engine reports a failure."""


class UnimplementedError(StorageError):
    """Raised when a declared operation has no backing logic."""


class ConfigurationError(StorageError):
    """Raised when configuration is invalid or cannot be read."""
