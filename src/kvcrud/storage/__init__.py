# Copyright (c) EGOGE - All Rights Reserved.
# This software may be used and distributed according to the terms of the MIT license.

"""Persistent storage: SQLite connection management and entity codecs."""

from .database import Database, get_default_db_path, MEMORY_PATH
from .codecs import Codec, JsonCodec, PydanticCodec

__all__ = [
    "Database",
    "get_default_db_path",
    "MEMORY_PATH",
    "Codec",
    "JsonCodec",
    "PydanticCodec",
]
