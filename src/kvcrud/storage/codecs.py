# Copyright (c) EGOGE - All Rights Reserved.
# This software may be used and distributed according to the terms of the MIT license.

"""Entity codecs: convert entities to and from the stored JSON text."""

from __future__ import annotations

import json
from dataclasses import asdict, fields, is_dataclass
from datetime import datetime
from typing import (
    Any,
    Generic,
    Optional,
    Protocol,
    Type,
    TypeVar,
    get_args,
    get_type_hints,
    runtime_checkable,
)

from pydantic import BaseModel, ValidationError

from kvcrud.domain.exceptions import FormattingError

E = TypeVar("E")
M = TypeVar("M", bound=BaseModel)


@runtime_checkable
class Codec(Protocol[E]):
    """Serialize/deserialize pair for one entity type."""

    def encode(self, entity: E) -> str:
        ...

    def decode(self, text: str) -> E:
        ...


class JsonCodec(Generic[E]):
    """JSON codec for dataclasses, ``to_dict``/``from_dict`` objects and plain dicts.

    Args:
        entity_type: Type to rebuild on decode. If None, decoded values
            are returned as plain JSON data.
    """

    def __init__(self, entity_type: Optional[Type[E]] = None) -> None:
        self.entity_type = entity_type

    def encode(self, entity: E) -> str:
        try:
            return json.dumps(_to_data(entity))
        except (TypeError, ValueError) as exc:
            raise FormattingError(f"Formatting error: {exc}") from exc

    def decode(self, text: str) -> E:
        try:
            data = json.loads(text)
        except (TypeError, ValueError) as exc:
            raise FormattingError(f"Formatting error: {exc}") from exc
        if self.entity_type is None:
            return data
        try:
            if hasattr(self.entity_type, "from_dict"):
                return self.entity_type.from_dict(data)
            if isinstance(data, dict):
                return self.entity_type(**_restore_datetimes(self.entity_type, data))
            return self.entity_type(data)
        except (TypeError, ValueError, KeyError) as exc:
            raise FormattingError(
                f"Formatting error: cannot build {self.entity_type.__name__}: {exc}"
            ) from exc


class PydanticCodec(Generic[M]):
    """JSON codec for pydantic models."""

    def __init__(self, model_type: Type[M]) -> None:
        self.model_type = model_type

    def encode(self, entity: M) -> str:
        try:
            return entity.model_dump_json()
        except (AttributeError, ValueError) as exc:
            raise FormattingError(f"Formatting error: {exc}") from exc

    def decode(self, text: str) -> M:
        try:
            return self.model_type.model_validate_json(text)
        except ValidationError as exc:
            raise FormattingError(f"Formatting error: {exc}") from exc


def _to_data(entity: Any) -> Any:
    if is_dataclass(entity) and not isinstance(entity, type):
        data = asdict(entity)
        # Convert datetime fields to ISO strings
        for k, v in data.items():
            if isinstance(v, datetime):
                data[k] = v.isoformat()
        return data
    if hasattr(entity, "to_dict"):
        return entity.to_dict()
    return entity


def _restore_datetimes(entity_type: type, data: dict) -> dict:
    """Parse ISO strings back into ``datetime`` for dataclass fields typed as such."""
    if not is_dataclass(entity_type):
        return data
    try:
        hints = get_type_hints(entity_type)
    except (NameError, TypeError):
        hints = {f.name: f.type for f in fields(entity_type)}
    restored = dict(data)
    for name, hint in hints.items():
        value = restored.get(name)
        if not isinstance(value, str):
            continue
        if hint is datetime or datetime in get_args(hint):
            restored[name] = datetime.fromisoformat(value)
    return restored
