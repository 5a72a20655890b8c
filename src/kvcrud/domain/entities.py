# Copyright (c) EGOGE - All Rights Reserved.
# This software may be used and distributed according to the terms of the MIT license.

"""Domain types: the entity contract and pagination/sort requests."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol, TypeVar, runtime_checkable

I_co = TypeVar("I_co", covariant=True)


@runtime_checkable
class Entity(Protocol[I_co]):
    """Anything that can report a unique identifier.

    The identifier must have a stable ``str()`` form; it becomes the
    record key. No base class is required.
    """

    def get_id(self) -> I_co:
        ...


@dataclass(frozen=True)
class Page:
    """A pagination window.

    Attributes:
        number: Zero-based page number.
        size: Maximum number of entities per page.
    """

    number: int = 0
    size: int = 20

    def __post_init__(self) -> None:
        if self.number < 0:
            raise ValueError(f"Page number must be non-negative, got {self.number}")
        if self.size < 1:
            raise ValueError(f"Page size must be positive, got {self.size}")

    @property
    def offset(self) -> int:
        """Number of rows skipped before this page starts."""
        return self.number * self.size


class SortDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


@dataclass(frozen=True)
class Sort:
    """Ordering request for a paginated scan.

    Attributes:
        field: Top-level entity field to order by.
        direction: Ascending or descending.
    """

    field: str
    direction: SortDirection = SortDirection.ASC

    def __post_init__(self) -> None:
        if not self.field:
            raise ValueError("Sort field must be a non-empty string")
        # Accept plain "asc"/"desc" strings from callers
        if not isinstance(self.direction, SortDirection):
            object.__setattr__(
                self, "direction", SortDirection(str(self.direction).upper())
            )
