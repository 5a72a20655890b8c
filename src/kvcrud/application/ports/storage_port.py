"""Storage ports: interfaces for key-value CRUD persistence.

Any storage backend (SQLite, in-memory, etc.) must implement these
Protocols to be usable by application code. They are split the same
way callers use them, so a read-only consumer can depend on ``Read``
alone.
"""

from __future__ import annotations

from typing import Any, List, Protocol, runtime_checkable

from kvcrud.domain.entities import Page, Sort


@runtime_checkable
class Create(Protocol):
    """Protocol for persisting entities."""

    def save(self, entity: Any) -> None:
        """Insert the entity, or replace the stored value for its identifier.

        Args:
            entity: Object exposing ``get_id()``.

        Raises:
            FormattingError: If the entity cannot be serialized.
            EngineError: If the storage engine fails.
        """
        ...


@runtime_checkable
class Read(Protocol):
    """Protocol for point lookups."""

    def find_by_id(self, id: Any) -> Any:
        """Load the entity stored under an identifier.

        Args:
            id: Entity identifier; matched by its string form.

        Returns:
            The decoded entity.

        Raises:
            NotFoundError: If no record exists for the identifier.
            FormattingError: If the stored value cannot be decoded.
            EngineError: If the storage engine fails.
        """
        ...


@runtime_checkable
class ReadWithPaginationAndSort(Protocol):
    """Protocol for paginated scans."""

    def find_all_with_page(self, page: Page) -> List[Any]:
        """Return one page of entities in storage order.

        Args:
            page: Window to return.

        Returns:
            Decoded entities; shorter than ``page.size`` near the end,
            empty past it.
        """
        ...

    def find_all_with_page_and_sort(self, page: Page, sort: Sort) -> List[Any]:
        """Return one page of entities ordered by an entity field.

        Args:
            page: Window to return.
            sort: Field and direction to order by.

        Raises:
            UnimplementedError: If the backend cannot sort.
        """
        ...


@runtime_checkable
class Update(Protocol):
    """Protocol for updates. Updating an unknown identifier creates it."""

    def update(self, entity: Any) -> None:
        ...


@runtime_checkable
class Delete(Protocol):
    """Protocol for removals."""

    def remove_by_id(self, id: Any) -> None:
        """Remove the record for an identifier.

        Succeeds whether or not a record existed.

        Args:
            id: Entity identifier.
        """
        ...

    def remove(self, entity: Any) -> None:
        """Remove the record for an entity's identifier."""
        ...


@runtime_checkable
class CrudPort(
    Create, Read, ReadWithPaginationAndSort, Update, Delete, Protocol
):
    """Full CRUD surface plus connection lifecycle."""

    def close(self) -> None:
        """Release the underlying connection."""
        ...
