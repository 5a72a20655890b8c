"""Port interfaces (Protocol classes) for dependency inversion.

Ports define the contracts that storage adapters must satisfy.
They depend only on the domain layer.
"""

from .storage_port import (
    Create,
    Read,
    ReadWithPaginationAndSort,
    Update,
    Delete,
    CrudPort,
)

__all__ = [
    "Create",
    "Read",
    "ReadWithPaginationAndSort",
    "Update",
    "Delete",
    "CrudPort",
]
