"""Thread-safe wrapper that serializes every call to a storage adapter."""

from __future__ import annotations

import threading
from typing import Any, List

from kvcrud.application.ports.storage_port import CrudPort
from kvcrud.domain.entities import Page, Sort


class SynchronizedStorageAdapter:
    """Wrap a :class:`CrudPort` so each operation runs under one lock.

    Use this when several threads share a single adapter; the wrapped
    adapter itself does no locking.
    """

    def __init__(self, inner: CrudPort) -> None:
        self._inner = inner
        self._lock = threading.RLock()

    def save(self, entity: Any) -> None:
        with self._lock:
            self._inner.save(entity)

    def update(self, entity: Any) -> None:
        with self._lock:
            self._inner.update(entity)

    def find_by_id(self, id: Any) -> Any:
        with self._lock:
            return self._inner.find_by_id(id)

    def find_all_with_page(self, page: Page) -> List[Any]:
        with self._lock:
            return self._inner.find_all_with_page(page)

    def find_all_with_page_and_sort(self, page: Page, sort: Sort) -> List[Any]:
        with self._lock:
            return self._inner.find_all_with_page_and_sort(page, sort)

    def remove_by_id(self, id: Any) -> None:
        with self._lock:
            self._inner.remove_by_id(id)

    def remove(self, entity: Any) -> None:
        with self._lock:
            self._inner.remove(entity)

    def close(self) -> None:
        with self._lock:
            self._inner.close()

    def __enter__(self) -> SynchronizedStorageAdapter:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
