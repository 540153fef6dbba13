# src/transcache/cache/base_cache_store.py
"""Abstract catalog store interface.

A generic key-value cache with groups and TTL. ``ttl == 0`` means no
expiration. Backend failures raise StoreError.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class BaseCatalogStore(ABC):
    """Unified interface for catalog store backends."""

    #: True when stored values outlive the current unit of work.
    is_persistent: bool = True

    def __init__(self) -> None:
        self._global_groups: set[str] = set()

    @abstractmethod
    async def get(self, key: str, group: str) -> tuple[Any, bool]:
        """Return ``(value, found)``. ``found`` is False for absent keys."""

    @abstractmethod
    async def set(self, key: str, value: Any, group: str, ttl: int = 0) -> bool:
        """Store a value. Returns False if the backend declined the write."""

    @abstractmethod
    async def delete(self, key: str, group: str) -> bool:
        """Remove a value. Returns False if nothing was deleted."""

    async def exists(self, key: str, group: str) -> bool:
        """Existence probe; a stored falsy value still counts as present."""
        _, found = await self.get(key, group)
        return found

    def add_global_groups(self, *groups: str) -> None:
        """Mark groups as shared across nodes. A hint only on single-node stores."""
        self._global_groups.update(g for g in groups if g)

    @property
    def global_groups(self) -> frozenset[str]:
        return frozenset(self._global_groups)

    def close(self) -> None:
        """Release backend resources."""
