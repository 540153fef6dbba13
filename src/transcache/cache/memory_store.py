# src/transcache/cache/memory_store.py
"""In-process catalog store (CACHE_BACKEND=memory).

Values vanish with the process, so by default the store reports itself as
non-persistent and the controller does not cache into it.
"""

from __future__ import annotations

import copy
import time
from typing import Any, Callable

from transcache.cache.base_cache_store import BaseCatalogStore


class MemoryCatalogStore(BaseCatalogStore):
    """Dict-backed store with monotonic-clock expiry."""

    def __init__(
        self,
        persistent: bool = False,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__()
        self.is_persistent = persistent
        self._clock = clock
        self._data: dict[tuple[str, str], tuple[Any, float | None]] = {}

    async def get(self, key: str, group: str) -> tuple[Any, bool]:
        item = self._data.get((group, key))
        if item is None:
            return None, False
        value, expires_at = item
        if expires_at is not None and expires_at <= self._clock():
            del self._data[(group, key)]
            return None, False
        return copy.deepcopy(value), True

    async def set(self, key: str, value: Any, group: str, ttl: int = 0) -> bool:
        if ttl < 0:
            return False
        expires_at = self._clock() + ttl if ttl > 0 else None
        self._data[(group, key)] = (copy.deepcopy(value), expires_at)
        return True

    async def delete(self, key: str, group: str) -> bool:
        return self._data.pop((group, key), None) is not None
