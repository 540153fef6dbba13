# src/transcache/index/memory_record.py
"""In-process record store (RECORD_BACKEND=memory)."""

from __future__ import annotations

import copy
from typing import Any

from transcache.index.base_record_store import BaseRecordStore


class MemoryRecordStore(BaseRecordStore):
    def __init__(self) -> None:
        self._records: dict[str, Any] = {}

    async def read(self, name: str, default: Any = None) -> Any:
        if name not in self._records:
            return default
        return copy.deepcopy(self._records[name])

    async def write(self, name: str, value: Any) -> bool:
        self._records[name] = copy.deepcopy(value)
        return True

    async def delete(self, name: str) -> bool:
        if name not in self._records:
            return False
        del self._records[name]
        return True
