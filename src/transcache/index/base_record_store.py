# src/transcache/index/base_record_store.py
"""Abstract durable record store: site-wide named config records."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class BaseRecordStore(ABC):
    """Named JSON-compatible records that survive across units of work."""

    @abstractmethod
    async def read(self, name: str, default: Any = None) -> Any:
        """Return the record value, or ``default`` if it does not exist."""

    @abstractmethod
    async def write(self, name: str, value: Any) -> bool:
        """Create or overwrite a record."""

    @abstractmethod
    async def delete(self, name: str) -> bool:
        """Remove a record. Returns False if it did not exist."""

    def close(self) -> None:
        """Release backend resources."""
