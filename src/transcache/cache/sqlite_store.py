# src/transcache/cache/sqlite_store.py
"""SQLite-based catalog store (CACHE_BACKEND=sqlite).

Uses stdlib sqlite3, no external dependency. Expired rows are treated as
absent and removed lazily on read.
"""

from __future__ import annotations

import json
import logging
import sqlite3
import time
from pathlib import Path
from typing import Any, Callable

from transcache.cache.base_cache_store import BaseCatalogStore
from transcache.exceptions import StoreError

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS cache_entries (
    grp TEXT NOT NULL,
    key TEXT NOT NULL,
    data TEXT NOT NULL,
    expires_at REAL,
    created_at TEXT DEFAULT CURRENT_TIMESTAMP,
    PRIMARY KEY (grp, key)
);
CREATE INDEX IF NOT EXISTS idx_expires_at ON cache_entries(expires_at);
"""


class SqliteCatalogStore(BaseCatalogStore):
    """SQLite-backed catalog store."""

    def __init__(
        self,
        db_path: Path | str,
        clock: Callable[[], float] = time.time,
    ) -> None:
        super().__init__()
        self._db_path = Path(db_path).expanduser()
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._clock = clock
        self._conn = sqlite3.connect(str(self._db_path))
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.executescript(_SCHEMA)

    async def get(self, key: str, group: str) -> tuple[Any, bool]:
        try:
            row = self._conn.execute(
                "SELECT data, expires_at FROM cache_entries WHERE grp = ? AND key = ?",
                (group, key),
            ).fetchone()
        except sqlite3.Error as e:
            raise StoreError(f"Cannot read cache entry {key}: {e}") from e

        if row is None:
            return None, False
        data, expires_at = row
        if expires_at is not None and expires_at <= self._clock():
            await self.delete(key, group)
            return None, False
        try:
            return json.loads(data), True
        except json.JSONDecodeError as e:
            logger.warning("Failed to deserialize cache entry %s: %s", key, e)
            return None, False

    async def set(self, key: str, value: Any, group: str, ttl: int = 0) -> bool:
        """Store a value (upsert)."""
        if ttl < 0:
            return False
        expires_at = self._clock() + ttl if ttl > 0 else None
        try:
            self._conn.execute(
                """INSERT OR REPLACE INTO cache_entries (grp, key, data, expires_at)
                   VALUES (?, ?, ?, ?)""",
                (group, key, json.dumps(value), expires_at),
            )
            self._conn.commit()
        except (sqlite3.Error, TypeError, ValueError) as e:
            raise StoreError(f"Cannot write cache entry {key}: {e}") from e
        return True

    async def delete(self, key: str, group: str) -> bool:
        try:
            cursor = self._conn.execute(
                "DELETE FROM cache_entries WHERE grp = ? AND key = ?", (group, key)
            )
            self._conn.commit()
        except sqlite3.Error as e:
            raise StoreError(f"Cannot delete cache entry {key}: {e}") from e
        return cursor.rowcount > 0

    async def purge_expired(self) -> int:
        """Remove every expired row. Returns the number of rows removed."""
        try:
            cursor = self._conn.execute(
                "DELETE FROM cache_entries WHERE expires_at IS NOT NULL AND expires_at <= ?",
                (self._clock(),),
            )
            self._conn.commit()
        except sqlite3.Error as e:
            raise StoreError(f"Cannot purge expired entries: {e}") from e
        return cursor.rowcount

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()
