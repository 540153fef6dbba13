# src/transcache/index/sqlite_record.py
"""SQLite record store (RECORD_BACKEND=sqlite), an options-style table."""

from __future__ import annotations

import json
import logging
import sqlite3
from pathlib import Path
from typing import Any

from transcache.exceptions import StoreError
from transcache.index.base_record_store import BaseRecordStore

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS records (
    name TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT DEFAULT CURRENT_TIMESTAMP
);
"""


class SqliteRecordStore(BaseRecordStore):
    def __init__(self, db_path: Path | str) -> None:
        self._db_path = Path(db_path).expanduser()
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(str(self._db_path))
        self._conn.executescript(_SCHEMA)

    async def read(self, name: str, default: Any = None) -> Any:
        try:
            row = self._conn.execute(
                "SELECT value FROM records WHERE name = ?", (name,)
            ).fetchone()
        except sqlite3.Error as e:
            raise StoreError(f"Cannot read record {name}: {e}") from e
        if row is None:
            return default
        try:
            return json.loads(row[0])
        except json.JSONDecodeError as e:
            logger.warning("Corrupted record %s, using default: %s", name, e)
            return default

    async def write(self, name: str, value: Any) -> bool:
        try:
            self._conn.execute(
                """INSERT INTO records (name, value) VALUES (?, ?)
                   ON CONFLICT(name) DO UPDATE SET
                       value = excluded.value,
                       updated_at = CURRENT_TIMESTAMP""",
                (name, json.dumps(value)),
            )
            self._conn.commit()
        except (sqlite3.Error, TypeError, ValueError) as e:
            raise StoreError(f"Cannot write record {name}: {e}") from e
        return True

    async def delete(self, name: str) -> bool:
        try:
            cursor = self._conn.execute("DELETE FROM records WHERE name = ?", (name,))
            self._conn.commit()
        except sqlite3.Error as e:
            raise StoreError(f"Cannot delete record {name}: {e}") from e
        return cursor.rowcount > 0

    def close(self) -> None:
        self._conn.close()
