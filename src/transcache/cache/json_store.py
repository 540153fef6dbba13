# src/transcache/cache/json_store.py
"""JSON file-based catalog store (default CACHE_BACKEND=json).

Stores each value as an individual JSON file under CACHE_ROOT/<group>/,
together with its absolute expiry time.
"""

from __future__ import annotations

import json
import logging
import os
import time
from pathlib import Path
from typing import Any, Callable

from transcache.cache.base_cache_store import BaseCatalogStore
from transcache.exceptions import StoreError

logger = logging.getLogger(__name__)


class JsonCatalogStore(BaseCatalogStore):
    """File-based catalog store using JSON files."""

    def __init__(
        self,
        cache_root: Path | str,
        clock: Callable[[], float] = time.time,
    ) -> None:
        super().__init__()
        self._root = Path(cache_root).expanduser()
        self._root.mkdir(parents=True, exist_ok=True)
        self._clock = clock

    async def get(self, key: str, group: str) -> tuple[Any, bool]:
        path = self._entry_path(key, group)
        if not path.exists():
            return None, False
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            logger.warning("Corrupted cache entry %s: %s", key, e)
            return None, False
        except OSError as e:
            raise StoreError(f"Cannot read cache entry {key}: {e}") from e

        if not isinstance(data, dict) or "value" not in data:
            return None, False
        expires_at = data.get("expires_at")
        if expires_at is not None and expires_at <= self._clock():
            self._unlink(path)
            return None, False
        return data["value"], True

    async def set(self, key: str, value: Any, group: str, ttl: int = 0) -> bool:
        if ttl < 0:
            return False
        path = self._entry_path(key, group)
        record = {
            "value": value,
            "expires_at": self._clock() + ttl if ttl > 0 else None,
        }
        tmp_path = path.with_suffix(".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(record), encoding="utf-8")
            os.replace(tmp_path, path)
        except (OSError, TypeError, ValueError) as e:
            raise StoreError(f"Cannot write cache entry {key}: {e}") from e
        return True

    async def delete(self, key: str, group: str) -> bool:
        path = self._entry_path(key, group)
        if not path.exists():
            return False
        return self._unlink(path)

    def _unlink(self, path: Path) -> bool:
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StoreError(f"Cannot delete cache entry {path.name}: {e}") from e
        return True

    def _entry_path(self, key: str, group: str) -> Path:
        """Return file path for a cache key."""
        safe_group = _safe_name(group) or "_"
        return self._root / safe_group / f"{_safe_name(key)}.json"


def _safe_name(name: str) -> str:
    return name.replace("/", "_").replace("\\", "_").replace("..", "_")
