# src/transcache/index/json_record.py
"""JSON file record store (default RECORD_BACKEND=json).

One file per record under RECORD_ROOT, replaced atomically on write.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from transcache.exceptions import StoreError
from transcache.index.base_record_store import BaseRecordStore

logger = logging.getLogger(__name__)


class JsonRecordStore(BaseRecordStore):
    def __init__(self, record_root: Path | str) -> None:
        self._root = Path(record_root).expanduser()
        self._root.mkdir(parents=True, exist_ok=True)

    async def read(self, name: str, default: Any = None) -> Any:
        path = self._record_path(name)
        if not path.exists():
            return default
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            logger.warning("Corrupted record %s, using default: %s", name, e)
            return default
        except OSError as e:
            raise StoreError(f"Cannot read record {name}: {e}") from e

    async def write(self, name: str, value: Any) -> bool:
        path = self._record_path(name)
        tmp_path = path.with_suffix(".tmp")
        try:
            tmp_path.write_text(json.dumps(value, indent=2), encoding="utf-8")
            os.replace(tmp_path, path)
        except (OSError, TypeError, ValueError) as e:
            raise StoreError(f"Cannot write record {name}: {e}") from e
        return True

    async def delete(self, name: str) -> bool:
        try:
            self._record_path(name).unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StoreError(f"Cannot delete record {name}: {e}") from e
        return True

    def _record_path(self, name: str) -> Path:
        safe_name = name.replace("/", "_").replace("\\", "_")
        return self._root / f"{safe_name}.json"
