# src/transcache/index/record_factory.py
"""Factory: instantiate the durable record store from configuration."""

from __future__ import annotations

from transcache.config.settings import Settings
from transcache.index.base_record_store import BaseRecordStore


def create_record_store(settings: Settings | None = None) -> BaseRecordStore:
    """Create the record store selected by RECORD_BACKEND.

    Raises:
        ValueError: If the backend is not supported.
    """
    backend = "memory" if settings is None else settings.record_backend

    if backend == "memory":
        from transcache.index.memory_record import MemoryRecordStore
        return MemoryRecordStore()

    if backend == "json":
        from transcache.index.json_record import JsonRecordStore
        return JsonRecordStore(record_root=settings.record_root)

    if backend == "sqlite":
        from transcache.index.sqlite_record import SqliteRecordStore
        return SqliteRecordStore(
            db_path=settings.record_root.expanduser() / "records.db"
        )

    raise ValueError(f"Unsupported record backend: {backend!r}")
