# tests/unit/index/test_record_factory.py
"""Tests for index/record_factory.py."""

from __future__ import annotations

from transcache.config.settings import Settings
from transcache.index.json_record import JsonRecordStore
from transcache.index.memory_record import MemoryRecordStore
from transcache.index.record_factory import create_record_store
from transcache.index.sqlite_record import SqliteRecordStore


class TestCreateRecordStore:
    def test_default_memory(self):
        assert isinstance(create_record_store(), MemoryRecordStore)

    def test_json(self, tmp_path):
        s = Settings(_env_file=None, record_backend="json", record_root=tmp_path)
        assert isinstance(create_record_store(s), JsonRecordStore)

    def test_sqlite(self, tmp_path):
        s = Settings(_env_file=None, record_backend="sqlite", record_root=tmp_path)
        store = create_record_store(s)
        assert isinstance(store, SqliteRecordStore)
        assert (tmp_path / "records.db").exists()
        store.close()
