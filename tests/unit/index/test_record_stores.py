# tests/unit/index/test_record_stores.py
"""Tests for index record stores: memory, JSON and SQLite backends."""

from __future__ import annotations

from pathlib import Path

import pytest

from transcache.index.base_record_store import BaseRecordStore
from transcache.index.json_record import JsonRecordStore
from transcache.index.memory_record import MemoryRecordStore
from transcache.index.sqlite_record import SqliteRecordStore

VALUE = {"my-theme": ["abc", "def"]}


@pytest.fixture(params=["memory", "json", "sqlite"])
def record_store(request, tmp_path: Path):
    if request.param == "memory":
        store: BaseRecordStore = MemoryRecordStore()
    elif request.param == "json":
        store = JsonRecordStore(record_root=tmp_path / "records")
    else:
        store = SqliteRecordStore(db_path=tmp_path / "records.db")
    yield store
    store.close()


class TestBaseRecordStore:
    def test_cannot_instantiate(self):
        with pytest.raises(TypeError):
            BaseRecordStore()  # type: ignore[abstract]


class TestRecordStores:
    @pytest.mark.asyncio
    async def test_read_default(self, record_store):
        assert await record_store.read("missing", {}) == {}
        assert await record_store.read("missing") is None

    @pytest.mark.asyncio
    async def test_write_creates_then_updates(self, record_store):
        assert await record_store.write("idx", VALUE) is True
        assert await record_store.read("idx") == VALUE
        assert await record_store.write("idx", {}) is True
        assert await record_store.read("idx", None) == {}

    @pytest.mark.asyncio
    async def test_delete(self, record_store):
        await record_store.write("idx", VALUE)
        assert await record_store.delete("idx") is True
        assert await record_store.delete("idx") is False
        assert await record_store.read("idx", "gone") == "gone"


class TestMemoryRecordStore:
    @pytest.mark.asyncio
    async def test_delete_record_holding_none(self):
        store = MemoryRecordStore()
        await store.write("idx", None)
        assert await store.delete("idx") is True
        assert await store.delete("idx") is False


class TestJsonRecordStore:
    @pytest.mark.asyncio
    async def test_corrupted_record_reads_default(self, tmp_path: Path):
        store = JsonRecordStore(record_root=tmp_path)
        (tmp_path / "idx.json").write_text("{nope", encoding="utf-8")
        assert await store.read("idx", {}) == {}

    @pytest.mark.asyncio
    async def test_survives_new_instance(self, tmp_path: Path):
        await JsonRecordStore(record_root=tmp_path).write("idx", VALUE)
        assert await JsonRecordStore(record_root=tmp_path).read("idx") == VALUE


class TestSqliteRecordStore:
    @pytest.mark.asyncio
    async def test_survives_new_connection(self, tmp_path: Path):
        db = tmp_path / "records.db"
        s1 = SqliteRecordStore(db_path=db)
        await s1.write("idx", VALUE)
        s1.close()
        s2 = SqliteRecordStore(db_path=db)
        assert await s2.read("idx") == VALUE
        s2.close()
