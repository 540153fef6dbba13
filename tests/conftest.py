# tests/conftest.py
"""Shared test fixtures for all unit tests.

Provides in-memory stores, a controller wired to them, sample catalogs and
a .mo file builder. No external services; file backends use tmp_path.
"""

from __future__ import annotations

import struct
from pathlib import Path
from typing import Callable, Union

import pytest

from transcache.cache.memory_store import MemoryCatalogStore
from transcache.catalog.models import Catalog
from transcache.controller.cache_controller import CacheController
from transcache.index.memory_record import MemoryRecordStore

HOST_VERSION = "6.4.2"


def build_mo(
    messages: dict[str, Union[str, list[str]]],
    headers: dict[str, str] | None = None,
    byte_order: str = "<",
) -> bytes:
    """Build a GNU .mo file (same layout msgfmt writes, without hash table).

    A list value is written as a plural entry: ``msgid`` gets a synthetic
    plural form and the list becomes the NUL-separated translations.
    """
    raw: dict[bytes, bytes] = {}
    if headers is not None:
        header_text = "".join(f"{k}: {v}\n" for k, v in headers.items())
        raw[b""] = header_text.encode("utf-8")
    for msgid, msgstr in messages.items():
        if isinstance(msgstr, list):
            key = f"{msgid}\0{msgid}s".encode("utf-8")
            raw[key] = "\0".join(msgstr).encode("utf-8")
        else:
            raw[msgid.encode("utf-8")] = msgstr.encode("utf-8")

    keys = sorted(raw)
    ids = b""
    strs = b""
    offsets = []
    for k in keys:
        offsets.append((len(ids), len(k), len(strs), len(raw[k])))
        ids += k + b"\0"
        strs += raw[k] + b"\0"

    key_start = 7 * 4 + 16 * len(keys)
    value_start = key_start + len(ids)
    table: list[int] = []
    for id_off, id_len, _, _ in offsets:
        table += [id_len, id_off + key_start]
    for _, _, str_off, str_len in offsets:
        table += [str_len, str_off + value_start]

    header = struct.pack(
        f"{byte_order}7I",
        0x950412DE, 0, len(keys), 7 * 4, 7 * 4 + len(keys) * 8, 0, 0,
    )
    return header + struct.pack(f"{byte_order}{len(table)}I", *table) + ids + strs


# === FIXTURES: Sample data ===


@pytest.fixture
def sample_catalog() -> Catalog:
    """The French greeting catalog used across tests."""
    return Catalog(entries={"Hello": "Bonjour"}, headers={"Language": "fr"})


@pytest.fixture
def write_mo(tmp_path: Path) -> Callable[..., Path]:
    """Write a .mo file under tmp_path and return its path."""

    def _write(
        name: str,
        messages: dict[str, Union[str, list[str]]],
        headers: dict[str, str] | None = None,
        byte_order: str = "<",
    ) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(build_mo(messages, headers, byte_order))
        return path

    return _write


# === FIXTURES: Stores and controller ===


@pytest.fixture
def memory_store() -> MemoryCatalogStore:
    """In-memory catalog store that claims to be persistent, so caching is on."""
    return MemoryCatalogStore(persistent=True)


@pytest.fixture
def records() -> MemoryRecordStore:
    return MemoryRecordStore()


@pytest.fixture
def controller(memory_store: MemoryCatalogStore, records: MemoryRecordStore) -> CacheController:
    return CacheController(memory_store, records, host_version=HOST_VERSION)
