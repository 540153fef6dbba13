# src/transcache/catalog/mo_loader.py
"""GNU gettext binary (.mo) catalog loader.

File layout (all integers 32-bit, byte order given by the magic number):
magic, revision, string count, offset of original table, offset of
translation table. Each table holds (length, offset) pairs.
"""

from __future__ import annotations

import codecs
import logging
import re
import struct
from pathlib import Path

from transcache.catalog.base_loader import BaseCatalogLoader
from transcache.catalog.models import Catalog, Translation
from transcache.exceptions import CatalogParseError

logger = logging.getLogger(__name__)

_MAGIC = 0x950412DE
_HEADER_SIZE = 20
_SUPPORTED_MAJOR_REVISIONS = (0, 1)
_CHARSET_RE = re.compile(r"charset=\s*([-\w.:]+)", re.IGNORECASE)


class MoCatalogLoader(BaseCatalogLoader):
    """Reads .mo files into Catalog instances."""

    def parse(self, path: str | Path) -> Catalog:
        mo_path = Path(path)
        try:
            data = mo_path.read_bytes()
        except OSError as e:
            raise CatalogParseError(f"Cannot read catalog {mo_path}: {e}") from e

        catalog = self.parse_bytes(data, source=str(mo_path))
        logger.debug(
            "Parsed %s: %d entries, %d headers",
            mo_path, len(catalog.entries), len(catalog.headers),
        )
        return catalog

    def parse_bytes(self, data: bytes, source: str = "<bytes>") -> Catalog:
        """Parse raw .mo content."""
        byte_order = _detect_byte_order(data, source)
        _, revision, count, orig_offset, trans_offset = struct.unpack_from(
            f"{byte_order}5I", data, 0
        )
        if revision >> 16 not in _SUPPORTED_MAJOR_REVISIONS:
            raise CatalogParseError(
                f"Unsupported .mo revision {revision >> 16} in {source}"
            )

        pairs: list[tuple[bytes, bytes]] = []
        for i in range(count):
            msgid = _read_string(data, byte_order, orig_offset + i * 8, source)
            msgstr = _read_string(data, byte_order, trans_offset + i * 8, source)
            pairs.append((msgid, msgstr))

        raw_header = next((s for m, s in pairs if m == b""), b"")
        headers = _parse_headers(raw_header.decode("utf-8", errors="replace"))
        charset = _charset_from(headers)

        entries: dict[str, Translation] = {}
        for msgid, msgstr in pairs:
            if msgid == b"":
                continue
            key = msgid.split(b"\x00", 1)[0].decode(charset, errors="replace")
            if b"\x00" in msgid:
                entries[key] = [
                    form.decode(charset, errors="replace")
                    for form in msgstr.split(b"\x00")
                ]
            else:
                entries[key] = msgstr.decode(charset, errors="replace")

        return Catalog(entries=entries, headers=headers)


def _detect_byte_order(data: bytes, source: str) -> str:
    if len(data) < _HEADER_SIZE:
        raise CatalogParseError(f"Truncated .mo header in {source}")
    (magic,) = struct.unpack_from("<I", data, 0)
    if magic == _MAGIC:
        return "<"
    (magic,) = struct.unpack_from(">I", data, 0)
    if magic == _MAGIC:
        return ">"
    raise CatalogParseError(f"Bad .mo magic number in {source}")


def _read_string(data: bytes, byte_order: str, table_pos: int, source: str) -> bytes:
    if table_pos + 8 > len(data):
        raise CatalogParseError(f"String table out of bounds in {source}")
    length, offset = struct.unpack_from(f"{byte_order}2I", data, table_pos)
    end = offset + length
    if end > len(data):
        raise CatalogParseError(f"String data out of bounds in {source}")
    return data[offset:end]


def _parse_headers(raw: str) -> dict[str, str]:
    headers: dict[str, str] = {}
    for line in raw.splitlines():
        name, sep, value = line.partition(":")
        if not sep or not name.strip():
            continue
        headers[name.strip()] = value.strip()
    return headers


def _charset_from(headers: dict[str, str]) -> str:
    match = _CHARSET_RE.search(headers.get("Content-Type", ""))
    if not match:
        return "utf-8"
    try:
        return codecs.lookup(match.group(1)).name
    except LookupError:
        return "utf-8"
