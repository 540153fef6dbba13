# src/transcache/index/domain_index.py
"""Domain index: text domain -> fingerprints stored for it.

One instance lives for one unit of work. It is read from the durable record
on first access, mutated in memory, then pruned and written back once by
sync(). Actual presence in the catalog store is ground truth; the index is a
hint used for bulk invalidation and may briefly hold expired fingerprints.
"""

from __future__ import annotations

import logging
from typing import Any

from transcache.cache.base_cache_store import BaseCatalogStore
from transcache.exceptions import StoreError
from transcache.index.base_record_store import BaseRecordStore

logger = logging.getLogger(__name__)


class DomainIndex:
    """In-memory image of the persisted domain index."""

    def __init__(
        self,
        records: BaseRecordStore,
        store: BaseCatalogStore,
        record_name: str,
        group: str,
    ) -> None:
        self._records = records
        self._store = store
        self._record_name = record_name
        self._group = group
        self._mapping: dict[str, set[str]] | None = None
        self._read_only = False

    @property
    def loaded(self) -> bool:
        """True once the index has been touched in this unit of work."""
        return self._mapping is not None

    async def _load(self) -> dict[str, set[str]]:
        if self._mapping is None:
            try:
                raw = await self._records.read(self._record_name, {})
            except StoreError as e:
                # Writing back a partial image would drop keys tracked by
                # earlier units of work.
                logger.warning("Domain index unavailable, not persisting: %s", e)
                raw = {}
                self._read_only = True
            self._mapping = _coerce_mapping(raw)
        return self._mapping

    async def register(self, domain: str, fingerprint: str) -> bool:
        """Track ``fingerprint`` under ``domain``. Returns False if already tracked."""
        mapping = await self._load()
        keys = mapping.setdefault(domain, set())
        if fingerprint in keys:
            return False
        keys.add(fingerprint)
        return True

    async def pop(self, domain: str) -> set[str] | None:
        """Stop tracking ``domain``. Returns its fingerprints, None if untracked."""
        mapping = await self._load()
        return mapping.pop(domain, None)

    async def keys_for(self, domain: str) -> frozenset[str]:
        mapping = await self._load()
        return frozenset(mapping.get(domain, ()))

    async def domains(self) -> list[str]:
        mapping = await self._load()
        return sorted(mapping)

    async def snapshot(self) -> dict[str, list[str]]:
        """Return a JSON-friendly copy of the index."""
        mapping = await self._load()
        return {domain: sorted(keys) for domain, keys in sorted(mapping.items())}

    async def clear(self) -> dict[str, set[str]]:
        """Empty the index and delete its durable record. Returns the old mapping."""
        mapping = await self._load()
        self._mapping = {}
        try:
            await self._records.delete(self._record_name)
        except StoreError as e:
            logger.warning("Cannot delete domain index record: %s", e)
        return mapping

    async def prune(self) -> int:
        """Drop fingerprints absent from the catalog store, then empty domains.

        Returns the number of fingerprints removed.
        """
        mapping = await self._load()
        removed = 0
        for domain in list(mapping):
            present: set[str] = set()
            for key in mapping[domain]:
                if await self._is_present(key):
                    present.add(key)
                else:
                    removed += 1
            if present:
                mapping[domain] = present
            else:
                del mapping[domain]
        return removed

    async def sync(self) -> bool:
        """Prune and persist. No-op when the index was never touched.

        Returns True if the record was written.
        """
        if self._mapping is None:
            return False
        removed = await self.prune()
        if self._read_only:
            return False
        try:
            await self._records.write(self._record_name, await self.snapshot())
        except StoreError as e:
            logger.warning("Cannot persist domain index: %s", e)
            return False
        logger.debug(
            "Domain index persisted: %d domains, %d stale keys pruned",
            len(self._mapping), removed,
        )
        return True

    async def _is_present(self, key: str) -> bool:
        try:
            return await self._store.exists(key, self._group)
        except StoreError as e:
            # Keep the key; the next unit of work probes again.
            logger.warning("Cannot probe cache key %s: %s", key, e)
            return True


def _coerce_mapping(raw: Any) -> dict[str, set[str]]:
    """Build the in-memory index from whatever the record holds."""
    if not isinstance(raw, dict):
        return {}
    mapping: dict[str, set[str]] = {}
    for domain, keys in raw.items():
        if not isinstance(domain, str) or not isinstance(keys, (list, tuple, set)):
            continue
        mapping[domain] = {k for k in keys if isinstance(k, str)}
    return mapping
