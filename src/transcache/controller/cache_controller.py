# src/transcache/controller/cache_controller.py
"""Read-through / write-through cache for parsed translation catalogs.

Lookups and writes go straight to the catalog store. Every fingerprint
written for a non-default domain is also tracked in the DomainIndex of the
current unit of work, so a whole domain can be dropped when the theme or
plugin owning it changes. Store failures never escape: a failed read is a
miss, a failed write is simply not indexed.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, AsyncIterator, Iterable

from transcache.cache.base_cache_store import BaseCatalogStore
from transcache.cache.fingerprint import derive_fingerprint, is_default_domain
from transcache.catalog.models import Catalog
from transcache.config.settings import Settings
from transcache.controller.policy import CachePolicy
from transcache.controller.unit_of_work import UnitOfWork
from transcache.exceptions import StoreError
from transcache.index.base_record_store import BaseRecordStore
from transcache.index.domain_index import DomainIndex
from transcache.logging.context import (
    reset_unit_of_work_context,
    set_unit_of_work_context,
)

if TYPE_CHECKING:
    from transcache.integration.resolvers import DomainResolver

logger = logging.getLogger(__name__)

DEFAULT_GROUP = "mo_cache"
DEFAULT_TTL = 43200  # 12 hours
MIN_TTL = 60
INDEX_RECORD_NAME = "transcache_domain_index"


class CacheController:
    """Catalog cache protocol: lookup, store and per-domain invalidation."""

    def __init__(
        self,
        store: BaseCatalogStore,
        records: BaseRecordStore,
        policy: CachePolicy | None = None,
        *,
        host_version: str = "",
        group: str = DEFAULT_GROUP,
        default_ttl: int = DEFAULT_TTL,
        min_ttl: int = MIN_TTL,
        record_name: str = INDEX_RECORD_NAME,
    ) -> None:
        self._store = store
        self._records = records
        self._policy = policy or CachePolicy()
        self._host_version = host_version
        self._group = group
        self._default_ttl = default_ttl
        self._min_ttl = min_ttl
        self._record_name = record_name

    @classmethod
    def from_settings(
        cls, settings: Settings, policy: CachePolicy | None = None
    ) -> CacheController:
        """Build a controller with the store and record backends from settings."""
        from transcache.cache.cache_factory import create_catalog_store
        from transcache.index.record_factory import create_record_store

        return cls(
            store=create_catalog_store(settings),
            records=create_record_store(settings),
            policy=policy,
            host_version=settings.host_version,
            group=settings.cache_group,
            default_ttl=settings.cache_default_ttl,
            min_ttl=settings.cache_min_ttl,
            record_name=settings.index_record_name,
        )

    def close(self) -> None:
        self._store.close()
        self._records.close()

    # --- Unit of work ---

    def new_index(self) -> DomainIndex:
        return DomainIndex(
            records=self._records,
            store=self._store,
            record_name=self._record_name,
            group=self._group,
        )

    @asynccontextmanager
    async def unit_of_work(self) -> AsyncIterator[UnitOfWork]:
        """Scope one request/transaction.

        The domain index is synced exactly once on exit, also when the body
        raises.
        """
        uow = UnitOfWork(self, self.new_index())
        token = set_unit_of_work_context(uow.id)
        try:
            yield uow
        finally:
            try:
                await uow.index.sync()
            finally:
                reset_unit_of_work_context(token)

    # --- Keys and policy ---

    def is_enabled(self, domain: str, source_path: str) -> bool:
        # An in-process store does not outlive the unit of work, so caching
        # into it only adds overhead.
        return self._policy.resolve_enabled(
            self._store.is_persistent, domain, source_path
        )

    def resolve_source_path(self, domain: str, source_path: str) -> str:
        return self._policy.resolve_source_path(source_path, domain)

    def fingerprint_for(self, domain: str, source_path: str) -> str:
        """Store key for ``(domain, source_path)`` after the path rewrite."""
        path = self.resolve_source_path(domain, source_path)
        default_seed = self._host_version if is_default_domain(domain) else ""
        return derive_fingerprint(
            domain,
            path,
            self._policy.resolve_seed(domain, default_seed),
            host_version=self._host_version,
        )

    def resolve_ttl(self, domain: str, source_path: str) -> int:
        default = self._default_ttl if self._store.is_persistent else 0
        return self._policy.resolve_ttl(default, domain, source_path, self._min_ttl)

    # --- Read path ---

    async def lookup(self, domain: str, source_path: str) -> Catalog | None:
        """Return the cached catalog, or None on a miss or when disabled."""
        if not self.is_enabled(domain, source_path):
            return None

        self._store.add_global_groups(self._group)
        key = self.fingerprint_for(domain, source_path)

        try:
            payload, found = await self._store.get(key, self._group)
        except StoreError as e:
            logger.warning("Cache read failed for %s, treating as miss: %s", domain, e)
            return None

        if not found:
            logger.debug("Cache miss for %s (%s)", domain, source_path)
            return None

        catalog = Catalog.from_payload(payload)
        if catalog is None:
            logger.warning("Malformed cache entry %s for %s, treating as miss", key, domain)
            return None

        logger.debug("Cache hit for %s (%s)", domain, source_path)
        return catalog

    # --- Write path ---

    async def store(
        self,
        domain: str,
        source_path: str,
        catalog: Catalog,
        index: DomainIndex,
    ) -> bool:
        """Write ``catalog`` and track its fingerprint under ``domain``.

        Returns True if the catalog was stored.
        """
        if not self.is_enabled(domain, source_path):
            return False

        key = self.fingerprint_for(domain, source_path)
        ttl = self.resolve_ttl(domain, self.resolve_source_path(domain, source_path))
        if ttl < 0:
            logger.debug("Negative TTL for %s, not caching", domain)
            return False

        try:
            stored = await self._store.set(key, catalog.to_payload(), self._group, ttl)
        except StoreError as e:
            logger.warning("Cache write failed for %s: %s", domain, e)
            return False

        if not stored:
            return False

        # The host core catalog is invalidated by the host version in the
        # fingerprint, not by explicit flushes.
        if not is_default_domain(domain):
            await index.register(domain, key)

        logger.debug("Cached %s (%s) as %s, ttl=%d", domain, source_path, key, ttl)
        return True

    # --- Invalidation ---

    async def invalidate(self, domains: str | Iterable[str], index: DomainIndex) -> bool:
        """Delete every cached catalog of the given domain(s).

        Returns True if at least one domain had tracked keys.
        """
        if isinstance(domains, str):
            domains = [domains]

        flushed = 0
        for domain in domains:
            if not domain or not isinstance(domain, str):
                continue
            keys = await index.pop(domain)
            if keys is None:
                continue
            flushed += 1
            await self._delete_keys(keys)
            logger.info("Invalidated %d cached catalogs for %s", len(keys), domain)

        return flushed > 0

    async def invalidate_all(self, index: DomainIndex) -> bool:
        """Delete every tracked catalog and the durable index record."""
        mapping = await index.clear()
        total = 0
        for keys in mapping.values():
            await self._delete_keys(keys)
            total += len(keys)
        logger.info("Invalidated all %d cached catalogs in %d domains", total, len(mapping))
        return True

    async def on_origin_swap(
        self, old_domain: str, new_domain: str, index: DomainIndex
    ) -> bool:
        """Active theme changed: drop both the old and the new theme's domain."""
        return await self.invalidate([old_domain, new_domain], index)

    async def on_origin_toggle(
        self, unit: str, resolver: DomainResolver, index: DomainIndex
    ) -> bool:
        """Plugin activated or deactivated: drop the domain it declares."""
        domain = resolver.resolve(unit)
        if not domain or not isinstance(domain, str):
            logger.debug("No text domain resolved for %s", unit)
            return False
        return await self.invalidate([domain], index)

    async def _delete_keys(self, keys: Iterable[str]) -> None:
        for key in keys:
            try:
                await self._store.delete(key, self._group)
            except StoreError as e:
                # Left to expire; the index no longer references it.
                logger.warning("Cannot delete cache key %s: %s", key, e)
