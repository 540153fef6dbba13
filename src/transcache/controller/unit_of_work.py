# src/transcache/controller/unit_of_work.py
"""Unit of work: one request/transaction holding its own domain index."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING, Iterable

from transcache.catalog.models import Catalog
from transcache.index.domain_index import DomainIndex

if TYPE_CHECKING:
    from transcache.controller.cache_controller import CacheController
    from transcache.integration.resolvers import DomainResolver


class UnitOfWork:
    """Controller operations bound to this unit of work's domain index.

    Created by CacheController.unit_of_work(), which syncs the index on exit.
    """

    def __init__(self, controller: CacheController, index: DomainIndex) -> None:
        self.controller = controller
        self.index = index
        self.id = uuid.uuid4().hex[:12]

    async def lookup(self, domain: str, source_path: str) -> Catalog | None:
        return await self.controller.lookup(domain, source_path)

    async def store(self, domain: str, source_path: str, catalog: Catalog) -> bool:
        return await self.controller.store(domain, source_path, catalog, self.index)

    async def invalidate(self, domains: str | Iterable[str]) -> bool:
        return await self.controller.invalidate(domains, self.index)

    async def invalidate_all(self) -> bool:
        return await self.controller.invalidate_all(self.index)

    async def on_origin_swap(self, old_domain: str, new_domain: str) -> bool:
        return await self.controller.on_origin_swap(old_domain, new_domain, self.index)

    async def on_origin_toggle(self, unit: str, resolver: DomainResolver) -> bool:
        return await self.controller.on_origin_toggle(unit, resolver, self.index)
