# src/transcache/integration/textdomain.py
"""Load a text domain through the catalog cache.

Hit: the cached catalog is merged into the registry without parsing.
Miss: the file is parsed, written to the cache, then merged.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from transcache.catalog.base_loader import BaseCatalogLoader
from transcache.catalog.mo_loader import MoCatalogLoader
from transcache.controller.unit_of_work import UnitOfWork
from transcache.exceptions import CatalogParseError
from transcache.integration.registry import TranslationRegistry
from transcache.logging.context import set_domain_context

logger = logging.getLogger(__name__)


class TextdomainLoader:
    """Host-facing entry point for loading catalogs in one unit of work."""

    def __init__(
        self,
        uow: UnitOfWork,
        registry: TranslationRegistry,
        loader: BaseCatalogLoader | None = None,
        on_load: Optional[Callable[[str, str], None]] = None,
    ) -> None:
        self._uow = uow
        self._registry = registry
        self._loader = loader or MoCatalogLoader()
        self._on_load = on_load
        self.hits = 0
        self.misses = 0

    async def load(self, domain: str, source_path: str) -> bool:
        """Load ``source_path`` into ``domain``. Returns False if nothing was loaded."""
        set_domain_context(domain)
        try:
            # Fired only when the cache takes over the load.
            if self._on_load is not None and self._uow.controller.is_enabled(
                domain, source_path
            ):
                self._on_load(domain, source_path)

            catalog = await self._uow.lookup(domain, source_path)
            if catalog is not None:
                self.hits += 1
                self._registry.merge(domain, catalog)
                return True

            self.misses += 1
            path = self._uow.controller.resolve_source_path(domain, source_path)
            try:
                catalog = self._loader.parse(path)
            except CatalogParseError as e:
                logger.info("No catalog loaded for %s: %s", domain, e)
                return False

            await self._uow.store(domain, source_path, catalog)
            self._registry.merge(domain, catalog)
            return True
        finally:
            set_domain_context(None)
