# tests/unit/integration/test_textdomain.py
"""Tests for integration/textdomain.py: load through the cache."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from transcache.cache.memory_store import MemoryCatalogStore
from transcache.catalog.mo_loader import MoCatalogLoader
from transcache.controller.cache_controller import CacheController
from transcache.integration.registry import TranslationRegistry
from transcache.integration.textdomain import TextdomainLoader
from transcache.logging.context import get_context


class TestTextdomainLoader:
    @pytest.mark.asyncio
    async def test_miss_then_hit(self, controller, write_mo):
        mo = write_mo("fr_FR.mo", {"Hello": "Bonjour"}, {"Language": "fr"})
        registry = TranslationRegistry()

        async with controller.unit_of_work() as uow:
            loader = TextdomainLoader(uow, registry)
            assert await loader.load("my-theme", str(mo)) is True
            assert (loader.hits, loader.misses) == (0, 1)

        mo.unlink()
        async with controller.unit_of_work() as uow:
            loader = TextdomainLoader(uow, TranslationRegistry())
            assert await loader.load("my-theme", str(mo)) is True
            assert (loader.hits, loader.misses) == (1, 0)

        assert registry.translate("my-theme", "Hello") == "Bonjour"

    @pytest.mark.asyncio
    async def test_hit_skips_parser(self, controller, write_mo):
        mo = write_mo("fr_FR.mo", {"Hello": "Bonjour"})
        async with controller.unit_of_work() as uow:
            await TextdomainLoader(uow, TranslationRegistry()).load("d", str(mo))

        parser = MagicMock(spec=MoCatalogLoader)
        async with controller.unit_of_work() as uow:
            loader = TextdomainLoader(uow, TranslationRegistry(), loader=parser)
            assert await loader.load("d", str(mo)) is True
        parser.parse.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_file(self, controller, tmp_path):
        registry = TranslationRegistry()
        async with controller.unit_of_work() as uow:
            loader = TextdomainLoader(uow, registry)
            assert await loader.load("d", str(tmp_path / "nope.mo")) is False
            assert await uow.index.domains() == []
        assert registry.domains() == []

    @pytest.mark.asyncio
    async def test_merges_over_existing(self, controller, write_mo):
        registry = TranslationRegistry()
        a = write_mo("a.mo", {"Hello": "Salut", "Bye": "Au revoir"})
        b = write_mo("b.mo", {"Hello": "Bonjour"})
        async with controller.unit_of_work() as uow:
            loader = TextdomainLoader(uow, registry)
            await loader.load("d", str(a))
            await loader.load("d", str(b))
        assert registry.get("d").entries == {"Hello": "Bonjour", "Bye": "Au revoir"}

    @pytest.mark.asyncio
    async def test_on_load_and_log_context(self, controller, write_mo):
        mo = write_mo("fr_FR.mo", {"Hello": "Bonjour"})
        seen = []

        def on_load(domain, path):
            seen.append((domain, path, get_context().domain))

        async with controller.unit_of_work() as uow:
            await TextdomainLoader(uow, TranslationRegistry(), on_load=on_load).load(
                "my-theme", str(mo)
            )
        assert seen == [("my-theme", str(mo), "my-theme")]
        assert get_context().domain is None

    @pytest.mark.asyncio
    async def test_on_load_skipped_when_caching_disabled(self, records, write_mo):
        controller = CacheController(MemoryCatalogStore(), records)
        mo = write_mo("fr_FR.mo", {"Hello": "Bonjour"})
        seen = []
        registry = TranslationRegistry()

        async with controller.unit_of_work() as uow:
            loader = TextdomainLoader(uow, registry, on_load=lambda d, p: seen.append(d))
            assert await loader.load("my-plugin", str(mo)) is True

        assert seen == []
        assert registry.translate("my-plugin", "Hello") == "Bonjour"
