# src/transcache/integration/registry.py
"""Process-wide translation table, one merged catalog per text domain."""

from __future__ import annotations

from transcache.catalog.models import Catalog


class TranslationRegistry:
    """Active translations, owned by the host integration layer."""

    def __init__(self) -> None:
        self._catalogs: dict[str, Catalog] = {}

    def merge(self, domain: str, catalog: Catalog) -> Catalog:
        """Merge ``catalog`` into ``domain``. New entries win over existing ones."""
        existing = self._catalogs.get(domain)
        merged = catalog if existing is None else catalog.merge_with(existing)
        self._catalogs[domain] = merged
        return merged

    def get(self, domain: str) -> Catalog | None:
        return self._catalogs.get(domain)

    def unload(self, domain: str) -> bool:
        return self._catalogs.pop(domain, None) is not None

    def domains(self) -> list[str]:
        return sorted(self._catalogs)

    def translate(self, domain: str, msgid: str) -> str:
        """Translation of ``msgid`` in ``domain``, or ``msgid`` itself."""
        catalog = self._catalogs.get(domain)
        if catalog is None:
            return msgid
        return catalog.translate(msgid) or msgid
