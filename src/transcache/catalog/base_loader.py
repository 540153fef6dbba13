# src/transcache/catalog/base_loader.py
"""Abstract catalog loader interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from transcache.catalog.models import Catalog


class BaseCatalogLoader(ABC):
    """Parses a catalog file into a Catalog."""

    @abstractmethod
    def parse(self, path: str | Path) -> Catalog:
        """Parse ``path``.

        Raises:
            CatalogParseError: If the file is unreadable or malformed.
        """
