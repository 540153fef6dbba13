"""Translation catalogs: model and file loaders."""

from transcache.catalog.base_loader import BaseCatalogLoader
from transcache.catalog.mo_loader import MoCatalogLoader
from transcache.catalog.models import Catalog

__all__ = ["BaseCatalogLoader", "Catalog", "MoCatalogLoader"]
