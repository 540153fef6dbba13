"""transcache: write-through cache for parsed translation catalogs."""

from transcache.catalog.models import Catalog
from transcache.controller.cache_controller import CacheController
from transcache.controller.policy import CachePolicy
from transcache.version import __version__

__all__ = ["CacheController", "CachePolicy", "Catalog", "__version__"]
