"""Catalog stores and cache key derivation."""

from transcache.cache.base_cache_store import BaseCatalogStore
from transcache.cache.fingerprint import derive_fingerprint, is_default_domain

__all__ = ["BaseCatalogStore", "derive_fingerprint", "is_default_domain"]
