# src/transcache/cache/cache_factory.py
"""Factory for catalog store instantiation."""

from __future__ import annotations

from transcache.cache.base_cache_store import BaseCatalogStore
from transcache.config.settings import Settings


def create_catalog_store(settings: Settings | None = None) -> BaseCatalogStore:
    """Instantiate the configured catalog store backend.

    Args:
        settings: Application settings. Defaults to an in-process store.

    Returns:
        Configured BaseCatalogStore implementation.
    """
    backend = "memory" if settings is None else settings.cache_backend

    if backend == "memory":
        from transcache.cache.memory_store import MemoryCatalogStore
        return MemoryCatalogStore()

    if backend == "json":
        from transcache.cache.json_store import JsonCatalogStore
        return JsonCatalogStore(cache_root=settings.cache_root)

    if backend == "sqlite":
        from transcache.cache.sqlite_store import SqliteCatalogStore
        db_path = settings.cache_root.expanduser() / "transcache.db"
        return SqliteCatalogStore(db_path=db_path)

    if backend == "redis":
        from transcache.cache.redis_store import RedisCatalogStore
        if not settings.cache_redis_url:
            raise ValueError(
                "CACHE_REDIS_URL must be set when CACHE_BACKEND=redis"
            )
        return RedisCatalogStore(redis_url=settings.cache_redis_url)

    raise ValueError(f"Unsupported cache backend: {backend!r}")
