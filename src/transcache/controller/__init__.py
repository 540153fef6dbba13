"""Cache controller, caching policy and unit of work."""

from transcache.controller.cache_controller import CacheController
from transcache.controller.policy import CachePolicy
from transcache.controller.unit_of_work import UnitOfWork

__all__ = ["CacheController", "CachePolicy", "UnitOfWork"]
