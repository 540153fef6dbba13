# src/transcache/controller/policy.py
"""Caching policy: named hook slots with coercion of their results.

Every hook receives the default the controller computed and returns the
value to use instead. Results are coerced, never trusted: a malformed value
falls back to a safe default rather than raising.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Optional

EnabledHook = Callable[[bool, str, str], object]
TtlHook = Callable[[int, str, str], object]
SeedHook = Callable[[str, str], object]
SourcePathHook = Callable[[str, str], object]

_TRUTHY = frozenset({"1", "true", "on", "yes"})


@dataclass(frozen=True)
class CachePolicy:
    """Overrides for the controller's defaults.

    Attributes:
        enabled: ``(default, domain, path) -> bool`` whether to cache.
        ttl: ``(default, domain, path) -> int`` seconds; 0 never expires,
            negative disables the write.
        seed: ``(default, domain) -> str`` invalidation seed, e.g. the
            owning plugin's version.
        source_path: ``(path, domain) -> str`` rewrite of the catalog path.
    """

    enabled: Optional[EnabledHook] = None
    ttl: Optional[TtlHook] = None
    seed: Optional[SeedHook] = None
    source_path: Optional[SourcePathHook] = None

    def resolve_enabled(self, default: bool, domain: str, path: str) -> bool:
        value: object = default
        if self.enabled is not None:
            value = self.enabled(default, domain, path)
        return coerce_bool(value)

    def resolve_ttl(self, default: int, domain: str, path: str, min_ttl: int) -> int:
        value: object = default
        if self.ttl is not None:
            value = self.ttl(default, domain, path)
        return coerce_ttl(value, min_ttl)

    def resolve_seed(self, domain: str, default: str = "") -> str:
        value: object = default
        if self.seed is not None:
            value = self.seed(default, domain)
        return value if isinstance(value, str) else ""

    def resolve_source_path(self, path: str, domain: str) -> str:
        if self.source_path is None:
            return path
        value = self.source_path(path, domain)
        return value if isinstance(value, str) else path


def coerce_bool(value: object) -> bool:
    """Loose boolean validation: True, 1 and "1/true/on/yes" are true."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value == 1
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    return False


def coerce_ttl(value: object, min_ttl: int) -> int:
    """Return ``value`` as whole seconds, or ``min_ttl`` if it is not numeric.

    Any negative value becomes -1 and a positive fraction rounds up, so the
    sign survives conversion: 0 alone means "never expires".
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return min_ttl
    if value < 0:
        return -1
    if not math.isfinite(value):
        return min_ttl
    if value == 0:
        return 0
    return max(1, math.ceil(value))
