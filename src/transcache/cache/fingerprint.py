# src/transcache/cache/fingerprint.py
"""Cache key derivation for translation catalogs.

A fingerprint is the SHA-256 of cache-format version, seed, domain and
source path joined with NUL. The domain is part of the hash, so two domains
never share a fingerprint.
"""

from __future__ import annotations

import hashlib

from transcache.version import CACHE_FORMAT_VERSION

DEFAULT_DOMAIN = "default"


def is_default_domain(domain: object) -> bool:
    """True for the host core domain ("" or "default")."""
    return not domain or domain == DEFAULT_DOMAIN


def derive_fingerprint(
    domain: object,
    source_path: object,
    seed: object = "",
    *,
    host_version: object = "",
    format_version: str = CACHE_FORMAT_VERSION,
) -> str:
    """Derive the store key for a (domain, source path) pair.

    Args:
        domain: Text domain. Non-strings are treated as "".
        source_path: Path of the catalog file.
        seed: Invalidation seed, e.g. the owning plugin's version.
        host_version: Host core version. Used as seed for the default
            domain when no seed is given.
        format_version: Cache format version.

    Returns:
        64-char hex digest.
    """
    domain = _as_str(domain)
    source_path = _as_str(source_path)
    seed = _as_str(seed)

    if is_default_domain(domain) and not seed:
        seed = _as_str(host_version)

    material = "\0".join((_as_str(format_version), seed, domain, source_path))
    return hashlib.sha256(material.encode("utf-8")).hexdigest()


def _as_str(value: object) -> str:
    return value if isinstance(value, str) else ""
