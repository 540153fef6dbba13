# src/transcache/exceptions.py
"""Error taxonomy for the translation cache.

None of these ever reach the caller of a cache lookup: the controller turns
them into a miss or a skipped write.
"""

from __future__ import annotations


class TranslationCacheError(Exception):
    """Base class for all transcache errors."""


class StoreError(TranslationCacheError):
    """A catalog store or durable record backend operation failed."""


class CatalogParseError(TranslationCacheError):
    """A catalog file could not be read or is malformed."""
