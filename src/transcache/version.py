# src/transcache/version.py
"""Package and cache-format versions.

CACHE_FORMAT_VERSION is mixed into every fingerprint. Bump it to orphan
every previously stored catalog at once.
"""

__version__ = "1.0.1"

CACHE_FORMAT_VERSION = "1.0.1"
