# src/transcache/integration/resolvers.py
"""Resolve the text domain declared by a plugin-like unit."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Mapping, Protocol

logger = logging.getLogger(__name__)

# Plugin headers live in the first 8 KiB of the main file.
_HEADER_BYTES = 8192
_TEXT_DOMAIN_RE = re.compile(r"^[ \t/*#@]*Text Domain:(.*)$", re.IGNORECASE | re.MULTILINE)


class DomainResolver(Protocol):
    """Maps a plugin-like unit identifier to the text domain it declares."""

    def resolve(self, unit: str) -> str | None: ...


class PluginHeaderResolver:
    """Reads the ``Text Domain:`` header of a plugin's main file."""

    def __init__(self, plugin_dir: Path | str) -> None:
        self._plugin_dir = Path(plugin_dir).expanduser()

    def resolve(self, unit: str) -> str | None:
        path = Path(unit)
        if not path.is_file():
            path = self._plugin_dir / unit
        if not path.is_file():
            logger.debug("Plugin file not found: %s", unit)
            return None

        try:
            with path.open("rb") as fh:
                head = fh.read(_HEADER_BYTES).decode("utf-8", errors="replace")
        except OSError as e:
            logger.warning("Cannot read plugin headers of %s: %s", path, e)
            return None

        match = _TEXT_DOMAIN_RE.search(head.replace("\r", "\n"))
        if not match:
            return None
        domain = re.sub(r"\s*(?:\*/|\?>).*$", "", match.group(1)).strip()
        return domain or None


class StaticDomainResolver:
    """Resolver backed by a fixed unit -> domain mapping."""

    def __init__(self, mapping: Mapping[str, str]) -> None:
        self._mapping = dict(mapping)

    def resolve(self, unit: str) -> str | None:
        return self._mapping.get(unit) or None
