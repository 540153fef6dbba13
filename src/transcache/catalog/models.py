# src/transcache/catalog/models.py
"""Catalog model: parsed translation entries plus headers."""

from __future__ import annotations

from typing import Any, Union

from pydantic import BaseModel, Field

# A plural entry keeps every translated form, in plural-index order.
Translation = Union[str, list[str]]


class Catalog(BaseModel):
    """Parsed set of translations for one domain/locale pair."""

    entries: dict[str, Translation] = Field(default_factory=dict)
    headers: dict[str, str] = Field(default_factory=dict)

    def merge_with(self, other: Catalog) -> Catalog:
        """Return a new catalog where this catalog's entries win.

        Entries and headers of ``other`` are kept when this catalog does not
        override them.
        """
        return Catalog(
            entries={**other.entries, **self.entries},
            headers={**other.headers, **self.headers},
        )

    def translate(self, msgid: str) -> str | None:
        """Return the singular translation for ``msgid``, or None."""
        value = self.entries.get(msgid)
        if isinstance(value, list):
            return value[0] if value else None
        return value

    def to_payload(self) -> dict[str, Any]:
        """Serialize into the mapping written to the catalog store."""
        return self.model_dump(mode="json")

    @classmethod
    def from_payload(cls, payload: Any) -> Catalog | None:
        """Rebuild a catalog from a stored payload.

        Returns None unless the payload carries both ``entries`` and
        ``headers`` mappings.
        """
        if not isinstance(payload, dict):
            return None
        entries = payload.get("entries")
        headers = payload.get("headers")
        if not isinstance(entries, dict) or not isinstance(headers, dict):
            return None
        try:
            return cls(entries=entries, headers=headers)
        except ValueError:
            return None
