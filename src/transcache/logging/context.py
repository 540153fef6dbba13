# src/transcache/logging/context.py
"""Contextual logging support: attach unit-of-work id and domain to log records."""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

# Set once per unit of work, and per domain while a catalog is being handled.
_unit_of_work_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "unit_of_work_id", default=None
)
_domain: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "domain", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    unit_of_work_id: str | None = None
    domain: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        unit_of_work_id=_unit_of_work_id.get(),
        domain=_domain.get(),
    )


def set_unit_of_work_context(unit_of_work_id: str) -> contextvars.Token:
    """Set the unit-of-work id. Returns a token for reset_unit_of_work_context()."""
    return _unit_of_work_id.set(unit_of_work_id)


def reset_unit_of_work_context(token: contextvars.Token) -> None:
    _unit_of_work_id.reset(token)


def set_domain_context(domain: str | None) -> None:
    """Set the text domain currently being handled."""
    _domain.set(domain or None)


def clear_context() -> None:
    """Reset all context variables."""
    _unit_of_work_id.set(None)
    _domain.set(None)
