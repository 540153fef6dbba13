# src/transcache/logging/handlers.py
"""File rotation handler for the LOG_FILE setting."""

from __future__ import annotations

import re
from logging.handlers import RotatingFileHandler
from pathlib import Path

_SIZE_RE = re.compile(r"^(\d+)\s*(B|KB|MB|GB)?$", re.IGNORECASE)
_MULTIPLIERS = {"B": 1, "KB": 1024, "MB": 1024**2, "GB": 1024**3}


def parse_size(size: str | int) -> int:
    """Parse a LOG_ROTATION value like '10MB' into bytes.

    A bare number is a byte count. 0 disables rotation.
    """
    if isinstance(size, int):
        if size < 0:
            raise ValueError(f"Invalid size: {size!r}. Must be >= 0.")
        return size
    match = _SIZE_RE.match(size.strip())
    if not match:
        raise ValueError(f"Invalid size format: {size!r}. Use e.g. '10MB'.")
    unit = (match.group(2) or "B").upper()
    return int(match.group(1)) * _MULTIPLIERS[unit]


def create_rotating_handler(
    log_file: str | Path,
    rotation: str | int = "10MB",
    retention: int = 5,
) -> RotatingFileHandler:
    """Create a rotating file handler.

    The file is opened on the first record, so a CLI run that logs nothing
    leaves no empty log behind.

    Args:
        log_file: Path to log file.
        rotation: Max file size before rotation (e.g. "10MB", 0 = never).
        retention: Number of backup files to keep.
    """
    path = Path(log_file).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)

    return RotatingFileHandler(
        filename=str(path),
        maxBytes=parse_size(rotation),
        backupCount=retention,
        encoding="utf-8",
        delay=True,
    )
