# src/transcache/config/settings.py
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for backend selection, TTLs and logging.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from transcache.exceptions import TranslationCacheError
from transcache.logging.handlers import parse_size


class ConfigurationError(TranslationCacheError):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Catalog store ===
    cache_backend: Literal["memory", "json", "sqlite", "redis"] = "json"
    cache_root: Path = Path("~/.transcache/cache")
    cache_redis_url: str = ""
    cache_group: str = "mo_cache"
    cache_default_ttl: int = 43200  # 12 hours
    cache_min_ttl: int = 60

    # === Domain index record ===
    record_backend: Literal["memory", "json", "sqlite"] = "json"
    record_root: Path = Path("~/.transcache/records")
    index_record_name: str = "transcache_domain_index"

    # === Host ===
    host_version: str = ""
    plugin_dir: Path = Path("plugins")

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 5

    # --- Validators ---

    @field_validator("cache_min_ttl")
    @classmethod
    def validate_min_ttl(cls, v: int) -> int:  # noqa: N805
        if v <= 0:
            raise ValueError("cache_min_ttl must be > 0")
        return v

    @field_validator("cache_default_ttl")
    @classmethod
    def validate_default_ttl(cls, v: int) -> int:  # noqa: N805
        if v < 0:
            raise ValueError("cache_default_ttl must be >= 0")
        return v

    @field_validator("log_rotation")
    @classmethod
    def validate_log_rotation(cls, v: str) -> str:  # noqa: N805
        parse_size(v)
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if self.cache_backend == "redis" and not self.cache_redis_url:
            errors.append("CACHE_REDIS_URL must be set when CACHE_BACKEND=redis")

        if not self.index_record_name.strip():
            errors.append("INDEX_RECORD_NAME must not be empty")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or CLI flags).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
