"""Configuration management.

Uses pydantic-settings so every setting can be overridden from the
environment (prefix ``TABPROFILE_``) or a local ``.env`` file.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from tabprofile.assistant import CONTEXT_SAMPLE_ROWS
from tabprofile.cache import (
    DEFAULT_MAX_ENTRIES,
    DEFAULT_TTL_SECONDS,
    SAMPLE_TTL_SECONDS,
)
from tabprofile.profiling.profiler import DEFAULT_PAGE_SIZE, DEFAULT_SAMPLE_SIZE


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="TABPROFILE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = Field(default="INFO")

    # Cache
    cache_ttl_seconds: float = Field(
        default=float(DEFAULT_TTL_SECONDS),
        gt=0,
        description="Lifetime of cached pages and profiles",
    )
    sample_cache_ttl_seconds: float = Field(
        default=float(SAMPLE_TTL_SECONDS),
        gt=0,
        description="Lifetime of cached dataset samples",
    )
    cache_max_entries: int = Field(
        default=DEFAULT_MAX_ENTRIES,
        ge=1,
        description="Entries kept before least recently used ones are evicted",
    )

    # Dataset access
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1)
    sample_size: int = Field(default=DEFAULT_SAMPLE_SIZE, ge=1)
    context_sample_rows: int = Field(
        default=CONTEXT_SAMPLE_ROWS,
        ge=1,
        description="Rows handed to the assistant as sample data",
    )

    # Persistence
    profile_dir: Path | None = Field(
        default=None,
        description="Directory of the YAML profile store (disabled when unset)",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
