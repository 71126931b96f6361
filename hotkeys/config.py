"""
Hotkeys Configuration
=====================
Centralized settings for the search engine and its HTTP surface.

Values are read from (highest priority first):
1. Keyword arguments passed to ``Settings(...)``
2. ``HOTKEYS_*`` environment variables
3. A local ``.env`` file (development)
"""
from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"
    warmup_on_startup: bool = True

    # Cache backend
    cache_backend: Literal["memory", "redis"] = "memory"
    redis_url: str = "redis://localhost:6379/0"
    redis_key_prefix: str = "hotkeys:"
    redis_timeout: float = 3.0
    redis_retry_after: float = 30.0

    # Cache lifetimes (seconds)
    search_cache_ttl: float = 5 * 60
    data_cache_ttl: float = 30 * 60
    usage_cache_ttl: float = 24 * 60 * 60

    # Search engine
    max_concurrent_searches: int = Field(default=3, ge=1)
    search_workers: int = Field(default=4, ge=1)

    # Default search options (see SearchOptions)
    enable_fuzzy_search: bool = True
    enable_abbreviation_search: bool = True
    use_cache: bool = True
    max_results: int = Field(default=50, ge=1)
    fuzzy_threshold: float = Field(default=60.0, ge=0.0, le=100.0)
    boost_recently_used: bool = True
    boost_popular_apps: bool = True

    model_config = SettingsConfigDict(
        env_prefix="HOTKEYS_",
        env_file=".env",
        extra="ignore",
    )


# Singleton settings instance
settings = Settings()
