"""Application settings using pydantic-settings."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from feed_proxy_core.constants import (
    CAMPAIGN_CACHE_TTL_SECONDS,
    DEFAULT_CACHE_CAPACITY,
    POSTS_CACHE_TTL_SECONDS,
    SEARCH_CACHE_TTL_SECONDS,
)


class Settings(BaseSettings):
    """Central configuration for patreon-feed-proxy."""

    model_config = SettingsConfigDict(env_prefix="FP_", env_file=".env")

    # --- Server ---
    host: str = Field(
        default="0.0.0.0",
        description="Interface the HTTP server binds to",
    )
    port: int = Field(
        default=8000,
        description="Port for the feed/search HTTP server",
    )
    metrics_port: int = Field(
        default=2112,
        ge=0,
        description="Port for the Prometheus exporter (0 disables it)",
    )

    # --- Logging ---
    log_level: str = Field(
        default="INFO",
        description="Root log level",
    )
    log_format: Literal["console", "json"] = Field(
        default="console",
        description="Log renderer: 'console' for development, 'json' for production",
    )

    # --- Upstream ---
    upstream_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout per upstream request in seconds",
    )
    user_agent: str = Field(
        default="patreon-feed-proxy/0.1",
        description="User-Agent header sent to the upstream API",
    )

    # --- Cache ---
    cache_capacity: int = Field(
        default=DEFAULT_CACHE_CAPACITY,
        gt=0,
        description="Maximum entries held per resource kind",
    )
    campaign_cache_ttl_seconds: float = Field(
        default=CAMPAIGN_CACHE_TTL_SECONDS,
        gt=0,
        description="How long campaign metadata stays cached",
    )
    posts_cache_ttl_seconds: float = Field(
        default=POSTS_CACHE_TTL_SECONDS,
        gt=0,
        description="How long a campaign's post list stays cached",
    )
    search_cache_ttl_seconds: float = Field(
        default=SEARCH_CACHE_TTL_SECONDS,
        gt=0,
        description="How long search results stay cached",
    )
