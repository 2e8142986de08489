"""Shared Settings factories for tests."""

from __future__ import annotations

from feed_proxy_core.config.settings import Settings


def make_settings(**overrides: object) -> Settings:
    """Create a real Settings instance with test-friendly defaults.

    Override any field via keyword arguments.
    """
    defaults: dict[str, object] = {
        "metrics_port": 0,
        "log_level": "INFO",
        "log_format": "console",
        "upstream_timeout_seconds": 5.0,
        "cache_capacity": 10,
    }
    defaults.update(overrides)
    return Settings(_env_file=None, **defaults)  # type: ignore[arg-type]
