"""Observability: structured logging and cache metrics."""

from feed_proxy_web.observability.logging import (
    bind_request_context,
    clear_request_context,
    configure_logging,
)
from feed_proxy_web.observability.metrics import NullCacheReporter, PrometheusCacheReporter

__all__ = [
    "NullCacheReporter",
    "PrometheusCacheReporter",
    "bind_request_context",
    "clear_request_context",
    "configure_logging",
]
