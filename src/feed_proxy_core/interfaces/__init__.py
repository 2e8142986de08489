"""Public interface re-exports for feed_proxy_core."""

from feed_proxy_core.interfaces.cache import CacheEventReporter, CacheOutcome, CacheStore
from feed_proxy_core.interfaces.upstream import UpstreamFetcher

__all__ = [
    "CacheEventReporter",
    "CacheOutcome",
    "CacheStore",
    "UpstreamFetcher",
]
