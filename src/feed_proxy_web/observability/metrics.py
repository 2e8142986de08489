"""Cache hit/miss reporting to Prometheus."""

from __future__ import annotations

from collections.abc import Hashable

import structlog
from prometheus_client import CollectorRegistry, Counter, start_http_server

from feed_proxy_core.constants import CACHE_CHECK_METRIC
from feed_proxy_core.interfaces.cache import CacheOutcome

logger = structlog.get_logger()


class PrometheusCacheReporter:
    """Counts cache lookups per resource kind and outcome.

    Each reporter owns its registry, so several apps (or tests) can coexist
    in one process without duplicate-metric errors.
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self.registry = registry if registry is not None else CollectorRegistry()
        self.cache_checks = Counter(
            CACHE_CHECK_METRIC,
            "Number of hits/misses for the app's in-memory cache of upstream API results",
            ["type", "hit"],
            registry=self.registry,
        )

    def report(self, kind: str, key: Hashable, outcome: CacheOutcome) -> None:
        """Increment the counter for ``kind`` and ``outcome``."""
        hit = "true" if outcome is CacheOutcome.HIT else "false"
        self.cache_checks.labels(type=kind, hit=hit).inc()
        logger.debug(f"cache_{outcome.value}", kind=kind, key=key)

    def count(self, kind: str, outcome: CacheOutcome) -> float:
        """Return the current counter value for one label pair."""
        hit = "true" if outcome is CacheOutcome.HIT else "false"
        value = self.registry.get_sample_value(
            f"{CACHE_CHECK_METRIC}_total", {"type": kind, "hit": hit}
        )
        return value or 0.0

    def serve(self, port: int, addr: str = "0.0.0.0") -> None:
        """Expose this registry on a background HTTP server."""
        start_http_server(port, addr=addr, registry=self.registry)
        logger.info("metrics_server_started", port=port)


class NullCacheReporter:
    """Discards cache events."""

    def report(self, kind: str, key: Hashable, outcome: CacheOutcome) -> None:
        """Do nothing."""
