"""Read-through resolution: cache lookup, fetch, decode, populate."""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

import structlog
from pydantic import BaseModel

from feed_proxy_core.exceptions import ResolveError
from feed_proxy_core.interfaces.cache import CacheEventReporter, CacheOutcome, CacheStore
from feed_proxy_core.interfaces.upstream import UpstreamFetcher
from feed_proxy_core.models import CampaignResponse, PostsResponse, SearchResponse
from feed_proxy_infra.cache.memory_store import MemoryCacheStore
from feed_proxy_infra.cache.resource_kinds import ResourceKind, kinds_from_settings

if TYPE_CHECKING:
    from feed_proxy_core.config.settings import Settings

logger = structlog.get_logger()

K = TypeVar("K", bound=Hashable)
M = TypeVar("M", bound=BaseModel)


async def resolve(
    key: K,
    kind: ResourceKind[K, M],
    store: CacheStore[K, M],
    fetcher: UpstreamFetcher,
    reporter: CacheEventReporter,
) -> M:
    """Return the decoded value for ``key``, fetching it on a cache miss.

    A hit never touches the network. FetchError and DecodeError propagate
    with ``kind`` and ``key`` bound, and nothing is stored for a failed
    resolution. Concurrent misses for the same key each fetch; the last
    one to finish wins the slot.
    """
    value, found = store.get(key)
    if found:
        _report(reporter, kind.name, key, CacheOutcome.HIT)
        return value  # type: ignore[return-value]

    _report(reporter, kind.name, key, CacheOutcome.MISS)
    url = kind.url_for(key)
    try:
        body = await fetcher.fetch(url)
        decoded = kind.decode(body)
    except ResolveError as exc:
        exc.bind(kind.name, key)
        raise

    store.put(key, decoded)
    logger.debug("cache_populated", kind=kind.name, key=key)
    return decoded


def _report(
    reporter: CacheEventReporter, kind: str, key: Hashable, outcome: CacheOutcome
) -> None:
    """Forward an event to the reporter; a broken sink never fails a lookup."""
    try:
        reporter.report(kind, key, outcome)
    except Exception:
        logger.warning("cache_report_failed", kind=kind, outcome=outcome.value, exc_info=True)


@dataclass
class CachedResource(Generic[K, M]):
    """A resource kind bound to its store and collaborators."""

    kind: ResourceKind[K, M]
    store: MemoryCacheStore[K, M]
    fetcher: UpstreamFetcher
    reporter: CacheEventReporter

    async def get(self, key: K) -> M:
        """Resolve ``key`` through this resource's cache."""
        return await resolve(key, self.kind, self.store, self.fetcher, self.reporter)


@dataclass
class ResourceCaches:
    """Per-process cache context, one resource per upstream kind."""

    campaigns: CachedResource[int, CampaignResponse]
    posts: CachedResource[int, PostsResponse]
    search: CachedResource[str, SearchResponse]


def build_resource_caches(
    settings: Settings,
    fetcher: UpstreamFetcher,
    reporter: CacheEventReporter,
) -> ResourceCaches:
    """Create the three cached resources, each with its own store."""
    campaign, posts, search = kinds_from_settings(settings)
    capacity = settings.cache_capacity

    def _bind(kind: ResourceKind[K, M]) -> CachedResource[K, M]:
        store: MemoryCacheStore[K, M] = MemoryCacheStore(capacity, kind.ttl_seconds)
        return CachedResource(kind, store, fetcher, reporter)

    return ResourceCaches(
        campaigns=_bind(campaign),
        posts=_bind(posts),
        search=_bind(search),
    )
