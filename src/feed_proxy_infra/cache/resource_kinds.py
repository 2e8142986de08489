"""Resource kinds fronted by the cache: URL template, decoded type, TTL."""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

import structlog
from pydantic import BaseModel, ValidationError

from feed_proxy_core.constants import (
    CAMPAIGN_URL_TEMPLATE,
    POSTS_URL_TEMPLATE,
    SEARCH_URL_TEMPLATE,
)
from feed_proxy_core.exceptions import DecodeError, excerpt
from feed_proxy_core.models import CampaignResponse, PostsResponse, SearchResponse

if TYPE_CHECKING:
    from feed_proxy_core.config.settings import Settings

logger = structlog.get_logger()

K = TypeVar("K", bound=Hashable)
M = TypeVar("M", bound=BaseModel)


@dataclass(frozen=True)
class ResourceKind(Generic[K, M]):
    """One upstream data category with its own cache namespace."""

    name: str
    url_template: str
    model: type[M]
    ttl_seconds: float

    def url_for(self, key: K) -> str:
        """Substitute the key into the URL template.

        String keys are inserted verbatim; callers percent-encode them.
        """
        return self.url_template.format(key=key)

    def decode(self, body: bytes) -> M:
        """Parse a response body into this kind's model.

        Raises DecodeError if the body is not valid JSON or has the wrong shape.
        """
        try:
            return self.model.model_validate_json(body)
        except ValidationError as exc:
            logger.warning("decode_failed", kind=self.name, errors=exc.error_count())
            raise DecodeError(excerpt(body), exc) from exc


def campaign_kind(ttl_seconds: float) -> ResourceKind[int, CampaignResponse]:
    """Campaign metadata keyed by numeric campaign ID."""
    return ResourceKind("campaign", CAMPAIGN_URL_TEMPLATE, CampaignResponse, ttl_seconds)


def posts_kind(ttl_seconds: float) -> ResourceKind[int, PostsResponse]:
    """Newest-first, non-draft posts keyed by numeric campaign ID."""
    return ResourceKind("posts", POSTS_URL_TEMPLATE, PostsResponse, ttl_seconds)


def search_kind(ttl_seconds: float) -> ResourceKind[str, SearchResponse]:
    """Campaign search results keyed by an escaped query string."""
    return ResourceKind("search", SEARCH_URL_TEMPLATE, SearchResponse, ttl_seconds)


def kinds_from_settings(
    settings: Settings,
) -> tuple[
    ResourceKind[int, CampaignResponse],
    ResourceKind[int, PostsResponse],
    ResourceKind[str, SearchResponse],
]:
    """Build the three resource kinds with TTLs taken from settings."""
    return (
        campaign_kind(settings.campaign_cache_ttl_seconds),
        posts_kind(settings.posts_cache_ttl_seconds),
        search_kind(settings.search_cache_ttl_seconds),
    )
