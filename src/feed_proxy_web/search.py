"""Translate upstream search results into feed lookups."""

from __future__ import annotations

import re
from urllib.parse import quote_plus

from pydantic import BaseModel, Field

from feed_proxy_core.models import SearchResponse

_TRAILING_DIGITS = re.compile(r"(\d+)$")


class SearchResult(BaseModel):
    """A campaign match with the feed URL that serves it."""

    id: int = Field(description="Numeric campaign ID")
    name: str = Field(description="Creator display name")
    url: str = Field(description="Public campaign page URL")
    creation_name: str = Field(default="", description="What the creator is creating")
    feed_url: str = Field(description="Atom feed URL on this service")


def escape_query(query: str) -> str:
    """Percent-encode a free-text query for use as a cache key and URL parameter."""
    return quote_plus(query)


def campaign_id(hit_id: str) -> int | None:
    """Extract the numeric campaign ID from a search hit ID such as ``campaign_123``."""
    match = _TRAILING_DIGITS.search(hit_id)
    return int(match.group(1)) if match else None


def translate_results(response: SearchResponse, feed_base_url: str) -> list[SearchResult]:
    """Map search hits to results, skipping hits with no usable campaign ID."""
    results: list[SearchResult] = []
    for hit in response.data:
        cid = campaign_id(hit.id)
        if cid is None:
            continue
        results.append(
            SearchResult(
                id=cid,
                name=hit.attributes.name,
                url=hit.attributes.url,
                creation_name=hit.attributes.creation_name,
                feed_url=f"{feed_base_url}?id={cid}",
            )
        )
    return results
