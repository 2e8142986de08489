"""Search results returned by the upstream search endpoint."""

from __future__ import annotations

from pydantic import Field

from feed_proxy_core.models.base import APIModel


class SearchHitAttributes(APIModel):
    """Attributes of a campaign matched by a search."""

    name: str = Field(default="", description="Creator display name")
    url: str = Field(default="", description="Public campaign page URL")
    creation_name: str = Field(default="", description="What the creator is creating")
    summary: str = Field(default="", description="Campaign summary (HTML)")


class SearchHit(APIModel):
    """JSON:API resource object for a search hit."""

    id: str = Field(default="", description="Campaign ID as a string")
    type: str = Field(default="", description="Resource type, normally 'campaign'")
    attributes: SearchHitAttributes = Field(default_factory=SearchHitAttributes)


class SearchResponse(APIModel):
    """Top-level search endpoint document."""

    data: list[SearchHit] = Field(default_factory=list)
