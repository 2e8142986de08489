"""Campaign metadata returned by the upstream campaigns endpoint."""

from __future__ import annotations

from pydantic import Field

from feed_proxy_core.models.base import APIModel


class CampaignAttributes(APIModel):
    """Public attributes of a creator's campaign."""

    name: str = Field(default="", description="Creator or campaign display name")
    url: str = Field(default="", description="Public campaign page URL")


class CampaignData(APIModel):
    """JSON:API resource object for a campaign."""

    id: str = Field(default="", description="Campaign ID as a string")
    attributes: CampaignAttributes = Field(default_factory=CampaignAttributes)


class CampaignResponse(APIModel):
    """Top-level campaigns endpoint document."""

    data: CampaignData = Field(default_factory=CampaignData)
