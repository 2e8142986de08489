"""Domain models for patreon-feed-proxy."""

from feed_proxy_core.models.campaign import CampaignAttributes, CampaignData, CampaignResponse
from feed_proxy_core.models.post import Post, PostAttributes, PostsResponse
from feed_proxy_core.models.search import SearchHit, SearchHitAttributes, SearchResponse

__all__ = [
    "CampaignAttributes",
    "CampaignData",
    "CampaignResponse",
    "Post",
    "PostAttributes",
    "PostsResponse",
    "SearchHit",
    "SearchHitAttributes",
    "SearchResponse",
]
