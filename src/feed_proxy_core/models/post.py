"""Post listings returned by the upstream posts endpoint."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from feed_proxy_core.models.base import APIModel


class PostAttributes(APIModel):
    """Fields requested through ``fields[post]``."""

    title: str = Field(default="", description="Post title")
    url: str = Field(default="", description="Public post URL")
    content: str = Field(default="", description="HTML body, empty when not visible")
    teaser_text: str = Field(default="", description="Plain-text teaser")
    published_at: datetime | None = Field(default=None, description="Publication time")


class Post(APIModel):
    """JSON:API resource object for a post."""

    id: str = Field(default="", description="Post ID as a string")
    attributes: PostAttributes = Field(default_factory=PostAttributes)


class PostsResponse(APIModel):
    """Top-level posts endpoint document, newest first."""

    data: list[Post] = Field(default_factory=list)
