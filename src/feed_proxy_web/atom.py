"""Atom feed rendering for a campaign's posts."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from datetime import UTC, datetime

from feed_proxy_core.constants import ATOM_CONTENT_TYPE, ATOM_NAMESPACE, HTML_CONTENT_TYPE
from feed_proxy_core.models import CampaignResponse, Post, PostsResponse

XML_PREFIX = '<?xml version="1.0" encoding="UTF-8"?>\n'

# Rendered for posts that carry no publication time
ZERO_TIME = "0001-01-01T00:00:00Z"

# Anything outside the XML 1.0 Char production
_INVALID_XML_CHARS = re.compile(
    r"[^\x09\x0a\x0d\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]"
)


def render_feed(
    campaign: CampaignResponse,
    posts: PostsResponse,
    self_url: str,
    now: datetime | None = None,
) -> bytes:
    """Render an Atom document for a campaign and its newest posts.

    The feed ``id`` and ``self`` link are the URL the feed was requested at.
    """
    attributes = campaign.data.attributes
    updated = (now if now is not None else datetime.now(UTC)).replace(microsecond=0)

    feed = ET.Element("feed", {"xmlns": ATOM_NAMESPACE})
    ET.SubElement(feed, "id").text = xml_text(self_url)
    ET.SubElement(feed, "title").text = xml_text(f"Patreon: {attributes.name}")
    ET.SubElement(feed, "updated").text = format_timestamp(updated)
    _link(feed, "alternate", HTML_CONTENT_TYPE, attributes.url)
    _link(feed, "self", ATOM_CONTENT_TYPE, self_url)

    for post in posts.data:
        feed.append(_entry(post))

    ET.indent(feed, space="  ")
    return (XML_PREFIX + ET.tostring(feed, encoding="unicode")).encode("utf-8")


def format_timestamp(value: datetime | None) -> str:
    """Format a timestamp as RFC 3339, treating naive values as UTC."""
    if value is None:
        return ZERO_TIME
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.isoformat().replace("+00:00", "Z")


def xml_text(value: str) -> str:
    """Replace characters XML 1.0 cannot carry with U+FFFD."""
    return _INVALID_XML_CHARS.sub("\ufffd", value)


def _entry(post: Post) -> ET.Element:
    attributes = post.attributes
    entry = ET.Element("entry")
    ET.SubElement(entry, "title").text = xml_text(attributes.title)

    # Locked posts have no content, only a plain-text teaser
    if attributes.content:
        content = ET.SubElement(entry, "content", {"type": "html"})
        content.text = xml_text(attributes.content)
    else:
        content = ET.SubElement(entry, "content", {"type": "text"})
        content.text = xml_text(attributes.teaser_text)

    _link(entry, "alternate", HTML_CONTENT_TYPE, attributes.url)
    ET.SubElement(entry, "updated").text = format_timestamp(attributes.published_at)
    return entry


def _link(parent: ET.Element, rel: str, type_: str, href: str) -> None:
    ET.SubElement(parent, "link", {"rel": rel, "type": type_, "href": xml_text(href)})
