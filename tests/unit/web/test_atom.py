"""Tests for Atom feed rendering."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from datetime import UTC, datetime, timedelta, timezone

import pytest

from feed_proxy_core.models import CampaignResponse, PostsResponse
from feed_proxy_web.atom import XML_PREFIX, format_timestamp, render_feed, xml_text
from tests.mocks.mock_payloads import campaign_body, posts_body

NS = {"atom": "http://www.w3.org/2005/Atom"}
SELF_URL = "http://feeds.test/feed?id=42"
NOW = datetime(2024, 6, 1, 12, 0, tzinfo=UTC)


def _render() -> tuple[bytes, ET.Element]:
    """Render the canned campaign and posts."""
    campaign = CampaignResponse.model_validate_json(campaign_body(name="Alice"))
    posts = PostsResponse.model_validate_json(posts_body())
    body = render_feed(campaign, posts, self_url=SELF_URL, now=NOW)
    return body, ET.fromstring(body)


@pytest.mark.unit
class TestRenderFeed:
    """Test the Atom document structure."""

    def test_xml_prefix(self) -> None:
        """Document starts with the XML declaration."""
        body, _ = _render()
        assert body.startswith(XML_PREFIX.encode())

    def test_feed_metadata(self) -> None:
        """Feed id, title, updated and links come from the campaign and request."""
        _, root = _render()
        assert root.tag == "{http://www.w3.org/2005/Atom}feed"
        assert root.findtext("atom:id", namespaces=NS) == SELF_URL
        assert root.findtext("atom:title", namespaces=NS) == "Patreon: Alice"
        assert root.findtext("atom:updated", namespaces=NS) == "2024-06-01T12:00:00Z"
        links = {link.get("rel"): link.attrib for link in root.findall("atom:link", NS)}
        assert links["alternate"]["href"] == "https://www.patreon.com/test"
        assert links["alternate"]["type"] == "text/html"
        assert links["self"]["href"] == SELF_URL
        assert links["self"]["type"] == "application/atom+xml"

    def test_entries_prefer_html_content(self) -> None:
        """Posts with content are html; locked posts fall back to the teaser."""
        _, root = _render()
        entries = root.findall("atom:entry", NS)
        assert len(entries) == 2

        open_content = entries[0].find("atom:content", NS)
        assert open_content is not None
        assert open_content.get("type") == "html"
        assert open_content.text == "<p>Hello <b>world</b></p>"

        locked_content = entries[1].find("atom:content", NS)
        assert locked_content is not None
        assert locked_content.get("type") == "text"
        assert locked_content.text == "Patrons only"

    def test_entry_link_and_updated(self) -> None:
        """Entries link to the post and use its publication time."""
        _, root = _render()
        entry = root.findall("atom:entry", NS)[0]
        assert entry.findtext("atom:title", namespaces=NS) == "Open post"
        link = entry.find("atom:link", NS)
        assert link is not None
        assert link.get("href") == "https://www.patreon.com/posts/open-2"
        assert link.get("rel") == "alternate"
        assert entry.findtext("atom:updated", namespaces=NS) == "2024-05-02T10:00:00Z"

    def test_html_is_escaped(self) -> None:
        """HTML content is escaped, not embedded as markup."""
        body, _ = _render()
        assert b"&lt;p&gt;Hello" in body

    def test_empty_posts(self) -> None:
        """A campaign with no posts yields a feed with no entries."""
        campaign = CampaignResponse.model_validate_json(campaign_body())
        body = render_feed(campaign, PostsResponse(), self_url=SELF_URL, now=NOW)
        assert ET.fromstring(body).findall("atom:entry", NS) == []


@pytest.mark.unit
class TestFormatTimestamp:
    """Test RFC 3339 formatting."""

    def test_missing_time_is_zero(self) -> None:
        """Posts without a publication time render the zero time."""
        assert format_timestamp(None) == "0001-01-01T00:00:00Z"

    def test_naive_is_treated_as_utc(self) -> None:
        """Naive datetimes are assumed UTC."""
        assert format_timestamp(datetime(2024, 1, 2, 3, 4, 5)) == "2024-01-02T03:04:05Z"

    def test_offset_preserved(self) -> None:
        """Non-UTC offsets are kept."""
        tz = timezone(timedelta(hours=2))
        assert format_timestamp(datetime(2024, 1, 2, 3, 4, 5, tzinfo=tz)) == (
            "2024-01-02T03:04:05+02:00"
        )


@pytest.mark.unit
class TestInvalidXmlCharacters:
    """Test that upstream control characters never break the document."""

    def test_control_characters_replaced(self) -> None:
        """C0 controls in names, titles and bodies become U+FFFD and the feed parses."""
        campaign = CampaignResponse.model_validate(
            {"data": {"attributes": {"name": "Ali\u0001ce", "url": "https://x.test/\u0002"}}}
        )
        posts = PostsResponse.model_validate(
            {
                "data": [
                    {"attributes": {"title": "Bell\u0007 post", "content": "<p>x\u000b</p>"}},
                    {"attributes": {"title": "Locked", "teaser_text": "tease\u001f"}},
                ]
            }
        )

        root = ET.fromstring(render_feed(campaign, posts, self_url=SELF_URL, now=NOW))

        assert root.findtext("atom:title", namespaces=NS) == "Patreon: Ali\ufffdce"
        entries = root.findall("atom:entry", NS)
        assert entries[0].findtext("atom:title", namespaces=NS) == "Bell\ufffd post"
        assert entries[0].findtext("atom:content", namespaces=NS) == "<p>x\ufffd</p>"
        assert entries[1].findtext("atom:content", namespaces=NS) == "tease\ufffd"

    @pytest.mark.parametrize("text", ["tab\there", "line\nbreak", "cr\rhere", "emoji \U0001f600"])
    def test_allowed_characters_kept(self, text: str) -> None:
        """Tab, newline, carriage return and astral characters pass through."""
        assert xml_text(text) == text


@pytest.mark.unit
class TestFeedUpdated:
    """Test the feed-level timestamp."""

    def test_updated_has_whole_seconds(self) -> None:
        """Sub-second precision is dropped from the feed's updated element."""
        campaign = CampaignResponse.model_validate_json(campaign_body())
        now = datetime(2024, 6, 1, 12, 0, 5, 123456, tzinfo=UTC)
        root = ET.fromstring(render_feed(campaign, PostsResponse(), self_url=SELF_URL, now=now))
        assert root.findtext("atom:updated", namespaces=NS) == "2024-06-01T12:00:05Z"
