"""Shared constants for patreon-feed-proxy."""

from __future__ import annotations

# Content types served by the web layer
ATOM_CONTENT_TYPE = "application/atom+xml"
HTML_CONTENT_TYPE = "text/html"
ATOM_NAMESPACE = "http://www.w3.org/2005/Atom"

# Upstream Patreon JSON:API endpoints, formatted with ``key``
CAMPAIGN_URL_TEMPLATE = "https://www.patreon.com/api/campaigns/{key}"
POSTS_URL_TEMPLATE = (
    "https://www.patreon.com/api/posts"
    "?fields[post]=title,url,teaser_text,content,published_at"
    "&filter[campaign_id]={key}"
    "&filter[contains_exclusive_posts]=true"
    "&filter[is_draft]=false"
    "&sort=-published_at"
    "&json-api-version=1.0"
    "&json-api-use-default-includes=false"
)
SEARCH_URL_TEMPLATE = (
    "https://www.patreon.com/api/search?q={key}&page%5Bsize%5D=5&json-api-version=1.0&include=[]"
)

# Cache defaults per resource kind
DEFAULT_CACHE_CAPACITY = 1000
CAMPAIGN_CACHE_TTL_SECONDS = 24 * 60 * 60
POSTS_CACHE_TTL_SECONDS = 15 * 60
SEARCH_CACHE_TTL_SECONDS = 60 * 60

# Prometheus counter for cache lookups
CACHE_CHECK_METRIC = "upstream_api_cache_check"
