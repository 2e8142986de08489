"""FastAPI application serving Atom feeds and campaign search."""

from __future__ import annotations

import re
import time
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from pathlib import Path

import structlog
from fastapi import APIRouter, Depends, FastAPI, Request, Response
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse

from feed_proxy_core.config.settings import Settings
from feed_proxy_core.constants import ATOM_CONTENT_TYPE
from feed_proxy_core.exceptions import ResolveError
from feed_proxy_core.interfaces.cache import CacheEventReporter
from feed_proxy_infra.cache.resolver import ResourceCaches, build_resource_caches
from feed_proxy_infra.upstream.httpx_fetcher import HttpxUpstreamFetcher
from feed_proxy_web.atom import render_feed
from feed_proxy_web.observability import (
    PrometheusCacheReporter,
    bind_request_context,
    clear_request_context,
)
from feed_proxy_web.search import escape_query, translate_results

logger = structlog.get_logger()

_ID_PATTERN = re.compile(r"[+-]?[0-9]+")

HOME_HTML = (Path(__file__).parent / "static" / "home.html").read_text(encoding="utf-8")

router = APIRouter()


def get_caches(request: Request) -> ResourceCaches:
    """Return the process-wide cache context attached to the app."""
    return request.app.state.caches  # type: ignore[no-any-return]


def _fail(stage: str, exc: ResolveError) -> PlainTextResponse:
    """Render a resolution failure as a 500 naming the failing stage."""
    logger.error(
        "resolve_failed",
        stage=stage,
        error_stage=exc.stage,
        kind=exc.kind,
        key=exc.key,
        error=str(exc),
    )
    return PlainTextResponse(f"internal error: {stage}: {exc}", status_code=500)


def _parse_id(raw: str | None) -> int:
    """Parse a campaign ID, returning 0 when absent or not a signed 64-bit decimal.

    Whitespace, underscores and non-ASCII digits are rejected.
    """
    if not raw or len(raw) > 20 or not _ID_PATTERN.fullmatch(raw):
        return 0
    value = int(raw)
    if not -(2**63) <= value < 2**63:
        return 0
    return value


@router.get("/", response_class=HTMLResponse)
async def home() -> HTMLResponse:
    """Landing page with a search box."""
    return HTMLResponse(HOME_HTML)


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    """Liveness check."""
    return {"status": "ok"}


@router.get("/feed", name="feed")
async def feed(
    request: Request,
    caches: ResourceCaches = Depends(get_caches),
) -> Response:
    """Atom feed of a campaign's newest posts."""
    campaign_id = _parse_id(request.query_params.get("id"))
    if campaign_id == 0:
        return PlainTextResponse("bad/missing param: id", status_code=400)

    try:
        campaign = await caches.campaigns.get(campaign_id)
    except ResolveError as exc:
        return _fail("fetch campaign", exc)

    try:
        posts = await caches.posts.get(campaign_id)
    except ResolveError as exc:
        return _fail("fetch posts", exc)

    body = render_feed(campaign, posts, self_url=str(request.url))
    return Response(content=body, media_type=ATOM_CONTENT_TYPE)


@router.get("/search")
async def search(
    request: Request,
    caches: ResourceCaches = Depends(get_caches),
) -> Response:
    """Find campaigns by name and return their feed URLs."""
    query = request.query_params.get("q", "")
    if not query.strip():
        return JSONResponse([])

    try:
        response = await caches.search.get(escape_query(query))
    except ResolveError as exc:
        return _fail("search", exc)

    results = translate_results(response, feed_base_url=str(request.url_for("feed")))
    return JSONResponse([result.model_dump() for result in results])


def create_app(
    settings: Settings,
    caches: ResourceCaches | None = None,
    reporter: CacheEventReporter | None = None,
) -> FastAPI:
    """Build the application with one cache context for the process.

    When ``caches`` is omitted an httpx fetcher is created and closed with
    the app's lifespan.
    """
    if reporter is None:
        reporter = PrometheusCacheReporter()

    fetcher: HttpxUpstreamFetcher | None = None
    if caches is None:
        fetcher = HttpxUpstreamFetcher(
            timeout_seconds=settings.upstream_timeout_seconds,
            user_agent=settings.user_agent,
        )
        caches = build_resource_caches(settings, fetcher, reporter)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        yield
        if fetcher is not None:
            await fetcher.aclose()

    app = FastAPI(title="patreon-feed-proxy", lifespan=lifespan)
    app.state.settings = settings
    app.state.caches = caches
    app.state.reporter = reporter
    app.include_router(router)

    @app.middleware("http")
    async def request_context(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        clear_request_context()
        bind_request_context(request.method, request.url.path)
        start = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "request_completed",
            status=response.status_code,
            duration_ms=round((time.perf_counter() - start) * 1000, 1),
        )
        return response

    return app
