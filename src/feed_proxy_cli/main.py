"""CLI entrypoint using typer."""

from __future__ import annotations

import asyncio

import structlog
import typer
import uvicorn
from rich.console import Console

from feed_proxy_core.config.settings import Settings
from feed_proxy_core.exceptions import ResolveError
from feed_proxy_infra.cache.resolver import build_resource_caches
from feed_proxy_infra.upstream.httpx_fetcher import HttpxUpstreamFetcher
from feed_proxy_web.app import create_app
from feed_proxy_web.observability import (
    NullCacheReporter,
    PrometheusCacheReporter,
    configure_logging,
)

app = typer.Typer(
    name="feed-proxy",
    help="Caching proxy that turns Patreon creator posts into Atom feeds",
)
console = Console()
logger = structlog.get_logger()


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Interface to bind"),
    port: int | None = typer.Option(None, "--port", help="HTTP port for feeds and search"),
    metrics_port: int | None = typer.Option(
        None, "--metrics-port", help="Prometheus exporter port (0 disables)"
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """Run the feed proxy HTTP server."""
    settings = Settings()
    if host is not None:
        settings.host = host
    if port is not None:
        settings.port = port
    if metrics_port is not None:
        settings.metrics_port = metrics_port
    if verbose:
        settings.log_level = "DEBUG"

    configure_logging(settings)

    reporter = PrometheusCacheReporter()
    if settings.metrics_port:
        reporter.serve(settings.metrics_port, addr=settings.host)

    console.print(
        f"[bold green]Serving feeds on[/bold green] http://{settings.host}:{settings.port}"
    )
    uvicorn.run(
        create_app(settings, reporter=reporter),
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


@app.command()
def check(
    campaign_id: int = typer.Argument(..., help="Numeric Patreon campaign ID"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """Resolve one campaign and its posts, and print a summary."""
    settings = Settings()
    if verbose:
        settings.log_level = "DEBUG"
    configure_logging(settings)

    try:
        name, post_count = asyncio.run(_check(settings, campaign_id))
    except ResolveError as exc:
        console.print(f"[red]Error:[/red] {exc.stage}: {exc}")
        raise typer.Exit(code=1) from exc

    console.print(f"[bold]Campaign:[/bold] {name}")
    console.print(f"  Posts: {post_count}")


async def _check(settings: Settings, campaign_id: int) -> tuple[str, int]:
    """Fetch campaign metadata and posts through a throwaway cache context."""
    fetcher = HttpxUpstreamFetcher(
        timeout_seconds=settings.upstream_timeout_seconds,
        user_agent=settings.user_agent,
    )
    try:
        caches = build_resource_caches(settings, fetcher, NullCacheReporter())
        campaign = await caches.campaigns.get(campaign_id)
        posts = await caches.posts.get(campaign_id)
    finally:
        await fetcher.aclose()
    return campaign.data.attributes.name, len(posts.data)


if __name__ == "__main__":
    app()
