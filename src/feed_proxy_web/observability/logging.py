"""structlog setup shared by the server and the CLI."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars, merge_contextvars

if TYPE_CHECKING:
    from feed_proxy_core.config.settings import Settings

# Loggers kept at WARNING or above; request_completed covers uvicorn's access log
_NOISY_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


def configure_logging(settings: Settings) -> None:
    """Route structlog and stdlib records (uvicorn, httpx) through one renderer.

    ``settings.log_format`` selects JSON lines or the dev console renderer.
    """
    pre_chain: list[structlog.types.Processor] = [
        merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer()
        if settings.log_format == "json"
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
            foreign_pre_chain=pre_chain,
        )
    )

    level = _resolve_level(settings.log_level)
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def bind_request_context(method: str, path: str) -> None:
    """Tag every log line of the current request with its method and path."""
    bind_contextvars(method=method, path=path)


def clear_request_context() -> None:
    """Drop request tags left over from a previous request."""
    clear_contextvars()


def _resolve_level(level_name: str) -> int:
    """Map a level name (any case) to its number, defaulting to INFO."""
    return logging.getLevelNamesMapping().get(level_name.upper(), logging.INFO)
