"""
Structured logging for the shopping assistant.

One structlog pipeline for the whole process: colored console lines while
developing, one JSON object per line in production. Request-scoped values
(request_id, path, user_id) travel through structlog's contextvars.

Usage:
    from core.logging import configure_logging, get_logger

    configure_logging(json_logs=False)   # or configure_from_settings(settings)

    logger = get_logger(__name__)
    logger.info("Search completed", user_id="guest", returned=3)
"""

import logging
import sys
from typing import Any, List, Optional

import structlog
from structlog.types import Processor

from config.settings import Settings


# Chatty third-party loggers held at WARNING.
NOISY_LOGGERS = ("urllib3", "uvicorn.access", "redis")


def _base_processors(include_timestamp: bool) -> List[Processor]:
    processors: List[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if include_timestamp:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))
    return processors


def _renderers(json_logs: bool) -> List[Processor]:
    if json_logs:
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(
        colors=True,
        exception_formatter=structlog.dev.plain_traceback,
    )]


def configure_logging(
    json_logs: bool = False,
    log_level: str = "INFO",
    include_timestamp: bool = True,
) -> None:
    """
    Configure structlog and the stdlib root logger.

    Args:
        json_logs: JSON lines (production) instead of console output
        log_level: Minimum level name (DEBUG, INFO, WARNING, ...)
        include_timestamp: Prefix every event with an ISO timestamp
    """
    structlog.configure(
        processors=_base_processors(include_timestamp) + _renderers(json_logs),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
        force=True,
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def configure_from_settings(settings: Settings) -> None:
    """JSON logs in production, DEBUG level when settings.debug is on."""
    configure_logging(
        json_logs=settings.is_production,
        log_level="DEBUG" if settings.debug else "INFO",
    )


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Attach values to every log line emitted later in this request."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Drop all request-scoped values. The tracing middleware calls this per request."""
    structlog.contextvars.clear_contextvars()
