"""Structured logging configuration using structlog.

Development runs get colored console output; production runs emit one JSON
object per line for log aggregation.

Usage:
    from src.core.logging import configure_logging, get_logger

    configure_logging()  # once, at startup

    logger = get_logger(__name__)
    logger.info("imgflip_meme_created", template_id="181913649")
"""

import logging
import sys
from os import getenv
from typing import Any, cast

import structlog
from structlog.types import Processor

# Libraries that are chatty at INFO and only interesting when they fail
QUIET_LOGGERS = ("discord", "aiohttp")


def configure_logging(
    development: bool | None = None,
    log_level: str | None = None,
) -> None:
    """Configure structlog and the standard library root logger.

    Args:
        development: True for pretty console output, False for JSON.
            Defaults to reading ENVIRONMENT (anything but "production"
            counts as development).
        log_level: DEBUG, INFO, WARNING or ERROR. Defaults to LOG_LEVEL,
            falling back to INFO.
    """
    if development is None:
        development = getenv("ENVIRONMENT", "development").lower() != "production"

    if log_level is None:
        log_level = getenv("LOG_LEVEL", "INFO").upper()

    numeric_level = getattr(logging, log_level, logging.INFO)

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if development:
        processors: list[Processor] = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=True),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # force=True replaces handlers installed by discord.py or earlier calls
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=numeric_level,
        force=True,
    )
    logging.getLogger().setLevel(numeric_level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger, usually named after the calling module."""
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))


def bind_contextvars(**kwargs: Any) -> None:
    """Attach key/value pairs to every log line emitted in this context.

    Example:
        bind_contextvars(correlation_id="1a2b3c4d", user_id=456)
        logger.info("interaction_started")  # carries both keys
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_contextvars() -> None:
    """Drop everything bound with bind_contextvars."""
    structlog.contextvars.clear_contextvars()
