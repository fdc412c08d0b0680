"""Logging configuration for crisisverify."""

import logging
import os

import structlog


def configure_logging(level: str | None = None, json: bool = False) -> None:
    """Configure structlog on top of standard library logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). If None, reads from
               CRISISVERIFY_LOG_LEVEL, then LOG_LEVEL, defaulting to INFO.
        json: Render one JSON object per line instead of colored console output.
    """
    log_level = (
        level
        or os.environ.get("CRISISVERIFY_LOG_LEVEL")
        or os.environ.get("LOG_LEVEL", "INFO")
    ).upper()
    numeric_level = getattr(logging, log_level, logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        level=numeric_level,
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if json
        else structlog.dev.ConsoleRenderer(colors=True)
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
