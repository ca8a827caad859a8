"""Structured logging shared by all layers"""

import logging
import sys
from typing import Any

import structlog


def setup_logging(level: int | str = "INFO") -> None:
    """Configure structlog for JSON-formatted logging. Call once at startup."""
    logging.basicConfig(
        format="%(message)s",
        level=level,
        stream=sys.stdout,
    )

    if isinstance(level, str):
        min_level = logging.getLevelName(level.upper())
        if not isinstance(min_level, int):
            min_level = logging.INFO
    else:
        min_level = level

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(min_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> Any:
    """Return a structlog logger bound to the provided name."""
    return structlog.get_logger(name or "chess")
