"""Structured logging configuration using structlog.

Diagnostics always go to stderr so that rendered diffs on stdout can be
piped or redirected on their own. ``json`` is the default format;
``console`` renders key=value lines for someone watching a terminal.
"""

from __future__ import annotations

import logging
import sys

import structlog

LOG_FORMATS = ("json", "console")


def setup_logging(level: str = "warning", fmt: str = "json") -> None:
    """Configure structlog for *fmt* output to stderr at *level*."""
    log_level = getattr(logging, level.upper(), logging.WARNING)
    renderer: structlog.typing.Processor
    if fmt == "console":
        renderer = structlog.dev.ConsoleRenderer(colors=False)
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="ts"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(component: str) -> structlog.stdlib.BoundLogger:
    """Get a logger bound with a component name."""
    return structlog.get_logger(component=component)  # type: ignore[return-value]
