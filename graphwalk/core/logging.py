"""Structured logging using structlog.

Log output always goes to stderr: stdout carries CLI JSON output and the
MCP stdio transport.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import Processor

from graphwalk.core.config import LoggingSettings, get_settings


def setup_logging(settings: LoggingSettings | None = None) -> None:
    """Configure structlog and the standard library root logger.

    Args:
        settings: Logging settings. Uses global settings if not provided.
    """
    if settings is None:
        settings = get_settings().logging

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.include_timestamp:
        shared_processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if settings.format == "json":
        format_processors: list[Processor] = [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        format_processors = [structlog.dev.ConsoleRenderer(colors=False)]

    structlog.configure(
        processors=shared_processors + format_processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, settings.level),
        force=True,
    )


def get_logger(name: str | None = None, **initial_context: Any) -> structlog.stdlib.BoundLogger:
    """Get a logger, optionally bound to initial context.

    Events go through the standard library logger of the same name, so until
    ``setup_logging`` runs only warnings and above are emitted, on stderr.

    Example:
        logger = get_logger(__name__, operation="max_flow")
        logger.debug("augmented", bottleneck=3)
    """
    logger = structlog.wrap_logger(
        logging.getLogger(name),
        wrapper_class=structlog.stdlib.BoundLogger,
    )
    if initial_context:
        logger = logger.bind(**initial_context)
    return logger
