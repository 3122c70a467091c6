"""Structlog configuration for the server process.

Logs always go to stderr: stdout carries the MCP stdio protocol.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog


def resolve_level(log_level: str) -> int:
    """Map a level name such as ``"info"`` or ``"WARNING"`` to its number.

    Unknown names fall back to INFO.
    """
    level = logging.getLevelName(log_level.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(
    log_level: str = "info",
    *,
    json_logs: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        log_level: Level name from the ``LOG_LEVEL`` setting.
        json_logs: Emit newline-delimited JSON instead of the console renderer.
        stream: Destination stream, defaults to ``sys.stderr``.
    """
    level = resolve_level(log_level)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_logs:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(level)
