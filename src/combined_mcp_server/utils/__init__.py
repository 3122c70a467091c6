"""Utility helpers shared by the server entrypoint.

Currently holds the structlog setup used at startup.
"""

from .logging import configure_logging, resolve_level

__all__ = [
    "configure_logging",
    "resolve_level",
]
