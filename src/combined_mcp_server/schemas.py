"""Pydantic schemas for tool outputs.

These models define the stable JSON contracts returned by the MCP
tools. Credentials never appear in any of them.
"""

from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, Field

Service = Literal["wikipedia", "google_search"]


class CacheStatus(BaseModel):
    """Wikipedia cache sizing.

    Attributes:
        max: Maximum number of cached entries.
        ttl_ms: Entry lifetime in milliseconds.
    """

    max: int
    ttl_ms: int


class ServerStatusOutput(BaseModel):
    """Effective configuration and available services.

    Attributes:
        name: Advertised server name.
        version: Advertised server version.
        port: Configured listening port.
        default_language: Wikipedia language code, e.g. 'en' or 'en-US'.
        cache: Wikipedia cache sizing.
        deduplication: Whether duplicate Wikipedia requests are collapsed.
        lru_cache_size: Size of the shared LRU cache.
        services: Services that can answer requests with this configuration.
        log_level: Configured log level name.
    """

    name: str
    version: str
    port: int
    default_language: str
    cache: CacheStatus
    deduplication: bool
    lru_cache_size: int
    services: List[Service] = Field(default_factory=list)
    log_level: str
