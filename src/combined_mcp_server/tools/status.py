"""Server status tool function."""

from __future__ import annotations

from typing import List

from ..config import AppConfig
from ..schemas import CacheStatus, ServerStatusOutput, Service


def available_services(config: AppConfig) -> List[Service]:
    """Wikipedia is always available; Google Search needs both credentials."""
    services: List[Service] = ["wikipedia"]
    if config.google.enabled:
        services.append("google_search")
    return services


def server_status(config: AppConfig) -> ServerStatusOutput:
    """Report the effective configuration and active services."""

    wiki = config.wikipedia
    return ServerStatusOutput(
        name=config.server.name,
        version=config.server.version,
        port=config.server.port,
        default_language=wiki.default_language,
        cache=CacheStatus(max=wiki.cache.max, ttl_ms=wiki.cache.ttl),
        deduplication=wiki.enable_deduplication,
        lru_cache_size=config.lru_cache_size,
        services=available_services(config),
        log_level=config.log_level,
    )
