"""Configuration helpers for the Combined MCP Server.

Exposes `load_config`, which reads the environment (and an optional
``.env`` file) and returns a typed, immutable `AppConfig`. Invalid
values raise `ConfigValidationError` listing every offending variable.
"""

from .env import (
    AppConfig,
    CacheConfig,
    EnvironmentSnapshotSource,
    GoogleConfig,
    ServerConfig,
    ValidatedSettings,
    WikipediaConfig,
    load_config,
    read_environment,
)

__all__ = [
    "AppConfig",
    "CacheConfig",
    "EnvironmentSnapshotSource",
    "GoogleConfig",
    "ServerConfig",
    "ValidatedSettings",
    "WikipediaConfig",
    "load_config",
    "read_environment",
]
