"""Environment configuration for the Combined MCP Server.

Settings come from the process environment, optionally seeded from a
local ``.env`` file. Live environment values always win over the file.

```bash
export GOOGLE_API_KEY="..."
export GOOGLE_CSE_ID="..."
export DEFAULT_LANGUAGE=fr
export CACHE_TTL=600000
```

The flat variables are validated into `ValidatedSettings` and then
grouped into the nested `AppConfig`:

```python
from combined_mcp_server.config import load_config
cfg = load_config()
print(cfg.wikipedia.cache.ttl)
```
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from dotenv import dotenv_values
from pydantic import BaseModel, ConfigDict, Field, PositiveInt, ValidationError
from pydantic.alias_generators import to_camel
from pydantic.fields import FieldInfo
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from ..errors import ConfigValidationError

DEFAULT_ENV_FILE = ".env"
LANGUAGE_PATTERN = r"^[a-z]{2}(-[A-Z]{2})?$"

EnvFile = Union[str, Path, None]


class EnvironmentSnapshotSource(PydanticBaseSettingsSource):
    """Settings source reading field values from an environment snapshot.

    Names are matched case-insensitively. When several casings of one name
    are present, the exact upper-case name wins, then the first in sorted
    order, so the result never depends on mapping iteration order.
    """

    def __init__(self, settings_cls: type[BaseSettings], snapshot: Mapping[str, str]) -> None:
        super().__init__(settings_cls)
        self.by_name: Dict[str, str] = {}
        for key in sorted(snapshot, reverse=True):
            self.by_name[key.upper()] = snapshot[key]
        for key, value in snapshot.items():
            if key == key.upper():
                self.by_name[key] = value

    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        env_name = str(field.validation_alias)
        return self.by_name.get(env_name), env_name, False

    def __call__(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        for field_name, field in self.settings_cls.model_fields.items():
            value, env_name, _ = self.get_field_value(field, field_name)
            if value is not None:
                data[env_name] = value
        return data


class ValidatedSettings(BaseSettings):
    """Flat, typed view of the environment.

    Field aliases are the environment variable names. Values come only
    from the snapshot handed to `from_snapshot`; nothing is read from the
    process environment or any file implicitly.
    """

    # ---- google search ----
    google_api_key: Optional[str] = Field(
        default=None,
        validation_alias="GOOGLE_API_KEY",
        description="Google Custom Search API key",
    )
    google_cse_id: Optional[str] = Field(
        default=None,
        validation_alias="GOOGLE_CSE_ID",
        description="Google Custom Search engine id",
    )

    # ---- wikipedia ----
    cache_max: PositiveInt = Field(
        default=100,
        validation_alias="CACHE_MAX",
        description="Maximum number of cached Wikipedia responses",
    )
    cache_ttl: PositiveInt = Field(
        default=300000,
        validation_alias="CACHE_TTL",
        description="Wikipedia cache entry lifetime in milliseconds",
    )
    default_language: str = Field(
        default="en",
        pattern=LANGUAGE_PATTERN,
        validation_alias="DEFAULT_LANGUAGE",
        description="Wikipedia language code, e.g. 'en' or 'en-US'",
    )
    enable_deduplication: bool = Field(
        default=True,
        validation_alias="ENABLE_DEDUPLICATION",
        description="Collapse duplicate in-flight Wikipedia requests",
    )
    user_agent: Optional[str] = Field(
        default=None,
        validation_alias="USER_AGENT",
        description="User-Agent sent to Wikipedia",
    )

    # ---- server ----
    server_name: str = Field(default="combined-mcp-server", validation_alias="SERVER_NAME")
    server_version: str = Field(default="1.0.0", validation_alias="SERVER_VERSION")
    port: int = Field(default=3000, ge=1, le=65535, validation_alias="PORT")

    # ---- general ----
    log_level: str = Field(default="info", validation_alias="LOG_LEVEL")
    lru_cache_size: PositiveInt = Field(default=500, validation_alias="LRU_CACHE_SIZE")

    model_config = SettingsConfigDict(
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        snapshot = init_settings.init_kwargs.get("_snapshot") or {}
        return (EnvironmentSnapshotSource(settings_cls, snapshot),)

    @classmethod
    def from_snapshot(cls, snapshot: Mapping[str, str]) -> "ValidatedSettings":
        return cls(_snapshot=dict(snapshot))

    @classmethod
    def env_names(cls) -> tuple[str, ...]:
        """Environment variable names understood by the schema, in declaration order."""
        return tuple(str(f.validation_alias) for f in cls.model_fields.values())


class _Section(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class GoogleConfig(_Section):
    api_key: Optional[str] = None
    cse_id: Optional[str] = None

    @property
    def enabled(self) -> bool:
        """True when both credentials needed by the search service are set."""
        return bool(self.api_key) and bool(self.cse_id)


class CacheConfig(_Section):
    max: int
    ttl: int


class WikipediaConfig(_Section):
    cache: CacheConfig
    default_language: str
    enable_deduplication: bool
    user_agent: Optional[str] = None


class ServerConfig(_Section):
    name: str
    version: str
    port: int


class AppConfig(_Section):
    """Nested, immutable configuration handed to every consumer.

    Attributes:
        google: Custom Search credentials.
        wikipedia: Cache sizing, language and request options.
        server: Name, version and port advertised by the server.
        lru_cache_size: Size of the shared LRU cache.
        log_level: Log level name, e.g. 'info'.
    """

    google: GoogleConfig
    wikipedia: WikipediaConfig
    server: ServerConfig
    lru_cache_size: int
    log_level: str

    @classmethod
    def from_settings(cls, settings: ValidatedSettings) -> "AppConfig":
        """Group the flat settings into sections without altering any value."""
        return cls(
            google=GoogleConfig(
                api_key=settings.google_api_key,
                cse_id=settings.google_cse_id,
            ),
            wikipedia=WikipediaConfig(
                cache=CacheConfig(max=settings.cache_max, ttl=settings.cache_ttl),
                default_language=settings.default_language,
                enable_deduplication=settings.enable_deduplication,
                user_agent=settings.user_agent,
            ),
            server=ServerConfig(
                name=settings.server_name,
                version=settings.server_version,
                port=settings.port,
            ),
            lru_cache_size=settings.lru_cache_size,
            log_level=settings.log_level,
        )

    def to_dict(self, *, redact_secrets: bool = False) -> Dict[str, Any]:
        """Return the nested structure keyed the way clients expect (camelCase).

        With ``redact_secrets`` the Google credentials are masked when set.
        """
        data = self.model_dump(by_alias=True)
        if redact_secrets:
            for key in ("apiKey", "cseId"):
                if data["google"][key]:
                    data["google"][key] = "***"
        return data


def read_environment(
    env: Optional[Mapping[str, str]] = None,
    env_file: EnvFile = DEFAULT_ENV_FILE,
) -> Dict[str, str]:
    """Build the environment snapshot to validate.

    Values from ``env_file`` (python-dotenv syntax) are loaded first and
    then overlaid by ``env`` (``os.environ`` when omitted): a live name
    hides the file entry with the same name in any casing. A missing file
    is ignored. `${VAR}` references in the file are kept literally.
    """

    file_values: Dict[str, str] = {}
    if env_file is not None and Path(env_file).is_file():
        for key, value in dotenv_values(env_file, interpolate=False).items():
            if value is not None:
                file_values[key] = value

    live = os.environ if env is None else env
    shadowed = {key.upper() for key in live}
    snapshot = {k: v for k, v in file_values.items() if k.upper() not in shadowed}
    snapshot.update(live)
    return snapshot


def load_config(
    env: Optional[Mapping[str, str]] = None,
    env_file: EnvFile = DEFAULT_ENV_FILE,
) -> AppConfig:
    """Load and validate application configuration.

    • Missing values fall back to the documented defaults.
    • Every invalid variable is reported at once.

    Raises:
        ConfigValidationError: one entry per offending variable.
    """

    snapshot = read_environment(env, env_file)
    try:
        settings = ValidatedSettings.from_snapshot(snapshot)
    except ValidationError as exc:
        raise ConfigValidationError.from_validation_error(exc) from exc
    return AppConfig.from_settings(settings)
