"""Pydantic configuration models with validation."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import (
    AliasChoices,
    AliasPath,
    BaseModel,
    Field,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]
TrendBackend = Literal["cache", "appwrite"]


def _normalize_path(value: Any) -> Path:
    """
    Normalize a path-like value without causing filesystem side-effects.

    This function MUST NOT create directories or files.
    """
    if isinstance(value, Path):
        return value.expanduser()
    if isinstance(value, str):
        return Path(value).expanduser()
    raise TypeError(f"Expected path-like value, got: {type(value)!r}")


def _split_tokens(value: Any) -> Any:
    if isinstance(value, str):
        return [t.strip() for t in value.split(",") if t.strip()]
    return value


class CacheConfig(BaseSettings):
    """Storage backing the cache trend store."""

    backend: Literal["diskcache", "redis"] = Field(
        default="diskcache",
        description="Cache backend: 'diskcache' (SQLite) or 'redis'",
    )
    directory: Path = Field(
        default=Path("./.cache/moviescout"),
        alias="dir",
        description="Diskcache SQLite DB path",
    )
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL (only when backend=redis)",
    )
    max_concurrent: int = Field(
        default=10,
        description="Max parallel cache ops (semaphore limit)",
    )

    model_config = SettingsConfigDict(
        env_prefix="CACHE_",  # Env vars: CACHE_BACKEND, CACHE_REDIS_URL, ...
        case_sensitive=False,
        populate_by_name=True,
    )

    @field_validator("directory", mode="before")
    @classmethod
    def _validate_directory(cls, v: Any) -> Path:
        return _normalize_path(v)


class TrendsConfig(BaseModel):
    """Trend store selection and Appwrite connection identifiers."""

    backend: TrendBackend = Field(
        default="cache",
        description="'cache' (diskcache/redis via CachePort) or 'appwrite'.",
    )
    appwrite_endpoint: str = Field(
        default="https://cloud.appwrite.io/v1",
        description="Appwrite API endpoint.",
    )
    appwrite_project_id: str | None = Field(default=None)
    appwrite_database_id: str | None = Field(default=None)
    appwrite_collection_id: str | None = Field(default=None)
    appwrite_api_key: str | None = Field(
        default=None,
        description="Server API key with documents.read/documents.write scopes.",
    )

    @model_validator(mode="after")
    def _require_appwrite_ids(self) -> "TrendsConfig":
        if self.backend == "appwrite":
            missing = [
                name
                for name in (
                    "appwrite_project_id",
                    "appwrite_database_id",
                    "appwrite_collection_id",
                )
                if not getattr(self, name)
            ]
            if missing:
                raise ValueError(
                    f"trends.backend=appwrite requires: {', '.join(missing)}"
                )
        return self


class AppConfig(BaseModel):
    """
    Canonical application configuration (validated, final).

    Note:
    - YAML is expected to be sectioned (tmdb/http/search/logging/cache/trends/auth).
    - Environment variables are handled by EnvOverrides(BaseSettings) to allow strict
      precedence control (defaults < YAML < ENV < CLI) in load.py.
    """

    # General
    app_name: str = Field(default="moviescout", description="Application name.")
    environment: Environment = Field(
        default="dev",
        description="Runtime environment (affects defaults like log format).",
    )

    # TMDB (YAML section: tmdb.*)
    tmdb_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "tmdb_api_key",
            AliasPath("tmdb", "api_key"),
        ),
        description="TMDB read-access token, sent as a bearer credential.",
    )
    tmdb_base_url: str = Field(
        default="https://api.themoviedb.org/3",
        validation_alias=AliasChoices(
            "tmdb_base_url",
            AliasPath("tmdb", "base_url"),
        ),
        description="TMDB API base URL.",
    )

    # HTTP (YAML section: http.*)
    http_timeout_seconds: float = Field(
        default=30.0,
        validation_alias=AliasChoices(
            "http_timeout_seconds",
            AliasPath("http", "timeout_seconds"),
        ),
        description="HTTP timeout in seconds for catalog and store calls.",
    )
    http_user_agent: str = Field(
        default="MovieScout/0.1.0",
        validation_alias=AliasChoices(
            "http_user_agent",
            AliasPath("http", "user_agent"),
        ),
        description="User-Agent for outgoing HTTP requests.",
    )

    # Search (YAML section: search.*)
    search_debounce_ms: int = Field(
        default=500,
        validation_alias=AliasChoices(
            "search_debounce_ms",
            AliasPath("search", "debounce_ms"),
        ),
        description="Settle delay for search input in milliseconds.",
    )
    search_trending_limit: int = Field(
        default=5,
        validation_alias=AliasChoices(
            "search_trending_limit",
            AliasPath("search", "trending_limit"),
        ),
        description="Number of trending terms shown.",
    )
    search_max_sessions: int = Field(
        default=1000,
        validation_alias=AliasChoices(
            "search_max_sessions",
            AliasPath("search", "max_sessions"),
        ),
        description="Max live search sessions before LRU eviction.",
    )

    # Identity gate (YAML section: auth.*)
    auth_api_tokens: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices(
            "auth_api_tokens",
            AliasPath("auth", "api_tokens"),
        ),
        description="Bearer tokens accepted as signed-in sessions.",
    )

    # Logging (YAML section: logging.*)
    log_level: LogLevel = Field(
        default="INFO",
        validation_alias=AliasChoices(
            "log_level",
            AliasPath("logging", "level"),
        ),
        description="Log level.",
    )
    log_format: Optional[LogFormat] = Field(
        default=None,
        validation_alias=AliasChoices(
            "log_format",
            AliasPath("logging", "format"),
        ),
        description=(
            "Log renderer format (console/json). If unset, derived from environment."
        ),
    )

    # Trend store (YAML section: trends.*)
    trends: TrendsConfig = Field(default_factory=TrendsConfig)

    # Cache (YAML section: cache.*)
    cache: CacheConfig = Field(default_factory=CacheConfig)

    @field_validator("auth_api_tokens", mode="before")
    @classmethod
    def _validate_tokens(cls, v: Any) -> Any:
        return _split_tokens(v)

    @field_validator("http_timeout_seconds")
    @classmethod
    def _validate_http_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("http_timeout_seconds must be > 0")
        return v

    @field_validator("search_debounce_ms")
    @classmethod
    def _validate_debounce(cls, v: int) -> int:
        if v < 0:
            raise ValueError("search_debounce_ms must be >= 0")
        return v

    @field_validator("search_trending_limit", "search_max_sessions")
    @classmethod
    def _validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be >= 1")
        return v

    @model_validator(mode="after")
    def _derive_defaults(self) -> "AppConfig":
        # Default log format: console in dev/test, json in prod.
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"
        return self

    @property
    def debounce_seconds(self) -> float:
        return self.search_debounce_ms / 1000.0

    def to_sectioned_dict(self) -> dict[str, Any]:
        """
        Dump configuration in the sectioned shape used by config.yaml/docs.

        Secrets are omitted.
        """
        return {
            "app_name": self.app_name,
            "environment": self.environment,
            "tmdb": {"base_url": self.tmdb_base_url},
            "http": {
                "timeout_seconds": self.http_timeout_seconds,
                "user_agent": self.http_user_agent,
            },
            "search": {
                "debounce_ms": self.search_debounce_ms,
                "trending_limit": self.search_trending_limit,
                "max_sessions": self.search_max_sessions,
            },
            "logging": {"level": self.log_level, "format": self.log_format},
            "trends": self.trends.model_dump(exclude={"appwrite_api_key"}),
            "cache": {
                "backend": self.cache.backend,
                "dir": str(self.cache.directory),
                "redis_url": self.cache.redis_url,
            },
        }


class EnvOverrides(BaseSettings):
    """
    Environment-variable overrides (all optional).

    Intended usage:
    - load.py creates EnvOverrides() to read MOVIESCOUT_* variables,
      converts to dict of set values, merges into YAML/defaults,
      then validates AppConfig.

    Supported env var examples (flat, explicit):
    - MOVIESCOUT_TMDB_API_KEY
    - MOVIESCOUT_SEARCH_DEBOUNCE_MS
    - MOVIESCOUT_AUTH_API_TOKENS (comma-separated)
    - MOVIESCOUT_TRENDS_BACKEND
    - MOVIESCOUT_LOG_LEVEL
    """

    model_config = SettingsConfigDict(
        env_prefix="MOVIESCOUT_",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: Optional[str] = None
    environment: Optional[Environment] = None

    tmdb_api_key: Optional[str] = None
    tmdb_base_url: Optional[str] = None

    http_timeout_seconds: Optional[float] = None
    http_user_agent: Optional[str] = None

    search_debounce_ms: Optional[int] = None
    search_trending_limit: Optional[int] = None
    search_max_sessions: Optional[int] = None

    # Comma-separated string; split by AppConfig.
    auth_api_tokens: Optional[str] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    trends_backend: Optional[TrendBackend] = None
    trends_appwrite_endpoint: Optional[str] = None
    trends_appwrite_project_id: Optional[str] = None
    trends_appwrite_database_id: Optional[str] = None
    trends_appwrite_collection_id: Optional[str] = None
    trends_appwrite_api_key: Optional[str] = None

    cache_dir: Optional[Path] = None
    cache_backend: Optional[Literal["diskcache", "redis"]] = None
    cache_redis_url: Optional[str] = None

    @field_validator("cache_dir", mode="before")
    @classmethod
    def _validate_paths(cls, v: Any) -> Any:
        if v is None:
            return None
        return _normalize_path(v)

    def to_update_dict(self) -> dict[str, Any]:
        """
        Return only values that were actually provided (non-None), for merging.
        """
        return self.model_dump(exclude_none=True)
