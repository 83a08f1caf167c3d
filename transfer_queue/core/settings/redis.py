"""Redis connection settings."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal
from urllib.parse import quote, urlparse

from pydantic import Field, SecretStr, computed_field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ._sanitizers import sanitize_inline_numeric
from .yaml_sources import create_redis_yaml_source


class RedisSettings(BaseSettings):
    """Connection settings for the Redis instance backing the transfer queue.

    Environment variables use REDIS_ prefix.
    Example: REDIS_URL="redis://localhost:6379/0"

    Supports bidirectional configuration:
    1. Provide REDIS_URL → components are parsed automatically
    2. Provide components (host, port, etc.) → URL is built automatically
    """

    # ──────────────────────────────────────────────────────────────
    # Connection configuration (bidirectional)
    # ──────────────────────────────────────────────────────────────

    redis_url: str | None = Field(
        default=None,
        alias="REDIS_URL",
        description="Redis connection URL (redis://[username:password@]host:port/db). If provided, overrides component fields.",
    )

    host: str = Field(
        default="localhost",
        description="Redis server hostname or IP address",
    )

    port: int = Field(
        default=6379,
        ge=1,
        le=65535,
        description="Redis server port",
    )

    db: int = Field(
        default=0,
        ge=0,
        le=15,
        description="Redis database number (0-15)",
    )

    username: str | None = Field(
        default=None,
        description="Redis username (Redis 6+ ACL)",
    )

    password: SecretStr | None = Field(
        default=None,
        description="Redis password for authentication",
    )

    # ──────────────────────────────────────────────────────────────
    # Connection pool settings
    # ──────────────────────────────────────────────────────────────

    max_connections: int = Field(
        default=10,
        ge=1,
        le=1000,
        description="Maximum Redis connection pool size",
    )

    socket_timeout: float = Field(
        default=5.0,
        ge=0.1,
        le=30.0,
        description="Redis socket timeout in seconds (for operations)",
    )

    socket_connect_timeout: float = Field(
        default=5.0,
        ge=0.1,
        le=30.0,
        description="Redis socket connection timeout in seconds (initial connection)",
    )

    socket_keepalive: bool = Field(
        default=True,
        description="Enable TCP keepalive on Redis connections",
    )

    health_check_interval: int = Field(
        default=30,
        ge=0,
        le=300,
        description="Connection health check interval in seconds (0 to disable)",
    )

    # ──────────────────────────────────────────────────────────────
    # SSL/TLS settings
    # ──────────────────────────────────────────────────────────────

    ssl_enabled: bool = Field(
        default=False,
        description="Enable SSL/TLS for Redis connection (use rediss:// scheme)",
    )

    ssl_cert_reqs: Literal["none", "optional", "required"] = Field(
        default="required",
        description="SSL certificate verification requirement",
    )

    ssl_ca_certs: Path | None = Field(
        default=None,
        description="Path to CA certificate bundle for SSL verification",
    )

    # ──────────────────────────────────────────────────────────────
    # Validators and computed fields
    # ──────────────────────────────────────────────────────────────

    @model_validator(mode="after")
    def _apply_url(self) -> "RedisSettings":
        """Parse redis_url into component fields if provided."""
        if self.redis_url:
            parsed = urlparse(self.redis_url)

            if parsed.hostname:
                object.__setattr__(self, "host", parsed.hostname)
            if parsed.port:
                object.__setattr__(self, "port", parsed.port)
            if parsed.path and len(parsed.path) > 1:
                try:
                    db_num = int(parsed.path.lstrip("/"))
                    object.__setattr__(self, "db", db_num)
                except ValueError:
                    pass
            if parsed.username:
                object.__setattr__(self, "username", parsed.username)
            if parsed.password:
                object.__setattr__(self, "password", SecretStr(parsed.password))

            if parsed.scheme == "rediss":
                object.__setattr__(self, "ssl_enabled", True)

        return self

    @computed_field
    @property
    def url(self) -> str:
        """Build Redis URL from component fields.

        Returns URL in format: redis[s]://[username:password@]host:port/db
        """
        scheme = "rediss" if self.ssl_enabled else "redis"

        auth = ""
        if self.username or self.password:
            username_part = quote(self.username) if self.username else ""
            password_part = quote(self.password.get_secret_value()) if self.password else ""

            if username_part and password_part:
                auth = f"{username_part}:{password_part}@"
            elif password_part:
                auth = f":{password_part}@"

        return f"{scheme}://{auth}{self.host}:{self.port}/{self.db}"

    @field_validator(
        "socket_timeout",
        "socket_connect_timeout",
        "health_check_interval",
        "max_connections",
        mode="before",
    )
    @classmethod
    def _normalize_numeric(cls, value: Any) -> Any:
        """Allow numeric env vars with inline comments (e.g., "5.0  # seconds")."""
        return sanitize_inline_numeric(value)

    # ──────────────────────────────────────────────────────────────
    # Helper methods
    # ──────────────────────────────────────────────────────────────

    def connection_pool_kwargs(self) -> dict[str, Any]:
        """Return kwargs for redis.asyncio.ConnectionPool.from_url().

        Responses are always decoded to ``str``; the transfer queue store
        relies on it.
        """
        kwargs: dict[str, Any] = {
            "max_connections": self.max_connections,
            "socket_timeout": self.socket_timeout,
            "socket_connect_timeout": self.socket_connect_timeout,
            "socket_keepalive": self.socket_keepalive,
            "decode_responses": True,
            "encoding": "utf-8",
        }

        if self.health_check_interval > 0:
            kwargs["health_check_interval"] = self.health_check_interval

        if self.ssl_enabled:
            kwargs["ssl_cert_reqs"] = self.ssl_cert_reqs
            if self.ssl_ca_certs is not None:
                kwargs["ssl_ca_certs"] = str(self.ssl_ca_certs)

        return kwargs

    model_config = SettingsConfigDict(
        env_prefix="REDIS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        populate_by_name=True,
        extra="ignore",
        env_ignore_empty=True,
    )

    @classmethod
    def settings_customise_sources(
        cls, settings_cls, init_settings, env_settings, dotenv_settings, file_secret_settings
    ):
        """Customize settings source precedence: init > yaml > env > dotenv > secrets."""
        return (
            init_settings,
            create_redis_yaml_source(settings_cls),
            env_settings,
            dotenv_settings,
            file_secret_settings,
        )
