"""Transfer queue settings."""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ._sanitizers import sanitize_inline_numeric
from .yaml_sources import create_queue_yaml_source


class QueueSettings(BaseSettings):
    """Namespace and TTL of one transfer queue.

    Environment variables use TRANSFER_QUEUE_ prefix.
    Example: TRANSFER_QUEUE_NAMESPACE=erc20-watcher TRANSFER_QUEUE_TTL_SECONDS=86400

    Neither field has a default: queues sharing one Redis are isolated only by
    their namespace, and every write expires after ``ttl_seconds``.
    """

    namespace: str = Field(
        min_length=1,
        max_length=200,
        description="Prefix for every key of this queue",
    )

    ttl_seconds: int = Field(
        gt=0,
        description="Seconds before the block number, queue and transfer records expire",
    )

    @field_validator("ttl_seconds", mode="before")
    @classmethod
    def _normalize_ttl(cls, value: Any) -> Any:
        """Allow numeric env vars with inline comments (e.g., "86400  # 1 day")."""
        return sanitize_inline_numeric(value)

    model_config = SettingsConfigDict(
        env_prefix="TRANSFER_QUEUE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
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
            create_queue_yaml_source(settings_cls),
            env_settings,
            dotenv_settings,
            file_secret_settings,
        )
