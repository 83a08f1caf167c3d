"""Helpers to open a transfer queue store from CLI options."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
import sys

import click
from pydantic import ValidationError

from transfer_queue.cli.utils.formatters import error
from transfer_queue.core.exceptions import StoreConnectionError
from transfer_queue.core.settings import QueueSettings, get_queue_settings
from transfer_queue.infra.logging.context import set_log_context
from transfer_queue.infra.queue.store import TransferQueueStore


def resolve_queue_settings(namespace: str | None, ttl_seconds: int | None) -> QueueSettings:
    """Merge command-line overrides with configured queue settings."""
    if namespace is None and ttl_seconds is None:
        return get_queue_settings()

    overrides: dict[str, object] = {}
    if namespace is not None:
        overrides["namespace"] = namespace
    if ttl_seconds is not None:
        overrides["ttl_seconds"] = ttl_seconds
    return QueueSettings(**overrides)


@asynccontextmanager
async def open_store(ctx: click.Context) -> AsyncIterator[TransferQueueStore]:
    """Open the store selected by the root command options, exiting on failure."""
    obj = ctx.find_root().obj or {}
    try:
        settings = resolve_queue_settings(obj.get("namespace"), obj.get("ttl_seconds"))
    except ValidationError as e:
        error(f"Invalid queue configuration: {e.error_count()} error(s)")
        for err in e.errors():
            error(f"  {'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}")
        sys.exit(1)

    set_log_context(namespace=settings.namespace)

    try:
        store = await TransferQueueStore.create(settings.namespace, settings.ttl_seconds)
    except StoreConnectionError as e:
        error(f"Failed to connect to Redis: {e.detail}")
        sys.exit(1)

    async with store:
        yield store
