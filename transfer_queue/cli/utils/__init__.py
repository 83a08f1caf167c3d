"""CLI utilities for running async operations, formatting output and opening stores."""

from transfer_queue.cli.utils.async_runner import coro
from transfer_queue.cli.utils.formatters import (
    error,
    info,
    print_json,
    success,
    warning,
)
from transfer_queue.cli.utils.store import open_store, resolve_queue_settings

__all__ = [
    "coro",
    "error",
    "info",
    "open_store",
    "print_json",
    "resolve_queue_settings",
    "success",
    "warning",
]
