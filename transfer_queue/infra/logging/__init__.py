"""Logging infrastructure.

Structured logging with:
- JSONL format for log aggregation
- Automatic context injection (namespace, command, etc.)
- QueueHandler + QueueListener for non-blocking I/O
- Per-handler log levels (console vs file)

Basic usage:
    from transfer_queue.infra.logging import setup_logging, set_log_context
    import logging

    setup_logging()
    logger = logging.getLogger(__name__)

    set_log_context(namespace="erc20-watcher")
    logger.info("Polling queue")  # Automatically includes namespace
"""

from transfer_queue.infra.logging.config import configure_logging, setup_logging, shutdown
from transfer_queue.infra.logging.context import (
    ContextBoundLogger,
    ContextInjectingFilter,
    clear_log_context,
    get_log_context,
    get_logger,
    set_log_context,
)
from transfer_queue.infra.logging.formatters import JSONFormatter

__all__ = [
    "ContextBoundLogger",
    "ContextInjectingFilter",
    "JSONFormatter",
    "clear_log_context",
    "configure_logging",
    "get_log_context",
    "get_logger",
    "set_log_context",
    "setup_logging",
    "shutdown",
]
