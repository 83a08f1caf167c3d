"""Context management for structured logging.

Provides automatic context injection into log records using contextvars, so
fields like the queue namespace or the CLI command end up on every record
without being passed to each logging call.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Any

# Each async task gets its own copy automatically
_log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})


def set_log_context(**kwargs: Any) -> None:
    """Set logging context for current async task/thread.

    All subsequent log calls in this context will automatically include
    these fields in the log record.

    Example:
        ```python
        set_log_context(command="peek", namespace="erc20-watcher")
        logger.info("Reading queue head")  # Includes command and namespace
        ```
    """
    current = _log_context.get().copy()
    current.update(kwargs)
    _log_context.set(current)


def get_log_context() -> dict[str, Any]:
    """Get a copy of the current logging context."""
    return _log_context.get().copy()


def clear_log_context() -> None:
    """Clear all logging context for current async task/thread."""
    _log_context.set({})


class ContextInjectingFilter(logging.Filter):
    """Logging filter that injects the contextvars log context into LogRecords.

    Applied to the root logger so every logger benefits. Existing record
    attributes are never overwritten.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in _log_context.get().items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True


class ContextBoundLogger(logging.LoggerAdapter):
    """Logger adapter that binds context to a logger instance.

    Example:
        ```python
        logger = ContextBoundLogger(logging.getLogger(__name__), namespace="erc20")
        logger.info("Transfer admitted", extra={"member": member})
        ```
    """

    def __init__(self, logger: logging.Logger, **context: Any) -> None:
        super().__init__(logger, context)

    def bind(self, **context: Any) -> ContextBoundLogger:
        """Create new logger with additional bound context."""
        merged = {**self.extra, **context}
        return ContextBoundLogger(self.logger, **merged)

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        """Merge bound context with any extra fields passed to the log call."""
        extra = kwargs.get("extra", {})
        kwargs["extra"] = {**self.extra, **extra}
        return msg, kwargs


def get_logger(name: str, **context: Any) -> ContextBoundLogger:
    """Get logger with bound context.

    Args:
        name: Logger name.
        **context: Context to add to all log messages.

    Returns:
        Logger adapter with context.
    """
    return ContextBoundLogger(logging.getLogger(name), **context)
