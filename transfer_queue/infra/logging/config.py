"""Logging configuration setup.

Provides logging configuration using:
- dictConfig for root logger, formatters and filters
- QueueHandler + QueueListener for non-blocking I/O
- ContextInjectingFilter for automatic context propagation
- JSONL format for machine parsing
"""

from __future__ import annotations

import atexit
import logging
import logging.config
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from pathlib import Path
from queue import Queue
from typing import TYPE_CHECKING, Any

from transfer_queue.infra.logging.context import ContextInjectingFilter
from transfer_queue.infra.logging.formatters import JSONFormatter

if TYPE_CHECKING:
    from transfer_queue.core.settings.logs import LoggingSettings

_log_queue: Queue[logging.LogRecord] | None = None
_listener: QueueListener | None = None
_queue_handler: QueueHandler | None = None
_LOGGING_INITIALIZED = False
_ATEXIT_REGISTERED = False

logger = logging.getLogger(__name__)

TEXT_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
TEXT_DATEFMT = "%Y-%m-%d %H:%M:%S"


def shutdown() -> None:
    """Stop the QueueListener, flushing pending records.

    Registered with atexit; safe to call more than once.
    """
    global _log_queue, _listener, _queue_handler

    if _listener is not None:
        _listener.stop()
        _listener = None

    if _queue_handler is not None:
        logging.getLogger().removeHandler(_queue_handler)
        _queue_handler = None

    _log_queue = None


def setup_logging(
    log_settings: LoggingSettings | None = None,
    *,
    force: bool = False,
    **configure_kwargs: Any,
) -> None:
    """Ensure logging is configured once across entrypoints.

    Args:
        log_settings: Optional logging settings instance. If omitted, settings
            are loaded via get_logging_settings().
        force: Reconfigure logging even if it was already initialized.
        **configure_kwargs: Explicit overrides for configure_logging().
    """
    global _LOGGING_INITIALIZED

    if _LOGGING_INITIALIZED and not force:
        return

    settings_obj = log_settings
    if settings_obj is None:
        from transfer_queue.core.settings import get_logging_settings

        settings_obj = get_logging_settings()

    log_config = {**settings_obj.to_logging_kwargs(), **configure_kwargs}
    configure_logging(**log_config)
    _LOGGING_INITIALIZED = True


def configure_logging(
    log_level: str = "INFO",
    console_level: str | None = None,
    file_level: str | None = None,
    file_path: str | Path | None = None,
    json_logs: bool = True,
    console_enabled: bool = True,
    include_context: bool = True,
    capture_warnings: bool = True,
    include_function_name: bool = False,
    file_max_bytes: int = 10 * 1024 * 1024,
    file_backup_count: int = 5,
    service_name: str = "transfer-queue",
) -> None:
    """Configure logging with dictConfig and the QueueHandler pattern.

    All handlers hang off a QueueListener; the root logger only gets a
    QueueHandler, and application loggers propagate up to it.

    Example:
        from transfer_queue.core.settings import get_logging_settings
        configure_logging(**get_logging_settings().to_logging_kwargs())

        # Or direct parameters with per-handler levels
        configure_logging(log_level="DEBUG", console_level="WARNING", json_logs=False)
    """
    global _log_queue, _listener, _queue_handler, _ATEXIT_REGISTERED

    # Reconfiguring replaces the previous listener
    shutdown()

    if capture_warnings:
        logging.captureWarnings(True)

    resolved_path = Path(file_path) if file_path else None
    if resolved_path:
        resolved_path.parent.mkdir(parents=True, exist_ok=True)

    filters: dict[str, Any] = {}
    root_filters: list[str] = []
    if include_context:
        filters["context"] = {
            "()": "transfer_queue.infra.logging.context.ContextInjectingFilter",
        }
        root_filters.append("context")

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "filters": filters,
            "root": {
                "level": log_level.upper(),
                "handlers": [],
                "filters": root_filters,
            },
        }
    )

    fmt_keys = {"level": "levelname", "logger": "name", "message": "message"}
    if include_function_name:
        fmt_keys["function"] = "funcName"

    def _make_formatter() -> logging.Formatter:
        if json_logs:
            return JSONFormatter(fmt_keys=fmt_keys, static={"service": service_name})
        return logging.Formatter(fmt=TEXT_FORMAT, datefmt=TEXT_DATEFMT)

    handlers: list[logging.Handler] = []

    if console_enabled:
        console_handler = logging.StreamHandler()
        console_handler.setLevel((console_level or log_level).upper())
        console_handler.setFormatter(_make_formatter())
        handlers.append(console_handler)

    if resolved_path:
        file_handler = RotatingFileHandler(
            resolved_path,
            maxBytes=file_max_bytes,
            backupCount=file_backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel((file_level or log_level).upper())
        file_handler.setFormatter(_make_formatter())
        handlers.append(file_handler)

    _log_queue = Queue()
    if handlers:
        _listener = QueueListener(_log_queue, *handlers, respect_handler_level=True)
        _listener.start()
        if not _ATEXIT_REGISTERED:
            atexit.register(shutdown)
            _ATEXIT_REGISTERED = True

    _queue_handler = QueueHandler(_log_queue)
    if include_context:
        # Root logger filters do not see records propagated from child loggers
        _queue_handler.addFilter(ContextInjectingFilter())
    logging.getLogger().addHandler(_queue_handler)

    logger.debug(
        "Logging configured",
        extra={"json_logs": json_logs, "file_path": str(resolved_path) if resolved_path else None},
    )
