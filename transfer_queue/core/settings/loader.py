"""LRU-cached settings loaders.

Settings are loaded and validated once, then cached for the lifetime of the process.

Usage:
    from transfer_queue.core.settings.loader import get_redis_settings

    settings = get_redis_settings()  # First call: loads and validates
    settings = get_redis_settings()  # Subsequent calls: returns cached instance

Testing:
    In tests, clear the cache to force reload:
    get_redis_settings.cache_clear()
"""

from __future__ import annotations

from functools import lru_cache

from .logs import LoggingSettings
from .queue import QueueSettings
from .redis import RedisSettings


@lru_cache(maxsize=1)
def get_redis_settings() -> RedisSettings:
    """Get cached Redis settings.

    Returns:
        Validated and frozen RedisSettings instance.
    """
    return RedisSettings()


@lru_cache(maxsize=1)
def get_queue_settings() -> QueueSettings:
    """Get cached transfer queue settings.

    Returns:
        Validated and frozen QueueSettings instance.

    Raises:
        pydantic.ValidationError: If namespace or TTL is not configured.
    """
    return QueueSettings()


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    """Get cached logging settings.

    Returns:
        Validated and frozen LoggingSettings instance.
    """
    return LoggingSettings()


def clear_all_caches() -> None:
    """Clear every settings cache (useful in tests)."""
    get_redis_settings.cache_clear()
    get_queue_settings.cache_clear()
    get_logging_settings.cache_clear()
