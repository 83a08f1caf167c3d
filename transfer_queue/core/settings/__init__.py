"""Modular Pydantic Settings v2 configuration.

One settings model per concern (redis/queue/logging), each immutable and
loaded through an LRU-cached loader:

    from transfer_queue.core.settings import get_redis_settings

Configuration precedence (highest to lowest):
    1. init kwargs (testing/overrides)
    2. YAML/conf.d files (optional, local/dev)
    3. Environment variables (production)
    4. .env file (development only)
    5. secrets_dir (Kubernetes/Docker secrets)
"""

from __future__ import annotations

from .loader import (
    clear_all_caches,
    get_logging_settings,
    get_queue_settings,
    get_redis_settings,
)
from .logs import LoggingSettings
from .queue import QueueSettings
from .redis import RedisSettings

__all__ = [
    "LoggingSettings",
    "QueueSettings",
    "RedisSettings",
    "clear_all_caches",
    "get_logging_settings",
    "get_queue_settings",
    "get_redis_settings",
]
