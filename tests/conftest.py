"""Pytest configuration and shared fixtures.

Organization:
    - Settings Fixtures: environment isolation and settings cache resets
    - Redis Fixtures: in-memory fakeredis server and clients (Lua enabled)
    - Store Fixtures: TransferQueueStore wired to fakeredis
    - Data Fixtures: transfer factories
"""

from __future__ import annotations

from collections.abc import AsyncGenerator, Callable
import os
from typing import Any

import fakeredis
import fakeredis.aioredis
import pytest

from transfer_queue.core.schemas.transfer import Transfer
from transfer_queue.core.settings import clear_all_caches
from transfer_queue.infra.queue.store import TransferQueueStore

# Keep tests away from any real configuration
os.environ.setdefault("REDIS_CONFIG_DIR", "/nonexistent/transfer-queue-conf")
os.environ.setdefault("QUEUE_CONFIG_DIR", "/nonexistent/transfer-queue-conf")
os.environ.setdefault("LOGGING_CONFIG_DIR", "/nonexistent/transfer-queue-conf")

TEST_NAMESPACE = "test-watcher"
TEST_TTL_SECONDS = 3600


# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def _reset_settings_caches():
    """Clear cached settings so each test sees its own environment."""
    clear_all_caches()
    yield
    clear_all_caches()


# ============================================================================
# Redis Fixtures
# ============================================================================


@pytest.fixture
def fake_server() -> fakeredis.FakeServer:
    """Isolated in-memory Redis server."""
    return fakeredis.FakeServer()


@pytest.fixture
async def redis_client(fake_server) -> AsyncGenerator[fakeredis.aioredis.FakeRedis]:
    """Async fakeredis client with decoded responses, as the store expects."""
    client = fakeredis.aioredis.FakeRedis(server=fake_server, decode_responses=True)
    yield client
    await client.aclose()


# ============================================================================
# Store Fixtures
# ============================================================================


@pytest.fixture
def store(redis_client) -> TransferQueueStore:
    """Transfer queue store on the fake Redis client."""
    return TransferQueueStore(redis_client, TEST_NAMESPACE, TEST_TTL_SECONDS)


# ============================================================================
# Data Fixtures
# ============================================================================


@pytest.fixture
def make_transfer() -> Callable[..., Transfer]:
    """Factory building transfers with sensible defaults.

    Example:
        def test_something(make_transfer):
            transfer = make_transfer(9, 5, value="42")
    """

    def _make(block_number: int, log_index: int, **overrides: Any) -> Transfer:
        data: dict[str, Any] = {
            "blockNumber": block_number,
            "logIndex": log_index,
            "transactionHash": f"0x{block_number:064x}",
            "from": "0x1111111111111111111111111111111111111111",
            "to": "0x2222222222222222222222222222222222222222",
            "value": "1000000000000000000",
            "unit": "WEI",
        }
        data.update(overrides)
        return Transfer.model_validate(data)

    return _make
