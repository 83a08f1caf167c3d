"""Unit tests for TransferQueueStore.create() and connection ownership."""

from __future__ import annotations

from typing import Any

import fakeredis
import fakeredis.aioredis
import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from transfer_queue.core.exceptions import StoreConnectionError
from transfer_queue.core.settings import RedisSettings
from transfer_queue.infra.queue.store import TransferQueueStore


class FakePool:
    """Connection pool stand-in recording how it was built and released."""

    def __init__(self, url: str, **kwargs: Any) -> None:
        self.url = url
        self.kwargs = kwargs
        self.disconnected = False

    async def disconnect(self) -> None:
        self.disconnected = True


class UnreachableRedis:
    """Client whose ping fails like a refused connection."""

    def __init__(self, connection_pool: Any | None = None) -> None:
        self.connection_pool = connection_pool

    async def ping(self):
        raise RedisConnectionError("Connection refused")


@pytest.fixture
def pools(monkeypatch) -> list[FakePool]:
    """Capture pools created by ConnectionPool.from_url."""
    created: list[FakePool] = []

    def _from_url(url: str, **kwargs: Any) -> FakePool:
        pool = FakePool(url, **kwargs)
        created.append(pool)
        return pool

    monkeypatch.setattr(
        "transfer_queue.infra.queue.store.ConnectionPool.from_url",
        _from_url,
    )
    return created


@pytest.mark.asyncio
async def test_create_connects_and_owns_connection(monkeypatch, pools, fake_server):
    """create() pings Redis, returns a working store and close() releases the pool."""
    monkeypatch.setattr(
        "transfer_queue.infra.queue.store.Redis",
        lambda connection_pool=None: fakeredis.aioredis.FakeRedis(
            server=fake_server, decode_responses=True
        ),
    )
    settings = RedisSettings(redis_url="redis://cache.internal:6380/2")

    store = await TransferQueueStore.create("watcher", 120, redis_settings=settings)

    assert len(pools) == 1
    assert pools[0].url == "redis://cache.internal:6380/2"
    assert pools[0].kwargs["decode_responses"] is True

    await store.set_pending_block_number(7)
    assert await store.get_pending_block_number() == 7

    await store.close()
    assert pools[0].disconnected is True
    with pytest.raises(RuntimeError):
        _ = store.client


@pytest.mark.asyncio
async def test_create_fails_when_redis_unreachable(monkeypatch, pools):
    """Construction fails with StoreConnectionError and cleans up the pool."""
    monkeypatch.setattr("transfer_queue.infra.queue.store.Redis", UnreachableRedis)
    settings = RedisSettings(host="redis.invalid", port=6390)

    with pytest.raises(StoreConnectionError) as exc_info:
        await TransferQueueStore.create("watcher", 120, redis_settings=settings)

    assert isinstance(exc_info.value.__cause__, RedisConnectionError)
    assert exc_info.value.extra["host"] == "redis.invalid"
    assert exc_info.value.extra["port"] == 6390
    assert pools[0].disconnected is True


@pytest.mark.asyncio
async def test_store_as_async_context_manager(monkeypatch, pools, fake_server):
    monkeypatch.setattr(
        "transfer_queue.infra.queue.store.Redis",
        lambda connection_pool=None: fakeredis.aioredis.FakeRedis(
            server=fake_server, decode_responses=True
        ),
    )

    async with await TransferQueueStore.create(
        "watcher", 120, redis_settings=RedisSettings()
    ) as store:
        assert await store.pending_count() == 0

    assert pools[0].disconnected is True


@pytest.mark.asyncio
async def test_close_leaves_injected_client_open(redis_client):
    """A store built around an injected client does not close it."""
    store = TransferQueueStore(redis_client, "watcher", 60)

    await store.close()

    assert await redis_client.ping() is True
