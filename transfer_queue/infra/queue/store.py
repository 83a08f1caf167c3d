"""Redis-backed queue of token transfers awaiting publication.

A producer records the pending block height and admits transfers; a consumer
peeks at the lowest transfer in chain order and removes it once published.
Every write carries the configured TTL, which is the only eviction mechanism.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Self, cast

from redis.asyncio import ConnectionPool, Redis

from transfer_queue.core.exceptions import RecordDecodeError, StoreConnectionError
from transfer_queue.core.schemas.transfer import Transfer, TransferId
from transfer_queue.core.settings import get_redis_settings
from transfer_queue.infra.logging.context import get_logger
from transfer_queue.infra.queue.codec import (
    TransferQueueKeys,
    decode_transfer_id,
    encode_transfer_id,
    mapping_to_transfer,
    transfer_to_mapping,
)

if TYPE_CHECKING:
    from collections.abc import Awaitable

    from transfer_queue.core.settings.redis import RedisSettings

logger = logging.getLogger(__name__)

# KEYS[1] record hash, KEYS[2] queue sorted set
# ARGV[1] ttl, ARGV[2] member, ARGV[3..] field/value pairs
ADD_TRANSFER_SCRIPT = """
if redis.call('EXISTS', KEYS[1]) == 1 then
    return 0
end
for i = 3, #ARGV, 2 do
    redis.call('HSET', KEYS[1], ARGV[i], ARGV[i + 1])
end
redis.call('EXPIRE', KEYS[1], ARGV[1])
redis.call('ZADD', KEYS[2], 0, ARGV[2])
redis.call('EXPIRE', KEYS[2], ARGV[1])
return 1
"""

# KEYS[1] record hash, KEYS[2] queue sorted set, ARGV[1] member
DROP_DANGLING_SCRIPT = """
if redis.call('EXISTS', KEYS[1]) == 0 then
    return redis.call('ZREM', KEYS[2], ARGV[1])
end
return 0
"""


class TransferQueueStore:
    """Ordered, deduplicating queue of transfers stored in Redis.

    The store takes an already connected client (``decode_responses=True``),
    so several namespaces or tests can share or isolate connections freely.
    Use :meth:`create` to get a store that owns its own connection.

    Ordering: every queue member has score 0 and is a fixed-width encoding of
    its TransferId, so ``ZRANGEBYSCORE 0 0 LIMIT 0 1`` returns the transfer
    with the smallest ``(block_number, log_index)``.

    Example:
            store = await TransferQueueStore.create("erc20-watcher", ttl_seconds=86400)

        # Producer
        await store.set_pending_block_number(1_000_001)
        await store.add_transfer(transfer)

        # Consumer
        head = await store.next_transfer()
        if head is not None:
            publish(head)
            await store.remove_transfer(head)

        await store.close()
    """

    def __init__(
        self,
        client: Redis,
        namespace: str,
        ttl_seconds: int,
        *,
        pool: ConnectionPool | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            client: Connected async Redis client with decoded responses.
            namespace: Prefix for all keys of this queue.
            ttl_seconds: Expiry applied on every write, in seconds.
            pool: Connection pool owned by this store, closed by :meth:`close`.

        Raises:
            ValueError: If namespace is empty or ttl_seconds is not positive.
        """
        if not namespace:
            msg = "namespace must be a non-empty string"
            raise ValueError(msg)
        if isinstance(ttl_seconds, bool) or not isinstance(ttl_seconds, int) or ttl_seconds <= 0:
            msg = f"ttl_seconds must be a positive integer, got {ttl_seconds!r}"
            raise ValueError(msg)

        self.namespace = namespace
        self.ttl_seconds = ttl_seconds
        self.keys = TransferQueueKeys(namespace)

        self._client: Redis | None = client
        self._pool = pool
        self._log = get_logger(__name__, namespace=namespace)

    @classmethod
    async def create(
        cls,
        namespace: str,
        ttl_seconds: int,
        *,
        redis_settings: RedisSettings | None = None,
    ) -> Self:
        """Connect to Redis and return a store owning the connection.

        Raises:
            StoreConnectionError: If Redis cannot be reached.
        """
        settings = redis_settings or get_redis_settings()
        logger.info(
            "Connecting to Redis for transfer queue",
            extra={
                "namespace": namespace,
                "host": settings.host,
                "port": settings.port,
                "db": settings.db,
            },
        )

        pool: ConnectionPool | None = None
        try:
            pool = ConnectionPool.from_url(settings.url, **settings.connection_pool_kwargs())
            client = Redis(connection_pool=pool)
            await cast("Awaitable[bool]", client.ping())
        except Exception as e:
            logger.exception(
                "Failed to connect to Redis for transfer queue",
                extra={"namespace": namespace, "error": str(e)},
            )
            if pool is not None:
                await pool.disconnect()
            raise StoreConnectionError(
                detail=f"Unable to connect to Redis at {settings.host}:{settings.port}",
                extra={"host": settings.host, "port": settings.port, "db": settings.db},
            ) from e

        logger.info("Transfer queue Redis connection established", extra={"namespace": namespace})
        return cls(client, namespace, ttl_seconds, pool=pool)

    async def close(self) -> None:
        """Release the connection if this store owns it."""
        if self._pool is None:
            self._client = None
            return

        if self._client is not None:
            await self._client.aclose()
            self._client = None

        await self._pool.disconnect()
        self._pool = None
        logger.info("Transfer queue Redis connection closed", extra={"namespace": self.namespace})

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    @property
    def client(self) -> Redis:
        """Get the Redis client instance."""
        if self._client is None:
            msg = "Transfer queue store is closed."
            raise RuntimeError(msg)
        return self._client

    # ------------------------------------------------------------------
    # Pending block number
    # ------------------------------------------------------------------

    async def get_pending_block_number(self) -> int | None:
        """Return the pending block height, or None if unset or expired.

        Raises:
            RecordDecodeError: If the stored value is not an integer.
        """
        raw = await self._call("get_pending_block_number", self.client.get(self.keys.block))
        if raw is None:
            return None
        try:
            return int(raw)
        except ValueError as e:
            raise RecordDecodeError(
                detail=f"Pending block number is not an integer: {raw!r}",
                extra={"key": self.keys.block},
            ) from e

    async def set_pending_block_number(self, block_number: int) -> None:
        """Overwrite the pending block height and reset its TTL.

        Forward-only progress is the caller's responsibility.
        """
        if isinstance(block_number, bool) or not isinstance(block_number, int) or block_number < 0:
            msg = f"block_number must be a non-negative integer, got {block_number!r}"
            raise ValueError(msg)
        await self._call(
            "set_pending_block_number",
            self.client.set(self.keys.block, block_number, ex=self.ttl_seconds),
        )
        self._log.debug("Pending block number set", extra={"block_number": block_number})

    # ------------------------------------------------------------------
    # Transfers
    # ------------------------------------------------------------------

    async def add_transfer(self, transfer: Transfer) -> bool:
        """Admit a transfer unless one with the same TransferId was admitted before.

        The existence check and the writes run as a single Lua script, so
        concurrent producers cannot double-admit.

        Returns:
            True if the transfer was admitted, False if it was a duplicate.
        """
        transfer_id = transfer.transfer_id
        member = encode_transfer_id(transfer_id)
        args: list[Any] = [self.ttl_seconds, member]
        for field, value in transfer_to_mapping(transfer).items():
            args.extend((field, value))

        admitted = await self._call(
            "add_transfer",
            cast(
                "Awaitable[int]",
                self.client.eval(
                    ADD_TRANSFER_SCRIPT,
                    2,
                    self.keys.transfer(transfer_id),
                    self.keys.transfers,
                    *args,
                ),
            ),
        )

        if admitted:
            self._log.info("Transfer admitted", extra={"member": member})
        else:
            self._log.debug("Duplicate transfer ignored", extra={"member": member})
        return bool(admitted)

    async def next_transfer(self) -> Transfer | None:
        """Return the lowest pending transfer in chain order without removing it.

        Queue entries whose record already expired are dropped and the next
        entry is tried, so the result is the lowest transfer that still has a
        record.

        Raises:
            RecordDecodeError: If the head member or its record is malformed.
        """
        while True:
            members = await self._call(
                "next_transfer",
                self.client.zrangebyscore(self.keys.transfers, 0, 0, start=0, num=1),
            )
            if not members:
                return None

            member = members[0]
            transfer_id = decode_transfer_id(member)
            record_key = self.keys.transfer(transfer_id)
            record = await self._call("next_transfer", self.client.hgetall(record_key))
            if record:
                return mapping_to_transfer(record, key=record_key, expected_id=transfer_id)

            dropped = await self._call(
                "next_transfer",
                cast(
                    "Awaitable[int]",
                    self.client.eval(
                        DROP_DANGLING_SCRIPT, 2, record_key, self.keys.transfers, member,
                    ),
                ),
            )
            self._log.warning(
                "Dropped queue entry whose transfer record expired",
                extra={"member": member, "removed": bool(dropped)},
            )

    async def get_transfer(self, transfer_id: TransferId) -> Transfer | None:
        """Look up a transfer record directly, whether or not it is still queued."""
        record_key = self.keys.transfer(transfer_id)
        record = await self._call("get_transfer", self.client.hgetall(record_key))
        if not record:
            return None
        return mapping_to_transfer(record, key=record_key, expected_id=transfer_id)

    async def remove_transfer(self, transfer: Transfer | TransferId) -> bool:
        """Remove a transfer from the queue, keeping its record until it expires.

        Returns:
            True if an entry was removed, False if it was not queued.
        """
        transfer_id = transfer.transfer_id if isinstance(transfer, Transfer) else transfer
        member = encode_transfer_id(transfer_id)
        removed = await self._call(
            "remove_transfer", self.client.zrem(self.keys.transfers, member),
        )
        self._log.debug("Transfer removed", extra={"member": member, "removed": bool(removed)})
        return bool(removed)

    async def pending_count(self) -> int:
        """Number of entries currently in the queue."""
        return int(await self._call("pending_count", self.client.zcard(self.keys.transfers)))

    async def _call(self, operation: str, command: Awaitable[Any]) -> Any:
        """Await a Redis command, logging failures before propagating them."""
        try:
            return await command
        except Exception as e:
            self._log.exception(
                "Transfer queue operation failed",
                extra={"operation": operation, "error": str(e)},
            )
            raise
