"""Transfer queue infrastructure using Redis."""
from __future__ import annotations

from transfer_queue.infra.queue.codec import (
    TransferQueueKeys,
    decode_transfer_id,
    encode_transfer_id,
)
from transfer_queue.infra.queue.store import TransferQueueStore

__all__ = [
    "TransferQueueKeys",
    "TransferQueueStore",
    "decode_transfer_id",
    "encode_transfer_id",
]
