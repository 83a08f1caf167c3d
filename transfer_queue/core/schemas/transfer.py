"""Transfer event schemas.

A ``Transfer`` is one on-chain token-transfer event waiting to be published.
Its ``TransferId`` is the ``(block_number, log_index)`` pair, which orders
events the way the chain emitted them.
"""

from __future__ import annotations

from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field

# Upper bounds keep the fixed-width queue member encoding lossless.
MAX_BLOCK_NUMBER = 2**64 - 1
MAX_LOG_INDEX = 2**32 - 1


class TransferId(NamedTuple):
    """Ordering key of a transfer.

    Tuple comparison gives chain order: lower block first, then lower log index.
    """

    block_number: int
    log_index: int


class Transfer(BaseModel):
    """Token transfer event as persisted in the queue.

    Field aliases are the camelCase names used in storage and in JSON
    payloads; attribute names may be used when constructing in Python.

    Example:
            transfer = Transfer(
            blockNumber=9,
            logIndex=5,
            transactionHash="0xabc",
            **{"from": "0x01", "to": "0x02"},
            value="1000000000000000000",
            unit="ETH",
        )
        transfer.transfer_id  # TransferId(block_number=9, log_index=5)
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
    )

    block_number: int = Field(
        alias="blockNumber",
        ge=0,
        le=MAX_BLOCK_NUMBER,
        description="Height of the block containing the event",
    )
    log_index: int = Field(
        alias="logIndex",
        ge=0,
        le=MAX_LOG_INDEX,
        description="Position of the event within the block's logs",
    )
    transaction_hash: str = Field(
        alias="transactionHash",
        description="Hash of the originating transaction",
    )
    from_address: str = Field(alias="from", description="Sender address")
    to_address: str = Field(alias="to", description="Recipient address")
    value: str = Field(
        description="Transferred amount, kept as a string to avoid precision loss",
    )
    unit: str = Field(description="Token or currency unit of the amount")

    @property
    def transfer_id(self) -> TransferId:
        """Ordering key derived from block number and log index."""
        return TransferId(self.block_number, self.log_index)
