"""Key layout and value encoding for the Redis-backed transfer queue.

Redis Key Structure (for namespace ``ns``):
- ``ns:block`` - String holding the pending block number
- ``ns:transfers`` - Sorted set of encoded TransferIds, every score 0
- ``ns:tx:{member}`` - Hash with the full transfer record

Members sharing a score are ordered by Redis byte-wise, so a TransferId is
encoded as fixed-width zero-padded decimals. Lexicographic order of members
is then exactly ``(block_number, log_index)`` order.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

from pydantic import ValidationError

from transfer_queue.core.exceptions import RecordDecodeError
from transfer_queue.core.schemas.transfer import (
    MAX_BLOCK_NUMBER,
    MAX_LOG_INDEX,
    Transfer,
    TransferId,
)

KEY_SEPARATOR = ":"
MEMBER_SEPARATOR = "-"
BLOCK_NUMBER_WIDTH = len(str(MAX_BLOCK_NUMBER))
LOG_INDEX_WIDTH = len(str(MAX_LOG_INDEX))

_MEMBER_RE = re.compile(
    rf"^(\d{{{BLOCK_NUMBER_WIDTH}}}){MEMBER_SEPARATOR}(\d{{{LOG_INDEX_WIDTH}}})$"
)


def encode_transfer_id(transfer_id: TransferId) -> str:
    """Encode a TransferId as a sortable sorted-set member.

    Example:
            encode_transfer_id(TransferId(9, 5))
        # '00000000000000000009-0000000005'
    """
    block_number, log_index = transfer_id
    if not 0 <= block_number <= MAX_BLOCK_NUMBER:
        msg = f"block_number out of range: {block_number}"
        raise ValueError(msg)
    if not 0 <= log_index <= MAX_LOG_INDEX:
        msg = f"log_index out of range: {log_index}"
        raise ValueError(msg)
    return (
        f"{block_number:0{BLOCK_NUMBER_WIDTH}d}"
        f"{MEMBER_SEPARATOR}"
        f"{log_index:0{LOG_INDEX_WIDTH}d}"
    )


def decode_transfer_id(member: str) -> TransferId:
    """Decode a sorted-set member back into its TransferId.

    Raises:
        RecordDecodeError: If the member was not produced by encode_transfer_id().
    """
    match = _MEMBER_RE.match(member)
    if match is None:
        raise RecordDecodeError(
            detail=f"Malformed queue member: {member!r}",
            extra={"member": member},
        )
    return TransferId(int(match.group(1)), int(match.group(2)))


def transfer_to_mapping(transfer: Transfer) -> dict[str, str]:
    """Flatten a transfer into hash fields keyed by the camelCase field names."""
    return {
        field: str(value)
        for field, value in transfer.model_dump(by_alias=True).items()
    }


def mapping_to_transfer(
    mapping: Mapping[str, str],
    *,
    key: str | None = None,
    expected_id: TransferId | None = None,
) -> Transfer:
    """Rebuild a transfer from its hash fields, parsing numeric fields.

    When ``expected_id`` is given, the record's own block number and log
    index must match it.

    Raises:
        RecordDecodeError: If required fields are missing or invalid, or the
            record belongs to another TransferId.
    """
    try:
        transfer = Transfer.model_validate(dict(mapping))
    except ValidationError as e:
        missing = [
            ".".join(str(loc) for loc in err["loc"])
            for err in e.errors()
            if err["type"] == "missing"
        ]
        raise RecordDecodeError(
            detail=f"Invalid transfer record at {key or '<unknown>'}",
            extra={"key": key, "missing_fields": missing, "errors": e.error_count()},
        ) from e

    if expected_id is not None and transfer.transfer_id != expected_id:
        raise RecordDecodeError(
            detail=f"Transfer record at {key or '<unknown>'} does not match its key",
            extra={
                "key": key,
                "expected_id": tuple(expected_id),
                "record_id": tuple(transfer.transfer_id),
            },
        )
    return transfer


class TransferQueueKeys:
    """Namespaced key builder for one transfer queue."""

    def __init__(self, namespace: str) -> None:
        self.namespace = namespace
        self.block = self._namespaced("block")
        self.transfers = self._namespaced("transfers")

    def _namespaced(self, *parts: str) -> str:
        return KEY_SEPARATOR.join((self.namespace, *parts))

    def transfer(self, transfer_id: TransferId) -> str:
        """Key of the hash holding one transfer record."""
        return self._namespaced("tx", encode_transfer_id(transfer_id))
