"""Custom exception classes for the transfer queue."""

from __future__ import annotations

from typing import Any


class TransferQueueError(Exception):
    """Base transfer queue exception.

    All custom exceptions should inherit from this class.

    Attributes:
        detail: Human-readable error message.
        type: Error type identifier.
        extra: Additional context-specific information about the error.

    Example:
            raise TransferQueueError(
            detail="Queue entry could not be decoded",
            type="record-decode-error",
            extra={"key": "watcher:tx:00000000000000000009-0000000005"},
        )
    """

    def __init__(
        self,
        detail: str,
        type: str = "transfer-queue-error",
        extra: dict[str, Any] | None = None,
    ) -> None:
        """Initialize transfer queue exception.

        Args:
            detail: Human-readable error message.
            type: Error type identifier.
            extra: Additional context about the error.
        """
        self.detail = detail
        self.type = type
        self.extra = extra or {}
        super().__init__(detail)


class StoreConnectionError(TransferQueueError):
    """Raised when the backing Redis store cannot be reached during construction.

    Example:
            raise StoreConnectionError(
            detail="Unable to connect to Redis",
            extra={"host": "localhost", "port": 6379},
        )
    """

    def __init__(
        self,
        detail: str,
        type: str = "store-connection-error",
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(detail=detail, type=type, extra=extra)


class RecordDecodeError(TransferQueueError):
    """Raised when a stored value cannot be decoded.

    Covers malformed queue members, transfer records with missing or invalid
    fields, and a block number that is not an integer. Distinct from a
    transfer simply not being found, which is reported as ``None``.
    """

    def __init__(
        self,
        detail: str,
        type: str = "record-decode-error",
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(detail=detail, type=type, extra=extra)
