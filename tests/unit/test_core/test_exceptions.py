"""Tests for core exceptions."""

from transfer_queue.core import exceptions as exc


def test_transfer_queue_error_defaults() -> None:
    error = exc.TransferQueueError(detail="bad")
    assert error.type == "transfer-queue-error"
    assert error.extra == {}
    assert str(error) == "bad"


def test_store_connection_error_fields() -> None:
    error = exc.StoreConnectionError(detail="unreachable", extra={"host": "redis"})
    assert isinstance(error, exc.TransferQueueError)
    assert error.type == "store-connection-error"
    assert error.extra["host"] == "redis"


def test_record_decode_error_fields() -> None:
    error = exc.RecordDecodeError(detail="malformed", extra={"member": "9-5"})
    assert isinstance(error, exc.TransferQueueError)
    assert error.type == "record-decode-error"
    assert error.extra["member"] == "9-5"
