"""Unit tests for the Transfer schema and TransferId ordering."""

from __future__ import annotations

from pydantic import ValidationError
import pytest

from transfer_queue.core.schemas.transfer import MAX_BLOCK_NUMBER, Transfer, TransferId


def _payload(**overrides):
    data = {
        "blockNumber": 9,
        "logIndex": 5,
        "transactionHash": "0xabc",
        "from": "0x01",
        "to": "0x02",
        "value": "123456789012345678901234567890",
        "unit": "USDC",
    }
    data.update(overrides)
    return data


def test_transfer_accepts_aliases():
    transfer = Transfer.model_validate(_payload())

    assert transfer.block_number == 9
    assert transfer.log_index == 5
    assert transfer.from_address == "0x01"
    assert transfer.to_address == "0x02"
    assert transfer.transfer_id == TransferId(9, 5)


def test_transfer_accepts_field_names():
    transfer = Transfer(
        block_number=1,
        log_index=0,
        transaction_hash="0xdef",
        from_address="0xa",
        to_address="0xb",
        value="1",
        unit="ETH",
    )

    assert transfer.model_dump(by_alias=True)["from"] == "0xa"


def test_value_is_kept_as_string():
    """Large amounts are not converted to numbers."""
    transfer = Transfer.model_validate(_payload())

    assert transfer.value == "123456789012345678901234567890"


def test_transfer_parses_numeric_strings():
    transfer = Transfer.model_validate(_payload(blockNumber="10", logIndex="2"))

    assert transfer.transfer_id == TransferId(10, 2)


@pytest.mark.parametrize(
    "overrides",
    [
        {"blockNumber": -1},
        {"logIndex": -1},
        {"blockNumber": MAX_BLOCK_NUMBER + 1},
        {"transactionHash": None},
    ],
)
def test_transfer_rejects_invalid_data(overrides):
    with pytest.raises(ValidationError):
        Transfer.model_validate(_payload(**overrides))


def test_transfer_is_immutable():
    transfer = Transfer.model_validate(_payload())

    with pytest.raises(ValidationError):
        transfer.value = "0"  # type: ignore[misc]


def test_transfer_id_total_order():
    """Lower block first, then lower log index."""
    ids = [TransferId(10, 2), TransferId(10, 0), TransferId(9, 5)]

    assert sorted(ids) == [TransferId(9, 5), TransferId(10, 0), TransferId(10, 2)]
    assert TransferId(5, 0) < TransferId(5, 1) < TransferId(6, 0)


def test_string_fields_keep_surrounding_whitespace():
    transfer = Transfer.model_validate(_payload(value=" 100 ", transactionHash="0xabc "))

    assert transfer.value == " 100 "
    assert transfer.transaction_hash == "0xabc "
