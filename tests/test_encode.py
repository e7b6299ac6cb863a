"""
Tests for MultiSend aggregation.
"""
import pytest
from eth_abi import decode
from eth_utils import to_bytes
from pydantic import ValidationError

from relayer_sdk.builder import aggregate_transaction
from relayer_sdk.encode import (
    MULTISEND_SELECTOR,
    create_safe_multisend_transaction,
    encode_multisend_transactions,
)
from relayer_sdk.models import OperationType, SafeTransaction
from conftest import APPROVE_CALLDATA, CTF, SAFE_CONTRACTS, USDC


def _unpack(packed):
    """Split MultiSend packed bytes back into (op, to, value, data) tuples"""
    calls = []
    offset = 0
    while offset < len(packed):
        op = packed[offset]
        to = "0x" + packed[offset + 1:offset + 21].hex()
        value = int.from_bytes(packed[offset + 21:offset + 53], "big")
        length = int.from_bytes(packed[offset + 53:offset + 85], "big")
        data = packed[offset + 85:offset + 85 + length]
        calls.append((op, to, value, data))
        offset += 85 + length
    return calls


def test_single_call_returned_unchanged():
    tx = SafeTransaction(to=USDC, data=APPROVE_CALLDATA)
    assert aggregate_transaction([tx], SAFE_CONTRACTS.safe_multisend) is tx


def test_empty_batch_rejected():
    with pytest.raises(ValueError):
        aggregate_transaction([], SAFE_CONTRACTS.safe_multisend)


def test_multiple_calls_become_delegate_call():
    txns = [
        SafeTransaction(to=USDC, data=APPROVE_CALLDATA),
        SafeTransaction(to=CTF, data="0x", value="5"),
    ]
    result = aggregate_transaction(txns, SAFE_CONTRACTS.safe_multisend)

    assert result.to.lower() == SAFE_CONTRACTS.safe_multisend.lower()
    assert result.operation == OperationType.DelegateCall
    assert result.value == "0"
    assert result.data.startswith("0x8d80ff0a")


def test_multisend_calldata_layout():
    txns = [
        SafeTransaction(to=USDC, data=APPROVE_CALLDATA),
        SafeTransaction(to=CTF, operation=OperationType.DelegateCall, data="0xdeadbeef", value=7),
        SafeTransaction(to=USDC),
    ]
    result = create_safe_multisend_transaction(txns, SAFE_CONTRACTS.safe_multisend)
    calldata = to_bytes(hexstr=result.data)

    assert calldata[:4] == MULTISEND_SELECTOR
    (packed,) = decode(["bytes"], calldata[4:])
    assert packed == encode_multisend_transactions(txns)
    assert _unpack(packed) == [
        (0, USDC.lower(), 0, to_bytes(hexstr=APPROVE_CALLDATA)),
        (1, CTF.lower(), 7, bytes.fromhex("deadbeef")),
        (0, USDC.lower(), 0, b""),
    ]


def test_order_matters():
    a = SafeTransaction(to=USDC, data=APPROVE_CALLDATA)
    b = SafeTransaction(to=CTF, data="0x01")
    forward = create_safe_multisend_transaction([a, b], SAFE_CONTRACTS.safe_multisend)
    backward = create_safe_multisend_transaction([b, a], SAFE_CONTRACTS.safe_multisend)
    assert forward.data != backward.data


def test_invalid_multisend_address():
    with pytest.raises(ValueError, match="MultiSend"):
        create_safe_multisend_transaction([SafeTransaction(to=USDC)], "0x1234")


def test_safe_transaction_is_frozen():
    tx = SafeTransaction(to=USDC)
    with pytest.raises(ValidationError):
        tx.to = CTF


def test_safe_transaction_validation():
    assert SafeTransaction(to=USDC.lower()).to == USDC
    assert SafeTransaction(to=USDC, value=10).value == "10"
    with pytest.raises(ValidationError):
        SafeTransaction(to="not-an-address")
    with pytest.raises(ValidationError):
        SafeTransaction(to=USDC, data="095ea7b3")
    with pytest.raises(ValidationError):
        SafeTransaction(to=USDC, value=-1)


def test_safe_transaction_value_parsing():
    assert SafeTransaction(to=USDC, value="0x10").value == "16"
    assert SafeTransaction(to=USDC, value="0X0").value == "0"
    assert SafeTransaction(to=USDC, value="1000").value == "1000"
    assert SafeTransaction(to=USDC, value=2**256 - 1).value == str(2**256 - 1)


@pytest.mark.parametrize("value", [1.9, 1.0, True, False, "1.5", "abc", "0xzz", None])
def test_safe_transaction_rejects_non_integer_value(value):
    """Non-integer values raise instead of being truncated"""
    with pytest.raises(ValidationError):
        SafeTransaction(to=USDC, value=value)
