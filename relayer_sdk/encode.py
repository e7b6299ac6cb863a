"""
Calldata encoding for Safe batch execution.
"""
import logging
from typing import Sequence

from eth_abi import encode
from eth_abi.packed import encode_packed
from eth_utils import function_signature_to_4byte_selector, is_address, to_bytes, to_checksum_address

from .models import OperationType, SafeTransaction

logger = logging.getLogger(__name__)

MULTISEND_SELECTOR = function_signature_to_4byte_selector("multiSend(bytes)")


def encode_multisend_transactions(txns: Sequence[SafeTransaction]) -> bytes:
    """
    Pack calls in the MultiSend layout.

    Each call is encoded as ``operation (1) ++ to (20) ++ value (32) ++
    len(data) (32) ++ data``, concatenated in input order.

    Args:
        txns: Calls to pack

    Returns:
        Packed bytes
    """
    packed = b""
    for tx in txns:
        data = to_bytes(hexstr=tx.data)
        packed += encode_packed(
            ["uint8", "address", "uint256", "uint256", "bytes"],
            [int(tx.operation), tx.to, int(tx.value), len(data), data],
        )
    return packed


def create_safe_multisend_transaction(txns: Sequence[SafeTransaction], safe_multisend_address: str) -> SafeTransaction:
    """
    Wrap several calls into one delegate call to the MultiSend contract.

    Args:
        txns: Calls to batch
        safe_multisend_address: MultiSend contract address

    Returns:
        A DelegateCall SafeTransaction targeting the MultiSend contract

    Raises:
        ValueError: If the MultiSend address is invalid
    """
    if not is_address(safe_multisend_address):
        raise ValueError(f"Invalid MultiSend address: {safe_multisend_address}")

    calldata = MULTISEND_SELECTOR + encode(["bytes"], [encode_multisend_transactions(txns)])
    logger.debug(f"Encoded {len(txns)} calls into multiSend ({len(calldata)} bytes)")
    return SafeTransaction(
        to=to_checksum_address(safe_multisend_address),
        operation=OperationType.DelegateCall,
        data="0x" + calldata.hex(),
        value="0",
    )
