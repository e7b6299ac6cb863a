"""
Builder for SAFE transaction requests.
"""
import logging
from typing import Optional, Sequence

from ..constants import ZERO_ADDRESS
from ..config import SafeContractConfig
from ..encode import create_safe_multisend_transaction
from ..models import (
    OperationType,
    SafeSignatureParams,
    SafeTransaction,
    SafeTransactionArgs,
    SafeTransactionRequest,
)
from ..signer import Signer
from ..typed_data import SAFE_TX_TYPES, hash_typed_data
from ..utils import split_and_pack_sig
from .derive import derive_safe

logger = logging.getLogger(__name__)


def create_struct_hash(
    chain_id: int,
    safe: str,
    to: str,
    value: str,
    data: str,
    operation: OperationType,
    safe_tx_gas: str,
    base_gas: str,
    gas_price: str,
    gas_token: str,
    refund_receiver: str,
    nonce: str,
) -> str:
    """
    Compute the EIP-712 SafeTx digest the Safe verifies on-chain.

    Returns:
        0x-prefixed 32-byte digest
    """
    domain = {
        "chainId": chain_id,
        "verifyingContract": safe,
    }
    values = {
        "to": to,
        "value": value,
        "data": data,
        "operation": int(operation),
        "safeTxGas": safe_tx_gas,
        "baseGas": base_gas,
        "gasPrice": gas_price,
        "gasToken": gas_token,
        "refundReceiver": refund_receiver,
        "nonce": nonce,
    }
    return "0x" + hash_typed_data(domain, SAFE_TX_TYPES, values, "SafeTx").hex()


def aggregate_transaction(txns: Sequence[SafeTransaction], safe_multisend: str) -> SafeTransaction:
    """
    Fold calls into the single call a Safe executes.

    One call is returned unchanged; several are batched through MultiSend.

    Raises:
        ValueError: If ``txns`` is empty
    """
    if not txns:
        raise ValueError("At least one transaction is required")
    if len(txns) == 1:
        return txns[0]
    return create_safe_multisend_transaction(txns, safe_multisend)


def build_safe_transaction_request(
    signer: Signer,
    args: SafeTransactionArgs,
    safe_contract_config: SafeContractConfig,
    metadata: Optional[str] = None,
) -> SafeTransactionRequest:
    """
    Build and sign a SAFE request.

    The SafeTx digest is signed as a personal message and the signature is
    repacked into the Safe's r/s/v layout. Gas refund fields are always zero.

    Args:
        signer: Signer owning the Safe
        args: Sender, nonce, chain id and calls
        safe_contract_config: Factory and MultiSend addresses
        metadata: Optional free-form metadata for the relayer

    Returns:
        Signed SafeTransactionRequest
    """
    transaction = aggregate_transaction(args.transactions, safe_contract_config.safe_multisend)
    safe_txn_gas = "0"
    base_gas = "0"
    gas_price = "0"
    gas_token = ZERO_ADDRESS
    refund_receiver = ZERO_ADDRESS

    safe_address = derive_safe(args.from_address, safe_contract_config.safe_factory)

    struct_hash = create_struct_hash(
        args.chain_id,
        safe_address,
        transaction.to,
        transaction.value,
        transaction.data,
        transaction.operation,
        safe_txn_gas,
        base_gas,
        gas_price,
        gas_token,
        refund_receiver,
        args.nonce,
    )

    sig = signer.sign_message(struct_hash)
    packed_sig = split_and_pack_sig(sig)

    request = SafeTransactionRequest(
        from_address=args.from_address,
        to=transaction.to,
        proxy_wallet=safe_address,
        data=transaction.data,
        nonce=args.nonce,
        signature=packed_sig,
        signature_params=SafeSignatureParams(
            gas_price=gas_price,
            operation=str(int(transaction.operation)),
            safe_txn_gas=safe_txn_gas,
            base_gas=base_gas,
            gas_token=gas_token,
            refund_receiver=refund_receiver,
        ),
        metadata=metadata if metadata is not None else "",
    )
    logger.debug(f"Created Safe transaction request for {safe_address} (nonce {args.nonce})")
    return request
