"""
Builder for SAFE-CREATE (Safe deployment) requests.
"""
import logging

from ..config import SafeContractConfig
from ..constants import SAFE_FACTORY_NAME
from ..models import SafeCreateSignatureParams, SafeCreateTransactionArgs, SafeCreateTransactionRequest
from ..signer import Signer
from ..typed_data import CREATE_PROXY_TYPES
from .derive import derive_safe

logger = logging.getLogger(__name__)


def create_safe_create_signature(
    signer: Signer,
    safe_factory: str,
    chain_id: int,
    payment_token: str,
    payment: str,
    payment_receiver: str,
) -> str:
    """
    Sign the factory's CreateProxy typed message.

    The signature is returned as produced by the signer; the factory does
    not use the Safe's packed layout.
    """
    domain = {
        "name": SAFE_FACTORY_NAME,
        "chainId": chain_id,
        "verifyingContract": safe_factory,
    }
    values = {
        "paymentToken": payment_token,
        "payment": int(payment),
        "paymentReceiver": payment_receiver,
    }
    return signer.sign_typed_data(domain, CREATE_PROXY_TYPES, values, "CreateProxy")


def build_safe_create_transaction_request(
    signer: Signer,
    safe_contract_config: SafeContractConfig,
    args: SafeCreateTransactionArgs,
) -> SafeCreateTransactionRequest:
    """
    Build and sign a SAFE-CREATE request.

    Args:
        signer: Signer that will own the new Safe
        safe_contract_config: Factory and MultiSend addresses
        args: Owner, chain id and payment parameters

    Returns:
        Signed SafeCreateTransactionRequest
    """
    safe_factory = safe_contract_config.safe_factory
    sig = create_safe_create_signature(
        signer,
        safe_factory,
        args.chain_id,
        args.payment_token,
        args.payment,
        args.payment_receiver,
    )

    request = SafeCreateTransactionRequest(
        from_address=args.from_address,
        to=safe_factory,
        # The Safe does not exist yet; the relayer records the expected address
        proxy_wallet=derive_safe(args.from_address, safe_factory),
        data="0x",
        signature=sig,
        signature_params=SafeCreateSignatureParams(
            payment_token=args.payment_token,
            payment=args.payment,
            payment_receiver=args.payment_receiver,
        ),
    )
    logger.debug(f"Created Safe create request for owner {args.from_address}")
    return request
