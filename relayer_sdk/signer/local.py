"""
Signer backed by an in-process eth_account key.
"""
from typing import Any, Dict, Mapping, Optional, Sequence, Union

from eth_account import Account
from eth_account.messages import encode_defunct
from eth_account.signers.local import LocalAccount
from eth_utils import to_hex
from web3 import Web3

from .base import Digest, build_typed_data, digest_bytes


class LocalSigner:
    """
    Signer using an eth_account LocalAccount.

    Args:
        private_key: Hex private key or an existing LocalAccount
        w3: Optional Web3 instance, only needed for gas estimation
    """

    def __init__(self, private_key: Union[str, bytes, LocalAccount], w3: Optional[Web3] = None):
        if isinstance(private_key, LocalAccount):
            self.account = private_key
        else:
            self.account = Account.from_key(private_key)
        self.w3 = w3

    @property
    def address(self) -> str:
        return self.account.address

    def get_address(self) -> str:
        return self.account.address

    def sign_message(self, digest: Digest) -> str:
        signed = self.account.sign_message(encode_defunct(primitive=digest_bytes(digest)))
        return to_hex(signed.signature)

    def sign_typed_data(
        self,
        domain: Mapping[str, Any],
        types: Mapping[str, Sequence[Mapping[str, str]]],
        values: Mapping[str, Any],
        primary_type: str,
    ) -> str:
        signed = self.account.sign_typed_data(
            full_message=build_typed_data(domain, types, values, primary_type)
        )
        return to_hex(signed.signature)

    def estimate_gas(self, tx: Dict[str, Any]) -> int:
        if self.w3 is None:
            raise ValueError("A Web3 instance is required for gas estimation")
        return self.w3.eth.estimate_gas({"from": self.address, **tx})
