"""
Signer backed by an account managed by a JSON-RPC node or wallet.
"""
import logging
from typing import Any, Dict, Mapping, Optional, Sequence

from eth_utils import to_checksum_address, to_hex
from web3 import Web3

from ..exceptions import SignerUnavailableError
from .base import Digest, build_typed_data, digest_bytes, normalize_v

logger = logging.getLogger(__name__)


class Web3Signer:
    """
    Signer delegating to ``eth_sign`` / ``eth_signTypedData_v4`` on a node.

    Args:
        w3: Connected Web3 instance
        address: Account to sign with; defaults to the node's first account
    """

    def __init__(self, w3: Web3, address: Optional[str] = None):
        self.w3 = w3
        self._address = to_checksum_address(address) if address else None

    @property
    def address(self) -> str:
        return self.get_address()

    def get_address(self) -> str:
        if self._address is None:
            accounts = self.w3.eth.accounts
            if not accounts:
                raise SignerUnavailableError("RPC node exposes no accounts to sign with")
            self._address = to_checksum_address(accounts[0])
            logger.debug(f"Using node account {self._address}")
        return self._address

    def sign_message(self, digest: Digest) -> str:
        signature = self.w3.eth.sign(self.get_address(), data=digest_bytes(digest))
        return to_hex(normalize_v(bytes(signature)))

    def sign_typed_data(
        self,
        domain: Mapping[str, Any],
        types: Mapping[str, Sequence[Mapping[str, str]]],
        values: Mapping[str, Any],
        primary_type: str,
    ) -> str:
        typed_data = build_typed_data(domain, types, values, primary_type)
        signature = self.w3.eth.sign_typed_data(self.get_address(), typed_data)
        return to_hex(normalize_v(bytes(signature)))

    def estimate_gas(self, tx: Dict[str, Any]) -> int:
        return self.w3.eth.estimate_gas({"from": self.get_address(), **tx})
