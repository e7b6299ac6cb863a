"""
Signer backed by a raw eth_keys private key.

Hashing is done with the SDK's own EIP-712 implementation, so this
backend doubles as an independent check of the eth_account one.
"""
from typing import Any, Dict, Mapping, Optional, Sequence, Union

from eth_keys import keys
from eth_utils import keccak, to_bytes, to_hex
from web3 import Web3

from ..typed_data import hash_typed_data
from .base import Digest, digest_bytes


class KeySigner:
    """
    Signer using an eth_keys PrivateKey.

    Args:
        private_key: Hex string, raw 32 bytes or an eth_keys PrivateKey
        w3: Optional Web3 instance, only needed for gas estimation
    """

    def __init__(self, private_key: Union[str, bytes, keys.PrivateKey], w3: Optional[Web3] = None):
        if isinstance(private_key, keys.PrivateKey):
            self._key = private_key
        elif isinstance(private_key, str):
            self._key = keys.PrivateKey(to_bytes(hexstr=private_key))
        else:
            self._key = keys.PrivateKey(private_key)
        self.w3 = w3

    @property
    def address(self) -> str:
        return self._key.public_key.to_checksum_address()

    def get_address(self) -> str:
        return self.address

    def _sign_hash(self, message_hash: bytes) -> str:
        sig = self._key.sign_msg_hash(message_hash)
        raw = sig.r.to_bytes(32, "big") + sig.s.to_bytes(32, "big") + bytes([sig.v + 27])
        return to_hex(raw)

    def sign_message(self, digest: Digest) -> str:
        message = digest_bytes(digest)
        prefix = b"\x19Ethereum Signed Message:\n" + str(len(message)).encode("ascii")
        return self._sign_hash(keccak(prefix + message))

    def sign_typed_data(
        self,
        domain: Mapping[str, Any],
        types: Mapping[str, Sequence[Mapping[str, str]]],
        values: Mapping[str, Any],
        primary_type: str,
    ) -> str:
        return self._sign_hash(hash_typed_data(domain, types, values, primary_type))

    def estimate_gas(self, tx: Dict[str, Any]) -> int:
        if self.w3 is None:
            raise ValueError("A Web3 instance is required for gas estimation")
        return self.w3.eth.estimate_gas({"from": self.address, **tx})
