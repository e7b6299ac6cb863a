"""
Signing backends for the Safe relayer SDK.
"""
from typing import Any, Optional

from eth_account.signers.local import LocalAccount
from eth_keys import keys
from web3 import Web3

from .base import Signer
from .raw import KeySigner
from .local import LocalSigner
from .rpc import Web3Signer

__all__ = ['Signer', 'LocalSigner', 'KeySigner', 'Web3Signer', 'create_signer']


def create_signer(signer: Any, w3: Optional[Web3] = None) -> Signer:
    """
    Normalize a key, account or signer into a Signer.

    Args:
        signer: Hex private key, LocalAccount, eth_keys PrivateKey or Signer
        w3: Optional Web3 instance handed to key-based backends

    Returns:
        Signer instance

    Raises:
        TypeError: If the object cannot be used for signing
    """
    if isinstance(signer, (str, bytes)):
        return LocalSigner(signer, w3=w3)
    if isinstance(signer, LocalAccount):
        return LocalSigner(signer, w3=w3)
    if isinstance(signer, keys.PrivateKey):
        return KeySigner(signer, w3=w3)
    if isinstance(signer, Signer):
        return signer
    raise TypeError(f"Unsupported signer type: {type(signer).__name__}")
