"""
Counterfactual address derivation for Safe and proxy wallets.
"""
from eth_abi import encode
from eth_utils import is_address, keccak, to_bytes, to_canonical_address, to_checksum_address

from ..constants import PROXY_INIT_CODE_HASH, SAFE_INIT_CODE_HASH


def _require_address(address: str, name: str) -> str:
    if not isinstance(address, str) or not is_address(address):
        raise ValueError(f"{name} must be a valid 20-byte address, got: {address!r}")
    return to_checksum_address(address)


def get_create2_address(deployer: str, salt: bytes, init_code_hash: str) -> str:
    """
    Compute a CREATE2 deployment address.

    Args:
        deployer: Factory address
        salt: 32-byte salt
        init_code_hash: keccak256 of the creation code (hex)

    Returns:
        Checksummed address
    """
    preimage = b"\xff" + to_canonical_address(deployer) + salt + to_bytes(hexstr=init_code_hash)
    return to_checksum_address(keccak(preimage)[12:])


def derive_safe(address: str, safe_factory: str) -> str:
    """
    Derive the Safe address the factory deploys for an owner.

    The salt is keccak256 of the ABI-encoded owner address.

    Args:
        address: Owner (signer) address
        safe_factory: Safe factory address

    Returns:
        Checksummed Safe address

    Raises:
        ValueError: If either address is malformed
    """
    owner = _require_address(address, "owner address")
    factory = _require_address(safe_factory, "safe factory address")
    salt = keccak(encode(["address"], [owner]))
    return get_create2_address(factory, salt, SAFE_INIT_CODE_HASH)


def derive_proxy_wallet(address: str, proxy_factory: str) -> str:
    """
    Derive the legacy proxy wallet address for an owner.

    The salt is keccak256 of the packed 20-byte owner address.
    """
    owner = _require_address(address, "owner address")
    factory = _require_address(proxy_factory, "proxy factory address")
    salt = keccak(to_canonical_address(owner))
    return get_create2_address(factory, salt, PROXY_INIT_CODE_HASH)
