"""
Signer protocol shared by all signing backends.
"""
from typing import Any, Dict, List, Mapping, Protocol, Sequence, Union, runtime_checkable

from eth_utils import to_bytes

from ..typed_data import domain_types

Digest = Union[str, bytes]


@runtime_checkable
class Signer(Protocol):
    """
    Capability interface used by the relay client.

    Every backend must return 0x-prefixed 65-byte signatures with v in
    {27, 28} so that signatures are byte-identical across backends.
    """

    def get_address(self) -> str:
        """Return the checksummed signer address"""
        ...

    def sign_message(self, digest: Digest) -> str:
        """Sign a 32-byte digest as an EIP-191 personal message"""
        ...

    def sign_typed_data(
        self,
        domain: Mapping[str, Any],
        types: Mapping[str, Sequence[Mapping[str, str]]],
        values: Mapping[str, Any],
        primary_type: str,
    ) -> str:
        """Sign an EIP-712 typed message"""
        ...

    def estimate_gas(self, tx: Dict[str, Any]) -> int:
        """Estimate gas for a transaction"""
        ...


def digest_bytes(digest: Digest) -> bytes:
    if isinstance(digest, (bytes, bytearray)):
        return bytes(digest)
    return to_bytes(hexstr=digest)


def normalize_v(signature: bytes) -> bytes:
    """Lift a 0/1 recovery id into the 27/28 convention."""
    if len(signature) == 65 and signature[64] < 27:
        return signature[:64] + bytes([signature[64] + 27])
    return signature


def build_typed_data(
    domain: Mapping[str, Any],
    types: Mapping[str, Sequence[Mapping[str, str]]],
    values: Mapping[str, Any],
    primary_type: str,
) -> Dict[str, Any]:
    """Assemble a full EIP-712 message as accepted by eth_signTypedData_v4."""
    message_types: Dict[str, List[Dict[str, str]]] = {"EIP712Domain": domain_types(domain)}
    for name, fields in types.items():
        if name != "EIP712Domain":
            message_types[name] = [dict(f) for f in fields]
    return {
        "types": message_types,
        "primaryType": primary_type,
        "domain": dict(domain),
        "message": dict(values),
    }
