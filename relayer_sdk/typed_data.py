"""
EIP-712 structured data hashing.

Implements the two-level scheme used by the Safe contracts:

    keccak256(0x19 0x01 ++ hashStruct(EIP712Domain) ++ hashStruct(message))

Only what the Safe flows need is supported: atomic types, dynamic
``bytes``/``string`` and nested struct references. Arrays are rejected.
"""
import re
from typing import Any, Dict, List, Mapping, Sequence

from eth_abi import encode
from eth_utils import is_address, keccak, to_bytes, to_checksum_address

# Field order of the domain struct is fixed by EIP-712
DOMAIN_FIELDS = [
    {"name": "name", "type": "string"},
    {"name": "version", "type": "string"},
    {"name": "chainId", "type": "uint256"},
    {"name": "verifyingContract", "type": "address"},
    {"name": "salt", "type": "bytes32"},
]

SAFE_TX_TYPES = {
    "SafeTx": [
        {"name": "to", "type": "address"},
        {"name": "value", "type": "uint256"},
        {"name": "data", "type": "bytes"},
        {"name": "operation", "type": "uint8"},
        {"name": "safeTxGas", "type": "uint256"},
        {"name": "baseGas", "type": "uint256"},
        {"name": "gasPrice", "type": "uint256"},
        {"name": "gasToken", "type": "address"},
        {"name": "refundReceiver", "type": "address"},
        {"name": "nonce", "type": "uint256"},
    ],
}

CREATE_PROXY_TYPES = {
    "CreateProxy": [
        {"name": "paymentToken", "type": "address"},
        {"name": "payment", "type": "uint256"},
        {"name": "paymentReceiver", "type": "address"},
    ],
}

_ARRAY_RE = re.compile(r"\[\d*\]$")

TypeMap = Mapping[str, Sequence[Mapping[str, str]]]


def domain_types(domain: Mapping[str, Any]) -> List[Dict[str, str]]:
    """Return the EIP712Domain fields present in ``domain``, in canonical order."""
    return [dict(field) for field in DOMAIN_FIELDS if field["name"] in domain]


def _dependencies(primary_type: str, types: TypeMap, found: List[str]) -> List[str]:
    if primary_type in found or primary_type not in types:
        return found
    found.append(primary_type)
    for field in types[primary_type]:
        _dependencies(field["type"], types, found)
    return found


def encode_type(primary_type: str, types: TypeMap) -> str:
    """
    Build the canonical type string, e.g. ``SafeTx(address to,...)``.

    Referenced struct types are appended in alphabetical order.
    """
    deps = _dependencies(primary_type, types, [])
    deps.remove(primary_type)
    result = ""
    for type_name in [primary_type] + sorted(deps):
        fields = ",".join(f"{f['type']} {f['name']}" for f in types[type_name])
        result += f"{type_name}({fields})"
    return result


def type_hash(primary_type: str, types: TypeMap) -> bytes:
    return keccak(text=encode_type(primary_type, types))


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return int(value, 16) if value.startswith(("0x", "0X")) else int(value)
    raise TypeError(f"Cannot convert {type(value).__name__} to an integer")


def _to_bytes(value: Any) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, str):
        return to_bytes(hexstr=value)
    raise TypeError(f"Cannot convert {type(value).__name__} to bytes")


def _encode_field(type_name: str, value: Any, types: TypeMap):
    """Return the (abi type, abi value) pair for one struct member."""
    if type_name in types:
        return "bytes32", hash_struct(type_name, types, value)
    if _ARRAY_RE.search(type_name):
        raise ValueError(f"Array types are not supported: {type_name}")
    if type_name == "bytes":
        return "bytes32", keccak(_to_bytes(value))
    if type_name == "string":
        return "bytes32", keccak(text=value)
    if type_name == "address":
        if not is_address(value):
            raise ValueError(f"Invalid address: {value}")
        return "address", to_checksum_address(value)
    if type_name == "bool":
        return "bool", bool(value)
    if type_name.startswith(("uint", "int")):
        return type_name, _to_int(value)
    if type_name.startswith("bytes"):
        size = int(type_name[5:])
        raw = _to_bytes(value)
        if len(raw) > size:
            raise ValueError(f"Value too long for {type_name}: {len(raw)} bytes")
        return type_name, raw.ljust(size, b"\x00")
    raise ValueError(f"Unsupported EIP-712 type: {type_name}")


def encode_data(primary_type: str, types: TypeMap, values: Mapping[str, Any]) -> bytes:
    abi_types = ["bytes32"]
    abi_values: List[Any] = [type_hash(primary_type, types)]
    for field in types[primary_type]:
        if field["name"] not in values:
            raise ValueError(f"Missing value for {primary_type}.{field['name']}")
        abi_type, abi_value = _encode_field(field["type"], values[field["name"]], types)
        abi_types.append(abi_type)
        abi_values.append(abi_value)
    return encode(abi_types, abi_values)


def hash_struct(primary_type: str, types: TypeMap, values: Mapping[str, Any]) -> bytes:
    return keccak(encode_data(primary_type, types, values))


def hash_domain(domain: Mapping[str, Any]) -> bytes:
    """Compute the domain separator."""
    return hash_struct("EIP712Domain", {"EIP712Domain": domain_types(domain)}, domain)


def hash_typed_data(
    domain: Mapping[str, Any],
    types: TypeMap,
    values: Mapping[str, Any],
    primary_type: str,
) -> bytes:
    """
    Compute the EIP-712 digest of a typed message.

    Args:
        domain: Domain fields (any of name, version, chainId, verifyingContract, salt)
        types: Struct definitions, without ``EIP712Domain``
        values: Message values for ``primary_type``
        primary_type: Name of the struct being signed

    Returns:
        32-byte digest
    """
    types = {k: v for k, v in types.items() if k != "EIP712Domain"}
    return keccak(b"\x19\x01" + hash_domain(domain) + hash_struct(primary_type, types, values))
