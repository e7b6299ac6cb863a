"""
Utility functions for the Safe relayer SDK.
"""
from typing import Tuple

from eth_utils import is_hexstr

from .exceptions import InvalidSignatureFormatError

SIGNATURE_LENGTH = 65


def split_signature(sig: str) -> Tuple[int, int, int]:
    """
    Split a raw 65-byte signature and normalize ``v`` for the Safe contract.

    The Safe encodes the signature type in ``v``: values above 30 mark an
    eth_sign signature, so recovery ids 0/1 and 27/28 both map to 31/32.

    Args:
        sig: Hex signature (with or without 0x prefix)

    Returns:
        Tuple of (r, s, v) as integers

    Raises:
        InvalidSignatureFormatError: If the signature is malformed or v is
            outside {0, 1, 27, 28}
    """
    sig_hex = sig[2:] if sig.startswith("0x") else sig
    if len(sig_hex) != SIGNATURE_LENGTH * 2 or not is_hexstr(sig_hex):
        raise InvalidSignatureFormatError(
            f"Invalid signature: expected {SIGNATURE_LENGTH} bytes, got {len(sig_hex) // 2}"
        )

    r = int(sig_hex[0:64], 16)
    s = int(sig_hex[64:128], 16)
    v = int(sig_hex[128:130], 16)

    if v in (0, 1):
        v += 31
    elif v in (27, 28):
        v += 4
    else:
        raise InvalidSignatureFormatError(f"Invalid signature: unexpected v value {v}")

    return r, s, v


def split_and_pack_sig(sig: str) -> str:
    """
    Repack a raw signature into the Safe's ``r ++ s ++ v`` layout.

    Args:
        sig: Raw 65-byte signature as hex

    Returns:
        Packed signature as a 0x-prefixed hex string
    """
    r, s, v = split_signature(sig)
    packed = r.to_bytes(32, byteorder="big") + s.to_bytes(32, byteorder="big") + v.to_bytes(1, byteorder="big")
    return "0x" + packed.hex()

