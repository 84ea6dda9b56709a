"""ECDSA signature utilities for legacytx."""

import logging
from typing import Optional, Tuple

from ..constants import SECP256K1_ORDER
from ..crypto.keys import PrivateKey, PublicKey
from ..exceptions import CryptoError
from ..types.common import Signature

__all__ = [
    "sign_digest",
    "verify_digest",
    "is_low_s",
    "normalize_s",
    "parse_der_signature",
    "encode_der_signature",
]

logger = logging.getLogger(__name__)

HALF_ORDER = SECP256K1_ORDER // 2


def sign_digest(private_key: PrivateKey, digest: bytes) -> Signature:
    """
    Sign a 32-byte digest and return a canonical low-S DER signature.

    Args:
        private_key: Private key to sign with
        digest: 32-byte hash to sign

    Returns:
        DER-encoded signature (no sighash type byte)

    Raises:
        ValueError: If digest is not 32 bytes
        CryptoError: If signing fails
    """
    if len(digest) != 32:
        raise ValueError("Digest must be 32 bytes")

    der = private_key.sign(digest)
    r, s, _ = parse_der_signature(der)
    if not is_low_s(s):
        logger.debug("Normalizing high-S signature")
        der = encode_der_signature(r, normalize_s(s))

    return Signature(der)


def verify_digest(public_key: PublicKey, signature: bytes, digest: bytes) -> bool:
    """Verify DER signature (no sighash type byte) over a 32-byte digest."""
    return public_key.verify(signature, digest)


def is_low_s(s: int) -> bool:
    """Check if s is in the lower half of the curve order."""
    return 0 < s <= HALF_ORDER


def normalize_s(s: int) -> int:
    """Map s to its low-S equivalent."""
    return SECP256K1_ORDER - s if s > HALF_ORDER else s


def parse_der_signature(
    signature: bytes,
    has_sighash_type: bool = False
) -> Tuple[int, int, Optional[int]]:
    """
    Parse DER-encoded signature.

    Args:
        signature: DER-encoded signature
        has_sighash_type: Whether a trailing sighash type byte is present

    Returns:
        Tuple of (r, s, sighash_type)

    Raises:
        CryptoError: If signature format is invalid
    """
    try:
        if has_sighash_type:
            sighash_type: Optional[int] = signature[-1]
            signature = signature[:-1]
        else:
            sighash_type = None

        if signature[0] != 0x30:
            raise ValueError("missing sequence tag")

        length = signature[1]
        if length + 2 != len(signature):
            raise ValueError("incorrect length")

        if signature[2] != 0x02:
            raise ValueError("missing r integer tag")

        r_length = signature[3]
        r_bytes = signature[4:4 + r_length]
        r = int.from_bytes(r_bytes, "big")

        s_offset = 4 + r_length
        if signature[s_offset] != 0x02:
            raise ValueError("missing s integer tag")

        s_length = signature[s_offset + 1]
        if s_offset + 2 + s_length != len(signature):
            raise ValueError("incorrect s length")
        s_bytes = signature[s_offset + 2:s_offset + 2 + s_length]
        s = int.from_bytes(s_bytes, "big")

        return r, s, sighash_type

    except (IndexError, ValueError) as e:
        raise CryptoError(f"Invalid DER signature: {e}") from e


def _encode_der_integer(value: int) -> bytes:
    data = value.to_bytes((value.bit_length() + 7) // 8 or 1, "big")
    # Leading 0x00 keeps the integer positive
    if data[0] & 0x80:
        data = b"\x00" + data
    return b"\x02" + bytes([len(data)]) + data


def encode_der_signature(r: int, s: int, sighash_type: Optional[int] = None) -> bytes:
    """
    Encode signature as DER.

    Args:
        r: Signature r value
        s: Signature s value
        sighash_type: Optional sighash type to append

    Returns:
        DER-encoded signature
    """
    sequence = _encode_der_integer(r) + _encode_der_integer(s)
    result = b"\x30" + bytes([len(sequence)]) + sequence

    if sighash_type is not None:
        result += bytes([sighash_type])

    return result
