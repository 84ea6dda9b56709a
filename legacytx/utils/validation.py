"""Validation utilities for legacytx."""

import re
from typing import Union

from ..constants import (
    COMPRESSED_PUBKEY_SIZE,
    SECP256K1_ORDER,
    TXID_SIZE,
    UINT32_MAX,
    UINT64_MAX,
)
from ..exceptions import ValidationError

__all__ = [
    "validate_private_key",
    "validate_public_key",
    "validate_txid",
    "validate_uint32",
    "validate_uint64",
    "validate_script",
]

HEX_PATTERN = re.compile(r"^[0-9a-fA-F]*$")


def _to_bytes(value: Union[str, bytes], label: str) -> bytes:
    """Accept hex string or bytes-like and return bytes."""
    if isinstance(value, str):
        if value.startswith("0x"):
            value = value[2:]
        if not HEX_PATTERN.match(value):
            raise ValidationError(f"{label} must be hexadecimal")
        try:
            return bytes.fromhex(value)
        except ValueError as e:
            raise ValidationError(f"Invalid hex {label.lower()}: {e}") from e
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    raise ValidationError(f"{label} must be bytes or hex string")


def validate_private_key(key: Union[str, bytes]) -> bytes:
    """
    Validate private key and return as bytes.

    Args:
        key: Private key as hex string or bytes

    Returns:
        Private key as 32 bytes

    Raises:
        ValidationError: If private key is invalid
    """
    key = _to_bytes(key, "Private key")

    if len(key) != 32:
        raise ValidationError(f"Private key must be 32 bytes, got {len(key)}")

    key_int = int.from_bytes(key, "big")
    if key_int == 0:
        raise ValidationError("Private key cannot be zero")
    if key_int >= SECP256K1_ORDER:
        raise ValidationError("Private key exceeds curve order")

    return key


def validate_public_key(key: Union[str, bytes]) -> bytes:
    """
    Validate compressed public key and return as bytes.

    Only the 33-byte compressed form is accepted; P2PKH scripts built by
    this library always commit to the compressed serialization.

    Args:
        key: Public key as hex string or bytes

    Returns:
        Public key bytes (33 bytes)

    Raises:
        ValidationError: If public key is invalid
    """
    key = _to_bytes(key, "Public key")

    if len(key) != COMPRESSED_PUBKEY_SIZE:
        raise ValidationError(
            f"Public key must be {COMPRESSED_PUBKEY_SIZE} bytes, got {len(key)}"
        )
    if key[0] not in (0x02, 0x03):
        raise ValidationError("Compressed public key must start with 0x02 or 0x03")

    return key


def validate_txid(txid: Union[str, bytes]) -> bytes:
    """
    Validate a 32-byte transaction hash.

    Bytes are taken as-is (internal byte order). Hex strings are taken
    as raw bytes too; no display-order reversal happens here.

    Raises:
        ValidationError: If txid is not 32 bytes
    """
    txid = _to_bytes(txid, "Transaction ID")
    if len(txid) != TXID_SIZE:
        raise ValidationError(f"Transaction ID must be {TXID_SIZE} bytes, got {len(txid)}")
    return txid


def validate_uint32(value: int, name: str) -> int:
    """Check value fits an unsigned 32-bit field."""
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValidationError(f"{name} must be an integer")
    if value < 0 or value > UINT32_MAX:
        raise ValidationError(f"{name} must be a 32-bit unsigned integer, got {value}")
    return value


def validate_uint64(value: int, name: str) -> int:
    """Check value fits an unsigned 64-bit field."""
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValidationError(f"{name} must be an integer")
    if value < 0 or value > UINT64_MAX:
        raise ValidationError(f"{name} must be a 64-bit unsigned integer, got {value}")
    return value


def validate_script(script: Union[str, bytes]) -> bytes:
    """
    Validate script and return as bytes.

    Args:
        script: Script as hex string or bytes

    Returns:
        Script bytes

    Raises:
        ValidationError: If script is not bytes or valid hex
    """
    return _to_bytes(script, "Script")
