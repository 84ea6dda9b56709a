"""Encoding, decoding and hashing utilities for legacytx."""

import hashlib
import struct
from typing import Tuple, Union

from Crypto.Hash import RIPEMD160

from ..constants import UINT64_MAX
from ..exceptions import SerializationError, ValidationError
from ..types.common import HexStr

__all__ = [
    "hex_to_bytes",
    "bytes_to_hex",
    "bytes_to_int",
    "encode_varint",
    "decode_varint",
    "sha256",
    "double_sha256",
    "ripemd160",
    "hash160",
    "encode_base58",
    "decode_base58",
    "encode_base58_check",
    "decode_base58_check",
]

BASE58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"


def hex_to_bytes(hex_str: Union[HexStr, str]) -> bytes:
    """
    Convert hex string to bytes.

    Args:
        hex_str: Hex string with or without 0x prefix

    Returns:
        Decoded bytes

    Raises:
        ValidationError: If hex string is invalid
    """
    try:
        if isinstance(hex_str, str) and hex_str.startswith("0x"):
            hex_str = hex_str[2:]
        return bytes.fromhex(hex_str)
    except ValueError as e:
        raise ValidationError(f"Invalid hex string: {hex_str}") from e


def bytes_to_hex(data: bytes, prefix: bool = False) -> HexStr:
    """
    Convert bytes to lowercase hex string.

    Args:
        data: Bytes to encode
        prefix: Add 0x prefix

    Returns:
        Hex string
    """
    hex_str = data.hex()
    if prefix:
        hex_str = f"0x{hex_str}"
    return HexStr(hex_str)


def bytes_to_int(
    data: bytes,
    byteorder: str = "big",
    signed: bool = False
) -> int:
    """Convert bytes to integer."""
    return int.from_bytes(data, byteorder=byteorder, signed=signed)


def encode_varint(n: int) -> bytes:
    """
    Encode integer as Bitcoin variable length integer.

    The first byte determines the total length: values below 0xfd are a
    single byte, otherwise a 0xfd/0xfe/0xff marker is followed by a 2, 4
    or 8 byte little-endian value.

    Args:
        n: Unsigned 64-bit integer to encode

    Returns:
        Encoded varint bytes

    Raises:
        ValueError: If n is outside the unsigned 64-bit range
    """
    if n < 0 or n > UINT64_MAX:
        raise ValueError(f"VarInt value out of range: {n}")

    if n < 0xfd:
        return bytes([n])
    elif n <= 0xffff:
        return b"\xfd" + struct.pack("<H", n)
    elif n <= 0xffffffff:
        return b"\xfe" + struct.pack("<I", n)
    else:
        return b"\xff" + struct.pack("<Q", n)


def decode_varint(data: bytes, offset: int = 0) -> Tuple[int, int]:
    """
    Decode Bitcoin variable length integer.

    Args:
        data: Bytes containing varint
        offset: Starting position

    Returns:
        Tuple of (value, new_offset)

    Raises:
        SerializationError: If data ends before the varint does
    """
    try:
        prefix = data[offset]
        if prefix < 0xfd:
            return prefix, offset + 1
        elif prefix == 0xfd:
            return struct.unpack_from("<H", data, offset + 1)[0], offset + 3
        elif prefix == 0xfe:
            return struct.unpack_from("<I", data, offset + 1)[0], offset + 5
        else:
            return struct.unpack_from("<Q", data, offset + 1)[0], offset + 9
    except (IndexError, struct.error) as e:
        raise SerializationError(f"Truncated varint at offset {offset}") from e


def sha256(data: bytes) -> bytes:
    """Perform single SHA256 hash."""
    return hashlib.sha256(data).digest()


def double_sha256(data: bytes) -> bytes:
    """Perform double SHA256 hash."""
    return hashlib.sha256(hashlib.sha256(data).digest()).digest()


def ripemd160(data: bytes) -> bytes:
    """Perform RIPEMD160 hash."""
    return RIPEMD160.new(data).digest()


def hash160(data: bytes) -> bytes:
    """Perform RIPEMD160(SHA256(data))."""
    return ripemd160(sha256(data))


def encode_base58(data: bytes) -> str:
    """
    Encode bytes as Base58 string.

    Args:
        data: Bytes to encode

    Returns:
        Base58 encoded string
    """
    n = bytes_to_int(data, byteorder="big")

    encoded = ""
    while n:
        n, remainder = divmod(n, 58)
        encoded = BASE58_ALPHABET[remainder] + encoded

    # Leading zero bytes map to leading '1's
    for byte in data:
        if byte == 0:
            encoded = "1" + encoded
        else:
            break

    return encoded


def decode_base58(string: str) -> bytes:
    """
    Decode Base58 string to bytes.

    Args:
        string: Base58 string

    Returns:
        Decoded bytes

    Raises:
        ValidationError: If string contains invalid characters
    """
    n = 0
    for char in string:
        index = BASE58_ALPHABET.find(char)
        if index < 0:
            raise ValidationError(f"Invalid Base58 character: {char}")
        n = n * 58 + index

    body = n.to_bytes((n.bit_length() + 7) // 8, "big") if n else b""

    leading_zeros = len(string) - len(string.lstrip("1"))
    return b"\x00" * leading_zeros + body


def encode_base58_check(data: bytes) -> str:
    """
    Encode bytes as Base58Check (with checksum).

    Args:
        data: Bytes to encode

    Returns:
        Base58Check encoded string
    """
    checksum = double_sha256(data)[:4]
    return encode_base58(data + checksum)


def decode_base58_check(string: str) -> bytes:
    """
    Decode Base58Check string.

    Args:
        string: Base58Check string

    Returns:
        Decoded data (without checksum)

    Raises:
        ValidationError: If checksum is invalid
    """
    data = decode_base58(string)
    if len(data) < 4:
        raise ValidationError("Invalid Base58Check string: too short")

    payload, checksum = data[:-4], data[-4:]
    expected_checksum = double_sha256(payload)[:4]

    if checksum != expected_checksum:
        raise ValidationError("Invalid Base58Check checksum")

    return payload
