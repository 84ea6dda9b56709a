"""P2PKH script construction and inspection."""

import struct
from typing import List, Tuple, Union

from .constants import (
    ADDRESS_PREFIXES,
    COMPRESSED_PUBKEY_SIZE,
    MAX_DIRECT_PUSH,
    OP_CHECKSIG,
    OP_DUP,
    OP_EQUALVERIFY,
    OP_HASH160,
    OP_PUSHDATA1,
    OP_PUSHDATA2,
    OP_PUSHDATA4,
    OPCODE_NAMES,
    P2PKH_SCRIPT_SIZE,
    Network,
)
from .exceptions import ValidationError
from .types.common import Address
from .utils.encoding import encode_base58_check, hash160

__all__ = [
    "build_p2pkh_locking_script",
    "build_unlocking_script",
    "parse_unlocking_script",
    "is_p2pkh_script",
    "deserialize_script",
    "script_to_asm",
    "p2pkh_address",
]


def _check_compressed_key(public_key: bytes) -> None:
    if len(public_key) != COMPRESSED_PUBKEY_SIZE:
        raise ValueError(
            f"Public key must be {COMPRESSED_PUBKEY_SIZE} bytes, got {len(public_key)}"
        )


def _push(data: bytes) -> bytes:
    # Single length byte doubles as the push opcode
    if len(data) > MAX_DIRECT_PUSH:
        raise ValueError(
            f"Push of {len(data)} bytes exceeds direct push limit of {MAX_DIRECT_PUSH}"
        )
    return bytes([len(data)]) + data


def build_p2pkh_locking_script(public_key: bytes) -> bytes:
    """
    Build Pay-to-PubKey-Hash locking script.

    Args:
        public_key: 33-byte compressed public key

    Returns:
        25-byte script: OP_DUP OP_HASH160 <hash160> OP_EQUALVERIFY OP_CHECKSIG

    Raises:
        ValueError: If public key is not 33 bytes
    """
    _check_compressed_key(public_key)
    pubkey_hash = hash160(public_key)

    return b"".join([
        bytes([OP_DUP, OP_HASH160]),
        _push(pubkey_hash),
        bytes([OP_EQUALVERIFY, OP_CHECKSIG]),
    ])


def build_unlocking_script(signature: bytes, public_key: bytes) -> bytes:
    """
    Build P2PKH unlocking script: <signature> <public key>.

    Args:
        signature: DER signature with sighash type byte appended
        public_key: 33-byte compressed public key

    Returns:
        Unlocking script bytes

    Raises:
        ValueError: If either component is too long for a direct push
    """
    return _push(signature) + _push(public_key)


def parse_unlocking_script(script: bytes) -> Tuple[bytes, bytes]:
    """
    Split a P2PKH unlocking script into (signature, public_key).

    Raises:
        ValidationError: If script is not exactly two data pushes
    """
    try:
        ops = deserialize_script(script)
    except (IndexError, struct.error) as e:
        raise ValidationError("Truncated unlocking script") from e

    if len(ops) != 2 or not all(isinstance(op, bytes) for op in ops):
        raise ValidationError("Unlocking script must contain exactly two pushes")

    signature, public_key = ops
    return signature, public_key


def is_p2pkh_script(script: bytes) -> bool:
    """Check if script matches the P2PKH template."""
    return (
        len(script) == P2PKH_SCRIPT_SIZE
        and script[0] == OP_DUP
        and script[1] == OP_HASH160
        and script[2] == 0x14
        and script[23] == OP_EQUALVERIFY
        and script[24] == OP_CHECKSIG
    )


def deserialize_script(script: bytes) -> List[Union[int, bytes]]:
    """
    Deserialize script bytes to operations.

    Args:
        script: Script bytes

    Returns:
        List of opcodes (int) and pushed data (bytes)
    """
    ops: List[Union[int, bytes]] = []
    i = 0

    while i < len(script):
        op = script[i]
        i += 1

        if 1 <= op <= MAX_DIRECT_PUSH:
            size = op
        elif op == OP_PUSHDATA1:
            size = script[i]
            i += 1
        elif op == OP_PUSHDATA2:
            size = struct.unpack_from("<H", script, i)[0]
            i += 2
        elif op == OP_PUSHDATA4:
            size = struct.unpack_from("<I", script, i)[0]
            i += 4
        else:
            ops.append(op)
            continue

        if i + size > len(script):
            raise IndexError("Push extends past end of script")
        ops.append(script[i:i + size])
        i += size

    return ops


def script_to_asm(script: bytes) -> str:
    """Render script as space-separated opcodes and hex pushes."""
    parts = []
    for op in deserialize_script(script):
        if isinstance(op, bytes):
            parts.append(op.hex())
        else:
            parts.append(OPCODE_NAMES.get(op, f"OP_UNKNOWN<{op:#04x}>"))
    return " ".join(parts)


def p2pkh_address(public_key: bytes, network: Network = Network.MAINNET) -> Address:
    """
    Get Pay-to-PubKey-Hash address for a compressed public key.

    Args:
        public_key: 33-byte compressed public key
        network: Target network

    Returns:
        Base58Check P2PKH address
    """
    _check_compressed_key(public_key)
    prefix = ADDRESS_PREFIXES["p2pkh"][network]
    return Address(encode_base58_check(prefix + hash160(public_key)))
