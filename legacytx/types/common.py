"""Common type definitions for legacytx."""

from typing import NewType

__all__ = [
    "HexStr",
    "TxId",
    "Address",
    "PrivateKeyBytes",
    "PublicKeyBytes",
    "Signature",
]

HexStr = NewType("HexStr", str)
"""Hexadecimal string representation."""

TxId = NewType("TxId", bytes)
"""32-byte transaction hash in internal byte order."""

Address = NewType("Address", str)
"""Base58Check address string."""

PrivateKeyBytes = NewType("PrivateKeyBytes", bytes)
"""32-byte private key."""

PublicKeyBytes = NewType("PublicKeyBytes", bytes)
"""33-byte compressed public key."""

Signature = NewType("Signature", bytes)
"""DER-encoded signature."""
