"""Type definitions for legacytx."""

# Common types
from ..types.common import (
    HexStr,
    TxId,
    Address,
    PrivateKeyBytes,
    PublicKeyBytes,
    Signature,
)

# Transaction types
from ..types.transaction import (
    SigHashType,
    TxIn,
    TxOut,
    Transaction,
    transaction_id,
)

__all__ = [
    # Common
    "HexStr",
    "TxId",
    "Address",
    "PrivateKeyBytes",
    "PublicKeyBytes",
    "Signature",

    # Transaction
    "SigHashType",
    "TxIn",
    "TxOut",
    "Transaction",
    "transaction_id",
]
