"""
legacytx

Build, serialize and sign legacy (pre-segwit) Bitcoin transactions that
spend Pay-to-PubKey-Hash outputs.
"""

from .constants import Network
from .exceptions import (
    LegacyTxError,
    ValidationError,
    SerializationError,
    CryptoError,
    TransactionError,
)
from .types import SigHashType, TxIn, TxOut, Transaction, transaction_id
from .script import (
    build_p2pkh_locking_script,
    build_unlocking_script,
    p2pkh_address,
)
from .utils.encoding import encode_varint
from .crypto import (
    PrivateKey,
    PublicKey,
    KeyPair,
    compute_sighash,
    sign_input,
    sign_transaction,
    verify_input,
)

__version__ = "1.0.0"

__all__ = [
    # Network
    "Network",

    # Exceptions
    "LegacyTxError",
    "ValidationError",
    "SerializationError",
    "CryptoError",
    "TransactionError",

    # Transaction model
    "SigHashType",
    "TxIn",
    "TxOut",
    "Transaction",
    "transaction_id",
    "encode_varint",

    # Scripts
    "build_p2pkh_locking_script",
    "build_unlocking_script",
    "p2pkh_address",

    # Keys and signing
    "PrivateKey",
    "PublicKey",
    "KeyPair",
    "compute_sighash",
    "sign_input",
    "sign_transaction",
    "verify_input",
]
