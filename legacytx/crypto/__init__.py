"""Keys, signatures and transaction signing for legacytx."""

from ..crypto.keys import PrivateKey, PublicKey, KeyPair
from ..crypto.signature import (
    sign_digest,
    verify_digest,
    parse_der_signature,
    encode_der_signature,
)
from ..crypto.transaction_signing import (
    compute_sighash,
    sign_input,
    sign_transaction,
    verify_input,
)

__all__ = [
    # Keys
    "PrivateKey",
    "PublicKey",
    "KeyPair",

    # Signatures
    "sign_digest",
    "verify_digest",
    "parse_der_signature",
    "encode_der_signature",

    # Transaction signing
    "compute_sighash",
    "sign_input",
    "sign_transaction",
    "verify_input",
]
