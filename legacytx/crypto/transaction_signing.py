"""Legacy signature hash and P2PKH input signing."""

import logging
import struct
from typing import Sequence

from ..crypto.keys import KeyPair, PublicKey
from ..crypto.signature import sign_digest, verify_digest
from ..exceptions import TransactionError, ValidationError
from ..script import (
    build_unlocking_script,
    is_p2pkh_script,
    parse_unlocking_script,
    script_to_asm,
)
from ..types.transaction import SigHashType, Transaction, TxOut
from ..utils.encoding import double_sha256

__all__ = [
    "compute_sighash",
    "sign_input",
    "sign_transaction",
    "verify_input",
]

logger = logging.getLogger(__name__)


def compute_sighash(
    tx: Transaction,
    input_index: int,
    previous_locking_script: bytes,
    sighash_type: SigHashType = SigHashType.ALL,
) -> bytes:
    """
    Compute the legacy signature hash for one input.

    A copy of the transaction has every input script blanked, then the
    input being signed gets the locking script of the output it spends.
    The copy is serialized, the 4-byte little-endian sighash type is
    appended and the result is double-SHA256 hashed. ``tx`` itself is not
    modified.

    Args:
        tx: Transaction being signed
        input_index: Index of the input to hash for
        previous_locking_script: script_pubkey of the output being spent
        sighash_type: Only SigHashType.ALL is supported

    Returns:
        32-byte digest

    Raises:
        IndexError: If input_index is out of range
        NotImplementedError: For sighash types other than ALL
    """
    if sighash_type != SigHashType.ALL:
        raise NotImplementedError("Only SIGHASH_ALL is supported")
    if input_index < 0 or input_index >= len(tx.inputs):
        raise IndexError(f"Input index {input_index} out of range ({len(tx.inputs)} inputs)")

    tx_copy = tx.copy()
    for tx_in in tx_copy.inputs:
        tx_in.script_sig = b""
    tx_copy.inputs[input_index].script_sig = bytes(previous_locking_script)

    preimage = tx_copy.serialize() + struct.pack("<I", sighash_type)
    digest = double_sha256(preimage)

    logger.debug(
        f"Sighash for input {input_index}: {digest.hex()} "
        f"(preimage {len(preimage)} bytes)"
    )
    return digest


def _build_script_sig(
    tx: Transaction,
    input_index: int,
    key_pair: KeyPair,
    previous_output: TxOut,
) -> bytes:
    digest = compute_sighash(tx, input_index, previous_output.script_pubkey)
    signature = sign_digest(key_pair.private_key, digest)
    # On-chain type byte is a single byte, unlike the 4 bytes in the preimage
    signature_with_type = signature + bytes([SigHashType.ALL])
    return build_unlocking_script(signature_with_type, key_pair.public_key_bytes)


def sign_input(
    tx: Transaction,
    input_index: int,
    key_pair: KeyPair,
    previous_output: TxOut,
) -> bytes:
    """
    Sign one P2PKH input in place.

    Writes ``<DER signature + 0x01> <compressed pubkey>`` into
    ``tx.inputs[input_index].script_sig``, replacing any previous value.
    No other input is touched.

    Args:
        tx: Transaction to sign
        input_index: Index of the input to sign
        key_pair: Key owning the spent output
        previous_output: The output being spent

    Returns:
        The unlocking script written into the input

    Raises:
        IndexError: If input_index is out of range
        CryptoError: If signing fails
    """
    script_sig = _build_script_sig(tx, input_index, key_pair, previous_output)
    tx.inputs[input_index].script_sig = script_sig

    logger.info(f"Signed input {input_index} ({tx.inputs[input_index]})")
    logger.debug(f"scriptSig: {script_to_asm(script_sig)}")
    return script_sig


def sign_transaction(
    tx: Transaction,
    key_pairs: Sequence[KeyPair],
    previous_outputs: Sequence[TxOut],
) -> Transaction:
    """
    Sign every input of a transaction, one at a time, in order.

    Each digest is computed against a copy of the transaction taken before
    any signature was written. If any input fails to sign, ``tx`` is left
    unchanged.

    Args:
        tx: Transaction to sign in place
        key_pairs: One key per input
        previous_outputs: One spent output per input

    Returns:
        The signed transaction (same object as ``tx``)

    Raises:
        TransactionError: If the number of keys or outputs does not match
            the number of inputs
        CryptoError: If signing any input fails
    """
    if not (len(tx.inputs) == len(key_pairs) == len(previous_outputs)):
        raise TransactionError(
            f"Need one key and one previous output per input: "
            f"{len(tx.inputs)} inputs, {len(key_pairs)} keys, "
            f"{len(previous_outputs)} previous outputs"
        )

    unsigned = tx.copy()
    script_sigs = [
        _build_script_sig(unsigned, index, key_pair, previous_output)
        for index, (key_pair, previous_output) in enumerate(zip(key_pairs, previous_outputs))
    ]

    # Nothing is written until every input has signed
    for tx_in, script_sig in zip(tx.inputs, script_sigs):
        tx_in.script_sig = script_sig

    logger.info(f"Signed {len(tx.inputs)} inputs, txid {tx.txid_hex()}")
    return tx


def verify_input(tx: Transaction, input_index: int, previous_output: TxOut) -> bool:
    """
    Check a signed P2PKH input against the output it spends.

    Returns:
        True if the public key matches the locking script and the signature
        verifies over the recomputed sighash

    Raises:
        IndexError: If input_index is out of range
    """
    if input_index < 0 or input_index >= len(tx.inputs):
        raise IndexError(f"Input index {input_index} out of range ({len(tx.inputs)} inputs)")

    locking_script = previous_output.script_pubkey
    if not is_p2pkh_script(locking_script):
        logger.debug(f"Input {input_index}: previous output is not P2PKH")
        return False

    try:
        signature_with_type, public_key_bytes = parse_unlocking_script(
            tx.inputs[input_index].script_sig
        )
        public_key = PublicKey(public_key_bytes)
    except ValidationError as e:
        logger.debug(f"Input {input_index}: {e}")
        return False

    if not signature_with_type or signature_with_type[-1] != SigHashType.ALL:
        return False
    if public_key.hash160() != locking_script[3:23]:
        return False

    digest = compute_sighash(tx, input_index, locking_script)
    return verify_digest(public_key, signature_with_type[:-1], digest)
