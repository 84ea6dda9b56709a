"""
legacytx usage example

Builds a one-input, one-output P2PKH transaction that pays back to the
signing key, signs it and prints the raw hex.

    python main.py [WIF]

Without a WIF argument a throwaway testnet key is derived from a fixed seed.
"""

import logging
import sys

from legacytx import (
    KeyPair,
    Network,
    PrivateKey,
    Transaction,
    TxIn,
    TxOut,
    ValidationError,
    build_p2pkh_locking_script,
    sign_input,
    verify_input,
)

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

PREV_TXID = bytes(32)  # placeholder outpoint, internal byte order
PREV_INDEX = 0
PREV_AMOUNT = 100_000
SEND_AMOUNT = 90_000  # remaining 10k sats go to fees


def load_key(argv: list) -> KeyPair:
    """Load key from the command line or derive a demo key."""
    if len(argv) > 1:
        return KeyPair.from_wif(argv[1])

    demo = PrivateKey.from_seed(b"legacytx demo key")
    print(f"No WIF given, using demo key {demo.wif(Network.TESTNET)}")
    return KeyPair(demo)


def main() -> int:
    print("\n=== Legacy P2PKH Transaction ===")

    try:
        key_pair = load_key(sys.argv)
    except ValidationError as e:
        print(f"Error parsing WIF: {e}")
        return 1

    print(f"Address: {key_pair.public_key.p2pkh_address(Network.TESTNET)}")

    # Output being spent: P2PKH of our own key
    prev_script = build_p2pkh_locking_script(key_pair.public_key_bytes)
    prev_output = TxOut(amount=PREV_AMOUNT, script_pubkey=prev_script)

    tx = Transaction(
        version=1,
        inputs=[TxIn(prev_txid=PREV_TXID, prev_index=PREV_INDEX)],
        outputs=[TxOut(amount=SEND_AMOUNT, script_pubkey=prev_script)],
        locktime=0,
    )

    sign_input(tx, 0, key_pair, prev_output)

    if not verify_input(tx, 0, prev_output):
        print("Signature check failed")
        return 1

    print("\n=== RAW SIGNED TRANSACTION ===")
    print(tx.to_hex())
    print("==============================\n")
    print(f"TxID: {tx.txid_hex()}")
    print(f"Size: {tx.size} bytes")
    return 0


if __name__ == "__main__":
    sys.exit(main())
