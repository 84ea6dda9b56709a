"""Protocol constants for legacy Bitcoin transactions."""

from enum import Enum

__all__ = [
    "Network",
    "WIF_VERSIONS",
    "ADDRESS_PREFIXES",
    "OP_DUP",
    "OP_HASH160",
    "OP_EQUALVERIFY",
    "OP_CHECKSIG",
    "OP_PUSHDATA1",
    "OP_PUSHDATA2",
    "OP_PUSHDATA4",
    "OPCODE_NAMES",
    "MAX_DIRECT_PUSH",
    "DEFAULT_VERSION",
    "DEFAULT_LOCKTIME",
    "SEQUENCE_FINAL",
    "UINT32_MAX",
    "UINT64_MAX",
    "SECP256K1_ORDER",
    "TXID_SIZE",
    "COMPRESSED_PUBKEY_SIZE",
    "P2PKH_SCRIPT_SIZE",
]


class Network(str, Enum):
    """Supported networks."""
    MAINNET = "mainnet"
    TESTNET = "testnet"


# WIF version byte per network
WIF_VERSIONS = {
    Network.MAINNET: 0x80,
    Network.TESTNET: 0xEF,
}

ADDRESS_PREFIXES = {
    "p2pkh": {
        Network.MAINNET: b"\x00",
        Network.TESTNET: b"\x6f",
    },
}

# Opcodes
OP_DUP = 0x76
OP_HASH160 = 0xA9
OP_EQUALVERIFY = 0x88
OP_CHECKSIG = 0xAC
OP_PUSHDATA1 = 0x4C
OP_PUSHDATA2 = 0x4D
OP_PUSHDATA4 = 0x4E

OPCODE_NAMES = {
    OP_DUP: "OP_DUP",
    OP_HASH160: "OP_HASH160",
    OP_EQUALVERIFY: "OP_EQUALVERIFY",
    OP_CHECKSIG: "OP_CHECKSIG",
}

# Largest payload a single-byte push opcode can carry
MAX_DIRECT_PUSH = 75

# Transaction defaults
DEFAULT_VERSION = 1
DEFAULT_LOCKTIME = 0
SEQUENCE_FINAL = 0xFFFFFFFF

UINT32_MAX = 0xFFFFFFFF
UINT64_MAX = 0xFFFFFFFFFFFFFFFF

SECP256K1_ORDER = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141

# Sizes
TXID_SIZE = 32
COMPRESSED_PUBKEY_SIZE = 33
P2PKH_SCRIPT_SIZE = 25
