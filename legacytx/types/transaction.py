"""Transaction model and legacy wire-format codec."""

import copy
import logging
import struct
from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Tuple, Union

from ..constants import DEFAULT_LOCKTIME, DEFAULT_VERSION, SEQUENCE_FINAL, TXID_SIZE
from ..exceptions import SerializationError
from ..types.common import HexStr, TxId
from ..utils.encoding import (
    bytes_to_hex,
    decode_varint,
    double_sha256,
    encode_varint,
    hex_to_bytes,
)
from ..utils.validation import (
    validate_script,
    validate_txid,
    validate_uint32,
    validate_uint64,
)

__all__ = [
    "SigHashType",
    "TxIn",
    "TxOut",
    "Transaction",
    "transaction_id",
]

logger = logging.getLogger(__name__)


class SigHashType(IntEnum):
    """Signature hash types."""
    ALL = 0x01
    NONE = 0x02
    SINGLE = 0x03
    ANYONECANPAY = 0x80


@dataclass
class TxIn:
    """
    Transaction input.

    ``prev_txid`` is kept in internal byte order, exactly as it appears on
    the wire. ``script_sig`` stays empty until the input is signed.
    """

    prev_txid: TxId
    prev_index: int
    script_sig: bytes = b""
    sequence: int = SEQUENCE_FINAL

    def __post_init__(self) -> None:
        self.prev_txid = TxId(validate_txid(self.prev_txid))
        validate_uint32(self.prev_index, "prev_index")
        self.script_sig = validate_script(self.script_sig)
        validate_uint32(self.sequence, "sequence")

    @property
    def is_signed(self) -> bool:
        """Check if an unlocking script has been written."""
        return len(self.script_sig) > 0

    def serialize(self) -> bytes:
        """Serialize input: outpoint, script length, script, sequence."""
        return b"".join([
            self.prev_txid,
            struct.pack("<I", self.prev_index),
            encode_varint(len(self.script_sig)),
            self.script_sig,
            struct.pack("<I", self.sequence),
        ])

    def __str__(self) -> str:
        return f"{self.prev_txid[::-1].hex()}:{self.prev_index}"


@dataclass(frozen=True)
class TxOut:
    """Transaction output."""

    amount: int
    script_pubkey: bytes

    def __post_init__(self) -> None:
        validate_uint64(self.amount, "amount")
        # Frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "script_pubkey", validate_script(self.script_pubkey))

    def serialize(self) -> bytes:
        """Serialize output: amount, script length, script."""
        return b"".join([
            struct.pack("<Q", self.amount),
            encode_varint(len(self.script_pubkey)),
            self.script_pubkey,
        ])


@dataclass
class Transaction:
    """
    Legacy (non-segwit) transaction.

    Input and output order is serialization and signing order. The
    transaction owns its lists; the ones passed in are copied.
    """

    version: int = DEFAULT_VERSION
    inputs: List[TxIn] = field(default_factory=list)
    outputs: List[TxOut] = field(default_factory=list)
    locktime: int = DEFAULT_LOCKTIME

    def __post_init__(self) -> None:
        validate_uint32(self.version, "version")
        validate_uint32(self.locktime, "locktime")
        self.inputs = list(self.inputs)
        self.outputs = list(self.outputs)

    def add_input(
        self,
        prev_txid: Union[bytes, str],
        prev_index: int,
        sequence: int = SEQUENCE_FINAL,
        script_sig: bytes = b"",
    ) -> "Transaction":
        """Add input to transaction."""
        self.inputs.append(
            TxIn(
                prev_txid=TxId(prev_txid),
                prev_index=prev_index,
                script_sig=script_sig,
                sequence=sequence,
            )
        )
        return self

    def add_output(self, amount: int, script_pubkey: bytes) -> "Transaction":
        """Add output to transaction."""
        self.outputs.append(TxOut(amount=amount, script_pubkey=script_pubkey))
        return self

    def copy(self) -> "Transaction":
        """Return a deep copy that shares nothing mutable with this one."""
        return copy.deepcopy(self)

    def serialize(self) -> bytes:
        """
        Serialize transaction in the legacy wire format.

        Layout: version (4 LE), input count, inputs, output count,
        outputs, locktime (4 LE).
        """
        parts = [struct.pack("<I", self.version), encode_varint(len(self.inputs))]
        parts.extend(tx_in.serialize() for tx_in in self.inputs)
        parts.append(encode_varint(len(self.outputs)))
        parts.extend(tx_out.serialize() for tx_out in self.outputs)
        parts.append(struct.pack("<I", self.locktime))
        return b"".join(parts)

    def to_hex(self) -> HexStr:
        """Get serialized transaction as lowercase hex, ready to broadcast."""
        return bytes_to_hex(self.serialize())

    def txid(self) -> TxId:
        """Get double-SHA256 of the serialization (internal byte order)."""
        return transaction_id(self)

    def txid_hex(self) -> str:
        """Get transaction ID in the reversed form block explorers display."""
        return self.txid()[::-1].hex()

    @property
    def size(self) -> int:
        """Serialized size in bytes."""
        return len(self.serialize())

    @classmethod
    def from_bytes(cls, data: bytes) -> "Transaction":
        """
        Parse a legacy transaction.

        Raises:
            SerializationError: If data is truncated, has trailing bytes
                or uses the segwit marker
        """
        offset = 0
        version_bytes, offset = _read(data, offset, 4)
        version = struct.unpack("<I", version_bytes)[0]

        if data[offset:offset + 2] == b"\x00\x01":
            raise SerializationError("Segwit serialization is not supported")

        input_count, offset = decode_varint(data, offset)
        inputs = []
        for _ in range(input_count):
            tx_in, offset = _parse_input(data, offset)
            inputs.append(tx_in)

        output_count, offset = decode_varint(data, offset)
        outputs = []
        for _ in range(output_count):
            tx_out, offset = _parse_output(data, offset)
            outputs.append(tx_out)

        locktime_bytes, offset = _read(data, offset, 4)
        locktime = struct.unpack("<I", locktime_bytes)[0]

        if offset != len(data):
            raise SerializationError(
                f"Unexpected trailing data: {len(data) - offset} bytes"
            )

        logger.debug(f"Parsed transaction: {input_count} inputs, {output_count} outputs")
        return cls(version=version, inputs=inputs, outputs=outputs, locktime=locktime)

    @classmethod
    def from_hex(cls, hex_str: str) -> "Transaction":
        """Parse a legacy transaction from hex."""
        return cls.from_bytes(hex_to_bytes(hex_str))


def transaction_id(tx: Transaction) -> TxId:
    """Compute SHA256(SHA256(serialize(tx))) in internal byte order."""
    return TxId(double_sha256(tx.serialize()))


def _read(data: bytes, offset: int, size: int) -> Tuple[bytes, int]:
    chunk = data[offset:offset + size]
    if len(chunk) != size:
        raise SerializationError(
            f"Truncated transaction: wanted {size} bytes at offset {offset}"
        )
    return chunk, offset + size


def _parse_input(data: bytes, offset: int) -> Tuple[TxIn, int]:
    prev_txid, offset = _read(data, offset, TXID_SIZE)
    index_bytes, offset = _read(data, offset, 4)
    script_len, offset = decode_varint(data, offset)
    script_sig, offset = _read(data, offset, script_len)
    sequence_bytes, offset = _read(data, offset, 4)

    tx_in = TxIn(
        prev_txid=TxId(prev_txid),
        prev_index=struct.unpack("<I", index_bytes)[0],
        script_sig=script_sig,
        sequence=struct.unpack("<I", sequence_bytes)[0],
    )
    return tx_in, offset


def _parse_output(data: bytes, offset: int) -> Tuple[TxOut, int]:
    amount_bytes, offset = _read(data, offset, 8)
    script_len, offset = decode_varint(data, offset)
    script_pubkey, offset = _read(data, offset, script_len)

    tx_out = TxOut(amount=struct.unpack("<Q", amount_bytes)[0], script_pubkey=script_pubkey)
    return tx_out, offset
