"""Tests for the transaction model and wire codec."""

import pytest

from legacytx.exceptions import SerializationError, ValidationError
from legacytx.types.transaction import Transaction, TxIn, TxOut, transaction_id
from legacytx.utils.encoding import double_sha256, encode_varint

LOCKING_SCRIPT = bytes.fromhex("76a914751e76e8199196d454941c45d1b3a323f1433bd688ac")

# version 1, one input spending 00..00:0 with empty script, one 90000 sat
# P2PKH output, locktime 0
UNSIGNED_HEX = (
    "01000000"
    "01"
    + "00" * 32
    + "00000000"
    "00"
    "ffffffff"
    "01"
    "905f010000000000"
    "19" + LOCKING_SCRIPT.hex()
    + "00000000"
)


def _sample_transaction():
    return Transaction(
        version=1,
        inputs=[TxIn(prev_txid=bytes(32), prev_index=0)],
        outputs=[TxOut(amount=90000, script_pubkey=LOCKING_SCRIPT)],
        locktime=0,
    )


def test_defaults():
    tx_in = TxIn(prev_txid=bytes(32), prev_index=3)
    assert tx_in.script_sig == b""
    assert tx_in.sequence == 0xFFFFFFFF
    assert not tx_in.is_signed

    tx = Transaction()
    assert tx.version == 1
    assert tx.locktime == 0
    assert tx.inputs == []
    assert tx.outputs == []


def test_serialization_layout():
    tx = _sample_transaction()
    assert tx.serialize() == bytes.fromhex(UNSIGNED_HEX)
    assert tx.to_hex() == UNSIGNED_HEX
    assert tx.size == len(bytes.fromhex(UNSIGNED_HEX))


def test_input_and_output_serialization():
    tx_in = TxIn(prev_txid=bytes(range(32)), prev_index=2, script_sig=b"\xab\xcd", sequence=5)
    assert tx_in.serialize() == (
        bytes(range(32)) + b"\x02\x00\x00\x00" + b"\x02\xab\xcd" + b"\x05\x00\x00\x00"
    )

    tx_out = TxOut(amount=1, script_pubkey=b"\x51")
    assert tx_out.serialize() == b"\x01" + b"\x00" * 7 + b"\x01\x51"


def test_prev_txid_is_not_reversed():
    txid = bytes(range(32))
    tx = Transaction(inputs=[TxIn(prev_txid=txid, prev_index=0)])
    assert tx.serialize()[5:37] == txid


def test_serialization_is_deterministic():
    tx = _sample_transaction()
    assert tx.serialize() == tx.serialize()
    assert _sample_transaction().serialize() == tx.serialize()


def test_order_is_significant():
    out_a = TxOut(amount=1, script_pubkey=b"\x51")
    out_b = TxOut(amount=2, script_pubkey=b"\x52")
    tx_ab = Transaction(outputs=[out_a, out_b])
    tx_ba = Transaction(outputs=[out_b, out_a])
    assert tx_ab.serialize() != tx_ba.serialize()


def test_long_script_uses_multibyte_varint():
    script = b"\x00" * 300
    tx_out = TxOut(amount=0, script_pubkey=script)
    assert tx_out.serialize()[8:11] == encode_varint(300) == b"\xfd\x2c\x01"


def test_transaction_id_is_stable():
    tx = _sample_transaction()
    expected = double_sha256(bytes.fromhex(UNSIGNED_HEX))
    assert transaction_id(tx) == expected
    assert tx.txid() == expected
    assert _sample_transaction().txid() == expected
    assert len(tx.txid()) == 32
    assert tx.txid_hex() == expected[::-1].hex()


def test_add_input_and_output_chain():
    tx = Transaction().add_input(bytes(32), 0).add_output(90000, LOCKING_SCRIPT)
    assert tx.serialize() == bytes.fromhex(UNSIGNED_HEX)


def test_transaction_owns_its_lists():
    inputs = [TxIn(prev_txid=bytes(32), prev_index=0)]
    outputs = [TxOut(amount=1, script_pubkey=b"\x51")]
    tx = Transaction(inputs=inputs, outputs=outputs)
    inputs.append(TxIn(prev_txid=bytes(32), prev_index=1))
    outputs.clear()
    assert len(tx.inputs) == 1
    assert len(tx.outputs) == 1


def test_copy_is_deep():
    tx = _sample_transaction()
    clone = tx.copy()
    clone.inputs[0].script_sig = b"\x01\x02"
    clone.inputs.append(TxIn(prev_txid=bytes(32), prev_index=1))
    assert tx.inputs[0].script_sig == b""
    assert len(tx.inputs) == 1


def test_output_is_frozen():
    tx_out = TxOut(amount=1, script_pubkey=b"\x51")
    with pytest.raises(AttributeError):
        tx_out.amount = 2


def test_field_validation():
    with pytest.raises(ValidationError):
        TxIn(prev_txid=bytes(31), prev_index=0)
    with pytest.raises(ValidationError):
        TxIn(prev_txid=bytes(32), prev_index=-1)
    with pytest.raises(ValidationError):
        TxIn(prev_txid=bytes(32), prev_index=0, sequence=2**32)
    with pytest.raises(ValidationError):
        TxOut(amount=2**64, script_pubkey=b"")
    with pytest.raises(ValidationError):
        TxOut(amount=-1, script_pubkey=b"")
    with pytest.raises(ValidationError):
        Transaction(version=2**32)
    with pytest.raises(ValidationError):
        Transaction(locktime=-1)


def test_parse_round_trip():
    tx = _sample_transaction()
    tx.inputs[0].script_sig = b"\x02\xab\xcd"
    tx.add_output(0, b"")

    parsed = Transaction.from_bytes(tx.serialize())
    assert parsed == tx
    assert parsed.inputs[0].script_sig == b"\x02\xab\xcd"
    assert parsed.outputs[1].amount == 0

    assert Transaction.from_hex(UNSIGNED_HEX) == _sample_transaction()


def test_parse_errors():
    data = bytes.fromhex(UNSIGNED_HEX)
    with pytest.raises(SerializationError):
        Transaction.from_bytes(data[:-1])
    with pytest.raises(SerializationError):
        Transaction.from_bytes(data + b"\x00")
    with pytest.raises(SerializationError):
        Transaction.from_bytes(data[:40])
    with pytest.raises(SerializationError, match="Segwit"):
        Transaction.from_bytes(b"\x02\x00\x00\x00\x00\x01" + data[5:])
