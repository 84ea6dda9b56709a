import pytest

from legacytx.constants import Network
from legacytx.crypto.keys import KeyPair, PrivateKey, PublicKey
from legacytx.exceptions import ValidationError
from legacytx.utils.encoding import decode_base58_check, encode_base58_check

ONE = (1).to_bytes(32, "big")
PUBKEY_G = bytes.fromhex("0279be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798")
WIF_ONE_COMPRESSED = "KwDiBf89QgGbjEhKnhXJuH7LrciVrZi3qYjgd9M7rFU73sVHnoWn"
WIF_ONE_UNCOMPRESSED = "5HpHagT65TZzG1PH3CSu63k8DbpvD8s5ip4nEB3kEsreAnchuDf"


def test_public_key_derivation():
    key = PrivateKey(ONE)
    assert key.public_key().point == PUBKEY_G
    assert key.public_key() == PublicKey(PUBKEY_G.hex())


def test_wif_vectors():
    key, compressed, network = PrivateKey.from_wif(WIF_ONE_COMPRESSED)
    assert key.secret == ONE
    assert compressed is True
    assert network == Network.MAINNET
    assert key.wif() == WIF_ONE_COMPRESSED

    key, compressed, network = PrivateKey.from_wif(WIF_ONE_UNCOMPRESSED)
    assert key.secret == ONE
    assert compressed is False
    assert key.wif(compressed=False) == WIF_ONE_UNCOMPRESSED


def test_wif_testnet_roundtrip():
    key = PrivateKey.from_seed(b"seed")
    wif = key.wif(Network.TESTNET)
    imported, compressed, network = PrivateKey.from_wif(wif)
    assert imported == key
    assert compressed is True
    assert network == Network.TESTNET


def test_key_pair_from_wif():
    key_pair = KeyPair.from_wif(WIF_ONE_COMPRESSED)
    assert key_pair.private_key.secret == ONE
    assert key_pair.public_key_bytes == PUBKEY_G
    assert len(key_pair.public_key_bytes) == 33


def test_wif_checksum_mismatch():
    data = decode_base58_check(WIF_ONE_COMPRESSED)
    bad = encode_base58_check(data)[:-1] + "1"
    with pytest.raises(ValidationError, match="Invalid WIF"):
        KeyPair.from_wif(bad)


def test_wif_bad_character():
    with pytest.raises(ValidationError):
        KeyPair.from_wif("KwDiBf89QgGbjEhKnhXJuH7LrciVrZi3qYjgd9M7rFU73sVHnoW0")


def test_wif_unknown_version():
    wif = encode_base58_check(b"\x81" + ONE + b"\x01")
    with pytest.raises(ValidationError, match="version"):
        KeyPair.from_wif(wif)


def test_wif_bad_length_and_flag():
    with pytest.raises(ValidationError, match="length"):
        KeyPair.from_wif(encode_base58_check(b"\x80" + ONE[:31]))
    with pytest.raises(ValidationError, match="compression"):
        KeyPair.from_wif(encode_base58_check(b"\x80" + ONE + b"\x02"))


def test_private_key_range():
    with pytest.raises(ValidationError):
        PrivateKey(bytes(32))
    with pytest.raises(ValidationError):
        PrivateKey(b"\xff" * 32)
    with pytest.raises(ValidationError):
        PrivateKey(b"\x01" * 31)


def test_public_key_validation():
    with pytest.raises(ValidationError):
        PublicKey(b"\x04" + b"\x11" * 64)
    with pytest.raises(ValidationError):
        PublicKey(b"\x05" + PUBKEY_G[1:])


def test_private_key_repr_is_masked():
    key = PrivateKey(bytes.fromhex("ab" * 32))
    assert "ab" * 32 not in repr(key)
    assert "ab" * 32 not in repr(KeyPair(key))


def test_sign_requires_32_byte_hash():
    with pytest.raises(ValueError):
        PrivateKey(ONE).sign(b"\x00" * 31)


def test_p2pkh_address():
    assert PrivateKey(ONE).public_key().p2pkh_address() == "1BgGZ9tcN4rm9KBzDn7KprQz87SZ26SAMH"


def test_public_key_hash160():
    # HASH160 of the generator point, the payload of 1BgGZ9...
    assert PublicKey(PUBKEY_G).hash160() == bytes.fromhex("751e76e8199196d454941c45d1b3a323f1433bd6")
