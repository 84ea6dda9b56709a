"""Key management for legacytx."""

import hashlib
import logging
from typing import Tuple, Union

from coincurve import PrivateKey as SecpPrivateKey, PublicKey as SecpPublicKey

from ..constants import WIF_VERSIONS, Network
from ..exceptions import CryptoError, ValidationError
from ..script import p2pkh_address
from ..types.common import Address, PrivateKeyBytes, PublicKeyBytes
from ..utils.encoding import decode_base58_check, encode_base58_check, hash160
from ..utils.validation import validate_private_key, validate_public_key

__all__ = ["PrivateKey", "PublicKey", "KeyPair"]

logger = logging.getLogger(__name__)


class PrivateKey:
    """
    Bitcoin private key wrapper.

    Handles signing, public key derivation and WIF import/export.
    """

    def __init__(self, key: Union[bytes, str, "PrivateKey"]) -> None:
        """
        Initialize private key.

        Args:
            key: Private key as 32 bytes, hex string, or another PrivateKey

        Raises:
            ValidationError: If key format is invalid
        """
        if isinstance(key, PrivateKey):
            self._secret = key._secret
            self._key = key._key
            return

        self._secret = PrivateKeyBytes(validate_private_key(key))
        self._key = SecpPrivateKey(self._secret)

    @classmethod
    def from_seed(cls, seed: bytes) -> "PrivateKey":
        """Create private key from SHA256 of seed bytes."""
        return cls(hashlib.sha256(seed).digest())

    @classmethod
    def from_wif(cls, wif: str) -> Tuple["PrivateKey", bool, Network]:
        """
        Import private key from WIF.

        Args:
            wif: Wallet Import Format string

        Returns:
            Tuple of (private_key, is_compressed, network)

        Raises:
            ValidationError: If WIF is invalid
        """
        try:
            data = decode_base58_check(wif)
        except ValidationError as e:
            raise ValidationError(f"Invalid WIF format: {e}") from e

        if len(data) not in (33, 34):
            raise ValidationError(f"Invalid WIF length: {len(data)}")

        version = data[0]
        for network, network_version in WIF_VERSIONS.items():
            if version == network_version:
                break
        else:
            raise ValidationError(f"Unknown WIF version: {version:#x}")

        key_bytes = data[1:33]
        if len(data) == 33:
            compressed = False
        else:
            compressed = data[33] == 0x01
            if not compressed:
                raise ValidationError(f"Invalid compression flag: {data[33]:#x}")

        return cls(key_bytes), compressed, network

    @property
    def secret(self) -> PrivateKeyBytes:
        """Get private key as bytes."""
        return self._secret

    def hex(self) -> str:
        """Get private key as hex string."""
        return self._secret.hex()

    def wif(self, network: Network = Network.MAINNET, compressed: bool = True) -> str:
        """
        Export private key in Wallet Import Format.

        Args:
            network: Target network
            compressed: Append the compressed-key flag

        Returns:
            WIF encoded private key
        """
        data = bytes([WIF_VERSIONS[network]]) + self._secret
        if compressed:
            data += b"\x01"
        return encode_base58_check(data)

    def public_key(self) -> "PublicKey":
        """Get corresponding compressed public key."""
        return PublicKey(self._key.public_key.format(compressed=True))

    def sign(self, message_hash: bytes) -> bytes:
        """
        Sign 32-byte message hash with RFC 6979 deterministic nonce.

        Args:
            message_hash: 32-byte hash to sign

        Returns:
            DER-encoded signature

        Raises:
            ValueError: If hash is not 32 bytes
            CryptoError: If signing fails
        """
        if len(message_hash) != 32:
            raise ValueError("Message hash must be 32 bytes")

        try:
            return self._key.sign(message_hash, hasher=None)
        except Exception as e:
            raise CryptoError(f"Signing failed: {e}") from e

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PrivateKey):
            return False
        return self._secret == other._secret

    def __hash__(self) -> int:
        return hash(self._secret)

    def __repr__(self) -> str:
        # Show first and last 4 chars of hex only
        hex_str = self.hex()
        return f"PrivateKey({hex_str[:4]}...{hex_str[-4:]})"


class PublicKey:
    """Compressed secp256k1 public key."""

    def __init__(self, key: Union[bytes, str, "PublicKey"]) -> None:
        """
        Initialize public key.

        Args:
            key: 33-byte compressed key as bytes, hex string, or another PublicKey

        Raises:
            ValidationError: If key format is invalid or not on the curve
        """
        if isinstance(key, PublicKey):
            self._point = key._point
            self._key = key._key
            return

        self._point = PublicKeyBytes(validate_public_key(key))
        try:
            self._key = SecpPublicKey(self._point)
        except ValueError as e:
            raise ValidationError(f"Invalid public key point: {e}") from e

    @property
    def point(self) -> PublicKeyBytes:
        """Get 33-byte compressed serialization."""
        return self._point

    def hex(self) -> str:
        return self._point.hex()

    def hash160(self) -> bytes:
        """Get HASH160 of public key."""
        return hash160(self._point)

    def p2pkh_address(self, network: Network = Network.MAINNET) -> Address:
        """Get Pay-to-PubKey-Hash address."""
        return p2pkh_address(self._point, network)

    def verify(self, signature: bytes, message_hash: bytes) -> bool:
        """
        Verify DER signature over a 32-byte hash.

        Returns:
            True if signature is valid, False otherwise
        """
        if len(message_hash) != 32:
            return False

        try:
            return self._key.verify(signature, message_hash, hasher=None)
        except ValueError:
            # Malformed DER
            return False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PublicKey):
            return False
        return self._point == other._point

    def __hash__(self) -> int:
        return hash(self._point)

    def __repr__(self) -> str:
        return f"PublicKey({self.hex()})"


class KeyPair:
    """
    Private key together with its compressed public key.

    This is the key material consumed by the signer.
    """

    def __init__(self, private_key: PrivateKey) -> None:
        self.private_key = private_key
        self.public_key = private_key.public_key()

    @classmethod
    def from_wif(cls, wif: str) -> "KeyPair":
        """
        Decode WIF text into a key pair.

        Raises:
            ValidationError: On bad Base58, checksum mismatch, unknown
                version byte or wrong payload length
        """
        private_key, compressed, network = PrivateKey.from_wif(wif)
        if not compressed:
            logger.warning("WIF marks an uncompressed key; using the compressed public key")
        logger.debug(f"Loaded {network.value} key {private_key!r}")
        return cls(private_key)

    @property
    def public_key_bytes(self) -> PublicKeyBytes:
        """Get 33-byte compressed public key."""
        return self.public_key.point

    def __repr__(self) -> str:
        return f"KeyPair({self.private_key!r}, {self.public_key!r})"
