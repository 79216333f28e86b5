"""Key management and signing for cosmkit."""

import logging
from typing import Optional, Union

import nacl.exceptions
import nacl.signing
from coincurve import PrivateKey as SecpPrivateKey, PublicKey as SecpPublicKey

from ..constants import DEFAULT_BECH32_PREFIX
from ..crypto.backend import ensure_ready
from ..crypto.hashes import hash160, sha256
from ..crypto.signature import ExtendedSecp256k1Signature, Secp256k1Signature
from ..exceptions import CryptoError, ValidationError
from ..types.common import Address, PrivateKeyBytes, PublicKeyBytes
from ..utils.encoding import encode_bech32
from ..utils.validation import validate_private_key, validate_public_key

__all__ = [
    "PrivateKey",
    "PublicKey",
    "Secp256k1Keypair",
    "Secp256k1",
    "Ed25519Keypair",
    "Ed25519",
    "sign_message",
    "verify_message",
]

logger = logging.getLogger(__name__)


class PrivateKey:
    """
    secp256k1 private key wrapper.

    Handles signing and public key derivation. The public key is always
    computed from the secret, never stored alongside it.
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
            key = key.secret

        # Validate and normalize key
        self._secret = PrivateKeyBytes(validate_private_key(key))
        self._key = SecpPrivateKey(self._secret)

    @property
    def secret(self) -> PrivateKeyBytes:
        """Get private key as bytes."""
        return self._secret

    def hex(self) -> str:
        """Get private key as hex string."""
        return self._secret.hex()

    def public_key(self, compressed: bool = True) -> "PublicKey":
        """
        Get corresponding public key.

        Args:
            compressed: Return compressed format

        Returns:
            PublicKey instance
        """
        serialized = self._key.public_key.format(compressed=compressed)
        return PublicKey(serialized)

    def sign(self, message_hash: bytes) -> ExtendedSecp256k1Signature:
        """
        Sign 32-byte message hash with an RFC 6979 deterministic nonce.

        Args:
            message_hash: 32-byte digest to sign

        Returns:
            Low-S signature with recovery id

        Raises:
            CryptoError: If signing fails
        """
        if len(message_hash) != 32:
            raise CryptoError("Message hash must be 32 bytes")

        try:
            raw = self._key.sign_recoverable(message_hash, hasher=None)
        except ValueError as e:
            raise CryptoError(f"Signing failed: {e}") from e

        return ExtendedSecp256k1Signature.from_fixed_length(raw)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PrivateKey):
            return False
        return self._secret == other._secret

    def __repr__(self) -> str:
        # Show first and last 4 chars of hex for security
        hex_str = self.hex()
        return f"PrivateKey({hex_str[:4]}...{hex_str[-4:]})"


class PublicKey:
    """
    secp256k1 public key wrapper.

    Accepts compressed (33 byte) or uncompressed (65 byte) points and
    converts freely between them.
    """

    def __init__(self, key: Union[bytes, str, "PublicKey"]) -> None:
        if isinstance(key, PublicKey):
            key = key.point

        key_bytes = validate_public_key(key)
        try:
            self._key = SecpPublicKey(key_bytes)
        except ValueError as e:
            raise ValidationError(f"Public key is not a curve point: {e}") from e
        self._point = PublicKeyBytes(key_bytes)

    @property
    def point(self) -> PublicKeyBytes:
        """Public key in the encoding it was created with."""
        return self._point

    @property
    def compressed(self) -> PublicKeyBytes:
        return PublicKeyBytes(self._key.format(compressed=True))

    @property
    def uncompressed(self) -> PublicKeyBytes:
        return PublicKeyBytes(self._key.format(compressed=False))

    def hex(self) -> str:
        return self._point.hex()

    def address(self, prefix: str = DEFAULT_BECH32_PREFIX) -> Address:
        """Cosmos SDK account address: bech32(ripemd160(sha256(compressed)))."""
        return Address(encode_bech32(prefix, hash160(self.compressed)))

    def verify(self, signature: Secp256k1Signature, message_hash: bytes) -> bool:
        """
        Verify signature over a 32-byte digest.

        Returns:
            True if signature is valid; False on mismatch or malformed digest
        """
        if len(message_hash) != 32:
            return False

        try:
            return self._key.verify(signature.to_der(), message_hash, hasher=None)
        except ValueError:
            return False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PublicKey):
            return False
        return self.compressed == other.compressed

    def __repr__(self) -> str:
        return f"PublicKey({self.compressed.hex()})"


class Secp256k1Keypair:
    """secp256k1 private key plus its derived public key."""

    def __init__(self, private_key: bytes) -> None:
        self._private_key = PrivateKey(private_key)

    @property
    def private_key(self) -> PrivateKeyBytes:
        return self._private_key.secret

    @property
    def public_key(self) -> PublicKeyBytes:
        """65-byte uncompressed public key."""
        return self._private_key.public_key(compressed=False).point

    @property
    def compressed_public_key(self) -> PublicKeyBytes:
        return self._private_key.public_key(compressed=True).point

    def __repr__(self) -> str:
        return f"Secp256k1Keypair(public_key={self.compressed_public_key.hex()})"


class Secp256k1:
    """secp256k1 ECDSA over pre-hashed 32-byte messages."""

    @staticmethod
    def make_keypair(private_key: bytes) -> Secp256k1Keypair:
        """
        Raises:
            CryptoError: If the key is not a valid secp256k1 scalar
        """
        try:
            return Secp256k1Keypair(private_key)
        except ValidationError as e:
            raise CryptoError(f"Input is not a valid secp256k1 private key: {e}") from e

    @staticmethod
    def create_signature(message_hash: bytes, private_key: bytes) -> ExtendedSecp256k1Signature:
        if len(message_hash) == 0:
            raise CryptoError("Message hash must not be empty")
        if len(message_hash) > 32:
            raise CryptoError("Message hash length must not exceed 32 bytes")
        return PrivateKey(private_key).sign(message_hash.rjust(32, b"\x00"))

    @staticmethod
    def verify_signature(
        signature: Secp256k1Signature,
        message_hash: bytes,
        public_key: bytes,
    ) -> bool:
        """Pure predicate; malformed keys or digests verify as False."""
        try:
            pubkey = PublicKey(public_key)
        except ValidationError:
            return False
        return pubkey.verify(signature, message_hash)

    @staticmethod
    def recover_pubkey(signature: ExtendedSecp256k1Signature, message_hash: bytes) -> PublicKeyBytes:
        """Recover the 65-byte uncompressed public key from a signature."""
        if len(message_hash) != 32:
            raise CryptoError("Message hash must be 32 bytes")
        try:
            key = SecpPublicKey.from_signature_and_message(
                signature.to_fixed_length(), message_hash, hasher=None
            )
        except ValueError as e:
            raise CryptoError(f"Public key recovery failed: {e}") from e
        return PublicKeyBytes(key.format(compressed=False))

    @staticmethod
    def compress_pubkey(public_key: bytes) -> PublicKeyBytes:
        return PublicKey(public_key).compressed

    @staticmethod
    def uncompress_pubkey(public_key: bytes) -> PublicKeyBytes:
        return PublicKey(public_key).uncompressed

    @staticmethod
    def trim_recovery_byte(signature: bytes) -> bytes:
        if len(signature) == 64:
            return signature
        if len(signature) == 65:
            return signature[:64]
        raise CryptoError(f"Invalid signature length: {len(signature)}")


class Ed25519Keypair:
    """Ed25519 32-byte seed (the "private key") plus its public key."""

    def __init__(self, private_key: bytes) -> None:
        if len(private_key) != 32:
            raise CryptoError(f"Ed25519 private key must be 32 bytes, got {len(private_key)}")
        ensure_ready()
        self._signing_key = nacl.signing.SigningKey(bytes(private_key))

    @property
    def private_key(self) -> bytes:
        return bytes(self._signing_key)

    @property
    def public_key(self) -> PublicKeyBytes:
        return PublicKeyBytes(bytes(self._signing_key.verify_key))

    def __repr__(self) -> str:
        return f"Ed25519Keypair(public_key={self.public_key.hex()})"


class Ed25519:
    """Ed25519 signatures over raw messages (hashing is internal to the scheme)."""

    @staticmethod
    def make_keypair(seed: bytes) -> Ed25519Keypair:
        return Ed25519Keypair(seed)

    @staticmethod
    def create_signature(message: bytes, keypair: Ed25519Keypair) -> bytes:
        return keypair._signing_key.sign(bytes(message)).signature

    @staticmethod
    def verify_signature(signature: bytes, message: bytes, public_key: bytes) -> bool:
        if len(signature) != 64 or len(public_key) != 32:
            return False
        ensure_ready()
        try:
            nacl.signing.VerifyKey(bytes(public_key)).verify(bytes(message), bytes(signature))
            return True
        except nacl.exceptions.BadSignatureError:
            return False


def sign_message(private_key: Union[PrivateKey, bytes], message: Union[str, bytes]) -> bytes:
    """
    SHA-256 hash a message and sign it.

    Args:
        private_key: secp256k1 key to sign with
        message: Message text or bytes

    Returns:
        64-byte fixed-length r || s signature
    """
    if isinstance(message, str):
        message = message.encode("utf-8")
    if not isinstance(private_key, PrivateKey):
        private_key = PrivateKey(private_key)

    return private_key.sign(sha256(message)).trimmed().to_fixed_length()


def verify_message(
    public_key: Union[PublicKey, bytes],
    signature: bytes,
    message: Union[str, bytes],
    prehashed: Optional[bool] = False,
) -> bool:
    """
    Verify a signature made by sign_message.

    Args:
        public_key: Signer's public key
        signature: 64-byte fixed-length signature
        message: Original message (or its digest if prehashed)
        prehashed: Treat message as an already computed SHA-256 digest

    Returns:
        True if signature is valid
    """
    if isinstance(message, str):
        message = message.encode("utf-8")
    digest = message if prehashed else sha256(message)

    try:
        parsed = Secp256k1Signature.from_fixed_length(signature)
        pubkey = public_key if isinstance(public_key, PublicKey) else PublicKey(public_key)
    except (CryptoError, ValidationError):
        return False

    return pubkey.verify(parsed, digest)
