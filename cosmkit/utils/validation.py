"""Input validation utilities for cosmkit."""

import re
from typing import Optional, Union

from ..constants import SECP256K1_N
from ..exceptions import ValidationError
from ..utils.encoding import decode_bech32

__all__ = [
    "ValidationError",
    "is_valid_address",
    "validate_address",
    "is_valid_type_url",
    "validate_type_url",
    "is_valid_private_key",
    "validate_private_key",
    "is_valid_public_key",
    "validate_public_key",
]

HEX_PATTERN = re.compile(r"^[0-9a-fA-F]*$")
TYPE_URL_PATTERN = re.compile(r"^(?:[A-Za-z0-9.\-]+)?/[A-Za-z_][A-Za-z0-9_.]*$")


def _to_bytes(key: Union[str, bytes], what: str) -> bytes:
    if isinstance(key, str):
        if key.startswith("0x"):
            key = key[2:]
        if not HEX_PATTERN.match(key):
            raise ValidationError(f"{what} must be hexadecimal")
        try:
            return bytes.fromhex(key)
        except ValueError as e:
            raise ValidationError(f"Invalid hex {what.lower()}: {e}") from e
    return bytes(key)


def is_valid_address(address: str, prefix: Optional[str] = None) -> bool:
    """
    Check if a bech32 account address is valid.

    Args:
        address: Address to check
        prefix: Expected human-readable prefix (any if None)

    Returns:
        True if valid, False otherwise
    """
    try:
        validate_address(address, prefix)
        return True
    except ValidationError:
        return False


def validate_address(address: str, prefix: Optional[str] = None) -> str:
    """
    Validate a bech32 account address.

    Args:
        address: Address to validate
        prefix: Expected human-readable prefix (any if None)

    Returns:
        Validated address

    Raises:
        ValidationError: If address is invalid
    """
    if not address or not isinstance(address, str):
        raise ValidationError("Address must be a non-empty string")

    hrp, data = decode_bech32(address)

    if prefix is not None and hrp != prefix:
        raise ValidationError(f"Address prefix {hrp!r} does not match {prefix!r}")
    if len(data) not in (20, 32):
        raise ValidationError(f"Address payload must be 20 or 32 bytes, got {len(data)}")

    return address


def is_valid_type_url(type_url: str) -> bool:
    """Check if a string looks like a protobuf type URL."""
    return isinstance(type_url, str) and bool(TYPE_URL_PATTERN.match(type_url))


def validate_type_url(type_url: str) -> str:
    """
    Validate a protobuf type URL such as /cosmos.bank.v1beta1.MsgSend.

    Raises:
        ValidationError: If type URL is malformed
    """
    if not is_valid_type_url(type_url):
        raise ValidationError(f"Invalid type url: {type_url!r}")
    return type_url


def is_valid_private_key(key: Union[str, bytes]) -> bool:
    """Check if a secp256k1 private key is valid."""
    try:
        validate_private_key(key)
        return True
    except ValidationError:
        return False


def validate_private_key(key: Union[str, bytes]) -> bytes:
    """
    Validate secp256k1 private key and return as bytes.

    Args:
        key: Private key as hex string or bytes

    Returns:
        Private key as 32 bytes

    Raises:
        ValidationError: If private key is invalid
    """
    key = _to_bytes(key, "Private key")

    if len(key) != 32:
        raise ValidationError(f"Private key must be 32 bytes, got {len(key)}")

    # Check range
    key_int = int.from_bytes(key, "big")

    if key_int == 0:
        raise ValidationError("Private key cannot be zero")
    if key_int >= SECP256K1_N:
        raise ValidationError("Private key exceeds curve order")

    return key


def is_valid_public_key(key: Union[str, bytes]) -> bool:
    """Check if a secp256k1 public key encoding is valid."""
    try:
        validate_public_key(key)
        return True
    except ValidationError:
        return False


def validate_public_key(key: Union[str, bytes]) -> bytes:
    """
    Validate secp256k1 public key encoding and return as bytes.

    Args:
        key: Public key as hex string or bytes

    Returns:
        Public key bytes (33 or 65 bytes)

    Raises:
        ValidationError: If public key is invalid
    """
    key = _to_bytes(key, "Public key")

    if len(key) == 33:
        if key[0] not in (0x02, 0x03):
            raise ValidationError("Compressed public key must start with 0x02 or 0x03")
    elif len(key) == 65:
        if key[0] != 0x04:
            raise ValidationError("Uncompressed public key must start with 0x04")
    else:
        raise ValidationError(f"Public key must be 33 or 65 bytes, got {len(key)}")

    return key
