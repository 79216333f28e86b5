"""Encoding and decoding utilities for cosmkit."""

import base64
import binascii
from typing import List, Tuple, Union

from ..exceptions import ValidationError
from ..types.common import HexStr

__all__ = [
    "hex_to_bytes",
    "bytes_to_hex",
    "to_base64",
    "from_base64",
    "convert_bits",
    "encode_bech32",
    "decode_bech32",
]

# Constants
BECH32_CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
BECH32_MAX_LENGTH = 90


def hex_to_bytes(hex_str: Union[HexStr, str]) -> bytes:
    """
    Convert hex string to bytes.

    Args:
        hex_str: Hex string with or without 0x prefix

    Returns:
        Decoded bytes

    Raises:
        ValidationError: If hex string is invalid
    """
    try:
        # Remove 0x prefix if present
        if isinstance(hex_str, str) and hex_str.startswith("0x"):
            hex_str = hex_str[2:]
        return bytes.fromhex(hex_str)
    except ValueError as e:
        raise ValidationError(f"Invalid hex string: {hex_str}") from e


def bytes_to_hex(data: bytes, prefix: bool = False) -> HexStr:
    """
    Convert bytes to hex string.

    Args:
        data: Bytes to encode
        prefix: Add 0x prefix

    Returns:
        Hex string
    """
    hex_str = data.hex()
    if prefix:
        hex_str = f"0x{hex_str}"
    return HexStr(hex_str)


def to_base64(data: bytes) -> str:
    """Encode bytes as standard padded base64."""
    return base64.b64encode(data).decode("ascii")


def from_base64(data: str) -> bytes:
    """
    Decode standard base64 string.

    Raises:
        ValidationError: If the string is not valid base64
    """
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValidationError(f"Invalid base64 string: {e}") from e


def convert_bits(data: bytes, from_bits: int, to_bits: int, pad: bool = True) -> List[int]:
    """
    Regroup a sequence of values between bit widths.

    Args:
        data: Input values, each below 2**from_bits
        from_bits: Width of input values
        to_bits: Width of output values
        pad: Zero-pad the final group

    Returns:
        List of regrouped values

    Raises:
        ValidationError: If the input has invalid values or non-zero padding
    """
    value = 0
    bits = 0
    result = []
    max_value = (1 << to_bits) - 1

    for item in data:
        if item < 0 or item >> from_bits:
            raise ValidationError(f"Invalid value for {from_bits}-bit group: {item}")
        value = (value << from_bits) | item
        bits += from_bits
        while bits >= to_bits:
            bits -= to_bits
            result.append((value >> bits) & max_value)

    if pad:
        if bits:
            result.append((value << (to_bits - bits)) & max_value)
    elif bits >= from_bits or ((value << (to_bits - bits)) & max_value):
        raise ValidationError("Invalid padding in bit conversion")

    return result


def _bech32_polymod(values: List[int]) -> int:
    """Compute Bech32 checksum polymod."""
    generator = [0x3b6a57b2, 0x26508e6d, 0x1ea119fa, 0x3d4233dd, 0x2a1462b3]
    chk = 1
    for value in values:
        top = chk >> 25
        chk = (chk & 0x1ffffff) << 5 ^ value
        for i in range(5):
            chk ^= generator[i] if ((top >> i) & 1) else 0
    return chk


def _bech32_hrp_expand(hrp: str) -> List[int]:
    """Expand human-readable part for Bech32."""
    return [ord(x) >> 5 for x in hrp] + [0] + [ord(x) & 31 for x in hrp]


def encode_bech32(prefix: str, data: bytes) -> str:
    """
    Encode bytes as a Bech32 string, e.g. an account address.

    Args:
        prefix: Human-readable part (e.g. "cosmos")
        data: Payload bytes

    Returns:
        Bech32 encoded string
    """
    values = convert_bits(data, 8, 5)

    # Calculate checksum
    polymod = _bech32_polymod(_bech32_hrp_expand(prefix) + values + [0, 0, 0, 0, 0, 0]) ^ 1
    checksum = [(polymod >> 5 * (5 - i)) & 31 for i in range(6)]

    result = prefix + "1" + "".join(BECH32_CHARSET[v] for v in values + checksum)
    if len(result) > BECH32_MAX_LENGTH:
        raise ValidationError(f"Bech32 string exceeds {BECH32_MAX_LENGTH} characters")
    return result


def decode_bech32(address: str) -> Tuple[str, bytes]:
    """
    Decode a Bech32 string.

    Args:
        address: Bech32 string

    Returns:
        Tuple of (prefix, data)

    Raises:
        ValidationError: If the string is invalid
    """
    if len(address) > BECH32_MAX_LENGTH:
        raise ValidationError(f"Bech32 string exceeds {BECH32_MAX_LENGTH} characters")
    if address.lower() != address and address.upper() != address:
        raise ValidationError("Invalid Bech32 string: mixed case")
    address = address.lower()

    # Find separator
    pos = address.rfind("1")
    if pos < 1 or pos + 7 > len(address):
        raise ValidationError("Invalid Bech32 string: no separator")

    hrp = address[:pos]
    data = address[pos + 1:]

    # Decode data
    values = []
    for char in data:
        try:
            values.append(BECH32_CHARSET.index(char))
        except ValueError:
            raise ValidationError(f"Invalid Bech32 character: {char}")

    # Verify checksum
    if _bech32_polymod(_bech32_hrp_expand(hrp) + values) != 1:
        raise ValidationError("Invalid Bech32 checksum")

    return hrp, bytes(convert_bits(bytes(values[:-6]), 5, 8, pad=False))
