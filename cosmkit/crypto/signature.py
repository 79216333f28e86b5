"""secp256k1 signature encodings."""

from typing import Optional, Tuple

from ..constants import SECP256K1_N
from ..exceptions import CryptoError

__all__ = [
    "Secp256k1Signature",
    "ExtendedSecp256k1Signature",
    "parse_der_signature",
    "encode_der_signature",
]


def _trim_leading_null_bytes(data: bytes) -> bytes:
    return data.lstrip(b"\x00")


class Secp256k1Signature:
    """
    ECDSA signature (r, s) over secp256k1.

    Fixed-length encoding is r || s with both scalars left-padded to 32 bytes.
    """

    def __init__(self, r: bytes, s: bytes) -> None:
        if len(r) > 32 or len(r) == 0 or r[0] == 0:
            raise CryptoError("Unsigned integer r must be encoded as unpadded big endian.")
        if len(s) > 32 or len(s) == 0 or s[0] == 0:
            raise CryptoError("Unsigned integer s must be encoded as unpadded big endian.")
        self._r = r
        self._s = s

    @classmethod
    def from_fixed_length(cls, data: bytes) -> "Secp256k1Signature":
        if len(data) != 64:
            raise CryptoError(f"Got invalid data length: {len(data)}. Expected 64")
        return cls(_trim_leading_null_bytes(data[:32]), _trim_leading_null_bytes(data[32:]))

    @classmethod
    def from_der(cls, data: bytes) -> "Secp256k1Signature":
        r, s, _ = parse_der_signature(data)
        return cls(
            _trim_leading_null_bytes(r.to_bytes(33, "big")),
            _trim_leading_null_bytes(s.to_bytes(33, "big")),
        )

    def r(self, length: Optional[int] = None) -> bytes:
        """r, optionally left-padded to length bytes."""
        if length is None:
            return self._r
        return self._r.rjust(length, b"\x00")

    def s(self, length: Optional[int] = None) -> bytes:
        """s, optionally left-padded to length bytes."""
        if length is None:
            return self._s
        return self._s.rjust(length, b"\x00")

    def is_low_s(self) -> bool:
        return int.from_bytes(self._s, "big") <= SECP256K1_N // 2

    def to_fixed_length(self) -> bytes:
        return self.r(32) + self.s(32)

    def to_der(self) -> bytes:
        return encode_der_signature(int.from_bytes(self._r, "big"), int.from_bytes(self._s, "big"))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Secp256k1Signature):
            return False
        return self.to_fixed_length() == other.to_fixed_length()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.to_fixed_length().hex()})"


class ExtendedSecp256k1Signature(Secp256k1Signature):
    """
    A signature with a public key recovery id.

    Fixed-length encoding is r || s || recovery (65 bytes).
    """

    def __init__(self, r: bytes, s: bytes, recovery: int) -> None:
        super().__init__(r, s)
        if not 0 <= recovery <= 3:
            raise CryptoError("The recovery parameter must be one of 0, 1, 2, 3")
        self.recovery = recovery

    @classmethod
    def from_fixed_length(cls, data: bytes) -> "ExtendedSecp256k1Signature":
        if len(data) != 65:
            raise CryptoError(f"Got invalid data length: {len(data)}. Expected 65")
        return cls(
            _trim_leading_null_bytes(data[:32]),
            _trim_leading_null_bytes(data[32:64]),
            data[64],
        )

    def to_fixed_length(self) -> bytes:
        return self.r(32) + self.s(32) + bytes([self.recovery])

    def trimmed(self) -> Secp256k1Signature:
        """The plain (r, s) signature without recovery id."""
        return Secp256k1Signature(self._r, self._s)


def parse_der_signature(signature: bytes) -> Tuple[int, int, Optional[int]]:
    """
    Parse DER-encoded signature.

    Args:
        signature: DER-encoded signature, optionally followed by one trailing byte

    Returns:
        Tuple of (r, s, trailing_byte)

    Raises:
        CryptoError: If signature format is invalid
    """
    try:
        # Parse DER structure
        if signature[0] != 0x30:
            raise ValueError("missing sequence tag")

        length = signature[1]
        if length + 3 == len(signature):
            trailing = signature[-1]
            signature = signature[:-1]
        elif length + 2 == len(signature):
            trailing = None
        else:
            raise ValueError("incorrect length")

        # Parse r value
        if signature[2] != 0x02:
            raise ValueError("missing r integer tag")

        r_length = signature[3]
        if r_length > 33:
            raise ValueError("r value too long")
        r_bytes = signature[4:4 + r_length]
        if len(r_bytes) != r_length:
            raise ValueError("truncated r value")
        r = int.from_bytes(r_bytes, "big")

        # Parse s value
        s_offset = 4 + r_length
        if signature[s_offset] != 0x02:
            raise ValueError("missing s integer tag")

        s_length = signature[s_offset + 1]
        if s_length > 33:
            raise ValueError("s value too long")
        s_bytes = signature[s_offset + 2:s_offset + 2 + s_length]
        if len(s_bytes) != s_length or s_offset + 2 + s_length != len(signature):
            raise ValueError("truncated s value")
        s = int.from_bytes(s_bytes, "big")

        return r, s, trailing

    except (IndexError, ValueError) as e:
        raise CryptoError(f"Invalid DER signature: {e}") from e


def encode_der_signature(r: int, s: int, trailing: Optional[int] = None) -> bytes:
    """
    Encode signature as DER.

    Args:
        r: Signature r value
        s: Signature s value
        trailing: Optional byte to append (e.g. a sighash type)

    Returns:
        DER-encoded signature
    """
    def encode_integer(value: int) -> bytes:
        value_bytes = value.to_bytes(max(1, (value.bit_length() + 7) // 8), "big")
        if value_bytes[0] & 0x80:
            value_bytes = b"\x00" + value_bytes
        return b"\x02" + bytes([len(value_bytes)]) + value_bytes

    sequence = encode_integer(r) + encode_integer(s)
    result = b"\x30" + bytes([len(sequence)]) + sequence

    if trailing is not None:
        result += bytes([trailing])

    return result
