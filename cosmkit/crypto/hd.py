"""Hierarchical deterministic key derivation (BIP32 / SLIP-10)."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Tuple, Union

from coincurve import PrivateKey as SecpPrivateKey

from ..constants import COSMOS_COIN_TYPE, HARDENED_OFFSET, SECP256K1_N
from ..crypto.hashes import hmac_sha512
from ..exceptions import InvalidDerivedKey, ValidationError
from ..types.common import Seed

__all__ = [
    "Slip10Curve",
    "slip10_curve_from_string",
    "Slip10RawIndex",
    "HdPath",
    "Slip10Result",
    "Slip10",
    "string_to_path",
    "path_to_string",
    "make_cosmos_hd_path",
]

logger = logging.getLogger(__name__)


class Slip10Curve(str, Enum):
    """Supported curves; the value is the curve's master key HMAC key."""

    SECP256K1 = "Bitcoin seed"
    ED25519 = "ed25519 seed"


def slip10_curve_from_string(curve: str) -> Slip10Curve:
    """Look up a curve by its seed constant, e.g. "ed25519 seed"."""
    try:
        return Slip10Curve(curve)
    except ValueError as e:
        raise ValidationError(f"Unknown curve input: {curve!r}") from e


class Slip10RawIndex(int):
    """A 32-bit path index with the hardened flag in the high bit."""

    def __new__(cls, value: int) -> "Slip10RawIndex":
        if not 0 <= value <= 0xFFFFFFFF:
            raise ValidationError(f"Index out of range: {value}")
        return super().__new__(cls, value)

    @classmethod
    def hardened(cls, number: int) -> "Slip10RawIndex":
        if not 0 <= number < HARDENED_OFFSET:
            raise ValidationError(f"Hardened index number out of range: {number}")
        return cls(number + HARDENED_OFFSET)

    @classmethod
    def normal(cls, number: int) -> "Slip10RawIndex":
        if not 0 <= number < HARDENED_OFFSET:
            raise ValidationError(f"Index number out of range: {number}")
        return cls(number)

    def is_hardened(self) -> bool:
        return self >= HARDENED_OFFSET

    def number(self) -> int:
        return self - HARDENED_OFFSET if self.is_hardened() else int(self)

    def __repr__(self) -> str:
        suffix = "'" if self.is_hardened() else ""
        return f"Slip10RawIndex({self.number()}{suffix})"


HdPath = Tuple[Slip10RawIndex, ...]


@dataclass(frozen=True)
class Slip10Result:
    """Extended private key: a scalar plus its chain code, on a given curve."""

    private_key: bytes
    chain_code: bytes
    curve: Slip10Curve = Slip10Curve.SECP256K1

    def __repr__(self) -> str:
        return f"Slip10Result(curve={self.curve.name}, chain_code={self.chain_code.hex()})"


class Slip10:
    """
    SLIP-10 derivation over secp256k1 and ed25519.

    For secp256k1 this is identical to BIP32 private derivation. Ed25519 only
    supports hardened derivation, so on that curve every index is treated as
    hardened whatever its flag says.
    """

    @staticmethod
    def master_from_seed(curve: Slip10Curve, seed: Seed) -> Slip10Result:
        """Create master key from seed."""
        if not 16 <= len(seed) <= 64:
            raise ValidationError("Seed must be between 16 and 64 bytes")

        h = hmac_sha512(curve.value.encode("ascii"), seed)
        private_key, chain_code = h[:32], h[32:]

        if curve is Slip10Curve.SECP256K1:
            key_int = int.from_bytes(private_key, "big")
            if key_int == 0 or key_int >= SECP256K1_N:
                raise InvalidDerivedKey("Invalid master key")

        return Slip10Result(private_key=private_key, chain_code=chain_code, curve=curve)

    @staticmethod
    def child(curve: Slip10Curve, parent: Slip10Result, index: int) -> Slip10Result:
        """Derive one child key."""
        if curve is Slip10Curve.ED25519:
            index = int(index) | HARDENED_OFFSET
        index = Slip10RawIndex(index)

        if index.is_hardened():
            data = b"\x00" + parent.private_key + index.to_bytes(4, "big")
        else:
            public_key = SecpPrivateKey(parent.private_key).public_key.format(compressed=True)
            data = public_key + index.to_bytes(4, "big")

        h = hmac_sha512(parent.chain_code, data)
        il, chain_code = h[:32], h[32:]

        if curve is Slip10Curve.ED25519:
            return Slip10Result(private_key=il, chain_code=chain_code, curve=curve)

        il_int = int.from_bytes(il, "big")
        if il_int >= SECP256K1_N:
            raise InvalidDerivedKey("Derived tweak exceeds curve order", index=int(index))

        child_int = (int.from_bytes(parent.private_key, "big") + il_int) % SECP256K1_N
        if child_int == 0:
            raise InvalidDerivedKey("Derived private key is zero", index=int(index))

        return Slip10Result(
            private_key=child_int.to_bytes(32, "big"),
            chain_code=chain_code,
            curve=curve,
        )

    @staticmethod
    def derive_path(
        curve: Slip10Curve,
        seed: Seed,
        path: Union[HdPath, Iterable[int], str],
    ) -> Slip10Result:
        """Derive using a path like m/44'/118'/0'/0/0 or an index tuple."""
        if isinstance(path, str):
            path = string_to_path(path)

        result = Slip10.master_from_seed(curve, seed)
        for index in path:
            result = Slip10.child(curve, result, index)
        return result


def string_to_path(path: str) -> HdPath:
    """
    Parse a textual path.

    Args:
        path: e.g. "m/44'/118'/0'/0/0"; hardening is marked with a trailing '

    Raises:
        ValidationError: If the path is malformed
    """
    if not path.startswith("m"):
        raise ValidationError("Path string must start with 'm'")

    rest = path[1:]
    if rest and not rest.startswith("/"):
        raise ValidationError(f"Syntax error in path: {path!r}")

    out = []
    for component in rest.split("/")[1:]:
        hardened = component.endswith("'")
        digits = component[:-1] if hardened else component
        if not digits.isdigit():
            raise ValidationError(f"Syntax error in path component: {component!r}")

        number = int(digits)
        if number >= HARDENED_OFFSET:
            raise ValidationError(f"Index too large: {component!r}")
        out.append(Slip10RawIndex.hardened(number) if hardened else Slip10RawIndex.normal(number))

    return tuple(out)


def path_to_string(path: Iterable[int]) -> str:
    """Format an index path as text, e.g. m/44'/118'/0'/0/0."""
    parts = ["m"]
    for index in path:
        index = Slip10RawIndex(index)
        parts.append(f"{index.number()}'" if index.is_hardened() else str(index.number()))
    return "/".join(parts)


def make_cosmos_hd_path(account: int = 0) -> HdPath:
    """The Cosmos Hub path m/44'/118'/0'/0/{account}."""
    return (
        Slip10RawIndex.hardened(44),
        Slip10RawIndex.hardened(COSMOS_COIN_TYPE),
        Slip10RawIndex.hardened(0),
        Slip10RawIndex.normal(0),
        Slip10RawIndex.normal(account),
    )
