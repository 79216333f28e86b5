"""Hash and MAC primitives."""

import hashlib
import hmac
from typing import Any, Callable

from Crypto.Hash import RIPEMD160, keccak

__all__ = [
    "sha256",
    "sha512",
    "keccak256",
    "ripemd160",
    "hash160",
    "hmac_digest",
    "hmac_sha256",
    "hmac_sha512",
    "Sha256",
    "Sha512",
    "Keccak256",
    "Ripemd160",
    "Hmac",
]


def sha256(data: bytes) -> bytes:
    """SHA-256 digest (32 bytes)."""
    return hashlib.sha256(data).digest()


def sha512(data: bytes) -> bytes:
    """SHA-512 digest (64 bytes)."""
    return hashlib.sha512(data).digest()


def keccak256(data: bytes) -> bytes:
    """Keccak-256 digest (32 bytes), the pre-standard SHA3 padding."""
    return keccak.new(digest_bits=256, data=data).digest()


def ripemd160(data: bytes) -> bytes:
    """RIPEMD-160 digest (20 bytes)."""
    return RIPEMD160.new(data).digest()


def hash160(data: bytes) -> bytes:
    """Perform RIPEMD160(SHA256(data))."""
    return ripemd160(sha256(data))


def hmac_digest(digestmod: Callable[..., Any], key: bytes, data: bytes) -> bytes:
    """HMAC of data under key using any hashlib-compatible constructor."""
    return hmac.new(key, data, digestmod).digest()


def hmac_sha256(key: bytes, data: bytes) -> bytes:
    return hmac_digest(hashlib.sha256, key, data)


def hmac_sha512(key: bytes, data: bytes) -> bytes:
    return hmac_digest(hashlib.sha512, key, data)


class _HashFunction:
    """Incremental hash; update() returns self so calls can be chained."""

    block_size: int
    digest_size: int

    def __init__(self, data: bytes = b"") -> None:
        self._hash = self._new()
        if data:
            self.update(data)

    def _new(self) -> Any:
        raise NotImplementedError

    def update(self, data: bytes) -> "_HashFunction":
        self._hash.update(data)
        return self

    def digest(self) -> bytes:
        # Digest a copy so further updates remain possible
        return self._hash.copy().digest()


class Sha256(_HashFunction):
    block_size = 64
    digest_size = 32

    def _new(self) -> Any:
        return hashlib.sha256()


class Sha512(_HashFunction):
    block_size = 128
    digest_size = 64

    def _new(self) -> Any:
        return hashlib.sha512()


class Keccak256(_HashFunction):
    block_size = 136
    digest_size = 32

    def _new(self) -> Any:
        return keccak.new(digest_bits=256)

    def digest(self) -> bytes:
        # Finalises the sponge; pycryptodome rejects later updates
        return self._hash.digest()


class Ripemd160(_HashFunction):
    block_size = 64
    digest_size = 20

    def _new(self) -> Any:
        return RIPEMD160.new()


class Hmac:
    """
    HMAC generic over the underlying hash.

    Args:
        digestmod: hashlib-compatible constructor, e.g. hashlib.sha512
        key: MAC key
    """

    def __init__(self, digestmod: Callable[..., Any], key: bytes) -> None:
        self._mac = hmac.new(key, digestmod=digestmod)

    @property
    def digest_size(self) -> int:
        return self._mac.digest_size

    def update(self, data: bytes) -> "Hmac":
        self._mac.update(data)
        return self

    def digest(self) -> bytes:
        return self._mac.digest()
