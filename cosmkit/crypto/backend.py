"""
libsodium backend: one-time initialisation and the primitives built on it.

The backend must be initialised once per process before sodium-backed
primitives are used. ``ready()`` starts a single shared initialisation task
and every caller awaits that same task, so concurrent callers never trigger
initialisation twice. Synchronous primitives call ``ensure_ready()``, which
initialises inline when no ``ready()`` has completed yet. A failed
initialisation is not cached; the next call tries again.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

import nacl.bindings
import nacl.exceptions
import nacl.pwhash
import nacl.utils

from ..exceptions import CryptoError

__all__ = [
    "ready",
    "ensure_ready",
    "is_ready",
    "Random",
    "Argon2idOptions",
    "Argon2id",
    "is_argon2id_options",
    "Xchacha20poly1305Ietf",
    "XCHACHA20_NONCE_LENGTH",
]

logger = logging.getLogger(__name__)

XCHACHA20_NONCE_LENGTH = nacl.bindings.crypto_aead_xchacha20poly1305_ietf_NPUBBYTES
XCHACHA20_KEY_LENGTH = nacl.bindings.crypto_aead_xchacha20poly1305_ietf_KEYBYTES

_ready = False
_ready_task: Optional[asyncio.Task] = None


def _load_backend() -> None:
    nacl.bindings.sodium_init()


async def _initialize() -> None:
    global _ready, _ready_task
    loop = asyncio.get_running_loop()
    try:
        await loop.run_in_executor(None, _load_backend)
    except Exception as e:
        # Let the next ready() start over instead of replaying this failure
        _ready_task = None
        raise CryptoError(f"Crypto backend failed to initialise: {e}") from e
    _ready = True
    logger.debug("libsodium backend initialised")


async def ready() -> None:
    """Wait until the crypto backend is initialised."""
    global _ready_task
    if _ready:
        return

    loop = asyncio.get_running_loop()
    # A task bound to a finished loop cannot be awaited from a new one
    if _ready_task is None or _ready_task.get_loop() is not loop:
        _ready_task = loop.create_task(_initialize())

    # Shield so a cancelled caller does not cancel everyone else's wait
    await asyncio.shield(_ready_task)


def ensure_ready() -> None:
    """
    Initialise the backend synchronously if ready() has not done so yet.

    Called by every sodium-backed primitive before it touches libsodium.
    """
    global _ready
    if _ready:
        return
    try:
        _load_backend()
    except Exception as e:
        raise CryptoError(f"Crypto backend failed to initialise: {e}") from e
    _ready = True


def is_ready() -> bool:
    """Check whether initialisation has completed."""
    return _ready


class Random:
    """Cryptographically secure random source."""

    @staticmethod
    def get_bytes(count: int) -> bytes:
        if count < 0:
            raise ValueError("Byte count must not be negative")
        ensure_ready()
        return nacl.utils.random(count)


@dataclass(frozen=True)
class Argon2idOptions:
    """
    Argon2id parameters.

    Attributes:
        output_length: Output key length in bytes
        op_limit: Number of passes
        mem_limit_kib: Memory cost in KiB
    """

    output_length: int
    op_limit: int
    mem_limit_kib: int


def is_argon2id_options(value: object) -> bool:
    return isinstance(value, Argon2idOptions)


class Argon2id:
    """Argon2id password hashing via libsodium."""

    SALT_LENGTH = nacl.pwhash.argon2id.SALTBYTES

    @staticmethod
    def execute(password: str, salt: bytes, options: Argon2idOptions) -> bytes:
        """
        Derive a key from a password.

        Args:
            password: Password text (UTF-8 encoded before hashing)
            salt: 16-byte salt
            options: Cost parameters

        Returns:
            Derived key of ``options.output_length`` bytes

        Raises:
            CryptoError: If the salt length or parameters are invalid
        """
        if len(salt) != Argon2id.SALT_LENGTH:
            raise CryptoError(f"Salt must be {Argon2id.SALT_LENGTH} bytes, got {len(salt)}")
        ensure_ready()

        try:
            return nacl.pwhash.argon2id.kdf(
                options.output_length,
                password.encode("utf-8"),
                salt,
                opslimit=options.op_limit,
                memlimit=options.mem_limit_kib * 1024,
            )
        except (nacl.exceptions.CryptoError, ValueError, TypeError) as e:
            raise CryptoError(f"Argon2id failed: {e}") from e


class Xchacha20poly1305Ietf:
    """XChaCha20-Poly1305 (IETF) authenticated encryption."""

    @staticmethod
    def _check(key: bytes, nonce: bytes) -> None:
        ensure_ready()
        if len(key) != XCHACHA20_KEY_LENGTH:
            raise CryptoError(f"Key must be {XCHACHA20_KEY_LENGTH} bytes, got {len(key)}")
        if len(nonce) != XCHACHA20_NONCE_LENGTH:
            raise CryptoError(
                f"Nonce must be {XCHACHA20_NONCE_LENGTH} bytes, got {len(nonce)}"
            )

    @staticmethod
    def encrypt(message: bytes, key: bytes, nonce: bytes) -> bytes:
        Xchacha20poly1305Ietf._check(key, nonce)
        return nacl.bindings.crypto_aead_xchacha20poly1305_ietf_encrypt(
            message, None, nonce, key
        )

    @staticmethod
    def decrypt(ciphertext: bytes, key: bytes, nonce: bytes) -> bytes:
        """
        Decrypt and authenticate.

        Raises:
            CryptoError: If authentication fails
        """
        Xchacha20poly1305Ietf._check(key, nonce)
        try:
            return nacl.bindings.crypto_aead_xchacha20poly1305_ietf_decrypt(
                ciphertext, None, nonce, key
            )
        except nacl.exceptions.CryptoError as e:
            raise CryptoError("Ciphertext cannot be decrypted using that key") from e
