"""BIP39 mnemonic implementation for cosmkit."""

import hashlib
import unicodedata
from typing import Optional

from ..constants import (
    BIP39_WORDLIST as WORDLIST,
    ENTROPY_LENGTHS,
    MNEMONIC_WORD_COUNTS,
    PBKDF2_ROUNDS,
)
from ..crypto.backend import Random
from ..exceptions import (
    ChecksumMismatch,
    InvalidEntropyLength,
    InvalidMnemonicLength,
    MnemonicError,
    UnknownWord,
)
from ..types.common import Entropy, Seed

__all__ = [
    "entropy_to_mnemonic",
    "mnemonic_to_entropy",
    "mnemonic_to_seed",
    "generate_mnemonic",
    "is_valid_mnemonic",
    "normalize_mnemonic",
    "EnglishMnemonic",
]

_WORD_INDEX = {word: index for index, word in enumerate(WORDLIST)}


def _checksum_bits(entropy: bytes) -> str:
    checksum_length = len(entropy) * 8 // 32
    digest = hashlib.sha256(entropy).digest()
    return "".join(format(byte, "08b") for byte in digest)[:checksum_length]


def normalize_mnemonic(mnemonic: str) -> str:
    """NFKD-normalise, lowercase and collapse whitespace."""
    return " ".join(unicodedata.normalize("NFKD", mnemonic).lower().split())


def entropy_to_mnemonic(entropy: bytes) -> str:
    """
    Encode entropy as a BIP39 mnemonic.

    Args:
        entropy: 16, 20, 24, 28 or 32 bytes

    Returns:
        Space-separated mnemonic sentence

    Raises:
        InvalidEntropyLength: If entropy has a non-standard size
    """
    if len(entropy) not in ENTROPY_LENGTHS:
        raise InvalidEntropyLength(len(entropy))

    entropy_bits = "".join(format(byte, "08b") for byte in entropy)
    all_bits = entropy_bits + _checksum_bits(entropy)

    # Split into 11-bit chunks and convert to words
    words = []
    for i in range(0, len(all_bits), 11):
        index = int(all_bits[i:i + 11], 2)
        words.append(WORDLIST[index])

    return " ".join(words)


def mnemonic_to_entropy(mnemonic: str) -> Entropy:
    """
    Decode a BIP39 mnemonic back to its entropy.

    Args:
        mnemonic: Mnemonic sentence

    Returns:
        Entropy bytes

    Raises:
        InvalidMnemonicLength: If the word count is not 12, 15, 18, 21 or 24
        UnknownWord: If a word is not in the word list
        ChecksumMismatch: If the encoded checksum is wrong
    """
    words = normalize_mnemonic(mnemonic).split(" ") if mnemonic.strip() else []
    if len(words) not in MNEMONIC_WORD_COUNTS:
        raise InvalidMnemonicLength(len(words))

    bits = []
    for position, word in enumerate(words):
        index = _WORD_INDEX.get(word)
        if index is None:
            raise UnknownWord(word, position)
        bits.append(format(index, "011b"))
    all_bits = "".join(bits)

    checksum_length = len(all_bits) // 33
    entropy_bits = all_bits[:-checksum_length]
    checksum = all_bits[-checksum_length:]

    entropy = int(entropy_bits, 2).to_bytes(len(entropy_bits) // 8, "big")
    if _checksum_bits(entropy) != checksum:
        raise ChecksumMismatch()

    return Entropy(entropy)


def mnemonic_to_seed(mnemonic: str, passphrase: str = "") -> Seed:
    """Convert mnemonic to 64-byte seed using PBKDF2-HMAC-SHA512."""
    mnemonic_bytes = unicodedata.normalize("NFKD", " ".join(mnemonic.split())).encode("utf-8")
    salt = unicodedata.normalize("NFKD", "mnemonic" + passphrase).encode("utf-8")

    return Seed(hashlib.pbkdf2_hmac(
        "sha512",
        mnemonic_bytes,
        salt,
        PBKDF2_ROUNDS,
        dklen=64
    ))


def generate_mnemonic(strength: int = 256) -> str:
    """Generate BIP39 mnemonic phrase with the given entropy strength in bits."""
    if strength % 8 or strength // 8 not in ENTROPY_LENGTHS:
        raise ValueError("Strength must be 128, 160, 192, 224, or 256")

    return entropy_to_mnemonic(Random.get_bytes(strength // 8))


def is_valid_mnemonic(mnemonic: str) -> bool:
    """Check word list membership, word count and checksum."""
    try:
        mnemonic_to_entropy(mnemonic)
        return True
    except MnemonicError:
        return False


class EnglishMnemonic:
    """
    A validated mnemonic over the BIP39 English word list.

    The sentence is normalised on construction and never stored in an
    invalid state.
    """

    def __init__(self, mnemonic: str) -> None:
        normalized = normalize_mnemonic(mnemonic)
        mnemonic_to_entropy(normalized)
        self._data = normalized

    @classmethod
    def from_entropy(cls, entropy: bytes) -> "EnglishMnemonic":
        return cls(entropy_to_mnemonic(entropy))

    @property
    def words(self) -> list[str]:
        return self._data.split(" ")

    def to_entropy(self) -> Entropy:
        return mnemonic_to_entropy(self._data)

    def to_seed(self, passphrase: Optional[str] = None) -> Seed:
        return mnemonic_to_seed(self._data, passphrase or "")

    def __str__(self) -> str:
        return self._data

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EnglishMnemonic):
            return False
        return self._data == other._data

    def __repr__(self) -> str:
        return f"EnglishMnemonic({len(self.words)} words)"
