"""cosmkit exceptions hierarchy."""

from typing import Any, Optional, Sequence

__all__ = [
    "CosmkitError",
    "ValidationError",
    "CryptoError",
    "MnemonicError",
    "InvalidEntropyLength",
    "InvalidMnemonicLength",
    "ChecksumMismatch",
    "UnknownWord",
    "InvalidDerivedKey",
    "RegistryError",
    "UnknownTypeUrl",
    "DuplicateTypeUrl",
    "CodecError",
    "ExtensionNamespaceCollision",
    "ProviderError",
    "NetworkError",
    "TimeoutError",
    "APIError",
    "QueryError",
]


class CosmkitError(Exception):
    """Base exception for all cosmkit errors."""

    def __init__(
        self,
        message: str,
        code: Optional[int] = None,
        data: Optional[Any] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.data = data

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class ValidationError(CosmkitError):
    """Raised when validation fails."""
    pass


class CryptoError(CosmkitError):
    """Raised when cryptographic operation fails."""
    pass


class MnemonicError(CryptoError):
    """Raised when a mnemonic cannot be encoded or decoded."""
    pass


class InvalidEntropyLength(MnemonicError):
    """Raised when entropy is not 128, 160, 192, 224 or 256 bits."""

    def __init__(self, length: int) -> None:
        super().__init__(
            f"Invalid entropy length: {length} bytes "
            "(expected 16, 20, 24, 28 or 32)"
        )
        self.length = length


class InvalidMnemonicLength(MnemonicError):
    """Raised when a mnemonic has an unsupported number of words."""

    def __init__(self, word_count: int) -> None:
        super().__init__(
            f"Invalid mnemonic length: {word_count} words "
            "(expected 12, 15, 18, 21 or 24)"
        )
        self.word_count = word_count


class ChecksumMismatch(MnemonicError):
    """Raised when the mnemonic checksum does not match its entropy."""

    def __init__(self, message: str = "Mnemonic checksum mismatch") -> None:
        super().__init__(message)


class UnknownWord(MnemonicError):
    """Raised when a mnemonic word is not in the word list."""

    def __init__(self, word: str, position: int) -> None:
        super().__init__(f"Unknown mnemonic word at position {position}: {word!r}")
        self.word = word
        self.position = position


class InvalidDerivedKey(CryptoError):
    """Raised when HD derivation produces an unusable key."""

    def __init__(self, message: str, index: Optional[int] = None) -> None:
        super().__init__(message)
        self.index = index


class RegistryError(CosmkitError):
    """Raised when type registry operation fails."""

    def __init__(self, message: str, type_url: Optional[str] = None) -> None:
        super().__init__(message)
        self.type_url = type_url


class UnknownTypeUrl(RegistryError):
    """Raised when a type URL has no registered codec."""

    def __init__(self, type_url: str) -> None:
        super().__init__(f"Unregistered type url: {type_url}", type_url=type_url)


class DuplicateTypeUrl(RegistryError):
    """Raised when a type URL is registered twice."""

    def __init__(self, type_url: str) -> None:
        super().__init__(f"Type url already registered: {type_url}", type_url=type_url)


class CodecError(RegistryError):
    """Raised when a registered codec fails to encode or decode a value."""

    def __init__(self, type_url: str, reason: str) -> None:
        super().__init__(f"Codec for {type_url} failed: {reason}", type_url=type_url)
        self.reason = reason


class ExtensionNamespaceCollision(CosmkitError):
    """Raised when two query extensions claim the same namespace path."""

    def __init__(self, path: Sequence[str]) -> None:
        self.path = tuple(path)
        super().__init__(f"Extension namespace collision at '{'.'.join(self.path)}'")


class ProviderError(CosmkitError):
    """Raised when provider encounters an error."""

    def __init__(
        self,
        message: str,
        code: Optional[int] = None,
        data: Optional[Any] = None,
        method: Optional[str] = None,
    ) -> None:
        self.detail = message
        self.method = method
        if method:
            message = f"{method}: {message}"
        super().__init__(message, code=code, data=data)

    def for_method(self, method: str) -> "ProviderError":
        """The same error, attributed to another method name."""
        return self.__class__(self.detail, code=self.code, data=self.data, method=method)


class NetworkError(ProviderError):
    """Raised when network communication fails."""
    pass


class TimeoutError(NetworkError):
    """Raised when operation times out."""
    pass


class APIError(ProviderError):
    """Raised when the node returns an error response."""
    pass


class QueryError(APIError):
    """Raised when an ABCI query returns a non-zero code."""

    def __init__(
        self,
        message: str,
        code: Optional[int] = None,
        codespace: Optional[str] = None,
        method: Optional[str] = None,
    ) -> None:
        super().__init__(message, code=code, method=method)
        self.codespace = codespace

    def for_method(self, method: str) -> "QueryError":
        return self.__class__(self.detail, code=self.code, codespace=self.codespace, method=method)
