"""
Type registry: maps protobuf type URLs to encode/decode pairs.

The signing and broadcast code only sees this interface, never concrete
message classes. Codecs come from generated protobuf modules; the registry
just dispatches on the type URL string.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, Mapping, Tuple, Union

from .exceptions import CodecError, DuplicateTypeUrl, RegistryError, UnknownTypeUrl
from .types.common import Decoder, Encoder, TypeUrl
from .utils.validation import validate_type_url

__all__ = ["Codec", "AnyMessage", "Registry", "build_registry"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Codec:
    """Encode/decode pair for one message type."""

    encode: Encoder
    decode: Decoder


@dataclass(frozen=True)
class AnyMessage:
    """A packed message, as carried in google.protobuf.Any."""

    type_url: TypeUrl
    value: bytes


TypeEntries = Union[Mapping[TypeUrl, Codec], Iterable[Tuple[TypeUrl, Codec]]]


def _entries(types: TypeEntries) -> Iterable[Tuple[TypeUrl, Codec]]:
    if isinstance(types, Mapping):
        return types.items()
    return types


class Registry:
    """
    Mapping from type URL to Codec.

    Duplicate registration raises DuplicateTypeUrl. Pass
    ``allow_override=True`` to let a later registration replace an earlier
    one, e.g. to swap in mocks under test. Once frozen, the registry rejects
    further registration and is safe to share between concurrent readers.
    """

    def __init__(self, types: TypeEntries = (), allow_override: bool = False) -> None:
        self._types: Dict[TypeUrl, Codec] = {}
        self._allow_override = allow_override
        self._frozen = False

        for type_url, codec in _entries(types):
            self.register(type_url, codec)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> "Registry":
        """Make the registry read-only. Returns self."""
        self._frozen = True
        return self

    def register(self, type_url: TypeUrl, codec: Codec) -> None:
        """
        Register a codec.

        Raises:
            DuplicateTypeUrl: If already registered and overrides are not allowed
            RegistryError: If the registry is frozen
        """
        if self._frozen:
            raise RegistryError("Registry is frozen", type_url=type_url)
        validate_type_url(type_url)

        if type_url in self._types:
            if not self._allow_override:
                raise DuplicateTypeUrl(type_url)
            logger.debug(f"Overriding codec for {type_url}")

        self._types[type_url] = codec

    def lookup(self, type_url: TypeUrl) -> Codec:
        """
        Raises:
            UnknownTypeUrl: If type_url is not registered
        """
        try:
            return self._types[type_url]
        except KeyError:
            raise UnknownTypeUrl(type_url) from None

    def encode(self, type_url: TypeUrl, value: Any) -> bytes:
        """
        Encode a value with its type's codec.

        Raises:
            UnknownTypeUrl: If type_url is not registered
            CodecError: If the codec fails
        """
        codec = self.lookup(type_url)
        try:
            encoded = codec.encode(value)
        except Exception as e:
            raise CodecError(type_url, str(e) or e.__class__.__name__) from e

        if not isinstance(encoded, (bytes, bytearray, memoryview)):
            raise CodecError(type_url, f"encoder returned {type(encoded).__name__}, expected bytes")
        return bytes(encoded)

    def decode(self, type_url: TypeUrl, data: bytes) -> Any:
        """
        Decode bytes with the type's codec.

        Raises:
            UnknownTypeUrl: If type_url is not registered
            CodecError: If the bytes are malformed for that type
        """
        codec = self.lookup(type_url)
        try:
            return codec.decode(bytes(data))
        except Exception as e:
            raise CodecError(type_url, str(e) or e.__class__.__name__) from e

    def encode_any(self, type_url: TypeUrl, value: Any) -> AnyMessage:
        return AnyMessage(type_url=type_url, value=self.encode(type_url, value))

    def decode_any(self, message: AnyMessage) -> Any:
        return self.decode(message.type_url, message.value)

    def __contains__(self, type_url: object) -> bool:
        return type_url in self._types

    def __iter__(self) -> Iterator[TypeUrl]:
        return iter(self._types)

    def __len__(self) -> int:
        return len(self._types)

    def __repr__(self) -> str:
        return f"<Registry types={len(self._types)} frozen={self._frozen}>"


def build_registry(
    base: TypeEntries = (),
    *extensions: TypeEntries,
    allow_override: bool = False,
) -> Registry:
    """
    Build a frozen registry from a base set plus extension sets.

    Fails as a whole on the first duplicate; no partial registry escapes.
    """
    registry = Registry(base, allow_override=allow_override)
    for extension in extensions:
        for type_url, codec in _entries(extension):
            registry.register(type_url, codec)

    logger.debug(f"Built registry with {len(registry)} types")
    return registry.freeze()
