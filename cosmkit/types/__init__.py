"""Type definitions for cosmkit."""

from ..types.common import (
    HexStr,
    Address,
    TypeUrl,
    Entropy,
    Seed,
    PrivateKeyBytes,
    PublicKeyBytes,
    Encoder,
    Decoder,
)

__all__ = [
    "HexStr",
    "Address",
    "TypeUrl",
    "Entropy",
    "Seed",
    "PrivateKeyBytes",
    "PublicKeyBytes",
    "Encoder",
    "Decoder",
]
