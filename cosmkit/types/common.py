"""Common type definitions for cosmkit."""

from typing import Any, Callable, NewType

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

# Basic types
HexStr = NewType("HexStr", str)
"""Hexadecimal string representation."""

Address = NewType("Address", str)
"""Bech32 account address."""

TypeUrl = NewType("TypeUrl", str)
"""Protobuf type URL, e.g. /cosmos.bank.v1beta1.MsgSend."""

# Key material
Entropy = NewType("Entropy", bytes)
"""16 to 32 bytes of mnemonic entropy."""

Seed = NewType("Seed", bytes)
"""64-byte BIP39 seed."""

PrivateKeyBytes = NewType("PrivateKeyBytes", bytes)
"""32-byte private key."""

PublicKeyBytes = NewType("PublicKeyBytes", bytes)
"""32, 33 or 65 byte public key."""

# Codec callables
Encoder = Callable[[Any], bytes]
Decoder = Callable[[bytes], Any]
