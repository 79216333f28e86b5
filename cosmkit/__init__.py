"""
cosmkit

Client-side key derivation, signing and message routing for Cosmos SDK
chains: BIP39 mnemonics, SLIP-10 HD keys, secp256k1/ed25519 signatures,
a type URL registry and an extension-composable ABCI query client.
"""

from .client import ExtensionFactory, Namespace, QueryClient
from .constants import Network
from .exceptions import (
    CosmkitError,
    CryptoError,
    ValidationError,
    MnemonicError,
    InvalidEntropyLength,
    InvalidMnemonicLength,
    ChecksumMismatch,
    UnknownWord,
    InvalidDerivedKey,
    RegistryError,
    UnknownTypeUrl,
    DuplicateTypeUrl,
    CodecError,
    ExtensionNamespaceCollision,
    ProviderError,
    NetworkError,
    APIError,
    QueryError,
)
from .providers import BaseProvider, HTTPProvider
from .registry import AnyMessage, Codec, Registry, build_registry
from .modules import HdWallet

__version__ = "0.1.0"

__all__ = [
    # Main client
    "QueryClient",
    "Namespace",
    "ExtensionFactory",
    "connect",

    # Network
    "Network",

    # Providers
    "BaseProvider",
    "HTTPProvider",

    # Registry
    "Codec",
    "AnyMessage",
    "Registry",
    "build_registry",

    # Wallet
    "HdWallet",

    # Exceptions
    "CosmkitError",
    "CryptoError",
    "ValidationError",
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
    "APIError",
    "QueryError",
]


def connect(
    *extensions: ExtensionFactory,
    endpoint: str | None = None,
    network: Network = Network.LOCAL,
    **kwargs
) -> QueryClient:
    """
    Create a query client over HTTP with the given extensions.

    Args:
        *extensions: Extension factories to compose
        endpoint: RPC endpoint (defaults to the network's)
        network: Network to connect to
        **kwargs: Additional provider arguments

    Returns:
        Composed QueryClient instance

    Example:
        >>> client = cosmkit.connect(setup_bank_extension)
        >>> async with client:
        ...     balance = await client.bank.balance(request)
    """
    return QueryClient.create_http_client(*extensions, endpoint=endpoint, network=network, **kwargs)
