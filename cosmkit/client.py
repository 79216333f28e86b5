"""Extension-composable query client."""

import logging
from typing import Any, Callable, Dict, Iterator, Mapping, Optional, Tuple

from .constants import Network
from .exceptions import ExtensionNamespaceCollision, ValidationError
from .providers import BaseProvider, HTTPProvider
from .providers.base import AbciQueryResponse

__all__ = ["QueryClient", "Namespace", "ExtensionFactory"]

logger = logging.getLogger(__name__)

ExtensionFactory = Callable[["QueryClient"], Mapping[str, Any]]
"""Takes the base client and returns a (possibly nested) namespace of query methods."""


class Namespace:
    """Read-only attribute view over a tree of query methods."""

    __slots__ = ("_path", "_members")

    def __init__(self, path: Tuple[str, ...], members: Mapping[str, Any]) -> None:
        frozen = {
            key: Namespace(path + (key,), value) if isinstance(value, Mapping) else value
            for key, value in members.items()
        }
        object.__setattr__(self, "_path", path)
        object.__setattr__(self, "_members", frozen)

    def __getattr__(self, name: str) -> Any:
        try:
            return self._members[name]
        except KeyError:
            raise AttributeError(
                f"Namespace '{'.'.join(self._path)}' has no member '{name}'"
            ) from None

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Namespace is read-only")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("Namespace is read-only")

    def __contains__(self, name: object) -> bool:
        return name in self._members

    def __iter__(self) -> Iterator[str]:
        return iter(self._members)

    def __dir__(self) -> list[str]:
        return list(self._members)

    def __repr__(self) -> str:
        return f"<Namespace {'.'.join(self._path)} members={sorted(self._members)}>"


def _merge_namespace(
    target: Dict[str, Any],
    addition: Mapping[str, Any],
    path: Tuple[str, ...],
    reserved: frozenset = frozenset(),
) -> None:
    """
    Copy an extension's namespace tree into the accumulator.

    Every name an extension contributes must be new. A name another
    extension already created is a collision at any depth, even when both
    sides are subtrees.
    """
    if not isinstance(addition, Mapping):
        raise ValidationError(f"Extension must return a mapping, got {type(addition).__name__}")

    for key, value in addition.items():
        here = path + (key,)
        if not isinstance(key, str) or not key.isidentifier():
            raise ValidationError(f"Invalid namespace key: {key!r}")
        if key in target or (not path and key in reserved):
            raise ExtensionNamespaceCollision(here)

        if isinstance(value, Mapping):
            target[key] = {}
            _merge_namespace(target[key], value, here)
        else:
            target[key] = value


class QueryClient:
    """
    Thin ABCI query front-end, decorated with extension namespaces.

    Extensions are added once, at construction, through ``with_extensions``.
    Each extension factory receives the base client and returns a mapping of
    namespace name to query methods (or nested mappings). Composition never
    overwrites: two extensions reaching the same path abort construction
    with ExtensionNamespaceCollision.
    """

    def __init__(self, provider: BaseProvider) -> None:
        """
        Initialize query client.

        Args:
            provider: Transport used for ABCI queries
        """
        self._provider = provider
        self._extensions: Dict[str, Any] = {}
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @classmethod
    def with_extensions(cls, provider: BaseProvider, *factories: ExtensionFactory) -> "QueryClient":
        """
        Build a client and fold each extension factory into it.

        Raises:
            ExtensionNamespaceCollision: If two extensions claim one path
        """
        client = cls(provider)
        reserved = frozenset(name for name in dir(client) if not name.startswith("__"))

        tree: Dict[str, Any] = {}
        for factory in factories:
            _merge_namespace(tree, factory(client), (), reserved)
            logger.debug(f"Composed extension {getattr(factory, '__name__', factory)!r}")

        client._extensions = {
            name: Namespace((name,), value) if isinstance(value, dict) else value
            for name, value in tree.items()
        }
        logger.info(
            f"Initialized QueryClient with {len(factories)} extensions "
            f"via {provider.__class__.__name__}"
        )
        return client

    @classmethod
    def create_http_client(
        cls,
        *factories: ExtensionFactory,
        endpoint: Optional[str] = None,
        network: Network = Network.LOCAL,
        **kwargs: Any
    ) -> "QueryClient":
        """
        Create client with HTTP provider.

        Args:
            *factories: Extension factories
            endpoint: Custom RPC endpoint
            network: Network whose default endpoint is used
            **kwargs: Additional provider arguments
        """
        provider = HTTPProvider(endpoint=endpoint, network=network, **kwargs)
        return cls.with_extensions(provider, *factories)

    def __getattr__(self, name: str) -> Any:
        extensions = self.__dict__.get("_extensions", {})
        try:
            return extensions[name]
        except KeyError:
            raise AttributeError(f"'{self.__class__.__name__}' has no attribute '{name}'") from None

    def __setattr__(self, name: str, value: Any) -> None:
        if name in self.__dict__.get("_extensions", {}):
            raise AttributeError(f"Extension namespace '{name}' is read-only")
        super().__setattr__(name, value)

    @property
    def provider(self) -> BaseProvider:
        return self._provider

    @property
    def extensions(self) -> Tuple[str, ...]:
        """Names of the composed top-level namespaces."""
        return tuple(self._extensions)

    async def query_abci(
        self,
        path: str,
        request: bytes,
        height: Optional[int] = None,
        timeout: Optional[float] = None,
    ) -> AbciQueryResponse:
        """
        Query the application at a gRPC-style path without proofs.

        Args:
            path: e.g. "/cosmos.bank.v1beta1.Query/Balance"
            request: Encoded request message
            height: Optional block height
            timeout: Per-call timeout in seconds
        """
        self._logger.debug(f"abci_query {path} ({len(request)} bytes)")
        return await self._provider.abci_query(path, request, height=height, timeout=timeout)

    async def query_unverified(
        self,
        path: str,
        request: bytes,
        height: Optional[int] = None,
        timeout: Optional[float] = None,
    ) -> bytes:
        """Like query_abci but returns only the response value."""
        response = await self.query_abci(path, request, height=height, timeout=timeout)
        return response.value

    async def connect(self) -> None:
        await self._provider.connect()

    async def disconnect(self) -> None:
        await self._provider.disconnect()

    async def __aenter__(self) -> "QueryClient":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.disconnect()

    def __repr__(self) -> str:
        return (
            f"<QueryClient "
            f"provider={self._provider.__class__.__name__} "
            f"extensions={list(self._extensions)}>"
        )
