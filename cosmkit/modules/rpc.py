"""Protobuf RPC adapter and generic query stubs for extensions."""

import logging
from typing import Any, Awaitable, Callable, Optional

from ..client import QueryClient
from ..registry import Registry

__all__ = ["ProtobufRpcClient", "create_protobuf_rpc_client", "create_query_method"]

logger = logging.getLogger(__name__)


class ProtobufRpcClient:
    """
    The transport capability generated query stubs expect:
    ``request(method, data) -> response bytes``.

    Method names are full gRPC paths such as
    "/cosmos.bank.v1beta1.Query/Balance"; errors carry that path.
    """

    def __init__(self, base: QueryClient, timeout: Optional[float] = None) -> None:
        self._base = base
        self._timeout = timeout

    async def request(self, method: str, data: bytes) -> bytes:
        return await self._base.query_unverified(method, data, timeout=self._timeout)

    async def request_service(self, service: str, method: str, data: bytes) -> bytes:
        """Generated-stub style call: service "cosmos.bank.v1beta1.Query", method "Balance"."""
        return await self.request(f"/{service}/{method}", data)


def create_protobuf_rpc_client(base: QueryClient, timeout: Optional[float] = None) -> ProtobufRpcClient:
    return ProtobufRpcClient(base, timeout=timeout)


def create_query_method(
    rpc: ProtobufRpcClient,
    method: str,
    request_type_url: str,
    response_type_url: str,
    registry: Registry,
) -> Callable[[Any], Awaitable[Any]]:
    """
    Build an async query method from registered codecs.

    Args:
        rpc: Transport capability
        method: gRPC path of the query
        request_type_url: Type URL of the request message
        response_type_url: Type URL of the response message
        registry: Registry holding both codecs

    Returns:
        Coroutine function taking a request value and returning the decoded response
    """
    # Fail at extension setup rather than on first call
    registry.lookup(request_type_url)
    registry.lookup(response_type_url)

    async def query(request: Any) -> Any:
        data = registry.encode(request_type_url, request)
        response = await rpc.request(method, data)
        return registry.decode(response_type_url, response)

    query.__name__ = method.rsplit("/", 1)[-1]
    query.__qualname__ = method
    return query
