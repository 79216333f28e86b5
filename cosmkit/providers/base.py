"""Base provider interface for cosmkit."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional
import logging

from ..exceptions import APIError, ProviderError, QueryError
from ..utils.encoding import bytes_to_hex, from_base64

__all__ = ["BaseProvider", "AbciQueryResponse"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AbciQueryResponse:
    """Decoded result of an abci_query call."""

    value: bytes
    height: int
    code: int = 0
    codespace: str = ""
    log: str = ""


class BaseProvider(ABC):
    """
    Abstract base provider for CometBFT RPC connections.

    Subclasses implement the JSON-RPC transport; ABCI queries are built on
    top of ``request``.
    """

    def __init__(self, endpoint: str) -> None:
        """
        Initialize provider.

        Args:
            endpoint: RPC endpoint URL
        """
        self.endpoint = endpoint
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @abstractmethod
    async def request(
        self,
        method: str,
        params: Optional[dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        """
        Make a JSON-RPC request.

        Args:
            method: RPC method name, e.g. "abci_query"
            params: Optional parameters for the request
            timeout: Per-call timeout in seconds

        Returns:
            The "result" member of the response

        Raises:
            ProviderError: If the request fails
        """
        raise NotImplementedError

    @abstractmethod
    async def connect(self) -> None:
        """
        Connect to the provider.

        Raises:
            ProviderError: If connection fails
        """
        raise NotImplementedError

    @abstractmethod
    async def disconnect(self) -> None:
        """Disconnect from the provider."""
        raise NotImplementedError

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """Check if provider is connected."""
        raise NotImplementedError

    async def abci_query(
        self,
        path: str,
        data: bytes,
        height: Optional[int] = None,
        prove: bool = False,
        timeout: Optional[float] = None,
    ) -> AbciQueryResponse:
        """
        Run an ABCI query, e.g. path "/cosmos.bank.v1beta1.Query/Balance".

        Raises:
            QueryError: If the application returns a non-zero code
            ProviderError: If the transport fails
        """
        params: dict[str, Any] = {
            "path": path,
            "data": bytes_to_hex(data),
            "prove": prove,
        }
        if height is not None:
            params["height"] = str(height)

        try:
            result = await self.request("abci_query", params, timeout=timeout)
        except ProviderError as e:
            # Name the query path, not the JSON-RPC method
            raise e.for_method(path) from e

        try:
            response = result["response"]
            code = int(response.get("code") or 0)
        except (KeyError, TypeError, ValueError) as e:
            raise APIError(f"Malformed abci_query response: {e}", method=path) from e

        if code:
            raise QueryError(
                response.get("log") or f"Query failed with code {code}",
                code=code,
                codespace=response.get("codespace") or None,
                method=path,
            )

        return AbciQueryResponse(
            value=from_base64(response.get("value") or ""),
            height=int(response.get("height") or 0),
            code=code,
            codespace=response.get("codespace") or "",
            log=response.get("log") or "",
        )

    async def __aenter__(self) -> "BaseProvider":
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.disconnect()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(endpoint={self.endpoint})"
