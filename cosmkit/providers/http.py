"""HTTP JSON-RPC provider implementation for cosmkit."""

import asyncio
import itertools
import json
import logging
from typing import Any, Optional

import aiohttp
from aiohttp import ClientTimeout, ClientSession, ClientResponse

from ..constants import (
    DEFAULT_TIMEOUT,
    MAX_RETRIES,
    RETRY_DELAY,
    RPC_ENDPOINTS,
    USER_AGENT,
    Network,
)
from ..exceptions import (
    APIError,
    NetworkError,
    ProviderError,
    TimeoutError,
)
from ..providers.base import BaseProvider

__all__ = ["HTTPProvider"]

logger = logging.getLogger(__name__)


class HTTPProvider(BaseProvider):
    """
    HTTP provider for a CometBFT JSON-RPC endpoint.

    Posts JSON-RPC 2.0 requests, retrying transient network failures with
    exponential backoff. Application-level errors are never retried.
    """

    def __init__(
        self,
        endpoint: Optional[str] = None,
        network: Network = Network.LOCAL,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[ClientSession] = None,
        headers: Optional[dict[str, str]] = None,
        max_retries: int = MAX_RETRIES,
    ) -> None:
        """
        Initialize HTTP provider.

        Args:
            endpoint: RPC endpoint (overrides the network default)
            network: Network whose default endpoint is used
            timeout: Request timeout in seconds
            session: Existing aiohttp session to use
            headers: Additional headers for requests
            max_retries: Attempts per request before giving up
        """
        super().__init__((endpoint or RPC_ENDPOINTS[network]).rstrip("/"))

        self.network = network
        self.timeout = ClientTimeout(total=timeout)
        self.max_retries = max(1, max_retries)
        self.headers = {
            "User-Agent": USER_AGENT,
            "Content-Type": "application/json",
            **(headers or {}),
        }

        # Session management
        self._session = session
        self._owns_session = session is None
        self._connected = False
        self._ids = itertools.count(1)

    async def connect(self) -> None:
        """Initialize HTTP session."""
        if self._session is None:
            self._session = ClientSession(timeout=self.timeout, headers=self.headers)
            self._owns_session = True

        self._connected = True
        self._logger.info(f"Connected to {self.endpoint}")

    async def disconnect(self) -> None:
        """Close HTTP session."""
        if self._session and self._owns_session:
            await self._session.close()
            self._session = None

        self._connected = False
        self._logger.info("Disconnected from provider")

    @property
    def is_connected(self) -> bool:
        return (
            self._connected
            and self._session is not None
            and not self._session.closed
        )

    async def request(
        self,
        method: str,
        params: Optional[dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        """
        Make a JSON-RPC request.

        Raises:
            APIError: If the node returns a JSON-RPC error
            TimeoutError: If the call exceeds its timeout
            NetworkError: If the transport keeps failing
        """
        if not self.is_connected:
            await self.connect()

        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": params or {},
        }

        try:
            return await asyncio.wait_for(self._request_with_retries(method, payload), timeout)
        except asyncio.TimeoutError as e:
            raise TimeoutError(f"Request timed out after {timeout}s", method=method) from e

    async def _request_with_retries(self, method: str, payload: dict[str, Any]) -> Any:
        for attempt in range(self.max_retries):
            try:
                return await self._post(method, payload)

            except (NetworkError, aiohttp.ClientError) as e:
                if attempt == self.max_retries - 1:
                    if isinstance(e, ProviderError):
                        raise
                    raise NetworkError(
                        f"Request failed after {self.max_retries} attempts: {e}",
                        method=method,
                    ) from e
                self._logger.debug(f"Retrying {method} after error: {e}")

            # Exponential backoff
            await asyncio.sleep(RETRY_DELAY * (2 ** attempt))

    async def _post(self, method: str, payload: dict[str, Any]) -> Any:
        """Make actual HTTP request."""
        try:
            self._logger.debug(f"Request: POST {self.endpoint} method={method}")

            async with self._session.post(self.endpoint, data=json.dumps(payload)) as response:
                self._logger.debug(f"Response: {response.status}")
                body = await self._parse_response(method, response)

        except asyncio.TimeoutError as e:
            raise TimeoutError("Request timed out", method=method) from e
        except aiohttp.ClientError as e:
            raise NetworkError(f"Network error: {e}", method=method) from e

        error = body.get("error") if isinstance(body, dict) else None
        if error:
            if not isinstance(error, dict):
                error = {"message": str(error)}
            raise APIError(
                str(error.get("data") or error.get("message") or "Unknown RPC error"),
                code=error.get("code"),
                data=error,
                method=method,
            )
        if not isinstance(body, dict) or "result" not in body:
            raise ProviderError("Response has no result", method=method)

        return body["result"]

    async def _parse_response(self, method: str, response: ClientResponse) -> Any:
        """Parse a JSON-RPC body; non-JSON 5xx responses count as transient."""
        text = await response.text()
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            if response.status >= 500:
                raise NetworkError(
                    f"Server error {response.status}: {text}", method=method
                ) from e
            if response.status >= 400:
                raise APIError(
                    f"Client error {response.status}: {text}",
                    code=response.status,
                    method=method,
                ) from e
            raise ProviderError(f"Invalid JSON response: {e}", method=method) from e
