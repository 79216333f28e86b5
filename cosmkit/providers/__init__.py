"""Provider implementations for cosmkit."""

from ..providers.base import AbciQueryResponse, BaseProvider
from ..providers.http import HTTPProvider

__all__ = [
    "AbciQueryResponse",
    "BaseProvider",
    "HTTPProvider",
]
