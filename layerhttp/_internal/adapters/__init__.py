"""Transport adapters implementing HttpAdapter on top of httpx."""

from layerhttp._internal.adapters.httpx_client import HttpxClientAdapter, create_httpx_adapter
from layerhttp._internal.adapters.standard import (
    Interceptors,
    StandardAdapter,
    create_standard_adapter,
    standard_adapter,
)

__all__ = [
    "HttpxClientAdapter",
    "create_httpx_adapter",
    "StandardAdapter",
    "Interceptors",
    "create_standard_adapter",
    "standard_adapter",
]
