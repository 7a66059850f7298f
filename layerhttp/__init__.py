"""layerhttp: async HTTP client built on an onion-model middleware engine.

Public API:
    HttpClient - Verb helpers (get/post/...) running every request through middlewares
    MiddlewareEngine - Registry of global middlewares plus dispatch
    compose_middlewares - Compose a middleware list into one coroutine function
    StandardAdapter, HttpxClientAdapter - httpx-based transports

Internal:
    _internal.engine - Composition and dispatch
    _internal.adapters - Transport adapters
"""

from layerhttp._internal.adapters import (
    HttpxClientAdapter,
    Interceptors,
    StandardAdapter,
    create_httpx_adapter,
    create_standard_adapter,
    standard_adapter,
)
from layerhttp._internal.engine import (
    FinalHandler,
    HttpAdapter,
    Middleware,
    MiddlewareEngine,
    NextFunction,
    compose_middlewares,
    create_middleware_engine,
)
from layerhttp._version import __version__
from layerhttp.client import HttpClient, create_http_client
from layerhttp.exceptions import (
    ConfigError,
    HttpStatusError,
    InvalidArgumentError,
    LayerHttpError,
    ProtocolViolationError,
)
from layerhttp.models import HttpContext, HttpMethod, RequestConfig, ResponseData, ResponseType

__all__ = [
    "__version__",
    "HttpClient",
    "create_http_client",
    "MiddlewareEngine",
    "create_middleware_engine",
    "compose_middlewares",
    "Middleware",
    "NextFunction",
    "FinalHandler",
    "HttpAdapter",
    "HttpxClientAdapter",
    "create_httpx_adapter",
    "StandardAdapter",
    "Interceptors",
    "create_standard_adapter",
    "standard_adapter",
    "HttpContext",
    "HttpMethod",
    "RequestConfig",
    "ResponseData",
    "ResponseType",
    "LayerHttpError",
    "InvalidArgumentError",
    "ProtocolViolationError",
    "HttpStatusError",
    "ConfigError",
]
