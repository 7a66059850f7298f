"""HTTP client: verb helpers over the middleware engine and an adapter."""

import os
from collections.abc import Sequence
from typing import Any

from layerhttp._internal.adapters.standard import create_standard_adapter
from layerhttp._internal.engine.engine import MiddlewareEngine
from layerhttp._internal.engine.types import HttpAdapter, Middleware
from layerhttp._internal.redaction import redact
from layerhttp.exceptions import ConfigError
from layerhttp.models import HttpContext, HttpMethod, RequestConfig, ResponseData


class HttpClient:
    """Client that runs every request through a middleware chain.

    Each request gets a fresh HttpContext. Registered middlewares run first,
    then any per-call middlewares, then the adapter call. The adapter's
    response is stored on ``ctx.response``; if the adapter raises, the error
    is stored on ``ctx.error`` and re-raised.

    Example:
        async def auth(ctx: HttpContext, next_: NextFunction) -> None:
            ctx.request.headers["Authorization"] = f"Bearer {token}"
            await next_()

        client = HttpClient(
            standard_adapter("https://api.example.com"),
            middlewares=[auth],
        )
        response = await client.get("/users", {"params": {"page": 1}})
    """

    def __init__(
        self,
        adapter: HttpAdapter,
        *,
        defaults: dict[str, Any] | None = None,
        middlewares: Sequence[Middleware[HttpContext]] | None = None,
        debug: bool = False,
    ) -> None:
        """Initialize the client.

        Args:
            adapter: Transport used by the final handler.
            defaults: Request config fields applied to every request
                (e.g. base_url, headers, timeout_ms).
            middlewares: Global middlewares, in execution order.
            debug: Enable debug logging to stderr.
        """
        self._adapter = adapter
        self._defaults = dict(defaults or {})
        self._engine: MiddlewareEngine[HttpContext] = MiddlewareEngine(middlewares)
        self._debug = debug

    @classmethod
    def from_env(
        cls,
        *,
        middlewares: Sequence[Middleware[HttpContext]] | None = None,
    ) -> "HttpClient":
        """Create a client backed by a standard adapter from environment variables.

        Optional environment variables:
            LAYERHTTP_BASE_URL: Base URL for relative request urls.
            LAYERHTTP_TIMEOUT_MS: Default request timeout in milliseconds.
            LAYERHTTP_DEBUG: Set to "1" to enable debug logging.

        Raises:
            ConfigError: If LAYERHTTP_TIMEOUT_MS is not a valid integer.
        """
        base_url = os.environ.get("LAYERHTTP_BASE_URL")
        debug = os.environ.get("LAYERHTTP_DEBUG", "") == "1"

        defaults: dict[str, Any] = {}
        timeout_ms = os.environ.get("LAYERHTTP_TIMEOUT_MS")
        if timeout_ms:
            try:
                defaults["timeout_ms"] = int(timeout_ms)
            except ValueError as e:
                raise ConfigError(
                    f"LAYERHTTP_TIMEOUT_MS must be an integer, got {timeout_ms!r}"
                ) from e

        return cls(
            create_standard_adapter(base_url=base_url),
            defaults=defaults,
            middlewares=middlewares,
            debug=debug,
        )

    @property
    def engine(self) -> MiddlewareEngine[HttpContext]:
        """The engine holding this client's global middlewares."""
        return self._engine

    def use(self, middleware: Middleware[HttpContext]) -> None:
        """Register a global middleware."""
        self._engine.use(middleware)

    def _log_debug(self, message: str) -> None:
        """Log a debug message to stderr if debug mode is enabled."""
        if self._debug:
            import sys

            print(f"[layerhttp] {message}", file=sys.stderr)

    def _merge_config(self, config: RequestConfig | dict[str, Any]) -> RequestConfig:
        """Apply client defaults under the request config; headers merge key-wise."""
        if isinstance(config, RequestConfig):
            overrides = config.model_dump(exclude_unset=True)
        else:
            overrides = dict(config)

        merged = {**self._defaults, **overrides}
        merged["headers"] = {
            **self._defaults.get("headers", {}),
            **(overrides.get("headers") or {}),
        }
        return RequestConfig.model_validate(merged)

    async def request(
        self,
        config: RequestConfig | dict[str, Any],
        *,
        middlewares: Sequence[Middleware[HttpContext]] | None = None,
    ) -> ResponseData | None:
        """Send a request through the middleware chain.

        Args:
            config: Request config, as a model or a dict of its fields.
            middlewares: Middlewares for this request only, run after the
                global ones.

        Returns:
            The response left on the context once the chain completes, or
            None if a middleware ended the chain without calling next().
        """
        ctx = HttpContext(request=self._merge_config(config))

        async def send() -> None:
            try:
                ctx.response = await self._adapter.request(ctx.request)
            except Exception as e:
                ctx.error = e
                raise

        self._log_debug(
            f"{ctx.request.method} {ctx.request.url} headers={redact(ctx.request.headers)}"
        )
        try:
            await self._engine.dispatch(ctx, send, middlewares)
        except Exception as e:
            self._log_debug(f"{ctx.request.method} {ctx.request.url} failed: {e!r}")
            raise

        if ctx.response is None:
            self._log_debug(f"{ctx.request.method} {ctx.request.url} short-circuited")
        else:
            self._log_debug(f"{ctx.request.method} {ctx.request.url} -> {ctx.response.status}")
        return ctx.response

    # =========================================================================
    # Convenience Methods
    # =========================================================================

    async def _send(
        self,
        method: HttpMethod,
        url: str,
        config: dict[str, Any] | None,
        middlewares: Sequence[Middleware[HttpContext]] | None,
        **fields: Any,
    ) -> ResponseData | None:
        return await self.request(
            {**(config or {}), **fields, "url": url, "method": method},
            middlewares=middlewares,
        )

    async def get(
        self,
        url: str,
        config: dict[str, Any] | None = None,
        *,
        middlewares: Sequence[Middleware[HttpContext]] | None = None,
    ) -> ResponseData | None:
        """Send a GET request."""
        return await self._send("GET", url, config, middlewares)

    async def delete(
        self,
        url: str,
        config: dict[str, Any] | None = None,
        *,
        middlewares: Sequence[Middleware[HttpContext]] | None = None,
    ) -> ResponseData | None:
        """Send a DELETE request."""
        return await self._send("DELETE", url, config, middlewares)

    async def head(
        self,
        url: str,
        config: dict[str, Any] | None = None,
        *,
        middlewares: Sequence[Middleware[HttpContext]] | None = None,
    ) -> ResponseData | None:
        """Send a HEAD request."""
        return await self._send("HEAD", url, config, middlewares)

    async def options(
        self,
        url: str,
        config: dict[str, Any] | None = None,
        *,
        middlewares: Sequence[Middleware[HttpContext]] | None = None,
    ) -> ResponseData | None:
        """Send an OPTIONS request."""
        return await self._send("OPTIONS", url, config, middlewares)

    async def post(
        self,
        url: str,
        data: Any = None,
        config: dict[str, Any] | None = None,
        *,
        middlewares: Sequence[Middleware[HttpContext]] | None = None,
    ) -> ResponseData | None:
        """Send a POST request with an optional body."""
        return await self._send("POST", url, config, middlewares, data=data)

    async def put(
        self,
        url: str,
        data: Any = None,
        config: dict[str, Any] | None = None,
        *,
        middlewares: Sequence[Middleware[HttpContext]] | None = None,
    ) -> ResponseData | None:
        """Send a PUT request with an optional body."""
        return await self._send("PUT", url, config, middlewares, data=data)

    async def patch(
        self,
        url: str,
        data: Any = None,
        config: dict[str, Any] | None = None,
        *,
        middlewares: Sequence[Middleware[HttpContext]] | None = None,
    ) -> ResponseData | None:
        """Send a PATCH request with an optional body."""
        return await self._send("PATCH", url, config, middlewares, data=data)


def create_http_client(
    adapter: HttpAdapter,
    *,
    defaults: dict[str, Any] | None = None,
    middlewares: Sequence[Middleware[HttpContext]] | None = None,
    debug: bool = False,
) -> HttpClient:
    """Create an HTTP client.

    Args:
        adapter: Transport used for every request.
        defaults: Request config fields applied to every request.
        middlewares: Global middlewares, in execution order.
        debug: Enable debug logging to stderr.

    Returns:
        A configured HttpClient instance.
    """
    return HttpClient(adapter, defaults=defaults, middlewares=middlewares, debug=debug)
