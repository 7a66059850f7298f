"""Self-contained adapter that opens a short-lived httpx client per request."""

import inspect
from collections.abc import Awaitable, Callable
from typing import Any

import httpx
from pydantic import BaseModel

from layerhttp._internal.adapters.convert import (
    body_kwargs,
    clean_params,
    join_url,
    timeout_kwargs,
    to_response_data,
)
from layerhttp._internal.http import create_async_client
from layerhttp.exceptions import HttpStatusError
from layerhttp.models import RequestConfig, ResponseData

RequestInterceptor = Callable[
    [RequestConfig],
    RequestConfig | dict[str, Any] | Awaitable[RequestConfig | dict[str, Any]],
]
ResponseInterceptor = Callable[[ResponseData], ResponseData | Awaitable[ResponseData]]


class Interceptors(BaseModel):
    """Hooks applied by StandardAdapter around every request.

    Both may be plain functions or coroutine functions.
    """

    request: RequestInterceptor | None = None
    response: ResponseInterceptor | None = None


async def _resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


class StandardAdapter:
    """Adapter with its own base URL, default headers and interceptors.

    Compared to HttpxClientAdapter it normalizes the request itself:
        - relative urls are joined onto the request's base_url, else the adapter's
        - request headers override default_headers
        - a body without a content type is sent as application/json
        - non-2xx responses raise HttpStatusError
    """

    def __init__(
        self,
        *,
        base_url: str | None = None,
        default_headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        interceptors: Interceptors | None = None,
    ) -> None:
        """Initialize the adapter.

        Args:
            base_url: Prefix for relative request urls.
            default_headers: Headers sent with every request.
            transport: Optional custom httpx transport (tests, proxies).
            interceptors: Optional request/response hooks.
        """
        self._base_url = base_url
        self._default_headers = dict(default_headers or {})
        self._transport = transport
        self._interceptors = interceptors or Interceptors()

    def build_url(self, config: RequestConfig) -> str:
        """Build the full request url, including query parameters."""
        url = join_url(config.url, config.base_url or self._base_url)

        params = clean_params(config.params)
        if params:
            parsed = httpx.URL(url)
            query = httpx.QueryParams(parsed.params.multi_items() + list(params.items()))
            url = str(parsed.copy_with(params=query))
        return url

    def build_headers(self, config: RequestConfig) -> dict[str, str]:
        """Merge default and request headers, adding a JSON content type for bodies."""
        headers = {**self._default_headers, **config.headers}
        if config.data and not any(k.lower() == "content-type" for k in headers):
            headers["Content-Type"] = "application/json"
        return headers

    async def request(self, config: RequestConfig) -> ResponseData:
        if self._interceptors.request is not None:
            config = RequestConfig.model_validate(
                await _resolve(self._interceptors.request(config))
            )

        async with create_async_client(transport=self._transport) as client:
            response = await client.request(
                config.method,
                self.build_url(config),
                headers=self.build_headers(config),
                **body_kwargs(config.data),
                **timeout_kwargs(config.timeout_ms),
            )

            if not response.is_success:
                raise HttpStatusError(
                    f"HTTP Error: {response.status_code} {response.reason_phrase}",
                    status_code=response.status_code,
                )

            result = to_response_data(response, config)

        if self._interceptors.response is not None:
            result = await _resolve(self._interceptors.response(result))
        return result


def create_standard_adapter(
    *,
    base_url: str | None = None,
    default_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    interceptors: Interceptors | None = None,
) -> StandardAdapter:
    """Create a standard adapter.

    Example:
        adapter = create_standard_adapter(
            base_url="https://api.example.com",
            default_headers={"Accept": "application/json"},
        )
    """
    return StandardAdapter(
        base_url=base_url,
        default_headers=default_headers,
        transport=transport,
        interceptors=interceptors,
    )


def standard_adapter(base_url: str | None = None) -> StandardAdapter:
    """Shortcut for a standard adapter with only a base URL."""
    return StandardAdapter(base_url=base_url)
