"""Adapter over a caller-owned httpx.AsyncClient."""

import httpx

from layerhttp._internal.adapters.convert import (
    body_kwargs,
    clean_params,
    join_url,
    timeout_kwargs,
    to_response_data,
)
from layerhttp.models import RequestConfig, ResponseData


class HttpxClientAdapter:
    """Sends requests through an existing httpx.AsyncClient.

    The client keeps its own configuration (base_url, auth, transport,
    event hooks) and its lifecycle belongs to the caller. Errors raised by
    the client propagate unchanged; non-2xx responses raise
    ``httpx.HTTPStatusError`` via ``raise_for_status()``.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def request(self, config: RequestConfig) -> ResponseData:
        response = await self._client.request(
            config.method,
            join_url(config.url, config.base_url),
            headers=config.headers,
            params=clean_params(config.params),
            **body_kwargs(config.data),
            **timeout_kwargs(config.timeout_ms),
        )
        response.raise_for_status()
        return to_response_data(response, config)


def create_httpx_adapter(client: httpx.AsyncClient) -> HttpxClientAdapter:
    """Create an adapter for an existing httpx.AsyncClient.

    Example:
        adapter = create_httpx_adapter(
            httpx.AsyncClient(base_url="https://api.example.com")
        )
    """
    return HttpxClientAdapter(client)
