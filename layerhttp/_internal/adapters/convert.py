"""Conversions between RequestConfig/ResponseData and httpx."""

from typing import Any

import httpx

from layerhttp.models import RequestConfig, ResponseData, ResponseType


def join_url(url: str, base_url: str | None) -> str:
    """Join a relative url onto base_url with exactly one slash between them.

    Absolute ``http://`` and ``https://`` urls are returned unchanged.
    """
    if not base_url or url.startswith(("http://", "https://")):
        return url
    return base_url.removesuffix("/") + "/" + url.removeprefix("/")


def clean_params(params: dict[str, Any] | None) -> dict[str, Any]:
    """Drop query parameters whose value is None."""
    if not params:
        return {}
    return {key: value for key, value in params.items() if value is not None}


def body_kwargs(data: Any) -> dict[str, Any]:
    """Build the httpx body argument: str/bytes are sent raw, anything else as JSON."""
    if data is None:
        return {}
    if isinstance(data, (str, bytes)):
        return {"content": data}
    return {"json": data}


def timeout_kwargs(timeout_ms: int | None) -> dict[str, Any]:
    """Build the httpx timeout argument; zero or unset keeps the client default."""
    if timeout_ms:
        return {"timeout": timeout_ms / 1000}
    return {}


def parse_body(response: httpx.Response, response_type: ResponseType | None) -> Any:
    """Decode the response body according to the response_type hint.

    ``json`` (the default) falls back to the raw text when the body is not JSON.
    """
    if response_type == "text":
        return response.text
    if response_type == "bytes":
        return response.content
    try:
        return response.json()
    except ValueError:
        return response.text


def to_response_data(response: httpx.Response, config: RequestConfig) -> ResponseData:
    """Convert an httpx response to ResponseData, echoing the request config."""
    return ResponseData(
        data=parse_body(response, config.response_type),
        status=response.status_code,
        status_text=response.reason_phrase,
        headers=dict(response.headers),
        config=config,
    )
