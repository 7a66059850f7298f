"""Pydantic models for requests, responses and the per-call context.

These records are what the client and the transport adapters exchange. The
middleware engine itself treats the context as opaque.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field

# =============================================================================
# Constants
# =============================================================================

HttpMethod = Literal["GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS"]

# How the adapter should decode the response body
ResponseType = Literal["json", "text", "bytes"]

# =============================================================================
# Request / Response
# =============================================================================


class RequestConfig(BaseModel):
    """Request configuration handed to a transport adapter.

    Required fields:
        url: Absolute URL, or a path joined onto base_url

    Optional fields:
        method: HTTP method (default: GET)
        base_url: Prefix for relative urls
        headers: Request headers (default: empty)
        params: Query parameters; None values are dropped
        data: Request body (dict/list sent as JSON, str/bytes sent raw)
        timeout_ms: Request timeout in milliseconds
        response_type: Body decoding hint (default: json)
    """

    url: str
    method: HttpMethod = "GET"
    base_url: str | None = None
    headers: dict[str, str] = Field(default_factory=dict)
    params: dict[str, Any] | None = None
    data: Any = None
    timeout_ms: int | None = Field(default=None, ge=0)
    response_type: ResponseType | None = None


class ResponseData(BaseModel):
    """Response returned by a transport adapter.

    ``config`` echoes the request configuration that produced it.
    """

    data: Any = None
    status: int
    status_text: str = ""
    headers: dict[str, str] = Field(default_factory=dict)
    config: RequestConfig


# =============================================================================
# Context
# =============================================================================


class HttpContext(BaseModel):
    """Context threaded through the middleware chain for one request.

    Middlewares may replace ``request`` before calling next() and read
    ``response`` or ``error`` afterwards. ``state`` is free-form storage for
    middlewares to share data within one request.
    """

    request: RequestConfig
    response: ResponseData | None = None
    error: Exception | None = None
    state: dict[str, Any] = Field(default_factory=dict)

    model_config = {"arbitrary_types_allowed": True}
