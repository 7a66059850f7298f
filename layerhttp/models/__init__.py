"""Public models: request and response records plus the HTTP context."""

from layerhttp.models.http import (
    HttpContext,
    HttpMethod,
    RequestConfig,
    ResponseData,
    ResponseType,
)

__all__ = ["HttpContext", "HttpMethod", "RequestConfig", "ResponseData", "ResponseType"]
