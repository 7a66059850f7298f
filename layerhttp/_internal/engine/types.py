"""Handler contract shared by the composer, the engine and the client."""

from collections.abc import Awaitable, Callable
from typing import Protocol, TypeVar

from layerhttp.models import RequestConfig, ResponseData

C = TypeVar("C")

NextFunction = Callable[[], Awaitable[None]]
"""Runs everything after the current middleware."""

Middleware = Callable[[C, NextFunction], Awaitable[None]]
"""A middleware receives the context and the continuation for its position."""

FinalHandler = Callable[[], Awaitable[None]]
"""Terminal operation, run once after the last middleware calls next()."""


class HttpAdapter(Protocol):
    """Transport capability consumed by the client's final handler."""

    async def request(self, config: RequestConfig) -> ResponseData: ...
