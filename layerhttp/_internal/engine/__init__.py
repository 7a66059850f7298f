"""Middleware engine: onion-order composition and the global registry."""

from layerhttp._internal.engine.compose import compose_middlewares
from layerhttp._internal.engine.engine import MiddlewareEngine, create_middleware_engine
from layerhttp._internal.engine.types import FinalHandler, HttpAdapter, Middleware, NextFunction

__all__ = [
    "MiddlewareEngine",
    "create_middleware_engine",
    "compose_middlewares",
    "Middleware",
    "NextFunction",
    "FinalHandler",
    "HttpAdapter",
]
