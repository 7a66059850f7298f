"""Middleware engine: a registry of global middlewares plus dispatch."""

from collections.abc import Sequence
from typing import Generic, TypeVar

from layerhttp._internal.engine.compose import compose_middlewares
from layerhttp._internal.engine.types import FinalHandler, Middleware
from layerhttp.exceptions import InvalidArgumentError

C = TypeVar("C")


class MiddlewareEngine(Generic[C]):
    """Runs registered middlewares, in registration order, around a final handler.

    The engine never inspects the context and never handles errors: anything
    raised by a middleware or by the final handler propagates to the caller
    of ``dispatch``.

    Example:
        engine = MiddlewareEngine[HttpContext]()
        engine.use(logger_middleware)
        engine.use(auth_middleware)

        ctx = HttpContext(request=config)

        async def send() -> None:
            ctx.response = await adapter.request(ctx.request)

        await engine.dispatch(ctx, send)
    """

    def __init__(self, middlewares: Sequence[Middleware[C]] | None = None) -> None:
        """Initialize the engine.

        Args:
            middlewares: Optional middlewares to register up front, in order.
        """
        self._middlewares: list[Middleware[C]] = []
        for middleware in middlewares or ():
            self.use(middleware)

    def use(self, middleware: Middleware[C]) -> None:
        """Register a global middleware after the ones already registered.

        Raises:
            InvalidArgumentError: If ``middleware`` is not callable.
        """
        if not callable(middleware):
            raise InvalidArgumentError("Middleware must be callable")
        self._middlewares.append(middleware)

    def get_middlewares(self) -> list[Middleware[C]]:
        """Return a copy of the registered middlewares (debugging and tests)."""
        return list(self._middlewares)

    async def dispatch(
        self,
        ctx: C,
        final_handler: FinalHandler | None = None,
        extra_middlewares: Sequence[Middleware[C]] | None = None,
    ) -> None:
        """Execute the middleware chain once.

        Args:
            ctx: Context object handed to every middleware.
            final_handler: Optional terminal operation (usually the transport call).
            extra_middlewares: Middlewares for this call only, run after all
                registered ones. They are not kept in the registry.
        """
        chain: list[Middleware[C]] = list(self._middlewares)
        if extra_middlewares is not None:
            if not isinstance(extra_middlewares, (list, tuple)):
                raise InvalidArgumentError("Middlewares must be a list")
            chain.extend(extra_middlewares)

        composed = compose_middlewares(chain, final_handler)
        await composed(ctx)


def create_middleware_engine(
    middlewares: Sequence[Middleware[C]] | None = None,
) -> MiddlewareEngine[C]:
    """Create a middleware engine, optionally seeded with middlewares."""
    return MiddlewareEngine(middlewares)
