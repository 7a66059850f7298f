"""Middleware composition in onion order.

For a chain ``[m1, m2]`` and a final handler ``f`` the execution is::

    m1 before
      m2 before
        f
      m2 after
    m1 after

A middleware that never calls ``next()`` stops the chain there. That is not
an error; nothing further in, including the final handler, runs.
"""

from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

from layerhttp._internal.engine.types import FinalHandler, Middleware
from layerhttp.exceptions import InvalidArgumentError, ProtocolViolationError

C = TypeVar("C")


def compose_middlewares(
    middlewares: Sequence[Middleware[C]],
    final_handler: FinalHandler | None = None,
) -> Callable[[C], Awaitable[None]]:
    """Compose a middleware list into a single coroutine function.

    Args:
        middlewares: Ordered middlewares. The first one is the outermost.
        final_handler: Optional terminal operation, run once after the last
            middleware calls ``next()``.

    Returns:
        ``async composed(ctx)`` executing the whole chain once per call.

    Raises:
        InvalidArgumentError: If ``middlewares`` is not a list or tuple, or
            one of its elements is not callable. Raised here, before any
            middleware runs.

    Example:
        composed = compose_middlewares(
            [logger_middleware, auth_middleware],
            lambda: adapter.request(ctx.request),
        )
        await composed(ctx)
    """
    if not isinstance(middlewares, (list, tuple)):
        raise InvalidArgumentError("Middlewares must be a list")

    for middleware in middlewares:
        if not callable(middleware):
            raise InvalidArgumentError("Middleware must be callable")

    chain = tuple(middlewares)

    async def composed(ctx: C) -> None:
        # Highest position whose next() has been entered in this execution
        current_index = -1

        def dispatch(index: int) -> Awaitable[None]:
            # Checked when next() is called, not when its result is awaited
            nonlocal current_index
            if index <= current_index:
                raise ProtocolViolationError("next() called multiple times")
            current_index = index
            return run(index)

        async def run(index: int) -> None:
            if index == len(chain):
                if final_handler is not None:
                    await final_handler()
                return

            await chain[index](ctx, lambda: dispatch(index + 1))

        await dispatch(0)

    return composed
