"""Shared httpx client configuration."""

import httpx

from layerhttp._version import __version__

DEFAULT_TIMEOUT = 30.0
USER_AGENT = f"layerhttp/{__version__}"


def create_async_client(
    *,
    timeout: float = DEFAULT_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create configured async HTTP client.

    Args:
        timeout: Request timeout in seconds.
        transport: Optional custom transport (mock transports in tests).

    Returns:
        Configured httpx.AsyncClient instance.
    """
    return httpx.AsyncClient(
        timeout=timeout,
        transport=transport,
        headers={"User-Agent": USER_AGENT},
    )
