"""Public exceptions for layerhttp."""


class LayerHttpError(Exception):
    """Base exception for all layerhttp errors."""


class InvalidArgumentError(LayerHttpError, TypeError):
    """Malformed middleware input (non-list chain, non-callable middleware)."""


class ProtocolViolationError(LayerHttpError, RuntimeError):
    """A middleware called next() more than once or out of order."""


class HttpStatusError(LayerHttpError):
    """Non-2xx response from a transport adapter."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ConfigError(LayerHttpError):
    """Configuration error (malformed env vars, invalid config)."""
