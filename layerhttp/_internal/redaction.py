"""Redaction of credentials before request data reaches debug output."""

from typing import Any

REDACT_KEYS: frozenset[str] = frozenset({
    "api_key",
    "x-api-key",
    "token",
    "secret",
    "password",
    "access_key",
    "refresh_token",
    "authorization",
    "proxy-authorization",
    "auth_token",
    "cookie",
    "set-cookie",
    "private_key",
    "secret_key",
    "credentials",
})

REDACTED_VALUE = "[REDACTED]"


def redact(obj: Any) -> Any:
    """Recursively redact sensitive keys (case-insensitive).

    Creates a copy - the original object is never mutated.

    Args:
        obj: Headers, query params or any JSON-like structure.

    Returns:
        A new structure with sensitive values replaced by "[REDACTED]".
    """
    if isinstance(obj, dict):
        result = {}
        for key, value in obj.items():
            key_lower = key.lower() if isinstance(key, str) else key
            if key_lower in REDACT_KEYS:
                result[key] = REDACTED_VALUE
            else:
                result[key] = redact(value)
        return result
    elif isinstance(obj, list):
        return [redact(item) for item in obj]
    else:
        return obj

