"""Redaction of credentials and sensitive values in debug logs."""

import json
from typing import Any

import httpx

REDACT_KEYS: frozenset[str] = frozenset({
    "api_key",
    "apikey",
    "token",
    "secret",
    "password",
    "access_key",
    "refresh_token",
    "authorization",
    "auth_token",
    "private_key",
    "secret_key",
    "credentials",
    "cookie",
    "set-cookie",
    "x-amz-credential",
    "x-amz-signature",
})

REDACTED_VALUE = "[REDACTED]"


def redact_headers(headers: httpx.Headers) -> dict[str, str]:
    """Return a plain copy of ``headers`` with sensitive values masked."""
    return {
        key: REDACTED_VALUE if _is_sensitive(key) else value
        for key, value in headers.items()
    }


def redact_body(content: bytes) -> str:
    """Render a request or response body for logging.

    JSON bodies are decoded and sensitive keys replaced recursively; anything
    else is returned as text.
    """
    if not content:
        return ""
    try:
        data = json.loads(content)
    except ValueError:
        return content.decode("utf-8", errors="replace")
    return json.dumps(redact_payload(data))


def redact_payload(obj: Any) -> Any:
    """Return a copy of ``obj`` with the values of sensitive keys replaced.

    Keys are matched case-insensitively at any depth; the input is never mutated.
    """
    if isinstance(obj, dict):
        return {
            key: REDACTED_VALUE if _is_sensitive(key) else redact_payload(value)
            for key, value in obj.items()
        }
    if isinstance(obj, list):
        return [redact_payload(item) for item in obj]
    return obj


def _is_sensitive(key: Any) -> bool:
    return isinstance(key, str) and key.lower() in REDACT_KEYS
