"""Shared HTTP client configuration."""

import logging

import httpx

from desk_sdk._internal.redaction import redact_body, redact_headers
from desk_sdk._version import __version__

DEFAULT_TIMEOUT = 30.0
USER_AGENT = f"desk-sdk/{__version__}"


def create_http_client(
    *,
    timeout: float = DEFAULT_TIMEOUT,
    base_url: str | None = None,
    logger: logging.Logger | None = None,
) -> httpx.AsyncClient:
    """Create configured HTTP client.

    Args:
        timeout: Request timeout in seconds.
        base_url: Optional base URL for all requests.
        logger: When given, every request and response is logged at DEBUG
            level with headers and bodies (credentials redacted).

    Returns:
        Configured httpx.AsyncClient instance.
    """
    event_hooks: dict[str, list] = {"request": [], "response": []}
    if logger is not None:
        event_hooks["request"].append(_request_logger(logger))
        event_hooks["response"].append(_response_logger(logger))

    return httpx.AsyncClient(
        timeout=timeout,
        base_url=base_url or "",
        headers={"User-Agent": USER_AGENT},
        event_hooks=event_hooks,
    )


def _request_logger(logger: logging.Logger):
    async def log_request(request: httpx.Request) -> None:
        try:
            body = redact_body(request.content)
        except httpx.RequestNotRead:
            # multipart uploads are streamed
            body = "<stream>"
        logger.debug(
            "HTTP Request",
            extra={
                "method": request.method,
                "url": str(request.url),
                "headers": redact_headers(request.headers),
                "request_body": body,
            },
        )

    return log_request


def _response_logger(logger: logging.Logger):
    async def log_response(response: httpx.Response) -> None:
        # Buffer the body here; later readers get the cached copy.
        await response.aread()
        logger.debug(
            "HTTP Response",
            extra={
                "status_code": response.status_code,
                "headers": redact_headers(response.headers),
                "response_body": redact_body(response.content),
            },
        )

    return log_response
