"""Request middleware for DeskClient.

A middleware is an async callable receiving the outgoing request and the next
handler in the chain. It may change the request before calling ``call_next``,
inspect or replace the response afterwards, or raise without calling it at
all::

    async def tag_requests(request: httpx.Request, call_next: Handler) -> httpx.Response:
        request.headers["X-Origin"] = "importer"
        response = await call_next(request)
        return response

Middleware passed to the client as ``[m1, m2, m3]`` runs m1, m2, m3 before the
request is sent and m3, m2, m1 after the response arrives.
"""

import asyncio
import logging
import time
import uuid
from collections.abc import Awaitable, Callable, Mapping, Sequence

import httpx

from desk_sdk._internal.ratelimit import TokenBucket

Handler = Callable[[httpx.Request], Awaitable[httpx.Response]]
Middleware = Callable[[httpx.Request, Handler], Awaitable[httpx.Response]]

DEFAULT_RETRY_ON: tuple[type[BaseException], ...] = (Exception,)


def compose(middleware: Sequence[Middleware], terminal: Handler) -> Handler:
    """Fold ``middleware`` around ``terminal`` into a single handler.

    The chain is built once; each handler only closes over its own middleware
    and the next handler, so the result can be shared by concurrent calls.
    """
    handler = terminal
    for mw in reversed(middleware):
        handler = _bind(mw, handler)
    return handler


def _bind(middleware: Middleware, call_next: Handler) -> Handler:
    async def handler(request: httpx.Request) -> httpx.Response:
        return await middleware(request, call_next)

    return handler


def clone_request(request: httpx.Request) -> httpx.Request:
    """Build an independent copy of ``request`` with the same buffered body."""
    return httpx.Request(
        request.method,
        request.url,
        headers=request.headers.copy(),
        content=request.content,
        extensions=dict(request.extensions),
    )


def logging_middleware(logger: logging.Logger | None = None) -> Middleware:
    """Log method, URL, status and duration of every call.

    Failures raised by the logger itself are ignored so logging never fails a
    request.
    """
    log = logger or logging.getLogger("desk_sdk.http")

    def emit(level: int, message: str, **fields: object) -> None:
        try:
            log.log(level, message, extra=fields)
        except Exception:
            pass

    async def middleware(request: httpx.Request, call_next: Handler) -> httpx.Response:
        method, url = request.method, str(request.url)
        emit(logging.INFO, "Making HTTP request", method=method, url=url)
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            emit(
                logging.ERROR,
                "HTTP request failed",
                method=method,
                url=url,
                duration=time.perf_counter() - start,
                error=str(e),
            )
            raise
        emit(
            logging.INFO,
            "HTTP request completed",
            method=method,
            url=url,
            status=response.status_code,
            duration=time.perf_counter() - start,
        )
        return response

    return middleware


def retry_middleware(
    max_retries: int,
    delay: float,
    *,
    retry_on: tuple[type[BaseException], ...] = DEFAULT_RETRY_ON,
) -> Middleware:
    """Retry failed calls up to ``max_retries`` additional times.

    Each attempt gets its own copy of the request. Attempts are sequential and
    separated by ``delay`` seconds; cancelling the caller during the delay
    aborts the wait. When every attempt fails the last error is raised.
    Responses are returned as they are, whatever their status.
    """
    if max_retries < 0:
        raise ValueError("max_retries must not be negative")

    async def middleware(request: httpx.Request, call_next: Handler) -> httpx.Response:
        # Buffer once so every clone can resend the body.
        await request.aread()
        attempt = 0
        while True:
            try:
                return await call_next(clone_request(request))
            except retry_on:
                if attempt >= max_retries:
                    raise
            attempt += 1
            await asyncio.sleep(delay)

    return middleware


def auth_middleware(token: str | None) -> Middleware:
    """Set a bearer Authorization header when ``token`` is non-empty."""

    async def middleware(request: httpx.Request, call_next: Handler) -> httpx.Response:
        if token:
            request.headers["Authorization"] = f"Bearer {token}"
        return await call_next(request)

    return middleware


def user_agent_middleware(user_agent: str) -> Middleware:
    return header_middleware({"User-Agent": user_agent})


def request_id_middleware() -> Middleware:
    """Tag every call with a unique ``X-Request-ID`` header."""

    async def middleware(request: httpx.Request, call_next: Handler) -> httpx.Response:
        request.headers["X-Request-ID"] = f"req_{uuid.uuid4().hex}"
        return await call_next(request)

    return middleware


def rate_limit_middleware(requests_per_second: float, burst: int = 1) -> Middleware:
    """Admit at most ``requests_per_second`` calls, with bursts of ``burst``.

    The bucket is private to the returned middleware and shared by every call
    going through it. Waiting for admission is cancellable.
    """
    bucket = TokenBucket(requests_per_second, burst)

    async def middleware(request: httpx.Request, call_next: Handler) -> httpx.Response:
        await bucket.acquire()
        return await call_next(request)

    return middleware


def timeout_middleware(seconds: float) -> Middleware:
    """Bound the rest of the chain by a deadline of ``seconds``.

    The transport timeout of the request is shortened to match, and expiry of
    the deadline raises ``TimeoutError``.
    """

    async def middleware(request: httpx.Request, call_next: Handler) -> httpx.Response:
        current = request.extensions.get("timeout", {})
        request.extensions["timeout"] = {
            key: seconds if current.get(key) is None else min(current[key], seconds)
            for key in ("connect", "read", "write", "pool")
        }
        async with asyncio.timeout(seconds):
            return await call_next(request)

    return middleware


def header_middleware(headers: Mapping[str, str]) -> Middleware:
    """Set ``headers`` on every request, replacing existing values."""
    headers = dict(headers)

    async def middleware(request: httpx.Request, call_next: Handler) -> httpx.Response:
        request.headers.update(headers)
        return await call_next(request)

    return middleware


def conditional_middleware(
    condition: Callable[[httpx.Request], bool], middleware: Middleware
) -> Middleware:
    """Run ``middleware`` only for requests matching ``condition``."""

    async def conditional(request: httpx.Request, call_next: Handler) -> httpx.Response:
        if condition(request):
            return await middleware(request, call_next)
        return await call_next(request)

    return conditional
