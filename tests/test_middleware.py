"""Tests for the middleware chain and built-in middleware."""

import asyncio
import logging
import time
from unittest.mock import MagicMock

import httpx
import pytest

from desk_sdk.middleware import (
    auth_middleware,
    clone_request,
    compose,
    conditional_middleware,
    header_middleware,
    logging_middleware,
    rate_limit_middleware,
    request_id_middleware,
    retry_middleware,
    timeout_middleware,
    user_agent_middleware,
)

URL = "https://desk.example.com/desk/api/v2/tickets.json"


def make_request(method="GET", content=None):
    return httpx.Request(method, URL, content=content)


def recording_terminal(calls, status_code=200):
    async def terminal(request):
        calls.append(request)
        return httpx.Response(status_code, request=request)

    return terminal


def failing_terminal(calls, errors):
    """Raise the next error of ``errors`` on every call; respond 200 once they run out."""
    pending = list(errors)

    async def terminal(request):
        calls.append(request)
        if pending:
            raise pending.pop(0)
        return httpx.Response(200, request=request)

    return terminal


class TestCompose:
    """Tests for compose()."""

    @pytest.mark.asyncio
    async def test_empty_chain_calls_terminal(self):
        """Without middleware the terminal handler should run directly."""
        calls = []
        handler = compose([], recording_terminal(calls))
        response = await handler(make_request())
        assert response.status_code == 200
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_execution_order(self):
        """First middleware should be outermost: m1, m2, m3 in, m3, m2, m1 out."""
        order = []

        def recorder(name):
            async def middleware(request, call_next):
                order.append(f"{name}:before")
                response = await call_next(request)
                order.append(f"{name}:after")
                return response

            return middleware

        async def terminal(request):
            order.append("send")
            return httpx.Response(200, request=request)

        handler = compose([recorder("m1"), recorder("m2"), recorder("m3")], terminal)
        await handler(make_request())

        assert order == [
            "m1:before",
            "m2:before",
            "m3:before",
            "send",
            "m3:after",
            "m2:after",
            "m1:after",
        ]

    @pytest.mark.asyncio
    async def test_short_circuit(self):
        """A middleware that does not call next should stop the chain."""
        calls = []

        async def reject(request, call_next):
            raise RuntimeError("rejected")

        handler = compose([reject], recording_terminal(calls))
        with pytest.raises(RuntimeError, match="rejected"):
            await handler(make_request())
        assert calls == []

    @pytest.mark.asyncio
    async def test_middleware_can_replace_response(self):
        """Middleware should be able to return its own response."""

        async def cached(request, call_next):
            return httpx.Response(304, request=request)

        handler = compose([cached], recording_terminal([]))
        response = await handler(make_request())
        assert response.status_code == 304

    @pytest.mark.asyncio
    async def test_concurrent_calls_share_chain(self):
        """One composed chain should serve concurrent calls."""
        calls = []
        handler = compose([header_middleware({"X-Test": "1"})], recording_terminal(calls))
        await asyncio.gather(*(handler(make_request()) for _ in range(5)))
        assert len(calls) == 5
        assert all(r.headers["X-Test"] == "1" for r in calls)


class TestCloneRequest:
    """Tests for clone_request()."""

    def test_clone_is_independent(self):
        """Changing the clone's headers should not affect the original."""
        original = make_request("POST", content=b'{"a":1}')
        original.headers["X-Custom"] = "yes"
        clone = clone_request(original)
        clone.headers["X-Custom"] = "changed"

        assert clone is not original
        assert clone.method == "POST"
        assert clone.url == original.url
        assert clone.content == b'{"a":1}'
        assert original.headers["X-Custom"] == "yes"


class TestRetryMiddleware:
    """Tests for retry_middleware()."""

    @pytest.mark.asyncio
    async def test_success_on_first_attempt(self):
        """Should call the next handler once when it succeeds."""
        calls = []
        handler = compose([retry_middleware(3, 0)], recording_terminal(calls))
        response = await handler(make_request())
        assert response.status_code == 200
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_retries_until_success(self):
        """Should retry failed attempts and return the first success."""
        calls = []
        errors = [httpx.ConnectError("refused"), httpx.ReadError("reset")]
        handler = compose([retry_middleware(3, 0)], failing_terminal(calls, errors))
        response = await handler(make_request())
        assert response.status_code == 200
        assert len(calls) == 3

    @pytest.mark.asyncio
    async def test_exhausted_retries_raise_last_error(self):
        """k retries should mean k+1 attempts and the last error raised."""
        calls = []
        errors = [httpx.ConnectError(f"attempt {i}") for i in range(3)]
        handler = compose([retry_middleware(2, 0)], failing_terminal(calls, errors))

        with pytest.raises(httpx.ConnectError) as exc_info:
            await handler(make_request())
        assert exc_info.value is errors[2]
        assert len(calls) == 3

    @pytest.mark.asyncio
    async def test_zero_retries(self):
        """max_retries=0 should make exactly one attempt."""
        calls = []
        handler = compose(
            [retry_middleware(0, 0)], failing_terminal(calls, [httpx.ConnectError("down")])
        )
        with pytest.raises(httpx.ConnectError):
            await handler(make_request())
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_error_status_is_not_retried(self):
        """Responses are returned as they are, whatever their status."""
        calls = []
        handler = compose([retry_middleware(3, 0)], recording_terminal(calls, 503))
        response = await handler(make_request())
        assert response.status_code == 503
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_any_error_is_retried_by_default(self):
        """An always-failing call should run k+1 times whatever it raises."""
        calls = []

        async def terminal(request):
            calls.append(request)
            raise RuntimeError(f"boom {len(calls)}")

        handler = compose([retry_middleware(2, 0)], terminal)
        with pytest.raises(RuntimeError, match="boom 3"):
            await handler(make_request())
        assert len(calls) == 3

    @pytest.mark.asyncio
    async def test_other_errors_are_not_retried(self):
        """Errors outside retry_on should propagate immediately."""
        calls = []
        handler = compose(
            [retry_middleware(3, 0, retry_on=(httpx.TransportError,))],
            failing_terminal(calls, [ValueError("bad")]),
        )
        with pytest.raises(ValueError):
            await handler(make_request())
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_custom_retry_on(self):
        """Should retry the exception types given in retry_on."""
        calls = []
        handler = compose(
            [retry_middleware(1, 0, retry_on=(ValueError,))],
            failing_terminal(calls, [ValueError("bad")]),
        )
        response = await handler(make_request())
        assert response.status_code == 200
        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_each_attempt_gets_fresh_request_with_body(self):
        """Every attempt should send its own copy carrying the full body."""
        calls = []
        handler = compose(
            [retry_middleware(1, 0)], failing_terminal(calls, [httpx.ConnectError("down")])
        )
        await handler(make_request("POST", content=b'{"subject":"hi"}'))

        assert len(calls) == 2
        assert calls[0] is not calls[1]
        assert calls[0].content == calls[1].content == b'{"subject":"hi"}'

    @pytest.mark.asyncio
    async def test_cancel_during_backoff(self):
        """Cancelling during the delay should stop without further attempts."""
        calls = []
        errors = [httpx.ConnectError("down")] * 5
        handler = compose([retry_middleware(5, 10)], failing_terminal(calls, errors))

        task = asyncio.create_task(handler(make_request()))
        while not calls:
            await asyncio.sleep(0)
        await asyncio.sleep(0)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert len(calls) == 1

    def test_negative_retries_rejected(self):
        """A negative retry count should be rejected."""
        with pytest.raises(ValueError):
            retry_middleware(-1, 0)


class TestHeaderMiddleware:
    """Tests for header-setting middleware."""

    @pytest.mark.asyncio
    async def test_auth_sets_bearer_token(self):
        """Should set Authorization: Bearer <token>."""
        calls = []
        handler = compose([auth_middleware("secret")], recording_terminal(calls))
        await handler(make_request())
        assert calls[0].headers["Authorization"] == "Bearer secret"

    @pytest.mark.asyncio
    async def test_auth_empty_token_skipped(self):
        """An empty token should leave the request untouched."""
        calls = []
        handler = compose([auth_middleware("")], recording_terminal(calls))
        await handler(make_request())
        assert "Authorization" not in calls[0].headers

    @pytest.mark.asyncio
    async def test_header_middleware_overwrites(self):
        """Configured headers should replace existing values."""
        calls = []
        request = make_request()
        request.headers["X-Team"] = "old"
        handler = compose(
            [header_middleware({"X-Team": "support", "X-Env": "test"})],
            recording_terminal(calls),
        )
        await handler(request)
        assert calls[0].headers["X-Team"] == "support"
        assert calls[0].headers["X-Env"] == "test"

    @pytest.mark.asyncio
    async def test_user_agent(self):
        """Should set the User-Agent header."""
        calls = []
        handler = compose([user_agent_middleware("importer/2.0")], recording_terminal(calls))
        await handler(make_request())
        assert calls[0].headers["User-Agent"] == "importer/2.0"

    @pytest.mark.asyncio
    async def test_request_id_unique(self):
        """Each call should get its own req_-prefixed ID."""
        calls = []
        handler = compose([request_id_middleware()], recording_terminal(calls))
        await handler(make_request())
        await handler(make_request())

        first, second = (r.headers["X-Request-ID"] for r in calls)
        assert first.startswith("req_")
        assert second.startswith("req_")
        assert first != second


class TestConditionalMiddleware:
    """Tests for conditional_middleware()."""

    @pytest.mark.asyncio
    async def test_applies_only_when_condition_holds(self):
        """The wrapped middleware should only run for matching requests."""
        calls = []
        handler = compose(
            [
                conditional_middleware(
                    lambda request: request.method == "POST",
                    header_middleware({"X-Write": "1"}),
                )
            ],
            recording_terminal(calls),
        )
        await handler(make_request("GET"))
        await handler(make_request("POST", content=b"{}"))

        assert "X-Write" not in calls[0].headers
        assert calls[1].headers["X-Write"] == "1"


class TestTimeoutMiddleware:
    """Tests for timeout_middleware()."""

    @pytest.mark.asyncio
    async def test_deadline_expires(self):
        """A slow call should fail with TimeoutError once the deadline passes."""

        async def slow(request):
            await asyncio.sleep(5)
            return httpx.Response(200, request=request)

        handler = compose([timeout_middleware(0.01)], slow)
        with pytest.raises(TimeoutError):
            await handler(make_request())

    @pytest.mark.asyncio
    async def test_shortens_transport_timeout(self):
        """The request's transport timeout should not exceed the deadline."""
        calls = []
        request = make_request()
        request.extensions["timeout"] = {"connect": 30.0, "read": 1.0, "write": 30.0, "pool": None}
        handler = compose([timeout_middleware(5)], recording_terminal(calls))
        await handler(request)

        assert calls[0].extensions["timeout"] == {
            "connect": 5,
            "read": 1.0,
            "write": 5,
            "pool": 5,
        }


class TestLoggingMiddleware:
    """Tests for logging_middleware()."""

    @pytest.mark.asyncio
    async def test_logs_request_and_completion(self, caplog):
        """Should log the request and its status and duration."""
        logger = logging.getLogger("test.desk.http")
        handler = compose([logging_middleware(logger)], recording_terminal([], 201))

        with caplog.at_level(logging.INFO, logger="test.desk.http"):
            await handler(make_request("POST", content=b"{}"))

        records = [r for r in caplog.records if r.name == "test.desk.http"]
        assert [r.getMessage() for r in records] == ["Making HTTP request", "HTTP request completed"]
        completed = records[1]
        assert completed.method == "POST"
        assert completed.url == URL
        assert completed.status == 201
        assert completed.duration >= 0

    @pytest.mark.asyncio
    async def test_logs_and_reraises_failure(self, caplog):
        """Failures should be logged at ERROR and propagate unchanged."""
        logger = logging.getLogger("test.desk.http")
        error = httpx.ConnectError("refused")
        handler = compose([logging_middleware(logger)], failing_terminal([], [error]))

        with caplog.at_level(logging.INFO, logger="test.desk.http"):
            with pytest.raises(httpx.ConnectError) as exc_info:
                await handler(make_request())

        assert exc_info.value is error
        failed = [r for r in caplog.records if r.name == "test.desk.http"][-1]
        assert failed.levelno == logging.ERROR
        assert failed.error == "refused"

    @pytest.mark.asyncio
    async def test_broken_logger_does_not_fail_request(self):
        """Errors raised by the logger should not affect the call."""
        logger = MagicMock(spec=logging.Logger)
        logger.log.side_effect = RuntimeError("log sink down")
        handler = compose([logging_middleware(logger)], recording_terminal([]))

        response = await handler(make_request())
        assert response.status_code == 200


class TestRateLimitMiddleware:
    """Tests for rate_limit_middleware()."""

    @pytest.mark.asyncio
    async def test_spaces_calls_beyond_burst(self):
        """Calls beyond the burst should wait for the next token."""
        calls = []
        handler = compose([rate_limit_middleware(20, burst=1)], recording_terminal(calls))

        start = time.monotonic()
        await handler(make_request())
        await handler(make_request())
        elapsed = time.monotonic() - start

        assert len(calls) == 2
        assert elapsed >= 0.04

    def test_invalid_rate_rejected(self):
        """A non-positive rate should be rejected."""
        with pytest.raises(ValueError):
            rate_limit_middleware(0)
