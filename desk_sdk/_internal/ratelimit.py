"""Token bucket used by the rate limiting middleware."""

import asyncio
import threading
import time
from collections.abc import Callable


class TokenBucket:
    """Token bucket rate limiter.

    Tokens are added at a fixed rate and consumed on each admission. Allows
    bursting up to the bucket capacity. State is guarded by a lock so one
    bucket can be shared by concurrent callers; no background task is needed.
    """

    def __init__(
        self,
        rate: float,
        burst: int = 1,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if rate <= 0:
            raise ValueError("rate must be positive")
        if burst < 1:
            raise ValueError("burst must be at least 1")
        self._rate = rate
        self._burst = burst
        self._clock = clock
        self._tokens = float(burst)
        self._last_update = clock()
        self._lock = threading.Lock()

    @property
    def rate(self) -> float:
        return self._rate

    def try_acquire(self) -> float:
        """Take a token if one is available.

        Returns:
            0.0 when a token was taken, otherwise the number of seconds until
            the next token becomes available.
        """
        with self._lock:
            now = self._clock()
            elapsed = max(0.0, now - self._last_update)
            self._tokens = min(self._burst, self._tokens + elapsed * self._rate)
            self._last_update = now

            if self._tokens >= 1:
                self._tokens -= 1
                return 0.0
            return (1 - self._tokens) / self._rate

    async def acquire(self) -> None:
        """Wait until a token is available and take it.

        Cancelling the awaiting task abandons the wait without consuming a token.
        """
        while True:
            wait = self.try_acquire()
            if wait == 0.0:
                return
            await asyncio.sleep(wait)
