"""Token-bucket pacing for outgoing API requests.

Tokens refill at ``rate_rps`` per second up to ``burst``.  A caller that
finds the bucket empty waits for the deficit to refill: the sync bucket
sleeps the thread, the async bucket awaits.  Notion documents an average
limit of three requests per second per integration.
"""

from __future__ import annotations

import asyncio
import threading
import time


class _BucketState:
    """Refill arithmetic shared by both bucket flavours."""

    __slots__ = ("burst", "last_refill", "rate", "tokens")

    def __init__(self, rate_rps: float, burst: int) -> None:
        if rate_rps <= 0:
            raise ValueError(f"rate_rps must be > 0, got {rate_rps}")
        if burst < 1:
            raise ValueError(f"burst must be >= 1, got {burst}")
        self.rate: float = rate_rps
        self.burst: int = burst
        self.tokens: float = float(burst)
        self.last_refill: float = time.monotonic()

    def take(self, tokens: int) -> float:
        """Consume *tokens*; return the seconds the caller must wait."""
        now = time.monotonic()
        self.tokens = min(self.burst, self.tokens + (now - self.last_refill) * self.rate)
        self.last_refill = now

        if self.tokens >= tokens:
            self.tokens -= tokens
            return 0.0

        wait = (tokens - self.tokens) / self.rate
        self.tokens = 0.0
        return wait


class TokenBucket:
    """Thread-safe token bucket for the synchronous transport."""

    def __init__(self, rate_rps: float, burst: int = 10) -> None:
        self._state = _BucketState(rate_rps, burst)
        self._lock = threading.Lock()

    @property
    def rate(self) -> float:
        return self._state.rate

    @property
    def burst(self) -> int:
        return self._state.burst

    def acquire(self, tokens: int = 1) -> float:
        """Take *tokens*, sleeping if needed; return the seconds waited."""
        with self._lock:
            wait = self._state.take(tokens)
        if wait > 0:
            time.sleep(wait)
        return wait


class AsyncTokenBucket:
    """Coroutine-safe token bucket for the asynchronous transport."""

    def __init__(self, rate_rps: float, burst: int = 10) -> None:
        self._state = _BucketState(rate_rps, burst)
        self._lock = asyncio.Lock()

    @property
    def rate(self) -> float:
        return self._state.rate

    @property
    def burst(self) -> int:
        return self._state.burst

    async def acquire(self, tokens: int = 1) -> float:
        """Take *tokens*, awaiting if needed; return the seconds waited."""
        async with self._lock:
            wait = self._state.take(tokens)
        if wait > 0:
            await asyncio.sleep(wait)
        return wait
