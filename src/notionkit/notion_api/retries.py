"""Retry decisions and backoff delays for the transport layer."""

from __future__ import annotations

import random

import httpx

RETRYABLE_STATUSES: frozenset[int] = frozenset({429, 500, 502, 503, 504})

RETRYABLE_EXCEPTIONS: tuple[type[Exception], ...] = (
    httpx.TimeoutException,
    httpx.NetworkError,
)


def should_retry(
    status_code: int | None,
    exception: Exception | None,
    attempt: int,
    max_attempts: int,
) -> bool:
    """Return ``True`` if attempt number *attempt* (0-indexed) may be retried.

    A request is retryable when it failed with a network-level exception
    or a status in :data:`RETRYABLE_STATUSES`, and at least one attempt
    remains.
    """
    if attempt + 1 >= max_attempts:
        return False
    if exception is not None:
        return isinstance(exception, RETRYABLE_EXCEPTIONS)
    return status_code is not None and status_code in RETRYABLE_STATUSES


def compute_backoff(
    attempt: int,
    base: float = 1.0,
    maximum: float = 60.0,
    jitter: bool = True,
    retry_after: float | None = None,
) -> float:
    """Seconds to wait before the next attempt.

    A server-supplied ``Retry-After`` wins; otherwise the delay is
    ``base * 2**attempt`` capped at *maximum*.  With *jitter* the delay is
    scaled to a random 50-100 % of its value.
    """
    delay = retry_after if retry_after is not None else min(base * (2 ** attempt), maximum)
    if jitter:
        delay *= 0.5 + random.random() * 0.5
    return delay
