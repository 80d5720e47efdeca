"""Sync and async HTTP transports for the Notion API.

Every request goes through the same lifecycle:

1. Take a token from the rate-limit bucket (waiting if it is empty).
2. Send the request with ``Authorization`` and ``Notion-Version`` headers.
3. ``2xx`` -- return the parsed JSON body (``{}`` for an empty body).
4. ``429`` / ``5xx`` / network error -- back off and retry, honouring
   ``Retry-After`` when present.
5. Any other ``4xx`` -- raise the matching :class:`NotionKitError`.
6. Attempts used up -- raise :class:`NotionKitRetryExhaustedError`
   (or :class:`NotionKitNetworkError` when the last failure was a
   network error).

The sync and async classes differ only in how they send and sleep; the
response handling is shared.
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
import time
from collections.abc import AsyncIterator, Iterator
from dataclasses import dataclass
from typing import Any

import httpx

from notionkit.config import NotionKitConfig
from notionkit.errors import (
    NotionKitAuthError,
    NotionKitConflictError,
    NotionKitNetworkError,
    NotionKitNotFoundError,
    NotionKitPermissionError,
    NotionKitRetryExhaustedError,
    NotionKitValidationError,
)
from notionkit.observability import NoopMetricsHook, get_logger, log_event
from notionkit.utils.redact import redact

from .rate_limit import AsyncTokenBucket, TokenBucket
from .retries import RETRYABLE_STATUSES, compute_backoff, should_retry

log = get_logger("notionkit.transport")

PAGE_SIZE = 100

_BUCKET_BURST = 10


# ---------------------------------------------------------------------------
# Response helpers
# ---------------------------------------------------------------------------

def parse_retry_after(response: httpx.Response) -> float | None:
    """Return the ``Retry-After`` header in seconds, or ``None``."""
    raw = response.headers.get("retry-after")
    if raw is None:
        return None
    try:
        return float(raw)
    except ValueError:
        return None


def _error_body(response: httpx.Response) -> dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def raise_for_status(response: httpx.Response, method: str, path: str) -> None:
    """Raise the typed error for a non-retryable ``4xx`` *response*."""
    status = response.status_code
    body = _error_body(response)
    notion_message = body.get("message", response.text[:500])
    ctx: dict[str, Any] = {"status_code": status, "notion_code": body.get("code", "")}
    where = f"{method} {path}"

    if status == 401:
        raise NotionKitAuthError(f"Authentication failed on {where}: {notion_message}", context=ctx)
    if status == 403:
        raise NotionKitPermissionError(
            f"Permission denied on {where}: {notion_message}",
            context={**ctx, "operation": where},
        )
    if status == 404:
        raise NotionKitNotFoundError(
            f"Resource not found on {where}: {notion_message}",
            context={**ctx, "path": path},
        )
    if status == 409:
        raise NotionKitConflictError(f"Conflict on {where}: {notion_message}", context=ctx)
    label = "Validation error" if status == 400 else f"Client error {status}"
    raise NotionKitValidationError(
        f"{label} on {where}: {notion_message}",
        context={**ctx, "body": body},
    )


def dump_payload(
    method: str,
    url: str,
    payload: Any | None,
    response_status: int | None,
    response_body: Any | None,
    token: str | None = None,
) -> None:
    """Write a redacted request/response dump to *stderr*."""
    dump: dict[str, Any] = {"method": method, "url": url}
    if payload is not None:
        dump["request_body"] = payload
    if response_status is not None:
        dump["response_status"] = response_status
    if response_body is not None:
        dump["response_body"] = response_body
    print(json.dumps(redact(dump, token), indent=2, default=str), file=sys.stderr)


def with_cursor(method: str, kwargs: dict[str, Any], cursor: str | None) -> dict[str, Any]:
    """Return request *kwargs* carrying ``page_size`` and *cursor*.

    ``POST``/``PATCH`` endpoints take pagination fields in the JSON body;
    everything else takes them as query parameters.  The caller's dicts
    are copied, never mutated.
    """
    key = "json" if method.upper() in ("POST", "PATCH") else "params"
    fields = dict(kwargs.get(key) or {})
    fields["page_size"] = PAGE_SIZE
    if cursor is None:
        fields.pop("start_cursor", None)
    else:
        fields["start_cursor"] = cursor
    return {**kwargs, key: fields}


@dataclass
class _Outcome:
    """What to do after one attempt: return ``body``, wait ``delay``, or stop."""

    body: dict | None = None
    delay: float | None = None


# ---------------------------------------------------------------------------
# Shared lifecycle
# ---------------------------------------------------------------------------

class _TransportBase:
    def __init__(self, config: NotionKitConfig) -> None:
        self._config = config
        self._metrics = config.metrics if config.metrics is not None else NoopMetricsHook()

    def _client_options(self) -> dict[str, Any]:
        return {
            "base_url": self._config.base_url,
            "headers": {
                "Authorization": f"Bearer {self._config.token}",
                "Notion-Version": self._config.notion_version,
                "Content-Type": "application/json",
            },
            "timeout": httpx.Timeout(self._config.timeout_seconds),
            "proxy": self._config.http_proxy,
        }

    def _record_wait(self, wait: float, method: str, path: str) -> None:
        if wait > 0:
            self._metrics.timing(
                "notionkit.rate_limit_wait_ms", wait * 1000,
                tags={"method": method, "path": path},
            )

    def _network_failure(self, method: str, path: str, exc: Exception, attempt: int) -> float:
        """Return the retry delay for *exc*, or raise once retries are spent."""
        self._metrics.increment(
            "notionkit.requests_total",
            tags={"method": method, "path": path, "status": "error"},
        )
        log_event(
            log, logging.WARNING, "Request network error",
            op="request", method=method, path=path, attempt=attempt + 1, error=str(exc),
        )
        if not should_retry(None, exc, attempt, self._config.retry_max_attempts):
            raise NotionKitNetworkError(
                f"Network error on {method} {path}: {exc}",
                context={"url": path, "attempt": attempt + 1},
                cause=exc,
            ) from exc
        self._metrics.increment(
            "notionkit.retries_total",
            tags={"method": method, "path": path, "reason": "network_error"},
        )
        return self._backoff(attempt)

    def _process(
        self,
        method: str,
        path: str,
        response: httpx.Response,
        attempt: int,
        elapsed_ms: float,
        payload: Any,
    ) -> _Outcome:
        status = response.status_code
        tags = {"method": method, "path": path, "status": str(status)}
        self._metrics.increment("notionkit.requests_total", tags=tags)
        self._metrics.timing("notionkit.request_duration_ms", elapsed_ms, tags=tags)

        if self._config.debug_dump_payload:
            try:
                response_body: Any = response.json()
            except ValueError:
                response_body = response.text[:1000]
            dump_payload(method, str(response.url), payload, status, response_body, self._config.token)

        if 200 <= status < 300:
            if status == 204 or not response.content:
                return _Outcome(body={})
            return _Outcome(body=response.json())

        if status not in RETRYABLE_STATUSES:
            raise_for_status(response, method, path)

        if not should_retry(status, None, attempt, self._config.retry_max_attempts):
            return _Outcome()

        retry_after: float | None = None
        reason = "server_error"
        if status == 429:
            retry_after = parse_retry_after(response)
            reason = "rate_limited"
            self._metrics.increment(
                "notionkit.rate_limited_total",
                tags={"method": method, "path": path},
            )
            log_event(
                log, logging.WARNING, "Rate limited by Notion API",
                op="request", method=method, path=path, status_code=status,
                retry_after=retry_after, attempt=attempt + 1,
            )
        self._metrics.increment(
            "notionkit.retries_total",
            tags={"method": method, "path": path, "reason": reason},
        )
        return _Outcome(delay=self._backoff(attempt, retry_after))

    def _backoff(self, attempt: int, retry_after: float | None = None) -> float:
        return compute_backoff(
            attempt,
            base=self._config.retry_base_delay,
            maximum=self._config.retry_max_delay,
            jitter=self._config.retry_jitter,
            retry_after=retry_after,
        )

    def _exhausted(
        self,
        method: str,
        path: str,
        last_status: int | None,
        last_exception: Exception | None,
    ) -> NotionKitRetryExhaustedError:
        attempts = self._config.retry_max_attempts
        last = f"last error: {last_exception}" if last_exception else f"last status: {last_status}"
        return NotionKitRetryExhaustedError(
            f"All {attempts} attempts exhausted for {method} {path} ({last})",
            context={"attempts": attempts, "last_status_code": last_status},
            cause=last_exception,
        )


# ---------------------------------------------------------------------------
# Sync transport
# ---------------------------------------------------------------------------

class NotionTransport(_TransportBase):
    """Synchronous transport with auth, pacing and retries.

    Parameters
    ----------
    config:
        Client configuration.
    """

    def __init__(self, config: NotionKitConfig) -> None:
        super().__init__(config)
        self._bucket = TokenBucket(rate_rps=config.rate_limit_rps, burst=_BUCKET_BURST)
        self._client = httpx.Client(**self._client_options())

    def request(self, method: str, path: str, **kwargs: Any) -> dict:
        """Send a request and return its JSON body.

        *kwargs* are passed to :meth:`httpx.Client.request` (``json=``,
        ``params=``, ``headers=``).

        Raises
        ------
        NotionKitAuthError, NotionKitPermissionError, NotionKitNotFoundError,
        NotionKitConflictError, NotionKitValidationError
            For non-retryable ``4xx`` responses.
        NotionKitNetworkError
            When the final attempt fails at the network level.
        NotionKitRetryExhaustedError
            When every attempt got a retryable status.
        """
        last_status: int | None = None
        last_exception: Exception | None = None

        for attempt in range(self._config.retry_max_attempts):
            self._record_wait(self._bucket.acquire(), method, path)

            t0 = time.monotonic()
            try:
                response = self._client.request(method, path, **kwargs)
            except (httpx.TimeoutException, httpx.NetworkError) as exc:
                last_status, last_exception = None, exc
                time.sleep(self._network_failure(method, path, exc, attempt))
                continue
            elapsed_ms = (time.monotonic() - t0) * 1000

            last_status, last_exception = response.status_code, None
            outcome = self._process(method, path, response, attempt, elapsed_ms, kwargs.get("json"))
            if outcome.body is not None:
                return outcome.body
            if outcome.delay is None:
                break
            time.sleep(outcome.delay)

        raise self._exhausted(method, path, last_status, last_exception)

    def paginate(self, path: str, method: str = "GET", **kwargs: Any) -> Iterator[dict]:
        """Yield every item of a cursor-paginated list endpoint."""
        cursor: str | None = None
        while True:
            data = self.request(method, path, **with_cursor(method, kwargs, cursor))
            yield from data.get("results", [])
            cursor = data.get("next_cursor")
            if not data.get("has_more", False) or cursor is None:
                break

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> NotionTransport:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


# ---------------------------------------------------------------------------
# Async transport
# ---------------------------------------------------------------------------

class AsyncNotionTransport(_TransportBase):
    """Asynchronous counterpart of :class:`NotionTransport`."""

    def __init__(self, config: NotionKitConfig) -> None:
        super().__init__(config)
        self._bucket = AsyncTokenBucket(rate_rps=config.rate_limit_rps, burst=_BUCKET_BURST)
        self._client = httpx.AsyncClient(**self._client_options())

    async def request(self, method: str, path: str, **kwargs: Any) -> dict:
        """Send a request and return its JSON body.

        See :meth:`NotionTransport.request`.
        """
        last_status: int | None = None
        last_exception: Exception | None = None

        for attempt in range(self._config.retry_max_attempts):
            self._record_wait(await self._bucket.acquire(), method, path)

            t0 = time.monotonic()
            try:
                response = await self._client.request(method, path, **kwargs)
            except (httpx.TimeoutException, httpx.NetworkError) as exc:
                last_status, last_exception = None, exc
                await asyncio.sleep(self._network_failure(method, path, exc, attempt))
                continue
            elapsed_ms = (time.monotonic() - t0) * 1000

            last_status, last_exception = response.status_code, None
            outcome = self._process(method, path, response, attempt, elapsed_ms, kwargs.get("json"))
            if outcome.body is not None:
                return outcome.body
            if outcome.delay is None:
                break
            await asyncio.sleep(outcome.delay)

        raise self._exhausted(method, path, last_status, last_exception)

    async def paginate(self, path: str, method: str = "GET", **kwargs: Any) -> AsyncIterator[dict]:
        """Yield every item of a cursor-paginated list endpoint."""
        cursor: str | None = None
        while True:
            data = await self.request(method, path, **with_cursor(method, kwargs, cursor))
            for item in data.get("results", []):
                yield item
            cursor = data.get("next_cursor")
            if not data.get("has_more", False) or cursor is None:
                break

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> AsyncNotionTransport:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()
