"""Metrics hook protocol and its no-op default.

The HTTP layer emits counters and timings at request, retry and page
creation points.  Pass any object satisfying :class:`MetricsHook` as
``NotionKitConfig(metrics=...)`` to route them to StatsD, Prometheus or
similar; otherwise :class:`NoopMetricsHook` discards them.

Emitted names:

* ``notionkit.requests_total``        -- counter
* ``notionkit.retries_total``         -- counter
* ``notionkit.rate_limited_total``    -- counter
* ``notionkit.request_duration_ms``   -- timing
* ``notionkit.rate_limit_wait_ms``    -- timing
* ``notionkit.blocks_created_total``  -- counter
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class MetricsHook(Protocol):
    """Protocol any metrics backend must satisfy.

    *tags* are optional string key/value pairs the backend may map to its
    own tagging scheme.
    """

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Increment counter *name* by *value*."""
        ...

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Record a duration of *ms* milliseconds."""
        ...


class NoopMetricsHook:
    """Metrics backend that drops every data point."""

    __slots__ = ()

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass
