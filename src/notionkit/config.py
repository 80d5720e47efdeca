"""Client configuration for notionkit.

:class:`NotionKitConfig` captures every tuneable knob of the HTTP layer.
Each client owns its own instance; nothing here is process-global.
"""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlparse

DEFAULT_NOTION_VERSION = "2022-06-28"
DEFAULT_BASE_URL = "https://api.notion.com/v1"

# Environment variable -> config field.
_ENV_FIELDS: dict[str, str] = {
    "NOTION_API_KEY": "token",
    "NOTION_VERSION": "notion_version",
    "NOTION_BASE_URL": "base_url",
}

_LOCAL_HOSTS = ("localhost", "127.0.0.1", "::1")


@dataclass
class NotionKitConfig:
    """Complete configuration for a notionkit client.

    Parameters
    ----------
    token:
        Notion integration token.  Never logged.
    notion_version:
        Value of the ``Notion-Version`` header sent with every request.
    base_url:
        API root URL.  Override for proxy or testing environments.
    retry_max_attempts:
        Maximum number of attempts per request for retryable failures.
    retry_base_delay:
        Base delay (seconds) for exponential backoff.
    retry_max_delay:
        Upper cap (seconds) on the computed backoff delay.
    retry_jitter:
        Randomly scale each backoff delay to 50-100 % of its value.
    rate_limit_rps:
        Target requests per second for client-side pacing.
    timeout_seconds:
        HTTP request timeout in seconds.
    http_proxy:
        Optional HTTP/HTTPS proxy URL.
    metrics:
        Optional :class:`~notionkit.observability.MetricsHook` backend.
    debug_dump_payload:
        Write each redacted request/response pair to *stderr*.
    """

    token: str = ""

    notion_version: str = DEFAULT_NOTION_VERSION

    base_url: str = DEFAULT_BASE_URL

    # ── Retry & rate ────────────────────────────────────────────────────
    retry_max_attempts: int = 5

    retry_base_delay: float = 1.0

    retry_max_delay: float = 60.0

    retry_jitter: bool = True

    rate_limit_rps: float = 3.0

    # ── HTTP ────────────────────────────────────────────────────────────
    timeout_seconds: float = 30.0

    http_proxy: str | None = None

    # ── Observability ──────────────────────────────────────────────────
    metrics: Any | None = None

    debug_dump_payload: bool = False

    def __post_init__(self) -> None:
        parsed = urlparse(self.base_url)
        if parsed.scheme == "http" and parsed.hostname not in _LOCAL_HOSTS:
            raise ValueError(
                f"base_url uses insecure HTTP for non-local host '{parsed.hostname}'. "
                "Use HTTPS to protect your API token, or target localhost for testing."
            )
        if self.retry_max_attempts < 1:
            raise ValueError(f"retry_max_attempts must be >= 1, got {self.retry_max_attempts}")
        if self.retry_base_delay < 0:
            raise ValueError(f"retry_base_delay must be >= 0, got {self.retry_base_delay}")
        if self.retry_max_delay < 0:
            raise ValueError(f"retry_max_delay must be >= 0, got {self.retry_max_delay}")
        if self.rate_limit_rps <= 0:
            raise ValueError(f"rate_limit_rps must be > 0, got {self.rate_limit_rps}")
        if self.timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be > 0, got {self.timeout_seconds}")

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        **overrides: Any,
    ) -> NotionKitConfig:
        """Build a config from ``NOTION_*`` environment variables.

        Reads ``NOTION_API_KEY``, ``NOTION_VERSION`` and ``NOTION_BASE_URL``.
        Unset or empty variables keep their defaults; explicit keyword
        *overrides* win over the environment.
        """
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        for var, field_name in _ENV_FIELDS.items():
            raw = env.get(var)
            if raw:
                values[field_name] = raw
        values.update(overrides)
        return cls(**values)

    def __repr__(self) -> str:
        """Mask the token to prevent accidental credential leakage."""
        parts: list[str] = []
        for f in dataclasses.fields(self):
            val = getattr(self, f.name)
            if f.name == "token":
                masked = f"...{val[-4:]}" if len(val) >= 4 else "****"
                parts.append(f"token='{masked}'")
            else:
                parts.append(f"{f.name}={val!r}")
        return f"NotionKitConfig({', '.join(parts)})"
