"""Redaction of credentials before payloads reach logs or debug dumps.

:func:`redact` returns a deep copy of a payload in which

* values under sensitive keys (``authorization``, ``token``, ``secret``
  and the like) are masked,
* every occurrence of the integration token is replaced by
  ``<redacted:...XXXX>`` (last four characters only),
* ``Bearer <credential>`` fragments are masked.

The caller's payload is never mutated.
"""

from __future__ import annotations

import copy
import re
from typing import Any

# Key substrings (case-insensitive) whose values are always masked.
_SENSITIVE_KEY_PATTERNS: frozenset[str] = frozenset({
    "token",
    "secret",
    "password",
    "credential",
    "authorization",
    "cookie",
    "api_key",
    "api-key",
})

_BEARER_RE = re.compile(r"(Bearer\s+)\S+")


def _mask(value: str, token: str | None) -> str:
    if token and token in value:
        suffix = token[-4:] if len(token) >= 4 else "****"
        placeholder = f"<redacted:...{suffix}>"
        if token in placeholder:
            placeholder = "<redacted>"
        value = value.replace(token, placeholder)
    return _BEARER_RE.sub(lambda m: f"{m.group(1)}<redacted>", value)


def _is_sensitive(key: Any) -> bool:
    if not isinstance(key, str):
        return False
    lowered = key.lower()
    return any(pat in lowered for pat in _SENSITIVE_KEY_PATTERNS)


def _redact_value(value: Any, token: str | None) -> Any:
    if isinstance(value, dict):
        result: dict = {}
        for key, item in value.items():
            if not _is_sensitive(key):
                result[key] = _redact_value(item, token)
            elif isinstance(item, str):
                masked = _mask(item, token)
                result[key] = masked if masked != item else "<redacted>"
            else:
                result[key] = "<redacted>"
        return result
    if isinstance(value, list):
        return [_redact_value(item, token) for item in value]
    if isinstance(value, str):
        return _mask(value, token)
    return value


def redact(payload: dict, token: str | None = None) -> dict:
    """Return a deep copy of *payload* with credentials removed.

    >>> redact({"Authorization": "Bearer ntn_abc123"})
    {'Authorization': 'Bearer <redacted>'}
    """
    return _redact_value(copy.deepcopy(payload), token)
