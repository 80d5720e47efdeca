"""Plain-string helpers used by the Markdown converter."""

from __future__ import annotations

import re

# Notion rejects rich_text content longer than this.
TEXT_CONTENT_LIMIT = 2000

ELLIPSIS = "..."

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def shorten_string(text: str, limit: int = TEXT_CONTENT_LIMIT) -> str:
    """Cap *text* below *limit* characters.

    Strings shorter than *limit* are returned unchanged.  Anything at or
    above it is cut to ``limit - 3`` characters followed by ``"..."``, so
    the result is exactly *limit* characters long.

    >>> shorten_string("abcdef", 5)
    'ab...'
    >>> shorten_string("abcd", 5)
    'abcd'
    """
    if limit <= len(ELLIPSIS):
        raise ValueError(f"limit must be > {len(ELLIPSIS)}, got {limit}")
    if len(text) < limit:
        return text
    return text[: limit - len(ELLIPSIS)] + ELLIPSIS


def split_lines(text: str) -> list[str]:
    """Split on ``\\r\\n``, bare ``\\r`` and ``\\n``.

    Unlike :meth:`str.splitlines` no other Unicode separators are honoured,
    and a trailing separator yields a final empty string.
    """
    return _LINE_BREAK_RE.split(text)
