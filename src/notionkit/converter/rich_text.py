"""Build Notion rich_text segments from one line of Markdown.

Only one inline construct is recognised: the link ``[text](url)``.
Everything else on the line, including ``*emphasis*`` markers, is kept as
literal text.

A line is processed in two stages:

1. :func:`tokenize_line` scans the line left to right and yields a flat
   stream of :class:`InlineToken` -- literal runs and accepted links.
   Link matches are numbered from 1 in encounter order; a match rejected
   by :func:`format_link_segment` keeps its number but stays literal.
2. :func:`assemble_segments` turns the tokens into ``TextSegment``
   values, capping plain text at 2000 characters.

Literal text that resembles an internal marker (``$((1))``) is ordinary
text here; no substitution markers are ever written into the line.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Literal
from urllib.parse import urlsplit

from notionkit.models import Link, TextSegment
from notionkit.observability import get_logger, log_event
from notionkit.utils.text import TEXT_CONTENT_LIMIT, shorten_string

log = get_logger("notionkit.converter")

# Link text may not contain brackets; the URL runs to the first ")".
LINK_RE = re.compile(r"\[([^\[\]]*)\]\((.*?)\)")

# Applied to a single matched link to pull out its parts.
_LINK_PARTS_RE = re.compile(r"\[(.+)\]\((.+)\)")

_ALLOWED_SCHEMES = frozenset({"http", "https"})


@dataclass(frozen=True)
class InlineToken:
    """One element of a tokenized line.

    ``kind == "text"`` tokens carry the literal run in ``raw``.
    ``kind == "link"`` tokens carry the full ``[text](url)`` source in
    ``raw``, the 1-based match ``number`` and the prebuilt ``segment``.
    """

    kind: Literal["text", "link"]
    raw: str
    number: int | None = None
    segment: TextSegment | None = None


# ---------------------------------------------------------------------------
# Segment builders
# ---------------------------------------------------------------------------

def format_text_segment(text: str) -> TextSegment:
    """Plain segment for *text*, capped at the Notion content limit."""
    return TextSegment(content=shorten_string(text, TEXT_CONTENT_LIMIT))


def format_link_segment(markdown: str) -> TextSegment | None:
    """Build a link segment from ``[text](url)`` source.

    Returns ``None`` when the text or URL is empty, or the URL is not an
    absolute ``http``/``https`` URI.  The display text is not capped.
    """
    match = _LINK_PARTS_RE.search(markdown)
    if match is None:
        return None

    text, url = match.group(1), match.group(2)
    if not is_valid_url(url):
        return None

    return TextSegment(
        content=text,
        link=Link(url=url),
        plain_text=text,
        href=url,
    )


def is_valid_url(url: str) -> bool:
    """Return ``True`` for an absolute ``http``/``https`` URL with a host."""
    if not url or any(ch.isspace() for ch in url):
        return False
    try:
        parts = urlsplit(url)
        # Accessing .port validates the netloc's port component.
        parts.port
    except ValueError:
        return False
    return parts.scheme in _ALLOWED_SCHEMES and bool(parts.hostname)


# ---------------------------------------------------------------------------
# Tokenize / assemble
# ---------------------------------------------------------------------------

def tokenize_line(line: str) -> list[InlineToken]:
    """Split *line* into literal runs and accepted link tokens.

    Rejected link matches are folded into the surrounding literal run, so
    two text tokens are never adjacent and no text token is empty.
    """
    tokens: list[InlineToken] = []
    cursor = 0

    for number, match in enumerate(LINK_RE.finditer(line), start=1):
        segment = format_link_segment(match.group(0))
        if segment is None:
            log_event(
                log, logging.DEBUG, "Link left as literal text",
                op="tokenize_line", number=number, source=match.group(0),
            )
            continue

        if match.start() > cursor:
            tokens.append(InlineToken(kind="text", raw=line[cursor:match.start()]))
        tokens.append(
            InlineToken(kind="link", raw=match.group(0), number=number, segment=segment)
        )
        cursor = match.end()

    if cursor < len(line):
        tokens.append(InlineToken(kind="text", raw=line[cursor:]))

    return tokens


def assemble_segments(tokens: list[InlineToken]) -> list[TextSegment]:
    """Resolve *tokens* into rich_text segments in source order."""
    segments: list[TextSegment] = []
    for token in tokens:
        if token.kind == "link" and token.segment is not None:
            segments.append(token.segment)
        elif token.raw:
            segments.append(format_text_segment(token.raw))
    return segments


def build_line_segments(line: str) -> list[TextSegment]:
    """Tokenize and assemble one Markdown line."""
    return assemble_segments(tokenize_line(line))
