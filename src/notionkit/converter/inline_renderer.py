"""Render Notion rich_text segments as Markdown.

Content is emitted raw, without escaping.  Two annotations are rendered,
always in this order (innermost first)::

    bold -> italic

so a bold italic segment ``X`` becomes ``***X***``: ``*`` + ``**X**`` +
``*``.  Strikethrough, underline, code, color and links are carried by
the model but produce no Markdown.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from notionkit.models import TextSegment

BOLD_MARKER = "**"
ITALIC_MARKER = "*"


def render_segment(segment: TextSegment) -> str:
    """Render one segment with its bold/italic markers."""
    text = segment.content
    if segment.bold:
        text = f"{BOLD_MARKER}{text}{BOLD_MARKER}"
    if segment.italic:
        text = f"{ITALIC_MARKER}{text}{ITALIC_MARKER}"
    return text


def render_rich_text(segments: Iterable[TextSegment | dict[str, Any]]) -> str:
    """Render a rich_text sequence, concatenating segments in order.

    Accepts :class:`TextSegment` values or raw API segment dicts.
    """
    parts: list[str] = []
    for seg in segments:
        if isinstance(seg, dict):
            seg = TextSegment.from_dict(seg)
        parts.append(render_segment(seg))
    return "".join(parts)
