"""Markdown-to-Notion conversion.

Each non-blank line of the input becomes one ``paragraph`` block whose
rich_text is produced by :mod:`notionkit.converter.rich_text`.  Headings
and list markers are not interpreted on this side; they arrive in Notion
as literal paragraph text.

Empty input -- or input made only of blank lines -- yields ``None`` rather
than an empty list: a page-creation request must then omit ``children``
altogether.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any

from notionkit.config import NotionKitConfig
from notionkit.converter.rich_text import build_line_segments
from notionkit.models import Block, BlockType
from notionkit.observability import get_logger, log_event
from notionkit.utils.redact import redact
from notionkit.utils.text import split_lines

log = get_logger("notionkit.converter")


def convert_markdown_to_blocks(markdown: str) -> list[Block] | None:
    """Convert *markdown* to paragraph blocks, one per non-blank line.

    Returns ``None`` when the input has no non-whitespace content.

    >>> blocks = convert_markdown_to_blocks("Hello\\n\\nworld")
    >>> [b.rich_text[0].content for b in blocks]
    ['Hello', 'world']
    >>> convert_markdown_to_blocks(" \\r\\n ") is None
    True
    """
    if not markdown:
        return None

    blocks: list[Block] = []
    for line in split_lines(markdown):
        if not line.strip():
            continue
        segments = build_line_segments(line)
        blocks.append(Block(type=BlockType.PARAGRAPH, rich_text=tuple(segments)))

    return blocks or None


def blocks_to_payload(blocks: list[Block]) -> list[dict[str, Any]]:
    """Serialise *blocks* for the ``children`` field of an API request."""
    return [block.to_dict() for block in blocks]


class MarkdownToNotionConverter:
    """Convert Markdown text to Notion blocks.

    Parameters
    ----------
    config:
        Client configuration.  When ``debug_dump_payload`` is set the
        redacted block payload is written to *stderr* after conversion.

    Examples
    --------
    >>> converter = MarkdownToNotionConverter()
    >>> blocks = converter.convert("See [docs](https://example.com)")
    >>> [seg.content for seg in blocks[0].rich_text]
    ['See ', 'docs']
    """

    def __init__(self, config: NotionKitConfig | None = None) -> None:
        self._config = config

    def convert(self, markdown: str) -> list[Block] | None:
        """Convert *markdown*; see :func:`convert_markdown_to_blocks`."""
        blocks = convert_markdown_to_blocks(markdown)

        log_event(
            log, logging.DEBUG, "Markdown converted",
            op="convert", blocks=0 if blocks is None else len(blocks),
        )

        if blocks is not None and self._config is not None and self._config.debug_dump_payload:
            safe = redact({"children": blocks_to_payload(blocks)}, self._config.token)
            print(
                "[notionkit] Notion blocks payload:",
                json.dumps(safe["children"], indent=2, ensure_ascii=False),
                file=sys.stderr,
            )

        return blocks

    def convert_to_payload(self, markdown: str) -> list[dict[str, Any]] | None:
        """Convert *markdown* straight to wire dicts, or ``None``."""
        blocks = self.convert(markdown)
        return None if blocks is None else blocks_to_payload(blocks)
