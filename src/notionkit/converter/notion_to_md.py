"""Notion blocks to Markdown.

Each supported block renders as a single line: a fixed prefix for its
kind followed by its rich_text, terminated by ``\\n``.

==================== ========
Block type           Prefix
==================== ========
paragraph            (none)
heading_1            ``# ``
heading_2            ``## ``
heading_3            ``### ``
bulleted_list_item   ``- ``
==================== ========

Blocks of any other type are skipped without output so that newer API
block kinds never break an export.

Usage::

    from notionkit.converter.notion_to_md import NotionToMarkdownRenderer

    md = NotionToMarkdownRenderer().render_blocks(api_blocks)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from notionkit.models import Block, BlockType
from notionkit.observability import get_logger, log_event

from .inline_renderer import render_rich_text

log = get_logger("notionkit.converter")

BLOCK_PREFIXES: dict[BlockType, str] = {
    BlockType.PARAGRAPH: "",
    BlockType.HEADING_1: "# ",
    BlockType.HEADING_2: "## ",
    BlockType.HEADING_3: "### ",
    BlockType.BULLETED_LIST_ITEM: "- ",
}


class NotionToMarkdownRenderer:
    """Render Notion blocks to Markdown text.

    The renderer holds no per-call state; one instance may be shared
    across threads.
    """

    def render_blocks(self, blocks: Iterable[Block | dict[str, Any]]) -> str:
        """Render *blocks* to Markdown, one line per supported block.

        Parameters
        ----------
        blocks:
            :class:`Block` values or raw API block dicts, in page order.

        Returns
        -------
        str
            Concatenated lines, each ending in ``\\n``.  An empty input
            gives ``""``.
        """
        lines: list[str] = []
        for raw in blocks:
            block = self._coerce(raw)
            if block is None:
                continue
            lines.append(self.render_block(block))
        return "".join(lines)

    def render_block(self, block: Block) -> str:
        """Render one block as a ``\\n``-terminated line."""
        prefix = BLOCK_PREFIXES[block.type]
        return f"{prefix}{render_rich_text(block.rich_text)}\n"

    @staticmethod
    def _coerce(raw: Block | dict[str, Any]) -> Block | None:
        if isinstance(raw, Block):
            return raw
        block = Block.from_dict(raw)
        if block is None:
            log_event(
                log, logging.DEBUG, "Skipping unsupported block",
                op="render_blocks", block_type=raw.get("type"), block_id=raw.get("id"),
            )
        return block


_default_renderer = NotionToMarkdownRenderer()


def convert_blocks_to_markdown(blocks: Iterable[Block | dict[str, Any]]) -> str:
    """Render *blocks* with a shared :class:`NotionToMarkdownRenderer`."""
    return _default_renderer.render_blocks(blocks)
