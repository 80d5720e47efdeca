"""Markdown <-> Notion conversion pipeline.

Public API:

- :class:`MarkdownToNotionConverter` / :func:`convert_markdown_to_blocks`
  -- Markdown -> paragraph blocks.
- :class:`NotionToMarkdownRenderer` / :func:`convert_blocks_to_markdown`
  -- Notion blocks -> Markdown.
- :func:`render_rich_text` -- rich_text segments -> Markdown.
- :func:`format_text_segment`, :func:`format_link_segment` -- segment
  builders.
"""

from notionkit.converter.inline_renderer import render_rich_text
from notionkit.converter.md_to_notion import (
    MarkdownToNotionConverter,
    blocks_to_payload,
    convert_markdown_to_blocks,
)
from notionkit.converter.notion_to_md import (
    NotionToMarkdownRenderer,
    convert_blocks_to_markdown,
)
from notionkit.converter.rich_text import (
    format_link_segment,
    format_text_segment,
    tokenize_line,
)

__all__ = [
    "MarkdownToNotionConverter",
    "NotionToMarkdownRenderer",
    "blocks_to_payload",
    "convert_blocks_to_markdown",
    "convert_markdown_to_blocks",
    "format_link_segment",
    "format_text_segment",
    "render_rich_text",
    "tokenize_line",
]
