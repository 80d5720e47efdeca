"""notionkit -- Notion API client with a Markdown <-> block converter.

Public re-exports
-----------------

* **Clients:** :class:`NotionClient`, :class:`AsyncNotionClient`
* **Configuration:** :class:`NotionKitConfig`
* **Conversion:** :func:`convert_markdown_to_blocks`,
  :func:`convert_blocks_to_markdown` and their converter classes
* **Properties:** :func:`format_prop_values`,
  :func:`get_prop_value_from_page`
* **Errors:** :class:`NotionKitError`, its subclasses and :class:`ErrorCode`
* **Models:** :class:`Block`, :class:`TextSegment` and friends

Usage::

    from notionkit import convert_blocks_to_markdown, convert_markdown_to_blocks

    blocks = convert_markdown_to_blocks("Read [the guide](https://example.com)")
    markdown = convert_blocks_to_markdown(blocks)
"""

from __future__ import annotations

# ── Clients ────────────────────────────────────────────────────────────
from notionkit.async_client import AsyncNotionClient
from notionkit.client import NotionClient

# ── Configuration ───────────────────────────────────────────────────────
from notionkit.config import NotionKitConfig

# ── Conversion ──────────────────────────────────────────────────────────
from notionkit.converter import (
    MarkdownToNotionConverter,
    NotionToMarkdownRenderer,
    convert_blocks_to_markdown,
    convert_markdown_to_blocks,
    render_rich_text,
)

# ── Errors ──────────────────────────────────────────────────────────────
from notionkit.errors import (
    ErrorCode,
    NotionKitAuthError,
    NotionKitConflictError,
    NotionKitError,
    NotionKitNetworkError,
    NotionKitNotFoundError,
    NotionKitPermissionError,
    NotionKitRetryExhaustedError,
    NotionKitValidationError,
)

# ── Models ──────────────────────────────────────────────────────────────
from notionkit.models import (
    Annotations,
    Block,
    BlockType,
    Link,
    PropertyType,
    PropValue,
    TextSegment,
)

# ── Properties ──────────────────────────────────────────────────────────
from notionkit.properties import format_prop_values, get_prop_value_from_page

__all__ = [
    # Clients
    "NotionClient",
    "AsyncNotionClient",
    # Configuration
    "NotionKitConfig",
    # Conversion
    "MarkdownToNotionConverter",
    "NotionToMarkdownRenderer",
    "convert_markdown_to_blocks",
    "convert_blocks_to_markdown",
    "render_rich_text",
    # Properties
    "format_prop_values",
    "get_prop_value_from_page",
    # Errors
    "ErrorCode",
    "NotionKitError",
    "NotionKitValidationError",
    "NotionKitAuthError",
    "NotionKitPermissionError",
    "NotionKitNotFoundError",
    "NotionKitConflictError",
    "NotionKitRetryExhaustedError",
    "NotionKitNetworkError",
    # Models
    "Annotations",
    "Block",
    "BlockType",
    "Link",
    "PropertyType",
    "PropValue",
    "TextSegment",
]
