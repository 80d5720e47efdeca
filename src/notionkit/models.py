"""Data model shared by the Markdown and Notion conversion pipelines.

Every type here is a frozen dataclass mirroring one object of the Notion
API wire schema.  Instances are built fresh for each conversion call and
never mutated; ``to_dict`` / ``from_dict`` translate to and from the JSON
shapes the API sends and accepts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class BlockType(str, Enum):
    """Block kinds understood by the converters."""

    PARAGRAPH = "paragraph"
    HEADING_1 = "heading_1"
    HEADING_2 = "heading_2"
    HEADING_3 = "heading_3"
    BULLETED_LIST_ITEM = "bulleted_list_item"


class PropertyType(str, Enum):
    """Notion database property type tags."""

    TITLE = "title"
    MULTI_SELECT = "multi_select"
    DATE = "date"
    SELECT = "select"
    RICH_TEXT = "rich_text"
    STATUS = "status"
    URL = "url"
    NUMBER = "number"
    LAST_EDITED_TIME = "last_edited_time"
    CREATED_TIME = "created_time"
    CHECKBOX = "checkbox"
    PHONE_NUMBER = "phone_number"
    PEOPLE = "people"
    FILES = "files"


# ---------------------------------------------------------------------------
# Rich text
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Annotations:
    """Style flags of a rich_text segment.

    Only ``bold`` and ``italic`` affect Markdown rendering; the remaining
    fields are carried so that API payloads survive a round trip.
    """

    bold: bool = False
    italic: bool = False
    strikethrough: bool = False
    underline: bool = False
    code: bool = False
    color: str = "default"

    def to_dict(self) -> dict[str, Any]:
        return {
            "bold": self.bold,
            "italic": self.italic,
            "strikethrough": self.strikethrough,
            "underline": self.underline,
            "code": self.code,
            "color": self.color,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Annotations:
        return cls(
            bold=bool(data.get("bold", False)),
            italic=bool(data.get("italic", False)),
            strikethrough=bool(data.get("strikethrough", False)),
            underline=bool(data.get("underline", False)),
            code=bool(data.get("code", False)),
            color=data.get("color") or "default",
        )


@dataclass(frozen=True)
class Link:
    url: str


@dataclass(frozen=True)
class TextSegment:
    """A run of text with uniform styling and an optional link.

    Attributes
    ----------
    content:
        The text itself (``text.content`` on the wire).
    annotations:
        Style flags, or ``None`` when the segment carries no
        ``annotations`` key.
    link:
        Link destination (``text.link`` on the wire).
    plain_text:
        Display text as reported by the API.  Link segments built by the
        converter duplicate ``content`` here.
    href:
        Mirror of ``link.url`` kept for consumers that read ``href``.
    """

    content: str
    annotations: Annotations | None = None
    link: Link | None = None
    plain_text: str | None = None
    href: str | None = None

    @property
    def bold(self) -> bool:
        return self.annotations is not None and self.annotations.bold

    @property
    def italic(self) -> bool:
        return self.annotations is not None and self.annotations.italic

    def to_dict(self) -> dict[str, Any]:
        text: dict[str, Any] = {"content": self.content}
        if self.link is not None:
            text["link"] = {"url": self.link.url}
        seg: dict[str, Any] = {"type": "text", "text": text}
        if self.annotations is not None:
            seg["annotations"] = self.annotations.to_dict()
        if self.plain_text is not None:
            seg["plain_text"] = self.plain_text
        if self.href is not None:
            seg["href"] = self.href
        return seg

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TextSegment:
        """Build a segment from an API rich_text object.

        Non-``text`` segments (mentions, equations) are read through their
        ``plain_text`` so they still contribute their visible text.
        """
        text = data.get("text") or {}
        content = text.get("content")
        if content is None:
            content = data.get("plain_text") or ""

        link_data = text.get("link")
        link = Link(url=link_data["url"]) if isinstance(link_data, dict) and link_data.get("url") else None

        annotations_data = data.get("annotations")
        annotations = Annotations.from_dict(annotations_data) if isinstance(annotations_data, dict) else None

        return cls(
            content=content,
            annotations=annotations,
            link=link,
            plain_text=data.get("plain_text"),
            href=data.get("href"),
        )


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Block:
    """One structural unit of a page: a paragraph, heading or list item."""

    type: BlockType
    rich_text: tuple[TextSegment, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        kind = self.type.value
        return {
            "object": "block",
            "type": kind,
            kind: {"rich_text": [seg.to_dict() for seg in self.rich_text]},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Block | None:
        """Build a block from an API block object.

        Returns ``None`` when the block's ``type`` is not a
        :class:`BlockType`, so callers can skip kinds they do not model.
        """
        try:
            block_type = BlockType(data.get("type", ""))
        except ValueError:
            return None
        body = data.get(block_type.value) or {}
        segments = tuple(TextSegment.from_dict(seg) for seg in body.get("rich_text") or [])
        return cls(type=block_type, rich_text=segments)


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PropValue:
    """A named, typed property value destined for a database page.

    ``value`` is always a string; :func:`notionkit.properties.format_prop_values`
    converts it to the shape required by ``type``.
    """

    name: str
    type: PropertyType
    value: str
