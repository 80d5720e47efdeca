"""Tests for the wire-schema dataclasses in notionkit.models and the error types."""

from __future__ import annotations

import dataclasses

import pytest

from notionkit.errors import (
    ErrorCode,
    NotionKitError,
    NotionKitNetworkError,
    NotionKitNotFoundError,
)
from notionkit.models import Annotations, Block, BlockType, Link, TextSegment


class TestTextSegment:
    def test_plain_to_dict(self):
        assert TextSegment("hi").to_dict() == {"type": "text", "text": {"content": "hi"}}

    def test_annotations_serialised(self):
        seg = TextSegment("b", annotations=Annotations(bold=True))
        assert seg.to_dict()["annotations"] == {
            "bold": True,
            "italic": False,
            "strikethrough": False,
            "underline": False,
            "code": False,
            "color": "default",
        }

    def test_from_api_object(self):
        seg = TextSegment.from_dict({
            "type": "text",
            "text": {"content": "docs", "link": {"url": "https://example.com"}},
            "annotations": {"italic": True, "color": "red"},
            "plain_text": "docs",
            "href": "https://example.com",
        })
        assert seg.link == Link("https://example.com")
        assert seg.italic and not seg.bold
        assert seg.annotations.color == "red"

    def test_null_link_ignored(self):
        seg = TextSegment.from_dict({"type": "text", "text": {"content": "x", "link": None}})
        assert seg.link is None

    def test_bold_without_annotations(self):
        assert TextSegment("x").bold is False

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            TextSegment("x").content = "y"


class TestBlock:
    def test_to_dict(self):
        block = Block(BlockType.HEADING_2, (TextSegment("t"),))
        assert block.to_dict() == {
            "object": "block",
            "type": "heading_2",
            "heading_2": {"rich_text": [{"type": "text", "text": {"content": "t"}}]},
        }

    def test_from_dict_unknown_type(self):
        assert Block.from_dict({"type": "callout", "callout": {}}) is None

    def test_from_dict_missing_type(self):
        assert Block.from_dict({}) is None

    def test_from_dict_missing_body(self):
        assert Block.from_dict({"type": "paragraph"}) == Block(BlockType.PARAGRAPH, ())

    def test_round_trip(self):
        block = Block(BlockType.BULLETED_LIST_ITEM, (TextSegment("a", annotations=Annotations(italic=True)),))
        assert Block.from_dict(block.to_dict()) == block


class TestErrors:
    def test_code_and_context(self):
        err = NotionKitNotFoundError("missing", context={"path": "/pages/x"})
        assert err.code == ErrorCode.NOT_FOUND
        assert err.context == {"path": "/pages/x"}
        assert str(err) == "missing"
        assert isinstance(err, NotionKitError)

    def test_cause_chained(self):
        cause = OSError("reset")
        err = NotionKitNetworkError("net", cause=cause)
        assert err.__cause__ is cause

    def test_repr(self):
        err = NotionKitError(ErrorCode.CONFLICT, "c", context={"a": 1})
        assert "context={'a': 1}" in repr(err)
        assert repr(err).startswith("NotionKitError(")
