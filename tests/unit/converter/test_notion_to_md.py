"""Tests for Notion block -> Markdown rendering."""

from __future__ import annotations

from notionkit.converter.inline_renderer import render_rich_text, render_segment
from notionkit.converter.md_to_notion import convert_markdown_to_blocks
from notionkit.converter.notion_to_md import (
    NotionToMarkdownRenderer,
    convert_blocks_to_markdown,
)
from notionkit.models import Annotations, Block, BlockType, Link, TextSegment


def _seg(content: str, bold: bool = False, italic: bool = False) -> dict:
    return {
        "type": "text",
        "text": {"content": content, "link": None},
        "annotations": {
            "bold": bold,
            "italic": italic,
            "strikethrough": False,
            "underline": False,
            "code": False,
            "color": "default",
        },
        "plain_text": content,
        "href": None,
    }


def _block(kind: str, *segments: dict, block_id: str = "b1") -> dict:
    return {"object": "block", "id": block_id, "type": kind, kind: {"rich_text": list(segments)}}


# =========================================================================
# Rich text
# =========================================================================

class TestRenderRichText:
    def test_mixed_annotations(self):
        rich_text = [
            _seg("This "),
            _seg("is a", bold=True),
            _seg(" "),
            _seg("paragraph", italic=True),
        ]
        assert render_rich_text(rich_text) == "This **is a** *paragraph*"

    def test_bold_then_italic_nesting(self):
        assert render_rich_text([_seg("X", bold=True, italic=True)]) == "***X***"

    def test_empty_sequence(self):
        assert render_rich_text([]) == ""

    def test_content_is_not_escaped(self):
        assert render_rich_text([_seg("a*b_c [d](e)")]) == "a*b_c [d](e)"

    def test_link_renders_display_text_only(self):
        seg = TextSegment("docs", link=Link("https://example.com"), href="https://example.com")
        assert render_segment(seg) == "docs"

    def test_other_annotations_produce_no_markers(self):
        ann = Annotations(strikethrough=True, underline=True, code=True, color="red")
        assert render_segment(TextSegment("plain", annotations=ann)) == "plain"

    def test_accepts_text_segments(self):
        segments = [TextSegment("a"), TextSegment("b", annotations=Annotations(bold=True))]
        assert render_rich_text(segments) == "a**b**"

    def test_segment_without_annotations_key(self):
        assert render_rich_text([{"type": "text", "text": {"content": "raw"}}]) == "raw"

    def test_mention_falls_back_to_plain_text(self):
        mention = {"type": "mention", "mention": {"type": "user"}, "plain_text": "@Ann"}
        assert render_rich_text([mention]) == "@Ann"


# =========================================================================
# Blocks
# =========================================================================

class TestRenderBlocks:
    def test_reference_page(self, renderer):
        blocks = [
            _block("heading_1", _seg("Heading "), _seg("1", italic=True)),
            _block("heading_2", _seg("Heading "), _seg("2", bold=True)),
            _block("heading_3", _seg("Heading 3")),
            _block("bulleted_list_item", _seg("Bold", bold=True), _seg(" and "), _seg("italics", italic=True)),
            _block("paragraph", _seg("One more "), _seg("bold", bold=True)),
        ]
        assert renderer.render_blocks(blocks) == (
            "# Heading *1*\n"
            "## Heading **2**\n"
            "### Heading 3\n"
            "- **Bold** and *italics*\n"
            "One more **bold**\n"
        )

    def test_empty_list(self, renderer):
        assert renderer.render_blocks([]) == ""

    def test_unknown_block_kinds_are_skipped(self, renderer):
        blocks = [
            _block("paragraph", _seg("keep")),
            {"object": "block", "id": "img", "type": "image", "image": {}},
            _block("to_do", _seg("task")),
            _block("heading_1", _seg("also keep")),
        ]
        assert renderer.render_blocks(blocks) == "keep\n# also keep\n"

    def test_only_unknown_blocks(self, renderer):
        assert renderer.render_blocks([{"type": "divider", "divider": {}}]) == ""

    def test_empty_paragraph_renders_empty_line(self, renderer):
        assert renderer.render_blocks([_block("paragraph")]) == "\n"

    def test_every_line_is_terminated(self, renderer):
        out = renderer.render_blocks([_block("paragraph", _seg("a")), _block("paragraph", _seg("b"))])
        assert out.endswith("\n")
        assert out.count("\n") == 2

    def test_accepts_block_models(self, renderer):
        block = Block(BlockType.BULLETED_LIST_ITEM, (TextSegment("item"),))
        assert renderer.render_blocks([block]) == "- item\n"

    def test_render_block(self, renderer):
        block = Block(BlockType.HEADING_3, (TextSegment("h"),))
        assert renderer.render_block(block) == "### h\n"

    def test_accepts_generator(self, renderer):
        gen = (_block("paragraph", _seg(str(i))) for i in range(3))
        assert renderer.render_blocks(gen) == "0\n1\n2\n"


class TestConvertBlocksToMarkdown:
    def test_module_function_matches_renderer(self, renderer):
        blocks = [_block("heading_2", _seg("x"))]
        assert convert_blocks_to_markdown(blocks) == renderer.render_blocks(blocks)

    def test_imported_paragraphs_export_their_text(self):
        blocks = convert_markdown_to_blocks("first\nsee [docs](https://example.com) now")
        assert convert_blocks_to_markdown(blocks) == "first\nsee docs now\n"
