"""Shared test fixtures for the notionkit test suite."""

from __future__ import annotations

import pytest

from notionkit.config import NotionKitConfig
from notionkit.converter.md_to_notion import MarkdownToNotionConverter
from notionkit.converter.notion_to_md import NotionToMarkdownRenderer


@pytest.fixture
def config() -> NotionKitConfig:
    """Default test configuration with a dummy token."""
    return NotionKitConfig(token="test_token_1234")


@pytest.fixture
def converter(config: NotionKitConfig) -> MarkdownToNotionConverter:
    return MarkdownToNotionConverter(config)


@pytest.fixture
def renderer() -> NotionToMarkdownRenderer:
    return NotionToMarkdownRenderer()


@pytest.fixture
def test_page() -> dict:
    """A database page object as returned by ``GET /pages/{id}``."""
    return {
        "object": "page",
        "id": "abc123",
        "created_time": "2023-12-01T17:22:00.000Z",
        "last_edited_time": "2023-12-01T17:22:00.000Z",
        "parent": {"type": "database_id", "database_id": "abc123"},
        "archived": False,
        "properties": {
            "Date": {
                "id": "Gcfj",
                "type": "date",
                "date": {"start": "2023-11-30", "end": None, "time_zone": None},
            },
            "Select": {
                "id": "%5B%5D%3Ae",
                "type": "select",
                "select": {"id": "y_Jq", "name": "Option 2", "color": "default"},
            },
            "Description": {
                "id": "%5CuD~",
                "type": "rich_text",
                "rich_text": [
                    {
                        "type": "text",
                        "text": {"content": "this is an e2e generated test page", "link": None},
                        "annotations": {
                            "bold": False,
                            "italic": False,
                            "strikethrough": False,
                            "underline": False,
                            "code": False,
                            "color": "default",
                        },
                        "plain_text": "this is an e2e generated test page",
                        "href": None,
                    }
                ],
            },
            "Checkbox": {"id": "_r%3Bc", "type": "checkbox", "checkbox": False},
            "Number": {"id": "hvE~", "type": "number", "number": 2},
            "Tags": {
                "id": "ypDA",
                "type": "multi_select",
                "multi_select": [
                    {"id": "abc123", "name": "tag 1", "color": "pink"},
                    {"id": "abc123", "name": " tag 2", "color": "brown"},
                ],
            },
            "Name": {
                "id": "title",
                "type": "title",
                "title": [
                    {
                        "type": "text",
                        "text": {"content": "e2e-test page", "link": None},
                        "plain_text": "e2e-test page",
                        "href": None,
                    }
                ],
            },
            "Last edited time": {
                "id": "f%5Dyy",
                "type": "last_edited_time",
                "last_edited_time": "2023-12-01T03:10:00.000Z",
            },
            "Created time": {
                "id": "zOOS",
                "type": "created_time",
                "created_time": "2023-11-30T23:32:00.000Z",
            },
        },
        "url": "https://www.notion.so/abc123",
    }
