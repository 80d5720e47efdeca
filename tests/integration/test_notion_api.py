"""Integration tests against the live Notion API.

These tests need a real integration token and a test database shared with
it.  Set NOTION_API_KEY and TEST_DB_ID to run them; TEST_PAGE_ID enables
the page-content tests.

Usage:
    NOTION_API_KEY=ntn_xxx TEST_DB_ID=xxx pytest tests/integration/ -v
"""
import os

import pytest

from notionkit import AsyncNotionClient, NotionClient, PropertyType, PropValue

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(
        not os.environ.get("NOTION_API_KEY"),
        reason="NOTION_API_KEY not set; skipping integration tests",
    ),
]


@pytest.fixture
def db_id():
    value = os.environ.get("TEST_DB_ID")
    if not value:
        pytest.skip("TEST_DB_ID not set")
    return value


@pytest.fixture
def page_id():
    value = os.environ.get("TEST_PAGE_ID")
    if not value:
        pytest.skip("TEST_PAGE_ID not set")
    return value


@pytest.fixture
def client():
    with NotionClient.from_env() as c:
        yield c


def _test_page_properties():
    return [
        PropValue("Name", PropertyType.TITLE, "e2e-test page"),
        PropValue("Tags", PropertyType.MULTI_SELECT, "tag 1, tag 2"),
        PropValue("Select", PropertyType.SELECT, "Option 2"),
        PropValue("Description", PropertyType.RICH_TEXT, "this is an e2e generated test page"),
        PropValue("Date", PropertyType.DATE, "2023-12-01"),
        PropValue("Number", PropertyType.NUMBER, "2"),
        PropValue("Checkbox", PropertyType.CHECKBOX, "false"),
    ]


class TestDatabase:
    def test_fetch_database(self, client, db_id):
        database = client.fetch_database(db_id)
        assert database["object"] == "database"

    def test_fetch_pages(self, client, db_id):
        pages = client.fetch_pages_in_database(db_id)
        assert all(p["object"] == "page" for p in pages)

    def test_create_read_archive(self, client, db_id):
        page = client.create_page_in_database(
            db_id,
            _test_page_properties(),
            "E2E DB test page test content\nsee [docs](https://developers.notion.com)",
        )
        try:
            fetched = client.fetch_page(page["id"])
            assert client.get_prop_value(fetched, PropertyType.TITLE, "Name") == "e2e-test page"
            assert client.get_prop_value(fetched, PropertyType.SELECT, "Select") == "Option 2"
            assert client.fetch_page_markdown(page["id"]) == (
                "E2E DB test page test content\nsee docs\n"
            )
        finally:
            archived = client.archive_page(page["id"])
        assert archived["archived"] is True


class TestPageContent:
    def test_fetch_page_markdown(self, client, page_id):
        markdown = client.fetch_page_markdown(page_id)
        assert isinstance(markdown, str)


class TestAsyncClient:
    @pytest.mark.asyncio
    async def test_fetch_database(self, db_id):
        async with AsyncNotionClient(token=os.environ["NOTION_API_KEY"]) as client:
            database = await client.fetch_database(db_id)
        assert database["id"].replace("-", "") == db_id.replace("-", "")
