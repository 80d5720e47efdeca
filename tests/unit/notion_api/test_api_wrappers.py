"""Tests for the page, block and database endpoint wrappers."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from notionkit.notion_api.blocks import AsyncBlockAPI, BlockAPI
from notionkit.notion_api.databases import AsyncDatabaseAPI, DatabaseAPI, query_body
from notionkit.notion_api.pages import AsyncPageAPI, PageAPI, page_create_body, page_update_body


async def _agen(items):
    for item in items:
        yield item


def _async_transport(paginate_items=()):
    transport = MagicMock()
    transport.request = AsyncMock(return_value={"id": "x"})
    transport.paginate = MagicMock(side_effect=lambda *a, **kw: _agen(paginate_items))
    return transport


# ---------------------------------------------------------------------------
# Body builders
# ---------------------------------------------------------------------------

class TestBodies:
    def test_create_body_without_children(self):
        body = page_create_body({"database_id": "d"}, {"Name": {}})
        assert body == {"parent": {"database_id": "d"}, "properties": {"Name": {}}}
        assert "children" not in body

    def test_create_body_with_empty_children(self):
        body = page_create_body({"page_id": "p"}, {}, [])
        assert body["children"] == []

    def test_update_body_only_given_fields(self):
        assert page_update_body() == {}
        assert page_update_body(archived=True) == {"archived": True}
        assert page_update_body({"A": {}}, False) == {"properties": {"A": {}}, "archived": False}

    def test_query_body(self):
        assert query_body() == {}
        assert query_body({"property": "Done"}, [{"timestamp": "created_time"}]) == {
            "filter": {"property": "Done"},
            "sorts": [{"timestamp": "created_time"}],
        }


# ---------------------------------------------------------------------------
# Sync wrappers
# ---------------------------------------------------------------------------

class TestPageAPI:
    def test_create(self):
        transport = MagicMock()
        PageAPI(transport).create({"database_id": "d"}, {"P": {}}, [{"type": "paragraph"}])
        transport.request.assert_called_once_with(
            "POST", "/pages",
            json={"parent": {"database_id": "d"}, "properties": {"P": {}}, "children": [{"type": "paragraph"}]},
        )

    def test_retrieve(self):
        transport = MagicMock()
        transport.request.return_value = {"id": "p1"}
        assert PageAPI(transport).retrieve("p1") == {"id": "p1"}
        transport.request.assert_called_once_with("GET", "/pages/p1")

    def test_update_archived(self):
        transport = MagicMock()
        PageAPI(transport).update("p1", archived=True)
        transport.request.assert_called_once_with("PATCH", "/pages/p1", json={"archived": True})


class TestBlockAPI:
    def test_get_children_collects_pages(self):
        transport = MagicMock()
        transport.paginate.return_value = iter([{"id": 1}, {"id": 2}])
        assert BlockAPI(transport).get_children("b") == [{"id": 1}, {"id": 2}]
        transport.paginate.assert_called_once_with("/blocks/b/children", method="GET")

    def test_append_children(self):
        transport = MagicMock()
        BlockAPI(transport).append_children("b", [{"type": "paragraph"}])
        transport.request.assert_called_once_with(
            "PATCH", "/blocks/b/children", json={"children": [{"type": "paragraph"}]},
        )


class TestDatabaseAPI:
    def test_retrieve(self):
        transport = MagicMock()
        DatabaseAPI(transport).retrieve("db")
        transport.request.assert_called_once_with("GET", "/databases/db")

    def test_query(self):
        transport = MagicMock()
        transport.paginate.return_value = iter([{"id": "p"}])
        result = DatabaseAPI(transport).query("db", filter={"f": 1})
        assert result == [{"id": "p"}]
        transport.paginate.assert_called_once_with(
            "/databases/db/query", method="POST", json={"filter": {"f": 1}},
        )


# ---------------------------------------------------------------------------
# Async wrappers
# ---------------------------------------------------------------------------

class TestAsyncWrappers:
    @pytest.mark.asyncio
    async def test_page_create_and_update(self):
        transport = _async_transport()
        api = AsyncPageAPI(transport)
        await api.create({"page_id": "p"}, {})
        await api.update("p", properties={"A": {}})
        assert transport.request.await_args_list[0].args == ("POST", "/pages")
        assert transport.request.await_args_list[0].kwargs == {
            "json": {"parent": {"page_id": "p"}, "properties": {}},
        }
        assert transport.request.await_args_list[1].kwargs == {"json": {"properties": {"A": {}}}}

    @pytest.mark.asyncio
    async def test_page_retrieve(self):
        transport = _async_transport()
        assert await AsyncPageAPI(transport).retrieve("p") == {"id": "x"}
        transport.request.assert_awaited_once_with("GET", "/pages/p")

    @pytest.mark.asyncio
    async def test_block_children(self):
        transport = _async_transport([{"id": 1}, {"id": 2}])
        api = AsyncBlockAPI(transport)
        assert await api.get_children("b") == [{"id": 1}, {"id": 2}]
        await api.append_children("b", [])
        transport.request.assert_awaited_once_with("PATCH", "/blocks/b/children", json={"children": []})

    @pytest.mark.asyncio
    async def test_database_query(self):
        transport = _async_transport([{"id": "p"}])
        api = AsyncDatabaseAPI(transport)
        assert await api.query("db", sorts=[]) == [{"id": "p"}]
        transport.paginate.assert_called_once_with(
            "/databases/db/query", method="POST", json={"sorts": []},
        )
        await api.retrieve("db")
        transport.request.assert_awaited_once_with("GET", "/databases/db")
