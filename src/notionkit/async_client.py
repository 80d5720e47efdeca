"""Asynchronous Notion client.

:class:`AsyncNotionClient` mirrors :class:`~notionkit.client.NotionClient`
with every I/O method written as a coroutine.

Usage::

    import asyncio
    from notionkit import AsyncNotionClient

    async def main():
        async with AsyncNotionClient(token="secret_xxx") as client:
            print(await client.fetch_page_markdown("<page_id>"))

    asyncio.run(main())
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from notionkit.client import log_append_failure, log_failure, split_children
from notionkit.config import NotionKitConfig
from notionkit.converter.md_to_notion import MarkdownToNotionConverter
from notionkit.converter.notion_to_md import NotionToMarkdownRenderer
from notionkit.errors import NotionKitError
from notionkit.models import PropertyType, PropValue
from notionkit.notion_api.blocks import AsyncBlockAPI
from notionkit.notion_api.databases import AsyncDatabaseAPI
from notionkit.notion_api.pages import AsyncPageAPI, page_create_body
from notionkit.notion_api.transport import AsyncNotionTransport
from notionkit.observability import NoopMetricsHook, get_logger, log_event
from notionkit.properties import format_prop_values, get_prop_value_from_page

log = get_logger("notionkit.client")


class AsyncNotionClient:
    """Asynchronous Notion client.

    Parameters
    ----------
    token:
        Notion integration token.
    **kwargs:
        Forwarded to :class:`NotionKitConfig`.
    """

    def __init__(self, token: str, **kwargs: Any) -> None:
        self._config = NotionKitConfig(token=token, **kwargs)
        self._metrics = self._config.metrics if self._config.metrics is not None else NoopMetricsHook()
        self._transport = AsyncNotionTransport(self._config)
        self._pages = AsyncPageAPI(self._transport)
        self._blocks = AsyncBlockAPI(self._transport)
        self._databases = AsyncDatabaseAPI(self._transport)
        self._converter = MarkdownToNotionConverter(self._config)
        self._renderer = NotionToMarkdownRenderer()

    # ------------------------------------------------------------------
    # Databases
    # ------------------------------------------------------------------

    async def fetch_database(self, database_id: str) -> dict[str, Any]:
        return await self._databases.retrieve(database_id)

    async def fetch_pages_in_database(
        self,
        database_id: str,
        filter: dict[str, Any] | None = None,
        sorts: list[dict[str, Any]] | None = None,
    ) -> list[dict[str, Any]]:
        """Return every page of a database, following pagination."""
        try:
            pages = await self._databases.query(database_id, filter=filter, sorts=sorts)
        except NotionKitError as exc:
            log_failure(
                f"Failed to fetch pages for database with ID [{database_id}]",
                exc, self._config, database_id=database_id,
            )
            raise
        log_event(
            log, logging.INFO, "Database pages fetched",
            op="fetch_pages_in_database", database_id=database_id, pages=len(pages),
        )
        return pages

    # ------------------------------------------------------------------
    # Pages
    # ------------------------------------------------------------------

    async def create_page(
        self,
        parent: dict[str, Any],
        properties: dict[str, Any],
        children: list[dict[str, Any]] | None = None,
    ) -> dict[str, Any]:
        """Create a page; see :meth:`NotionClient.create_page`."""
        first, rest = split_children(children)
        try:
            page = await self._pages.create(parent=parent, properties=properties, children=first)
        except NotionKitError as exc:
            log_failure(
                "Failed to create a new page with request body",
                exc, self._config, request_body=page_create_body(parent, properties, first),
            )
            raise

        for index, batch in enumerate(rest, start=1):
            try:
                await self._blocks.append_children(page["id"], batch)
            except NotionKitError as exc:
                log_append_failure(page["id"], index, batch, exc, self._config)
                raise

        created = len(children) if children else 0
        self._metrics.increment("notionkit.blocks_created_total", created)
        log_event(
            log, logging.INFO, "Page created",
            op="create_page", page_id=page.get("id"), blocks=created,
        )
        return page

    async def create_page_in_database(
        self,
        database_id: str,
        prop_values: Iterable[PropValue],
        markdown: str,
    ) -> dict[str, Any]:
        properties = format_prop_values(prop_values)
        children = self._converter.convert_to_payload(markdown)
        return await self.create_page({"database_id": database_id}, properties, children)

    async def fetch_page(self, page_id: str) -> dict[str, Any]:
        return await self._pages.retrieve(page_id)

    async def fetch_page_content(self, page_id: str) -> list[dict[str, Any]]:
        return await self._blocks.get_children(page_id)

    async def fetch_page_markdown(self, page_id: str) -> str:
        return self._renderer.render_blocks(await self.fetch_page_content(page_id))

    async def archive_page(self, page_id: str) -> dict[str, Any]:
        return await self._pages.update(page_id, archived=True)

    @staticmethod
    def get_prop_value(
        page: dict[str, Any],
        prop_type: PropertyType | str,
        prop_name: str,
    ) -> str:
        return get_prop_value_from_page(page, prop_type, prop_name)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def close(self) -> None:
        await self._transport.close()

    async def __aenter__(self) -> AsyncNotionClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()
