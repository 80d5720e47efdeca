"""Synchronous Notion client.

:class:`NotionClient` ties the transport, the endpoint wrappers, the
Markdown converters and the property helpers together.

Usage::

    from notionkit import NotionClient, PropValue, PropertyType

    with NotionClient(token="secret_xxx") as client:
        page = client.create_page_in_database(
            database_id="<db_id>",
            prop_values=[PropValue("Name", PropertyType.TITLE, "Hello")],
            markdown="First line\\nSee [docs](https://example.com)",
        )
        print(client.fetch_page_markdown(page["id"]))
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from notionkit.config import NotionKitConfig
from notionkit.converter.md_to_notion import MarkdownToNotionConverter
from notionkit.converter.notion_to_md import NotionToMarkdownRenderer
from notionkit.errors import NotionKitError
from notionkit.models import PropertyType, PropValue
from notionkit.notion_api.blocks import BlockAPI
from notionkit.notion_api.databases import DatabaseAPI
from notionkit.notion_api.pages import PageAPI, page_create_body
from notionkit.notion_api.transport import NotionTransport
from notionkit.observability import NoopMetricsHook, get_logger, log_event
from notionkit.properties import format_prop_values, get_prop_value_from_page
from notionkit.utils.chunk import chunk_children
from notionkit.utils.redact import redact

log = get_logger("notionkit.client")


def split_children(
    children: list[dict[str, Any]] | None,
) -> tuple[list[dict[str, Any]] | None, list[list[dict[str, Any]]]]:
    """Split page content into the create-call batch and follow-up batches.

    ``None`` (no content) stays ``None`` so the create body omits
    ``children``.
    """
    if children is None:
        return None, []
    batches = chunk_children(children)
    if not batches:
        return [], []
    return batches[0], batches[1:]


def log_failure(
    message: str,
    exc: NotionKitError,
    config: NotionKitConfig,
    **fields: Any,
) -> None:
    """Log a failed API call with its redacted request context."""
    log_event(
        log, logging.ERROR, message,
        error_code=exc.code, error=exc.message,
        **redact(fields, config.token),
    )


def log_append_failure(
    page_id: str,
    batch_index: int,
    batch: list[dict[str, Any]],
    exc: NotionKitError,
    config: NotionKitConfig,
) -> None:
    """Log a failed follow-up append and record *page_id* on *exc*.

    The page already exists at this point; *batch_index* counts the
    follow-up batches from 1 (batch 0 went with the create call).
    """
    exc.context.setdefault("page_id", page_id)
    exc.context.setdefault("batch_index", batch_index)
    log_failure(
        "Page created but appending content failed",
        exc, config, page_id=page_id, batch_index=batch_index, batch_size=len(batch),
    )


class NotionClient:
    """Synchronous Notion client.

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
        self._transport = NotionTransport(self._config)
        self._pages = PageAPI(self._transport)
        self._blocks = BlockAPI(self._transport)
        self._databases = DatabaseAPI(self._transport)
        self._converter = MarkdownToNotionConverter(self._config)
        self._renderer = NotionToMarkdownRenderer()

    @classmethod
    def from_env(cls, **kwargs: Any) -> NotionClient:
        """Create a client configured from ``NOTION_*`` environment variables."""
        config = NotionKitConfig.from_env(**kwargs)
        values = {k: v for k, v in vars(config).items() if k != "token"}
        return cls(token=config.token, **values)

    # ------------------------------------------------------------------
    # Databases
    # ------------------------------------------------------------------

    def fetch_database(self, database_id: str) -> dict[str, Any]:
        return self._databases.retrieve(database_id)

    def fetch_pages_in_database(
        self,
        database_id: str,
        filter: dict[str, Any] | None = None,
        sorts: list[dict[str, Any]] | None = None,
    ) -> list[dict[str, Any]]:
        """Return every page of a database, following pagination."""
        try:
            pages = self._databases.query(database_id, filter=filter, sorts=sorts)
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

    def create_page(
        self,
        parent: dict[str, Any],
        properties: dict[str, Any],
        children: list[dict[str, Any]] | None = None,
    ) -> dict[str, Any]:
        """Create a page, appending content beyond the first 100 blocks.

        Parameters
        ----------
        parent:
            ``{"database_id": ...}`` or ``{"page_id": ...}``.
        properties:
            Property payload, e.g. from :func:`format_prop_values`.
        children:
            Block payloads.  ``None`` omits ``children`` from the request.

        Returns
        -------
        dict
            The created page object.
        """
        first, rest = split_children(children)
        try:
            page = self._pages.create(parent=parent, properties=properties, children=first)
        except NotionKitError as exc:
            log_failure(
                "Failed to create a new page with request body",
                exc, self._config, request_body=page_create_body(parent, properties, first),
            )
            raise

        for index, batch in enumerate(rest, start=1):
            try:
                self._blocks.append_children(page["id"], batch)
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

    def create_page_in_database(
        self,
        database_id: str,
        prop_values: Iterable[PropValue],
        markdown: str,
    ) -> dict[str, Any]:
        """Create a database page from property triples and Markdown content."""
        properties = format_prop_values(prop_values)
        children = self._converter.convert_to_payload(markdown)
        return self.create_page({"database_id": database_id}, properties, children)

    def fetch_page(self, page_id: str) -> dict[str, Any]:
        return self._pages.retrieve(page_id)

    def fetch_page_content(self, page_id: str) -> list[dict[str, Any]]:
        """Return the top-level blocks of a page."""
        return self._blocks.get_children(page_id)

    def fetch_page_markdown(self, page_id: str) -> str:
        """Fetch a page's blocks and render them as Markdown."""
        return self._renderer.render_blocks(self.fetch_page_content(page_id))

    def archive_page(self, page_id: str) -> dict[str, Any]:
        return self._pages.update(page_id, archived=True)

    @staticmethod
    def get_prop_value(
        page: dict[str, Any],
        prop_type: PropertyType | str,
        prop_name: str,
    ) -> str:
        """See :func:`notionkit.properties.get_prop_value_from_page`."""
        return get_prop_value_from_page(page, prop_type, prop_name)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        self._transport.close()

    def __enter__(self) -> NotionClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
