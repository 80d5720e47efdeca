"""Page endpoint wrappers.

:class:`PageAPI` and :class:`AsyncPageAPI` build request bodies for the
``/pages`` endpoints and leave auth, retries and pacing to the transport.
"""

from __future__ import annotations

from typing import Any

from .transport import AsyncNotionTransport, NotionTransport


def page_create_body(
    parent: dict[str, Any],
    properties: dict[str, Any],
    children: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """Request body for ``POST /pages``.

    ``children`` is left out entirely when it is ``None``; the API
    treats a missing field and an empty array differently.
    """
    body: dict[str, Any] = {"parent": parent, "properties": properties}
    if children is not None:
        body["children"] = children
    return body


def page_update_body(
    properties: dict[str, Any] | None = None,
    archived: bool | None = None,
) -> dict[str, Any]:
    """Request body for ``PATCH /pages/{id}`` with only the given fields."""
    body: dict[str, Any] = {}
    if properties is not None:
        body["properties"] = properties
    if archived is not None:
        body["archived"] = archived
    return body


class PageAPI:
    """Synchronous wrapper for the Pages API."""

    def __init__(self, transport: NotionTransport) -> None:
        self._transport = transport

    def create(
        self,
        parent: dict[str, Any],
        properties: dict[str, Any],
        children: list[dict[str, Any]] | None = None,
    ) -> dict[str, Any]:
        """Create a page under *parent* (``{"database_id": ...}`` or
        ``{"page_id": ...}``) and return the page object.
        """
        return self._transport.request(
            "POST", "/pages", json=page_create_body(parent, properties, children),
        )

    def retrieve(self, page_id: str) -> dict[str, Any]:
        return self._transport.request("GET", f"/pages/{page_id}")

    def update(
        self,
        page_id: str,
        properties: dict[str, Any] | None = None,
        archived: bool | None = None,
    ) -> dict[str, Any]:
        """Change properties and/or the archived flag of a page."""
        return self._transport.request(
            "PATCH", f"/pages/{page_id}", json=page_update_body(properties, archived),
        )


class AsyncPageAPI:
    """Asynchronous wrapper for the Pages API."""

    def __init__(self, transport: AsyncNotionTransport) -> None:
        self._transport = transport

    async def create(
        self,
        parent: dict[str, Any],
        properties: dict[str, Any],
        children: list[dict[str, Any]] | None = None,
    ) -> dict[str, Any]:
        return await self._transport.request(
            "POST", "/pages", json=page_create_body(parent, properties, children),
        )

    async def retrieve(self, page_id: str) -> dict[str, Any]:
        return await self._transport.request("GET", f"/pages/{page_id}")

    async def update(
        self,
        page_id: str,
        properties: dict[str, Any] | None = None,
        archived: bool | None = None,
    ) -> dict[str, Any]:
        return await self._transport.request(
            "PATCH", f"/pages/{page_id}", json=page_update_body(properties, archived),
        )
