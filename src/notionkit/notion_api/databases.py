"""Database endpoint wrappers.

``query`` walks every result page of ``POST /databases/{id}/query``;
optional ``filter`` and ``sorts`` objects are sent unchanged.
"""

from __future__ import annotations

from typing import Any

from .transport import AsyncNotionTransport, NotionTransport


def query_body(
    filter: dict[str, Any] | None = None,
    sorts: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    body: dict[str, Any] = {}
    if filter is not None:
        body["filter"] = filter
    if sorts is not None:
        body["sorts"] = sorts
    return body


class DatabaseAPI:
    """Synchronous wrapper for the Databases API."""

    def __init__(self, transport: NotionTransport) -> None:
        self._transport = transport

    def retrieve(self, database_id: str) -> dict[str, Any]:
        return self._transport.request("GET", f"/databases/{database_id}")

    def query(
        self,
        database_id: str,
        filter: dict[str, Any] | None = None,
        sorts: list[dict[str, Any]] | None = None,
    ) -> list[dict[str, Any]]:
        """Return every page of *database_id* matching *filter*."""
        return list(
            self._transport.paginate(
                f"/databases/{database_id}/query",
                method="POST",
                json=query_body(filter, sorts),
            )
        )


class AsyncDatabaseAPI:
    """Asynchronous wrapper for the Databases API."""

    def __init__(self, transport: AsyncNotionTransport) -> None:
        self._transport = transport

    async def retrieve(self, database_id: str) -> dict[str, Any]:
        return await self._transport.request("GET", f"/databases/{database_id}")

    async def query(
        self,
        database_id: str,
        filter: dict[str, Any] | None = None,
        sorts: list[dict[str, Any]] | None = None,
    ) -> list[dict[str, Any]]:
        return [
            page
            async for page in self._transport.paginate(
                f"/databases/{database_id}/query",
                method="POST",
                json=query_body(filter, sorts),
            )
        ]
