"""Block-children endpoint wrappers.

``get_children`` follows pagination cursors and returns the full child
list of a page or block in order.
"""

from __future__ import annotations

from typing import Any

from .transport import AsyncNotionTransport, NotionTransport


class BlockAPI:
    """Synchronous wrapper for ``/blocks/{id}/children``."""

    def __init__(self, transport: NotionTransport) -> None:
        self._transport = transport

    def get_children(self, block_id: str) -> list[dict[str, Any]]:
        """Return every child block of *block_id* (a page ID works too)."""
        return list(self._transport.paginate(f"/blocks/{block_id}/children", method="GET"))

    def append_children(
        self,
        block_id: str,
        children: list[dict[str, Any]],
    ) -> dict[str, Any]:
        """Append up to 100 *children* after the last child of *block_id*."""
        return self._transport.request(
            "PATCH", f"/blocks/{block_id}/children", json={"children": children},
        )


class AsyncBlockAPI:
    """Asynchronous wrapper for ``/blocks/{id}/children``."""

    def __init__(self, transport: AsyncNotionTransport) -> None:
        self._transport = transport

    async def get_children(self, block_id: str) -> list[dict[str, Any]]:
        return [
            child
            async for child in self._transport.paginate(
                f"/blocks/{block_id}/children", method="GET",
            )
        ]

    async def append_children(
        self,
        block_id: str,
        children: list[dict[str, Any]],
    ) -> dict[str, Any]:
        return await self._transport.request(
            "PATCH", f"/blocks/{block_id}/children", json={"children": children},
        )
