"""Batch block payloads to respect the Notion children-per-request limit."""

from __future__ import annotations

from typing import Any

MAX_CHILDREN_PER_REQUEST = 100


def chunk_children(
    blocks: list[dict[str, Any]],
    size: int = MAX_CHILDREN_PER_REQUEST,
) -> list[list[dict[str, Any]]]:
    """Split *blocks* into consecutive batches of at most *size* items.

    An empty input returns ``[]`` (not ``[[]]``).

    >>> [len(b) for b in chunk_children([{"type": "paragraph"}] * 250)]
    [100, 100, 50]
    """
    if size < 1:
        raise ValueError(f"size must be >= 1, got {size}")
    return [blocks[i : i + size] for i in range(0, len(blocks), size)]
