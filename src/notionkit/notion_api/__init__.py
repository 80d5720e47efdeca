"""notionkit.notion_api -- HTTP transport and endpoint wrappers.

* :mod:`.rate_limit` -- token-bucket pacing (sync and async).
* :mod:`.retries` -- retry decisions and exponential backoff.
* :mod:`.transport` -- httpx transports with auth, retries and pacing.
* :mod:`.pages`, :mod:`.blocks`, :mod:`.databases` -- endpoint wrappers.
"""

from __future__ import annotations

from .blocks import AsyncBlockAPI, BlockAPI
from .databases import AsyncDatabaseAPI, DatabaseAPI
from .pages import AsyncPageAPI, PageAPI
from .rate_limit import AsyncTokenBucket, TokenBucket
from .retries import compute_backoff, should_retry
from .transport import AsyncNotionTransport, NotionTransport

__all__ = [
    "AsyncBlockAPI",
    "AsyncDatabaseAPI",
    "AsyncNotionTransport",
    "AsyncPageAPI",
    "AsyncTokenBucket",
    "BlockAPI",
    "DatabaseAPI",
    "NotionTransport",
    "PageAPI",
    "TokenBucket",
    "compute_backoff",
    "should_retry",
]
