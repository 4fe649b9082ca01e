"""Process-local feed cache."""

from typing import Optional

from comnet.domain.model import FeedCacheEntry
from comnet.domain.repository import FeedCache


class InMemoryFeedCache(FeedCache):
    """Dict-backed cache living as long as the application process.

    Each application instance keeps its own entries.
    """

    def __init__(self) -> None:
        self._entries: dict[str, FeedCacheEntry] = {}

    async def get(self, key: str) -> Optional[FeedCacheEntry]:
        return self._entries.get(key)

    async def set(self, key: str, entry: FeedCacheEntry) -> None:
        self._entries[key] = entry

    async def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
