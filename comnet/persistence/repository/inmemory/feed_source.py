"""In-memory feed source catalog for testing."""

from typing import Optional

from comnet.domain.model.feed import FeedSource
from comnet.domain.repository.feed_source import FeedSourceRepository
from comnet.domain.value import FeedSourceId


class InMemoryFeedSourceRepository(FeedSourceRepository):
    """In-memory implementation of FeedSourceRepository for testing."""

    def __init__(self, max_total_items: Optional[int] = None) -> None:
        self._sources: list[FeedSource] = []
        self._max_total_items = max_total_items

    async def find_enabled(self) -> list[FeedSource]:
        return [s for s in self._sources if s.enabled]

    async def find_by_id(self, source_id: FeedSourceId) -> Optional[FeedSource]:
        for source in self._sources:
            if source.id == source_id:
                return source
        return None

    async def max_total_items(self) -> Optional[int]:
        return self._max_total_items

    async def add(self, source: FeedSource) -> FeedSource:
        self._sources.append(source)
        return source
