"""Feed source catalog interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from comnet.domain.model.feed import FeedSource
from comnet.domain.value import FeedSourceId


class FeedSourceRepository(ABC):
    """Read access to the configured feed sources.

    Sources are configured outside the application; the only write
    operation is appending a new source.
    """

    @abstractmethod
    async def find_enabled(self) -> List[FeedSource]:
        """Return all enabled sources in catalog order."""
        pass

    @abstractmethod
    async def find_by_id(self, source_id: FeedSourceId) -> Optional[FeedSource]:
        """Find a source by ID, regardless of its enabled flag."""
        pass

    @abstractmethod
    async def max_total_items(self) -> Optional[int]:
        """Aggregate feed size configured in the catalog, if any."""
        pass

    @abstractmethod
    async def add(self, source: FeedSource) -> FeedSource:
        """Append a new source to the catalog."""
        pass
