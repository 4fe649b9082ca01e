"""Feed cache interface."""

from abc import ABC, abstractmethod
from typing import Optional

from comnet.domain.model.feed import FeedCacheEntry


class FeedCache(ABC):
    """Key-value store for the latest fetch outcome of each feed source.

    Entries carry their own ``last_updated`` timestamp; staleness is decided
    by the caller. The default implementation is process-local, so every
    application instance keeps an independent cache.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[FeedCacheEntry]:
        pass

    @abstractmethod
    async def set(self, key: str, entry: FeedCacheEntry) -> None:
        pass

    @abstractmethod
    async def clear(self) -> None:
        pass
