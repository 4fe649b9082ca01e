"""Feed client contract."""

from abc import ABC, abstractmethod
from typing import Optional

from comnet.domain.model.feed import ParsedFeed


class FeedClient(ABC):
    """Fetches and normalizes an RSS/Atom document.

    Implementations live in the adapter layer.
    """

    @abstractmethod
    async def fetch(self, url: str, max_items: Optional[int] = None) -> ParsedFeed:
        """Fetch a feed and normalize its entries.

        Args:
            url: Feed URL
            max_items: Keep only the first N entries (None keeps all)

        Returns:
            Normalized feed

        Raises:
            UpstreamFetchError: On timeout, network error, HTTP error status
                or a document that is not a feed
        """
        pass
