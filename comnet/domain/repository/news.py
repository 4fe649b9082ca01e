"""News ingestion repository interfaces."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Sequence

from comnet.domain.model.news import NewsChannel, NewsItem, NewsSubscription
from comnet.domain.value import FeedSourceId, NewsChannelId, NewsItemId


class NewsChannelRepository(ABC):
    """Repository for durable news channels."""

    @abstractmethod
    async def find_by_source_id(
        self, source_id: FeedSourceId
    ) -> Optional[NewsChannel]:
        """Find the channel mirroring a feed source."""
        pass

    @abstractmethod
    async def find_active(self) -> List[NewsChannel]:
        """Find all active channels."""
        pass

    @abstractmethod
    async def save(self, channel: NewsChannel) -> NewsChannel:
        """Save a channel (create)."""
        pass

    @abstractmethod
    async def mark_fetched(self, channel_id: NewsChannelId, at: datetime) -> None:
        """Advance the channel's last-fetched timestamp."""
        pass


class NewsItemRepository(ABC):
    """Repository for ingested raw news items.

    The set of GUIDs already stored for a channel is the durable
    deduplication ledger of the ingestion pipeline.
    """

    @abstractmethod
    async def find_guids_by_channel(self, channel_id: NewsChannelId) -> set[str]:
        """Return every GUID already ingested for a channel.

        Args:
            channel_id: The channel ID

        Returns:
            Set of GUIDs
        """
        pass

    @abstractmethod
    async def save_many(self, items: Sequence[NewsItem]) -> List[NewsItem]:
        """Persist newly ingested items.

        An item whose (channel_id, guid) is already stored, for instance by
        an overlapping run, is skipped rather than failing the batch.

        Args:
            items: Items to insert (all UNPROCESSED)

        Returns:
            The items actually inserted
        """
        pass

    @abstractmethod
    async def find_by_id(
        self, item_id: NewsItemId, for_update: bool = False
    ) -> Optional[NewsItem]:
        """Find an item by ID.

        Args:
            item_id: The item ID
            for_update: Lock the row until the current transaction ends
        """
        pass

    @abstractmethod
    async def find_unprocessed(self, limit: int = 50) -> List[NewsItem]:
        """Find unprocessed items, newest publication date first.

        Args:
            limit: Maximum number of items to return

        Returns:
            List of unprocessed items
        """
        pass

    @abstractmethod
    async def mark_processed(self, item_id: NewsItemId) -> None:
        """Move an item to the PROCESSED state."""
        pass


class NewsSubscriptionRepository(ABC):
    """Repository for news channel subscriptions."""

    @abstractmethod
    async def find_by_channel(
        self, channel_id: NewsChannelId
    ) -> List[NewsSubscription]:
        """Find all subscriptions to a channel, oldest first."""
        pass

    @abstractmethod
    async def save(self, subscription: NewsSubscription) -> NewsSubscription:
        """Save a subscription (create)."""
        pass
