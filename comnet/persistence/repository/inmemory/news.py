"""In-memory news ingestion repositories for testing."""

from datetime import datetime
from typing import Optional, Sequence

from comnet.domain.model.news import NewsChannel, NewsItem, NewsSubscription
from comnet.domain.repository.news import (
    NewsChannelRepository,
    NewsItemRepository,
    NewsSubscriptionRepository,
)
from comnet.domain.value import (
    FeedSourceId,
    NewsChannelId,
    NewsItemId,
    ProcessingState,
)


class InMemoryNewsChannelRepository(NewsChannelRepository):
    """In-memory implementation of NewsChannelRepository for testing."""

    def __init__(self) -> None:
        self._channels: dict[NewsChannelId, NewsChannel] = {}

    async def find_by_source_id(
        self, source_id: FeedSourceId
    ) -> Optional[NewsChannel]:
        for channel in self._channels.values():
            if channel.source_id == source_id:
                return channel
        return None

    async def find_active(self) -> list[NewsChannel]:
        return [c for c in self._channels.values() if c.is_active]

    async def save(self, channel: NewsChannel) -> NewsChannel:
        self._channels[channel.id] = channel
        return channel

    async def mark_fetched(self, channel_id: NewsChannelId, at: datetime) -> None:
        channel = self._channels.get(channel_id)
        if channel:
            self._channels[channel_id] = channel.model_copy(
                update={"last_fetched_at": at}
            )


class InMemoryNewsItemRepository(NewsItemRepository):
    """In-memory implementation of NewsItemRepository for testing."""

    def __init__(self) -> None:
        self._items: dict[NewsItemId, NewsItem] = {}

    async def find_guids_by_channel(self, channel_id: NewsChannelId) -> set[str]:
        return {i.guid for i in self._items.values() if i.channel_id == channel_id}

    async def save_many(self, items: Sequence[NewsItem]) -> list[NewsItem]:
        """Insert items, skipping (channel_id, guid) pairs already stored."""
        stored = {(i.channel_id, i.guid) for i in self._items.values()}
        inserted = []
        for item in items:
            if (item.channel_id, item.guid) in stored:
                continue
            stored.add((item.channel_id, item.guid))
            self._items[item.id] = item
            inserted.append(item)
        return inserted

    async def find_by_id(
        self, item_id: NewsItemId, for_update: bool = False
    ) -> Optional[NewsItem]:
        """Find an item by ID (locking is a no-op)."""
        return self._items.get(item_id)

    async def find_unprocessed(self, limit: int = 50) -> list[NewsItem]:
        pending = [i for i in self._items.values() if not i.is_processed]
        pending.sort(key=lambda i: i.pub_date, reverse=True)
        return pending[:limit]

    async def mark_processed(self, item_id: NewsItemId) -> None:
        item = self._items.get(item_id)
        if item:
            self._items[item_id] = item.model_copy(
                update={"state": ProcessingState.PROCESSED}
            )

    def all(self) -> list[NewsItem]:
        return list(self._items.values())


class InMemoryNewsSubscriptionRepository(NewsSubscriptionRepository):
    """In-memory implementation of NewsSubscriptionRepository for testing."""

    def __init__(self) -> None:
        self._subscriptions: list[NewsSubscription] = []

    async def find_by_channel(
        self, channel_id: NewsChannelId
    ) -> list[NewsSubscription]:
        matching = [s for s in self._subscriptions if s.channel_id == channel_id]
        return sorted(matching, key=lambda s: s.created_at)

    async def save(self, subscription: NewsSubscription) -> NewsSubscription:
        self._subscriptions.append(subscription)
        return subscription
