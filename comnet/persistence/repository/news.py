"""PostgreSQL implementations of the news ingestion repositories."""

from datetime import datetime
from typing import List, Optional, Sequence

from sqlalchemy import asc, desc, insert, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from comnet.domain.model import NewsChannel, NewsItem, NewsSubscription
from comnet.domain.repository import (
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
from comnet.persistence.mappers import (
    news_channel_to_dict,
    news_item_to_dict,
    news_subscription_to_dict,
    row_to_news_channel,
    row_to_news_item,
    row_to_news_subscription,
)
from comnet.persistence.tables import (
    news_channels_table,
    news_items_table,
    news_subscriptions_table,
)


class PostgresNewsChannelRepository(NewsChannelRepository):
    """PostgreSQL implementation of NewsChannelRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_source_id(
        self, source_id: FeedSourceId
    ) -> Optional[NewsChannel]:
        stmt = select(news_channels_table).where(
            news_channels_table.c.source_id == source_id
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_news_channel(row._asdict()) if row else None

    async def find_active(self) -> List[NewsChannel]:
        stmt = (
            select(news_channels_table)
            .where(news_channels_table.c.is_active.is_(True))
            .order_by(asc(news_channels_table.c.created_at))
        )
        result = await self.session.execute(stmt)
        return [row_to_news_channel(row._asdict()) for row in result.fetchall()]

    async def save(self, channel: NewsChannel) -> NewsChannel:
        stmt = insert(news_channels_table).values(**news_channel_to_dict(channel))
        await self.session.execute(stmt)
        await self.session.flush()
        return channel

    async def mark_fetched(self, channel_id: NewsChannelId, at: datetime) -> None:
        stmt = (
            update(news_channels_table)
            .where(news_channels_table.c.id == channel_id)
            .values(last_fetched_at=at)
        )
        await self.session.execute(stmt)
        await self.session.flush()


class PostgresNewsItemRepository(NewsItemRepository):
    """PostgreSQL implementation of NewsItemRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_guids_by_channel(self, channel_id: NewsChannelId) -> set[str]:
        stmt = select(news_items_table.c.guid).where(
            news_items_table.c.channel_id == channel_id
        )
        result = await self.session.execute(stmt)
        return set(result.scalars().all())

    async def save_many(self, items: Sequence[NewsItem]) -> List[NewsItem]:
        if not items:
            return []

        stmt = (
            pg_insert(news_items_table)
            .values([news_item_to_dict(item) for item in items])
            .on_conflict_do_nothing(index_elements=["channel_id", "guid"])
            .returning(news_items_table.c.id)
        )
        result = await self.session.execute(stmt)
        inserted = set(result.scalars().all())
        await self.session.flush()
        return [item for item in items if item.id in inserted]

    async def find_by_id(
        self, item_id: NewsItemId, for_update: bool = False
    ) -> Optional[NewsItem]:
        stmt = select(news_items_table).where(news_items_table.c.id == item_id)
        if for_update:
            stmt = stmt.with_for_update()

        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_news_item(row._asdict()) if row else None

    async def find_unprocessed(self, limit: int = 50) -> List[NewsItem]:
        stmt = (
            select(news_items_table)
            .where(news_items_table.c.state == ProcessingState.UNPROCESSED.value)
            .order_by(desc(news_items_table.c.pub_date))
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [row_to_news_item(row._asdict()) for row in result.fetchall()]

    async def mark_processed(self, item_id: NewsItemId) -> None:
        stmt = (
            update(news_items_table)
            .where(news_items_table.c.id == item_id)
            .values(state=ProcessingState.PROCESSED.value)
        )
        await self.session.execute(stmt)
        await self.session.flush()


class PostgresNewsSubscriptionRepository(NewsSubscriptionRepository):
    """PostgreSQL implementation of NewsSubscriptionRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_channel(
        self, channel_id: NewsChannelId
    ) -> List[NewsSubscription]:
        stmt = (
            select(news_subscriptions_table)
            .where(news_subscriptions_table.c.channel_id == channel_id)
            .order_by(asc(news_subscriptions_table.c.created_at))
        )
        result = await self.session.execute(stmt)
        return [row_to_news_subscription(row._asdict()) for row in result.fetchall()]

    async def save(self, subscription: NewsSubscription) -> NewsSubscription:
        stmt = insert(news_subscriptions_table).values(
            **news_subscription_to_dict(subscription)
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return subscription
