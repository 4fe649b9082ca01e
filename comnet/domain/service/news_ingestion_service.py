"""News ingestion domain service.

Turns configured feed sources into platform posts in two stages coupled
only by the ``state`` column of ingested items:

1. fetch/dedupe: new feed entries are persisted as UNPROCESSED news items
2. fan-out: every unprocessed item becomes one link post per subscribed
   network, then is marked PROCESSED

Stage 1 is committed before stage 2 starts, and every item is published in
its own savepoint and committed on its own. A crash or a failing item is
recovered by the next run, which rescans unprocessed items.
"""

import asyncio
from datetime import datetime, timezone
from uuid import uuid4

import logfire

from comnet.config import NewsSettings
from comnet.domain.error import UpstreamFetchError
from comnet.domain.model.community import Community
from comnet.domain.model.feed import NormalizedFeedItem, ParsedFeed
from comnet.domain.model.news import NewsChannel, NewsItem
from comnet.domain.model.post import Post
from comnet.domain.repository import (
    CommunityRepository,
    FeedSourceRepository,
    NewsChannelRepository,
    NewsItemRepository,
    NewsSubscriptionRepository,
    TransactionManager,
)
from comnet.domain.value import (
    CommunityId,
    ContentType,
    NetworkId,
    NewsChannelId,
    NewsItemId,
    PostId,
    UserId,
)
from comnet.domain.value.common import ValueObject

from .base import Service
from .feed_client import FeedClient
from .post_service import PostService

TITLE_MAX_LENGTH = 300
CONTENT_MAX_LENGTH = 10000


class IngestionResult(ValueObject):
    """Counts of one ingestion run."""

    items_fetched: int
    posts_created: int
    items_failed: int = 0


class FanOutResult(ValueObject):
    """Counts of one fan-out batch."""

    posts_created: int
    items_failed: int


class NewsIngestionService(Service):
    """Domain service for durable news ingestion and fan-out."""

    def __init__(
        self,
        feed_client: FeedClient,
        source_repository: FeedSourceRepository,
        channel_repository: NewsChannelRepository,
        item_repository: NewsItemRepository,
        subscription_repository: NewsSubscriptionRepository,
        community_repository: CommunityRepository,
        post_service: PostService,
        transaction_manager: TransactionManager,
        settings: NewsSettings,
    ) -> None:
        self.feed_client = feed_client
        self.source_repository = source_repository
        self.channel_repository = channel_repository
        self.item_repository = item_repository
        self.subscription_repository = subscription_repository
        self.community_repository = community_repository
        self.post_service = post_service
        self.transaction_manager = transaction_manager
        self.settings = settings

    async def run_ingestion(self) -> IngestionResult:
        """Run both stages once.

        Stored items are committed before fan-out starts, so a failure while
        publishing never discards them.

        Returns:
            Number of newly stored items, posts created and items whose
            fan-out failed
        """
        with logfire.span("news_ingestion_service.run_ingestion"):
            await self.sync_channels()

            channels = await self.channel_repository.find_active()
            fetched = await asyncio.gather(
                *(self._fetch_channel(channel) for channel in channels)
            )

            items_fetched = 0
            for channel, feed in zip(channels, fetched):
                if feed is None:
                    continue
                items_fetched += await self.ingest_channel_feed(channel, feed)

            await self.transaction_manager.commit()

            fan_out = await self.materialize_pending()

            logfire.info(
                "News ingestion finished",
                channels=len(channels),
                items_fetched=items_fetched,
                posts_created=fan_out.posts_created,
                items_failed=fan_out.items_failed,
            )
            return IngestionResult(
                items_fetched=items_fetched,
                posts_created=fan_out.posts_created,
                items_failed=fan_out.items_failed,
            )

    async def sync_channels(self) -> list[NewsChannel]:
        """Create a channel for every enabled source that has none yet.

        Returns:
            Newly created channels
        """
        with logfire.span("news_ingestion_service.sync_channels"):
            created = []
            for source in await self.source_repository.find_enabled():
                existing = await self.channel_repository.find_by_source_id(source.id)
                if existing is not None:
                    continue

                channel = await self.channel_repository.save(
                    NewsChannel(
                        id=NewsChannelId(uuid4()),
                        source_id=source.id,
                        name=source.name,
                        description=source.description,
                        profile_image=source.profile_image,
                        rss_url=source.rss_url,
                        category=source.category,
                        language=source.language,
                    )
                )
                logfire.info(
                    "News channel created",
                    channel_id=str(channel.id),
                    source_id=source.id,
                )
                created.append(channel)
            return created

    async def ingest_channel_feed(self, channel: NewsChannel, feed: ParsedFeed) -> int:
        """Persist the newest unseen entries of a fetched feed.

        Entries whose GUID is already stored for the channel, or repeated
        within the feed, are dropped. At most ``ingestion_batch_size``
        entries are kept, newest first.

        Returns:
            Number of items stored
        """
        with logfire.span(
            "news_ingestion_service.ingest_channel_feed",
            channel_id=str(channel.id),
            entries=len(feed.items),
        ):
            seen = await self.item_repository.find_guids_by_channel(channel.id)

            fresh: list[NormalizedFeedItem] = []
            for entry in feed.items:
                if not entry.guid or entry.guid in seen:
                    continue
                seen.add(entry.guid)
                fresh.append(entry)

            fresh.sort(key=lambda entry: entry.pub_date, reverse=True)
            batch = fresh[: self.settings.ingestion_batch_size]

            saved = await self.item_repository.save_many(
                [
                    NewsItem(
                        id=NewsItemId(uuid4()),
                        channel_id=channel.id,
                        guid=entry.guid,
                        title=entry.title,
                        content=entry.description,
                        link_url=entry.link,
                        pub_date=entry.pub_date,
                    )
                    for entry in batch
                ]
            )
            await self.channel_repository.mark_fetched(
                channel.id, datetime.now(timezone.utc)
            )

            logfire.info(
                "News items stored",
                channel_id=str(channel.id),
                stored=len(saved),
                skipped=len(feed.items) - len(saved),
            )
            return len(saved)

    async def materialize_pending(self) -> FanOutResult:
        """Fan out a batch of unprocessed items, newest first.

        Each item is published in its own savepoint and committed on
        success. An item whose fan-out raises is rolled back, logged and left
        unprocessed for a later run; the rest of the batch continues.
        """
        with logfire.span("news_ingestion_service.materialize_pending"):
            pending = await self.item_repository.find_unprocessed(
                limit=self.settings.fanout_batch_size
            )
            created = 0
            failed = 0
            for item in pending:
                try:
                    async with self.transaction_manager.savepoint():
                        created += await self.materialize_item(item.id)
                except Exception as e:
                    failed += 1
                    logfire.error(
                        "News item fan-out failed",
                        item_id=str(item.id),
                        guid=item.guid,
                        error=str(e),
                        error_type=type(e).__name__,
                    )
                    continue
                await self.transaction_manager.commit()
            return FanOutResult(posts_created=created, items_failed=failed)

    async def materialize_item(self, item_id: NewsItemId) -> int:
        """Create one post per subscribed network for a news item.

        Items already processed are left alone. Items without subscribers
        are marked processed without creating anything. The item row stays
        locked until the transaction ends, so a concurrent run waits and then
        sees it processed.

        Returns:
            Number of posts created
        """
        with logfire.span(
            "news_ingestion_service.materialize_item", item_id=str(item_id)
        ):
            item = await self.item_repository.find_by_id(item_id, for_update=True)
            if item is None or item.is_processed:
                return 0

            subscriptions = await self.subscription_repository.find_by_channel(
                item.channel_id
            )

            # First subscriber of each network authors that network's post
            authors: dict[NetworkId, UserId] = {}
            for subscription in subscriptions:
                authors.setdefault(subscription.network_id, subscription.user_id)

            for network_id, author_id in authors.items():
                community = await self._news_community(network_id, author_id)
                await self.post_service.create_post(
                    self._build_post(item, network_id, community.id, author_id)
                )

            await self.item_repository.mark_processed(item.id)

            if not authors:
                logfire.info("News item has no subscribers", item_id=str(item.id))
            else:
                logfire.info(
                    "News item published",
                    item_id=str(item.id),
                    networks=len(authors),
                )
            return len(authors)

    async def _fetch_channel(self, channel: NewsChannel) -> ParsedFeed | None:
        try:
            return await self.feed_client.fetch(channel.rss_url)
        except UpstreamFetchError as e:
            logfire.error(
                "News channel fetch failed",
                channel_id=str(channel.id),
                rss_url=channel.rss_url,
                error=e.reason,
            )
            return None

    async def _news_community(
        self, network_id: NetworkId, creator_id: UserId
    ) -> Community:
        """Find or create the news community of a network."""
        name = self.settings.news_community_name
        community = await self.community_repository.find_by_name(network_id, name)
        if community is not None:
            return community

        community = await self.community_repository.save(
            Community(
                id=CommunityId(uuid4()),
                network_id=network_id,
                name=name,
                display_name=self.settings.news_community_display_name,
                description=self.settings.news_community_description,
                creator_id=creator_id,
            )
        )
        logfire.info(
            "News community created",
            community_id=str(community.id),
            network_id=str(network_id),
        )
        return community

    def _build_post(
        self,
        item: NewsItem,
        network_id: NetworkId,
        community_id: CommunityId,
        author_id: UserId,
    ) -> Post:
        title = f"{self.settings.post_title_prefix}{item.title}"[:TITLE_MAX_LENGTH]
        return Post(
            id=PostId(uuid4()),
            network_id=network_id,
            community_id=community_id,
            author_id=author_id,
            title=title,
            content=item.content[:CONTENT_MAX_LENGTH] or None,
            content_type=ContentType.LINK if item.link_url else ContentType.TEXT,
            link_url=item.link_url or None,
        )
