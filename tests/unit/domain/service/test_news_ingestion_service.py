"""Unit tests for NewsIngestionService."""

from uuid import uuid4

import pytest

from comnet.adapter.rss import MockRssFeedClient
from comnet.domain.model.news import NewsSubscription
from comnet.domain.repository import (
    CommunityRepository,
    FeedSourceRepository,
    NewsChannelRepository,
    NewsItemRepository,
    NewsSubscriptionRepository,
    PostRepository,
    TransactionManager,
)
from comnet.domain.service import NewsIngestionService
from comnet.domain.value import ContentType, NetworkId, PostSortOrder, UserId
from tests.conftest import make_feed, make_item, make_source
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def subscribe(env, source_id: str, network_id: NetworkId) -> UserId:
    """Create the channel of a source and subscribe a new user to it."""
    service = await env.get(NewsIngestionService)
    channel_repo = await env.get(NewsChannelRepository)
    subscription_repo = await env.get(NewsSubscriptionRepository)

    await service.sync_channels()
    channel = await channel_repo.find_by_source_id(source_id)
    user_id = UserId(uuid4())
    await subscription_repo.save(
        NewsSubscription(user_id=user_id, network_id=network_id, channel_id=channel.id)
    )
    return user_id


class TestRunIngestion:
    """Tests for the full ingestion run."""

    @pytest.mark.asyncio
    async def test_second_run_over_unchanged_feed_creates_nothing(self, unit_env):
        service = await unit_env.get(NewsIngestionService)
        sources = await unit_env.get(FeedSourceRepository)
        feed_client = await unit_env.get(MockRssFeedClient)
        post_repo = await unit_env.get(PostRepository)

        source = await sources.add(make_source("alpha"))
        feed_client.add_feed(
            source.rss_url, make_feed(make_item("g1", hours=1), make_item("g2"))
        )
        network_id = NetworkId(uuid4())
        await subscribe(unit_env, "alpha", network_id)

        first = await service.run_ingestion()
        second = await service.run_ingestion()

        assert (first.items_fetched, first.posts_created) == (2, 2)
        assert (second.items_fetched, second.posts_created) == (0, 0)
        assert await post_repo.count(network_id) == 2

    @pytest.mark.asyncio
    async def test_one_post_per_subscribed_network(self, unit_env):
        service = await unit_env.get(NewsIngestionService)
        sources = await unit_env.get(FeedSourceRepository)
        feed_client = await unit_env.get(MockRssFeedClient)
        post_repo = await unit_env.get(PostRepository)
        community_repo = await unit_env.get(CommunityRepository)

        source = await sources.add(make_source("alpha"))
        feed_client.add_feed(source.rss_url, make_feed(make_item("g1")))

        n1, n2 = NetworkId(uuid4()), NetworkId(uuid4())
        first_in_n1 = await subscribe(unit_env, "alpha", n1)
        await subscribe(unit_env, "alpha", n1)
        await subscribe(unit_env, "alpha", n2)

        result = await service.run_ingestion()

        assert result.posts_created == 2
        n1_posts = await post_repo.find_all(n1, sort=PostSortOrder.NEW)
        n2_posts = await post_repo.find_all(n2, sort=PostSortOrder.NEW)
        assert len(n1_posts) == 1
        assert len(n2_posts) == 1

        post = n1_posts[0]
        assert post.author_id == first_in_n1
        assert post.title == "📰 Item g1"
        assert post.content_type == ContentType.LINK
        assert post.link_url == "https://example.org/g1"

        news_community = await community_repo.find_by_name(n1, "news")
        assert news_community is not None
        assert post.community_id == news_community.id

    @pytest.mark.asyncio
    async def test_item_without_subscribers_is_marked_processed(self, unit_env):
        service = await unit_env.get(NewsIngestionService)
        sources = await unit_env.get(FeedSourceRepository)
        feed_client = await unit_env.get(MockRssFeedClient)
        item_repo = await unit_env.get(NewsItemRepository)

        source = await sources.add(make_source("alpha"))
        feed_client.add_feed(source.rss_url, make_feed(make_item("g1")))

        result = await service.run_ingestion()

        assert (result.items_fetched, result.posts_created) == (1, 0)
        assert all(item.is_processed for item in item_repo.all())
        assert await item_repo.find_unprocessed() == []

    @pytest.mark.asyncio
    async def test_failing_channel_does_not_stop_others(self, unit_env):
        service = await unit_env.get(NewsIngestionService)
        sources = await unit_env.get(FeedSourceRepository)
        feed_client = await unit_env.get(MockRssFeedClient)
        channel_repo = await unit_env.get(NewsChannelRepository)

        healthy = await sources.add(make_source("healthy"))
        broken = await sources.add(make_source("broken"))
        feed_client.add_feed(healthy.rss_url, make_feed(make_item("g1")))
        feed_client.fail(broken.rss_url, "timeout")

        result = await service.run_ingestion()

        assert result.items_fetched == 1
        healthy_channel = await channel_repo.find_by_source_id("healthy")
        broken_channel = await channel_repo.find_by_source_id("broken")
        assert healthy_channel.last_fetched_at is not None
        assert broken_channel.last_fetched_at is None


class TestIngestChannelFeed:
    """Tests for the fetch/dedupe stage."""

    @pytest.mark.asyncio
    async def test_duplicates_and_empty_guids_are_skipped(self, unit_env):
        service = await unit_env.get(NewsIngestionService)
        sources = await unit_env.get(FeedSourceRepository)
        channel_repo = await unit_env.get(NewsChannelRepository)
        item_repo = await unit_env.get(NewsItemRepository)

        await sources.add(make_source("alpha"))
        (channel,) = await service.sync_channels()

        stored = await service.ingest_channel_feed(
            channel,
            make_feed(make_item("g1"), make_item("g1"), make_item("", link="")),
        )
        again = await service.ingest_channel_feed(channel, make_feed(make_item("g1")))

        assert stored == 1
        assert again == 0
        assert [item.guid for item in item_repo.all()] == ["g1"]
        assert (await channel_repo.find_by_source_id("alpha")).last_fetched_at

    @pytest.mark.asyncio
    async def test_batch_keeps_newest_entries(self, unit_env):
        service = await unit_env.get(NewsIngestionService)
        sources = await unit_env.get(FeedSourceRepository)
        item_repo = await unit_env.get(NewsItemRepository)

        await sources.add(make_source("alpha"))
        (channel,) = await service.sync_channels()
        entries = [make_item(f"g{i}", hours=i) for i in range(12)]

        stored = await service.ingest_channel_feed(channel, make_feed(*entries))

        assert stored == 10
        guids = {item.guid for item in item_repo.all()}
        assert "g0" not in guids
        assert "g1" not in guids
        assert "g11" in guids

    @pytest.mark.asyncio
    async def test_sync_channels_is_idempotent(self, unit_env):
        service = await unit_env.get(NewsIngestionService)
        sources = await unit_env.get(FeedSourceRepository)

        await sources.add(make_source("alpha"))
        await sources.add(make_source("off", enabled=False))

        created = await service.sync_channels()
        again = await service.sync_channels()

        assert [channel.source_id for channel in created] == ["alpha"]
        assert again == []


class TestMaterializeItem:
    """Tests for the fan-out stage."""

    @pytest.mark.asyncio
    async def test_processed_item_is_not_published_twice(self, unit_env):
        service = await unit_env.get(NewsIngestionService)
        sources = await unit_env.get(FeedSourceRepository)
        channel_repo = await unit_env.get(NewsChannelRepository)
        item_repo = await unit_env.get(NewsItemRepository)
        post_repo = await unit_env.get(PostRepository)

        await sources.add(make_source("alpha"))
        network_id = NetworkId(uuid4())
        await subscribe(unit_env, "alpha", network_id)
        alpha = await channel_repo.find_by_source_id("alpha")
        await service.ingest_channel_feed(alpha, make_feed(make_item("g1")))
        (item,) = item_repo.all()

        assert await service.materialize_item(item.id) == 1
        assert await service.materialize_item(item.id) == 0
        assert await post_repo.count(network_id) == 1

    @pytest.mark.asyncio
    async def test_item_without_link_becomes_text_post(self, unit_env):
        service = await unit_env.get(NewsIngestionService)
        sources = await unit_env.get(FeedSourceRepository)
        channel_repo = await unit_env.get(NewsChannelRepository)
        item_repo = await unit_env.get(NewsItemRepository)
        post_repo = await unit_env.get(PostRepository)

        await sources.add(make_source("alpha"))
        network_id = NetworkId(uuid4())
        await subscribe(unit_env, "alpha", network_id)
        alpha = await channel_repo.find_by_source_id("alpha")
        await service.ingest_channel_feed(
            alpha, make_feed(make_item("g1", link="", title="x" * 400))
        )
        (item,) = item_repo.all()

        await service.materialize_item(item.id)

        (post,) = await post_repo.find_all(network_id)
        assert post.content_type == ContentType.TEXT
        assert post.link_url is None
        assert len(post.title) == 300


class TestFanOutFailures:
    """A failing item must not take the rest of the run down with it."""

    @pytest.mark.asyncio
    async def test_failing_item_stays_unprocessed_and_batch_continues(
        self, unit_env, monkeypatch
    ):
        service = await unit_env.get(NewsIngestionService)
        sources = await unit_env.get(FeedSourceRepository)
        feed_client = await unit_env.get(MockRssFeedClient)
        item_repo = await unit_env.get(NewsItemRepository)
        post_repo = await unit_env.get(PostRepository)
        transactions = await unit_env.get(TransactionManager)

        source = await sources.add(make_source("alpha"))
        feed_client.add_feed(
            source.rss_url, make_feed(make_item("g1", hours=1), make_item("g2"))
        )
        network_id = NetworkId(uuid4())
        await subscribe(unit_env, "alpha", network_id)

        create_post = service.post_service.create_post
        calls = 0

        async def fail_first_call(post):
            nonlocal calls
            calls += 1
            if calls == 1:
                raise RuntimeError("transient db error")
            return await create_post(post)

        monkeypatch.setattr(service.post_service, "create_post", fail_first_call)

        result = await service.run_ingestion()

        assert (result.items_fetched, result.posts_created, result.items_failed) == (
            2,
            1,
            1,
        )
        pending = await item_repo.find_unprocessed()
        assert [item.guid for item in pending] == ["g1"]
        assert await post_repo.count(network_id) == 1
        assert transactions.rollbacks == 1
        # stored items, then the one published item
        assert transactions.commits == 2

    @pytest.mark.asyncio
    async def test_failed_item_is_published_by_next_run_without_reingest(
        self, unit_env, monkeypatch
    ):
        service = await unit_env.get(NewsIngestionService)
        sources = await unit_env.get(FeedSourceRepository)
        feed_client = await unit_env.get(MockRssFeedClient)
        item_repo = await unit_env.get(NewsItemRepository)
        post_repo = await unit_env.get(PostRepository)

        source = await sources.add(make_source("alpha"))
        feed_client.add_feed(source.rss_url, make_feed(make_item("g1")))
        network_id = NetworkId(uuid4())
        await subscribe(unit_env, "alpha", network_id)

        create_post = service.post_service.create_post

        async def broken(post):
            raise RuntimeError("transient db error")

        monkeypatch.setattr(service.post_service, "create_post", broken)
        first = await service.run_ingestion()

        monkeypatch.setattr(service.post_service, "create_post", create_post)
        second = await service.run_ingestion()

        assert (first.items_fetched, first.posts_created, first.items_failed) == (1, 0, 1)
        assert (second.items_fetched, second.posts_created, second.items_failed) == (
            0,
            1,
            0,
        )
        assert len(item_repo.all()) == 1
        assert await item_repo.find_unprocessed() == []
        assert await post_repo.count(network_id) == 1


class TestOverlappingRuns:
    """Two runs racing on the same feed."""

    @pytest.mark.asyncio
    async def test_guid_stored_by_another_run_is_skipped(self, unit_env, monkeypatch):
        service = await unit_env.get(NewsIngestionService)
        sources = await unit_env.get(FeedSourceRepository)
        channel_repo = await unit_env.get(NewsChannelRepository)
        item_repo = await unit_env.get(NewsItemRepository)

        await sources.add(make_source("alpha"))
        await service.sync_channels()
        alpha = await channel_repo.find_by_source_id("alpha")
        await service.ingest_channel_feed(alpha, make_feed(make_item("g1")))

        # The dedupe read happened before the other run's insert landed
        async def stale_guids(channel_id):
            return set()

        monkeypatch.setattr(item_repo, "find_guids_by_channel", stale_guids)

        stored = await service.ingest_channel_feed(
            alpha, make_feed(make_item("g1"), make_item("g2"))
        )

        assert stored == 1
        assert sorted(item.guid for item in item_repo.all()) == ["g1", "g2"]
