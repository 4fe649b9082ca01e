"""Unit tests for FeedService."""

import asyncio
from datetime import timedelta

import pytest

from comnet.adapter.rss import MockRssFeedClient
from comnet.config import NewsSettings
from comnet.domain.error import InvalidArgumentError, NotFoundError
from comnet.domain.service import FeedService
from comnet.domain.value import FeedSourceId
from comnet.persistence.cache import InMemoryFeedCache
from comnet.persistence.repository.inmemory import InMemoryFeedSourceRepository
from tests.conftest import BASE_TIME, make_feed, make_item, make_source


class FakeClock:
    """Manually advanced clock."""

    def __init__(self) -> None:
        self.now = BASE_TIME

    def __call__(self):
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def feed_client():
    return MockRssFeedClient()


@pytest.fixture
def source_repository():
    return InMemoryFeedSourceRepository()


@pytest.fixture
def feed_service(feed_client, source_repository, clock):
    return FeedService(
        feed_client=feed_client,
        feed_cache=InMemoryFeedCache(),
        source_repository=source_repository,
        settings=NewsSettings(cache_window_seconds=300),
        clock=clock,
    )


class TestGetSourceFeed:
    """Tests for the per-source cache."""

    @pytest.mark.asyncio
    async def test_lookups_within_window_share_one_fetch(
        self, feed_service, feed_client, source_repository, clock
    ):
        source = await source_repository.add(make_source("alpha"))
        feed_client.add_feed(source.rss_url, make_feed(make_item("g1")))

        first = await feed_service.get_source_feed(source.id)
        clock.advance(299)
        second = await feed_service.get_source_feed(source.id)

        assert second == first
        assert feed_client.fetch_count(source.rss_url) == 1

    @pytest.mark.asyncio
    async def test_entry_is_refetched_once_window_elapsed(
        self, feed_service, feed_client, source_repository, clock
    ):
        source = await source_repository.add(make_source("alpha"))
        feed_client.add_feed(source.rss_url, make_feed(make_item("g1")))

        await feed_service.get_source_feed(source.id)
        clock.advance(300)
        entry = await feed_service.get_source_feed(source.id)
        await feed_service.get_source_feed(source.id)

        assert feed_client.fetch_count(source.rss_url) == 2
        assert entry.last_updated == clock.now

    @pytest.mark.asyncio
    async def test_failure_is_cached_as_error_entry(
        self, feed_service, feed_client, source_repository
    ):
        source = await source_repository.add(make_source("broken"))
        feed_client.fail(source.rss_url, "HTTP 503")

        entry = await feed_service.get_source_feed(source.id)
        again = await feed_service.get_source_feed(source.id)

        assert entry.feed is None
        assert entry.error == "Feed could not be loaded: HTTP 503"
        assert not entry.succeeded
        assert again == entry
        assert feed_client.fetch_count(source.rss_url) == 1

    @pytest.mark.asyncio
    async def test_items_are_limited_per_source(
        self, feed_service, feed_client, source_repository
    ):
        source = await source_repository.add(make_source("alpha", max_items=2))
        feed_client.add_feed(
            source.rss_url,
            make_feed(make_item("g1"), make_item("g2"), make_item("g3")),
        )

        entry = await feed_service.get_source_feed(source.id)

        assert [item.guid for item in entry.feed.items] == ["g1", "g2"]

    @pytest.mark.asyncio
    async def test_concurrent_lookups_fetch_once(
        self, feed_service, feed_client, source_repository
    ):
        source = await source_repository.add(make_source("alpha"))
        feed_client.add_feed(source.rss_url, make_feed(make_item("g1")))

        await asyncio.gather(
            *(feed_service.get_source_feed(source.id) for _ in range(5))
        )

        assert feed_client.fetch_count(source.rss_url) == 1

    @pytest.mark.asyncio
    async def test_unknown_source_is_not_found(self, feed_service):
        with pytest.raises(NotFoundError):
            await feed_service.get_source_feed(FeedSourceId("missing"))

    @pytest.mark.asyncio
    async def test_disabled_source_is_not_found(
        self, feed_service, source_repository
    ):
        source = await source_repository.add(make_source("off", enabled=False))

        with pytest.raises(NotFoundError):
            await feed_service.get_source_feed(source.id)


class TestGetAggregateFeed:
    """Tests for the merged feed."""

    @pytest.mark.asyncio
    async def test_items_merge_newest_first_and_truncate(
        self, feed_service, feed_client, source_repository
    ):
        a = await source_repository.add(make_source("a"))
        b = await source_repository.add(make_source("b"))
        feed_client.add_feed(
            a.rss_url, make_feed(make_item("g1", hours=3), make_item("g2", hours=1))
        )
        feed_client.add_feed(b.rss_url, make_feed(make_item("g3", hours=2)))

        feed = await feed_service.get_aggregate_feed(max_total_items=2)

        assert [item.guid for item in feed.items] == ["g1", "g3"]
        assert [item.source.id for item in feed.items] == ["a", "b"]
        assert feed.sources_succeeded == 2

    @pytest.mark.asyncio
    async def test_failing_source_is_left_out(
        self, feed_service, feed_client, source_repository
    ):
        healthy = await source_repository.add(make_source("healthy"))
        broken = await source_repository.add(make_source("broken"))
        feed_client.add_feed(healthy.rss_url, make_feed(make_item("g1")))
        feed_client.fail(broken.rss_url)

        feed = await feed_service.get_aggregate_feed()

        assert [item.guid for item in feed.items] == ["g1"]
        assert feed.sources_succeeded == 1

    @pytest.mark.asyncio
    async def test_default_limit_comes_from_catalog(
        self, feed_client, clock
    ):
        source_repository = InMemoryFeedSourceRepository(max_total_items=1)
        service = FeedService(
            feed_client=feed_client,
            feed_cache=InMemoryFeedCache(),
            source_repository=source_repository,
            settings=NewsSettings(max_total_items=50),
            clock=clock,
        )
        source = await source_repository.add(make_source("a"))
        feed_client.add_feed(
            source.rss_url, make_feed(make_item("g1", hours=1), make_item("g2"))
        )

        feed = await service.get_aggregate_feed()

        assert [item.guid for item in feed.items] == ["g1"]

    @pytest.mark.asyncio
    async def test_no_sources_yields_empty_feed(self, feed_service, clock):
        feed = await feed_service.get_aggregate_feed()

        assert feed.items == []
        assert feed.sources_succeeded == 0
        assert feed.last_updated == clock.now


class TestRefreshAllSources:
    """Tests for forced refresh."""

    @pytest.mark.asyncio
    async def test_refresh_refetches_fresh_entries(
        self, feed_service, feed_client, source_repository
    ):
        a = await source_repository.add(make_source("a"))
        b = await source_repository.add(make_source("b"))
        feed_client.add_feed(a.rss_url, make_feed(make_item("g1")))
        feed_client.fail(b.rss_url)

        await feed_service.get_aggregate_feed()
        result = await feed_service.refresh_all_sources()

        assert result.sources_refreshed == 2
        assert feed_client.fetch_count(a.rss_url) == 2
        assert feed_client.fetch_count(b.rss_url) == 2


class TestAddSource:
    """Tests for registering sources."""

    @pytest.mark.asyncio
    async def test_valid_feed_is_added_with_derived_id(
        self, feed_service, feed_client, source_repository
    ):
        url = "https://science.example.org/rss"
        feed_client.add_feed(url, make_feed(make_item("g1")))

        source = await feed_service.add_source(name="  Science  Daily ", rss_url=url)

        assert source.id == "science-daily"
        assert source.name == "Science  Daily"
        assert await source_repository.find_by_id(FeedSourceId("science-daily"))

    @pytest.mark.asyncio
    async def test_unreachable_feed_is_rejected(self, feed_service, source_repository):
        with pytest.raises(InvalidArgumentError, match="Invalid RSS URL"):
            await feed_service.add_source(
                name="Nowhere", rss_url="https://nowhere.example.org/rss"
            )
        assert await source_repository.find_enabled() == []

    @pytest.mark.asyncio
    async def test_duplicate_id_is_rejected(
        self, feed_service, feed_client, source_repository
    ):
        await source_repository.add(make_source("alpha"))
        url = "https://other.example.org/rss"
        feed_client.add_feed(url, make_feed(make_item("g1")))

        with pytest.raises(InvalidArgumentError):
            await feed_service.add_source(name="Alpha", rss_url=url)

    @pytest.mark.asyncio
    async def test_missing_name_is_rejected(self, feed_service):
        with pytest.raises(InvalidArgumentError):
            await feed_service.add_source(name=" ", rss_url="https://x.example.org")
