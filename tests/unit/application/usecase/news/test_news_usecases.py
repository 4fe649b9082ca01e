"""Unit tests for news use cases."""

import pytest

from comnet.adapter.rss import MockRssFeedClient
from comnet.application.usecase.news import (
    AddSourceRequest,
    AddSourceUseCase,
    GetAggregateFeedRequest,
    GetAggregateFeedUseCase,
    GetSourceFeedRequest,
    GetSourceFeedUseCase,
    ListSourcesUseCase,
    RefreshSourcesUseCase,
    RunIngestionUseCase,
)
from comnet.domain.error import InvalidArgumentError, NotFoundError
from comnet.domain.repository import FeedSourceRepository
from tests.conftest import make_feed, make_item, make_source
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestListSourcesUseCase:
    @pytest.mark.asyncio
    async def test_only_enabled_sources_are_listed(self, unit_env):
        use_case = await unit_env.get(ListSourcesUseCase)
        sources = await unit_env.get(FeedSourceRepository)

        await sources.add(make_source("alpha", profile_image="https://img/a.png"))
        await sources.add(make_source("off", enabled=False))

        response = await use_case.execute()

        assert response.total == 1
        assert response.sources[0].id == "alpha"
        assert response.sources[0].profile_image == "https://img/a.png"


class TestAddSourceUseCase:
    @pytest.mark.asyncio
    async def test_added_source_is_listed(self, unit_env):
        use_case = await unit_env.get(AddSourceUseCase)
        list_sources = await unit_env.get(ListSourcesUseCase)
        feed_client = await unit_env.get(MockRssFeedClient)

        url = "https://lab.example.org/feed"
        feed_client.add_feed(url, make_feed(make_item("g1")))

        response = await use_case.execute(
            AddSourceRequest(name="Lab News", rss_url=url, category="science")
        )

        assert response.source.id == "lab-news"
        assert response.source.category == "science"
        assert response.message == "Feed source added"
        assert [s.id for s in (await list_sources.execute()).sources] == ["lab-news"]

    @pytest.mark.asyncio
    async def test_invalid_feed_is_rejected(self, unit_env):
        use_case = await unit_env.get(AddSourceUseCase)

        with pytest.raises(InvalidArgumentError):
            await use_case.execute(
                AddSourceRequest(name="Broken", rss_url="https://broken.example.org")
            )


class TestGetSourceFeedUseCase:
    @pytest.mark.asyncio
    async def test_healthy_source_returns_feed(self, unit_env):
        use_case = await unit_env.get(GetSourceFeedUseCase)
        sources = await unit_env.get(FeedSourceRepository)
        feed_client = await unit_env.get(MockRssFeedClient)

        source = await sources.add(make_source("alpha"))
        feed_client.add_feed(source.rss_url, make_feed(make_item("g1")))

        response = await use_case.execute(GetSourceFeedRequest(source_id="alpha"))

        assert response.error is None
        assert response.feed.title == "Example Feed"
        assert [item.guid for item in response.feed.items] == ["g1"]
        assert response.feed.items[0].source is None

    @pytest.mark.asyncio
    async def test_failed_source_returns_error_without_feed(self, unit_env):
        use_case = await unit_env.get(GetSourceFeedUseCase)
        sources = await unit_env.get(FeedSourceRepository)
        feed_client = await unit_env.get(MockRssFeedClient)

        source = await sources.add(make_source("alpha"))
        feed_client.fail(source.rss_url, "timeout")

        response = await use_case.execute(GetSourceFeedRequest(source_id="alpha"))

        assert response.feed is None
        assert response.error == "Feed could not be loaded: timeout"
        assert response.source.id == "alpha"

    @pytest.mark.asyncio
    async def test_unknown_source_is_not_found(self, unit_env):
        use_case = await unit_env.get(GetSourceFeedUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(GetSourceFeedRequest(source_id="nope"))


class TestGetAggregateFeedUseCase:
    @pytest.mark.asyncio
    async def test_items_carry_their_source(self, unit_env):
        use_case = await unit_env.get(GetAggregateFeedUseCase)
        sources = await unit_env.get(FeedSourceRepository)
        feed_client = await unit_env.get(MockRssFeedClient)

        a = await sources.add(make_source("a"))
        b = await sources.add(make_source("b"))
        feed_client.add_feed(
            a.rss_url, make_feed(make_item("g1", hours=3), make_item("g2", hours=1))
        )
        feed_client.add_feed(b.rss_url, make_feed(make_item("g3", hours=2)))

        response = await use_case.execute(GetAggregateFeedRequest(max_items=2))

        assert [item.guid for item in response.items] == ["g1", "g3"]
        assert [item.source.id for item in response.items] == ["a", "b"]
        assert response.total == 2
        assert response.sources == 2


class TestRefreshSourcesUseCase:
    @pytest.mark.asyncio
    async def test_reports_refreshed_sources(self, unit_env):
        use_case = await unit_env.get(RefreshSourcesUseCase)
        sources = await unit_env.get(FeedSourceRepository)
        feed_client = await unit_env.get(MockRssFeedClient)

        source = await sources.add(make_source("alpha"))
        feed_client.add_feed(source.rss_url, make_feed(make_item("g1")))

        response = await use_case.execute()

        assert response.sources_refreshed == 1
        assert response.message == "Feeds refreshed"
        assert feed_client.fetch_count(source.rss_url) == 1


class TestRunIngestionUseCase:
    @pytest.mark.asyncio
    async def test_reports_counts(self, unit_env):
        use_case = await unit_env.get(RunIngestionUseCase)
        sources = await unit_env.get(FeedSourceRepository)
        feed_client = await unit_env.get(MockRssFeedClient)

        source = await sources.add(make_source("alpha"))
        feed_client.add_feed(
            source.rss_url, make_feed(make_item("g1"), make_item("g2", hours=1))
        )

        response = await use_case.execute()

        assert response.items_fetched == 2
        assert response.posts_created == 0
