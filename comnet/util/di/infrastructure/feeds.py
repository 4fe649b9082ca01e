"""Feed infrastructure providers."""

from dishka import Scope, provide

from comnet.adapter.rss import HttpRssFeedClient
from comnet.config import NewsSettings
from comnet.domain.repository import FeedCache
from comnet.domain.service import FeedClient
from comnet.persistence.cache import InMemoryFeedCache
from comnet.util.di.base import ProviderBase
from comnet.util.observability import instrument_httpx


class FeedsProvider(ProviderBase):
    """Feeds component base (outbound feed client and feed cache)."""

    __mock_component__ = "feeds"


class ProdFeedsProvider(FeedsProvider):
    """Production feeds provider fetching over HTTP."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_feed_client(self, settings: NewsSettings) -> FeedClient:
        """Provide HTTP feed client."""
        instrument_httpx()
        return HttpRssFeedClient(
            timeout=settings.fetch_timeout_seconds,
            user_agent=settings.user_agent,
        )

    @provide(scope=Scope.APP)
    def get_feed_cache(self) -> FeedCache:
        """Provide the process-local feed cache."""
        return InMemoryFeedCache()
