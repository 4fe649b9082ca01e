"""Feed domain service.

Serves the on-demand news views: a bounded-staleness cache over every
configured feed source, with failures isolated per source.
"""

import asyncio
import re
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import logfire

from comnet.config import NewsSettings
from comnet.domain.error import InvalidArgumentError, NotFoundError, UpstreamFetchError
from comnet.domain.model.feed import (
    AggregatedFeedItem,
    FeedCacheEntry,
    FeedSource,
    FeedSourceSummary,
)
from comnet.domain.repository import FeedCache, FeedSourceRepository
from comnet.domain.value import FeedSourceId
from comnet.domain.value.common import ValueObject

from .base import Service
from .feed_client import FeedClient


Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AggregateFeed(ValueObject):
    """Merged view over all sources whose last fetch succeeded."""

    items: list[AggregatedFeedItem]
    sources_succeeded: int
    last_updated: datetime


class RefreshResult(ValueObject):
    """Outcome of a forced refresh of every source."""

    sources_refreshed: int
    timestamp: datetime


class FeedService(Service):
    """Domain service for the cached news feed.

    Per source the cache moves Unfetched -> Fresh -> Stale -> Fresh. A lookup
    refetches when there is no entry or the entry is at least one cache
    window old. Failed fetches are cached too, so a broken source is retried
    at most once per window.
    """

    def __init__(
        self,
        feed_client: FeedClient,
        feed_cache: FeedCache,
        source_repository: FeedSourceRepository,
        settings: NewsSettings,
        clock: Clock = utc_now,
    ) -> None:
        """Initialize feed service.

        Args:
            feed_client: Client used to fetch feed documents
            feed_cache: Store for the latest fetch outcome per source
            source_repository: Catalog of configured sources
            settings: News settings (cache window, default sizes)
            clock: Source of the current time
        """
        self.feed_client = feed_client
        self.feed_cache = feed_cache
        self.source_repository = source_repository
        self.settings = settings
        self.clock = clock
        self._locks: dict[str, asyncio.Lock] = {}

    @property
    def cache_window(self) -> timedelta:
        return timedelta(seconds=self.settings.cache_window_seconds)

    async def list_sources(self) -> list[FeedSource]:
        """Return all enabled sources."""
        return await self.source_repository.find_enabled()

    async def get_source_feed(self, source_id: FeedSourceId) -> FeedCacheEntry:
        """Get the cached feed of one source, refetching it when stale.

        Args:
            source_id: Source ID

        Returns:
            Cache entry; may carry an error instead of a feed

        Raises:
            NotFoundError: If the source is unknown or disabled
        """
        with logfire.span("feed_service.get_source_feed", source_id=source_id):
            source = await self.source_repository.find_by_id(source_id)
            if source is None or not source.enabled:
                logfire.warn("Feed source not found", source_id=source_id)
                raise NotFoundError("Feed source", source_id)

            return await self._lookup(source)

    async def get_aggregate_feed(
        self, max_total_items: Optional[int] = None
    ) -> AggregateFeed:
        """Merge the items of every healthy source, newest first.

        Sources whose last fetch failed are left out.

        Args:
            max_total_items: Maximum number of items to return (defaults to
                the catalog setting, then to the configured default)

        Returns:
            Aggregated feed
        """
        with logfire.span(
            "feed_service.get_aggregate_feed", max_total_items=max_total_items
        ):
            sources = await self.source_repository.find_enabled()
            entries = await asyncio.gather(*(self._lookup(s) for s in sources))

            healthy = [entry for entry in entries if entry.succeeded]

            items: list[AggregatedFeedItem] = []
            for entry in healthy:
                summary = FeedSourceSummary.of(entry.source)
                items.extend(
                    AggregatedFeedItem(**item.model_dump(), source=summary)
                    for item in entry.feed.items
                )

            items.sort(key=lambda item: item.pub_date, reverse=True)

            limit = await self._resolve_max_total_items(max_total_items)
            limited = items[:limit]

            logfire.info(
                "Aggregate feed built",
                sources=len(sources),
                sources_succeeded=len(healthy),
                items=len(limited),
                items_available=len(items),
            )

            return AggregateFeed(
                items=limited,
                sources_succeeded=len(healthy),
                last_updated=self.clock(),
            )

    async def refresh_all_sources(self) -> RefreshResult:
        """Drop every cache entry and refetch all enabled sources."""
        with logfire.span("feed_service.refresh_all_sources"):
            sources = await self.source_repository.find_enabled()

            await self.feed_cache.clear()
            await asyncio.gather(*(self._lookup(s) for s in sources))

            logfire.info("Feed cache refreshed", sources_refreshed=len(sources))
            return RefreshResult(
                sources_refreshed=len(sources), timestamp=self.clock()
            )

    async def add_source(
        self,
        name: str,
        rss_url: str,
        description: str = "",
        profile_image: str = "",
        category: str = "news",
        language: str = "de",
    ) -> FeedSource:
        """Register a new feed source after checking its URL yields a feed.

        The source ID is derived from the name (lower-cased, whitespace
        runs replaced by hyphens).

        Raises:
            InvalidArgumentError: If name or URL is missing, the URL does not
                yield a feed, or the derived ID is already taken
        """
        with logfire.span("feed_service.add_source", name=name, rss_url=rss_url):
            if not name or not name.strip() or not rss_url or not rss_url.strip():
                raise InvalidArgumentError("Name and RSS URL are required")

            try:
                await self.feed_client.fetch(rss_url, max_items=1)
            except UpstreamFetchError as e:
                logfire.warn("Rejected feed source", rss_url=rss_url, error=str(e))
                raise InvalidArgumentError("Invalid RSS URL")

            source_id = FeedSourceId(re.sub(r"\s+", "-", name.strip().lower()))
            if await self.source_repository.find_by_id(source_id) is not None:
                raise InvalidArgumentError(f"Feed source already exists: {source_id}")

            source = FeedSource(
                id=source_id,
                name=name.strip(),
                description=description,
                profile_image=profile_image,
                rss_url=rss_url.strip(),
                category=category or "news",
                language=language or "de",
            )
            saved = await self.source_repository.add(source)
            logfire.info("Feed source added", source_id=saved.id)
            return saved

    async def _lookup(self, source: FeedSource) -> FeedCacheEntry:
        """Return the cached entry for a source, fetching it if stale.

        Concurrent lookups of the same key share one fetch.
        """
        key = source.cache_key
        lock = self._locks.setdefault(key, asyncio.Lock())

        async with lock:
            cached = await self.feed_cache.get(key)
            if cached is not None and not self._is_stale(cached):
                logfire.debug("Feed cache hit", source_id=source.id)
                return cached

            entry = await self._fetch_entry(source)
            await self.feed_cache.set(key, entry)
            return entry

    def _is_stale(self, entry: FeedCacheEntry) -> bool:
        return self.clock() - entry.last_updated >= self.cache_window

    async def _fetch_entry(self, source: FeedSource) -> FeedCacheEntry:
        """Fetch a source and wrap the outcome, success or failure."""
        try:
            feed = await self.feed_client.fetch(
                source.rss_url, max_items=source.max_items
            )
        except UpstreamFetchError as e:
            logfire.warn(
                "Feed fetch failed",
                source_id=source.id,
                rss_url=source.rss_url,
                error=e.reason,
            )
            return FeedCacheEntry(
                source=source, feed=None, last_updated=self.clock(), error=str(e)
            )

        logfire.info("Feed fetched", source_id=source.id, items=len(feed.items))
        return FeedCacheEntry(
            source=source, feed=feed, last_updated=self.clock(), error=None
        )

    async def _resolve_max_total_items(self, requested: Optional[int]) -> int:
        if requested is not None:
            return max(requested, 0)
        configured = await self.source_repository.max_total_items()
        if configured:
            return configured
        return self.settings.max_total_items
