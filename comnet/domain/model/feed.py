"""Syndication feed models.

These describe external RSS/Atom feeds as seen by the news cache: the
configured source, a normalized snapshot of its items, and the cache entry
that stores the outcome of the last fetch attempt.
"""

from datetime import datetime
from typing import Optional

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from comnet.domain.model.common import DomainModel
from comnet.domain.value import FeedSourceId


class FeedSource(DomainModel):
    """Externally configured feed channel.

    Loaded from the sources catalog, which uses camelCase keys
    (``rssUrl``, ``maxItems``); snake_case is accepted too.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: FeedSourceId
    name: str = Field(min_length=1)
    description: str = ""
    profile_image: str = ""
    rss_url: str = Field(min_length=1)
    category: str = "news"
    language: str = "de"
    enabled: bool = True
    max_items: int = Field(default=20, ge=1)
    refresh_interval: int = 30

    @property
    def cache_key(self) -> str:
        """Key under which fetch results for this source are cached."""
        return f"{self.id}_{self.rss_url}"


class FeedEnclosure(DomainModel):
    """Media attachment of a feed item."""

    url: str
    type: Optional[str] = None
    length: Optional[int] = None


class NormalizedFeedItem(DomainModel):
    """A single feed entry with defaults applied.

    ``guid`` falls back to the link when the upstream entry has no id.
    """

    title: str
    description: str = ""
    link: str = ""
    pub_date: datetime
    guid: str
    categories: list[str] = Field(default_factory=list)
    creator: str = ""
    enclosure: Optional[FeedEnclosure] = None


class ParsedFeed(DomainModel):
    """Normalized snapshot of a fetched feed document."""

    title: str
    description: str = ""
    link: str = ""
    last_build_date: datetime
    items: list[NormalizedFeedItem] = Field(default_factory=list)


class FeedCacheEntry(DomainModel):
    """Outcome of the most recent fetch of one source.

    A failed fetch is cached as well: ``feed`` is None and ``error`` carries
    the reason.
    """

    source: FeedSource
    feed: Optional[ParsedFeed] = None
    last_updated: datetime
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.feed is not None and self.error is None


class FeedSourceSummary(DomainModel):
    """Public description of a source attached to aggregated items."""

    id: FeedSourceId
    name: str
    profile_image: str = ""
    category: str = "news"

    @classmethod
    def of(cls, source: FeedSource) -> "FeedSourceSummary":
        return cls(
            id=source.id,
            name=source.name,
            profile_image=source.profile_image,
            category=source.category,
        )


class AggregatedFeedItem(NormalizedFeedItem):
    """Feed item tagged with the source it came from."""

    source: FeedSourceSummary
