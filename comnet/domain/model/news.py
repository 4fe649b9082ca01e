"""Durable news ingestion entities.

A NewsChannel mirrors a configured feed source in the database. Every
newly seen feed entry becomes a NewsItem which is later materialized as
platform posts, once per subscribed network.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from comnet.domain.model.common import DomainModel
from comnet.domain.value import (
    FeedSourceId,
    NetworkId,
    NewsChannelId,
    NewsItemId,
    ProcessingState,
    UserId,
)


class NewsChannel(DomainModel):
    """Durable mirror of a feed source."""

    id: NewsChannelId
    source_id: FeedSourceId
    name: str
    description: str = ""
    profile_image: str = ""
    rss_url: str
    category: str = "news"
    language: str = "de"
    is_active: bool = True
    last_fetched_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class NewsItem(DomainModel):
    """Raw ingested feed entry.

    Unique per (channel_id, guid). ``state`` couples the fetch stage and the
    fan-out stage: fan-out only ever looks at UNPROCESSED rows.
    """

    id: NewsItemId
    channel_id: NewsChannelId
    guid: str
    title: str
    content: str = ""
    link_url: str = ""
    pub_date: datetime
    state: ProcessingState = ProcessingState.UNPROCESSED
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_processed(self) -> bool:
        return self.state == ProcessingState.PROCESSED


class NewsSubscription(DomainModel):
    """A user's subscription to a news channel."""

    user_id: UserId
    network_id: NetworkId
    channel_id: NewsChannelId
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
