"""Domain model entities for COMNet."""

from comnet.domain.model.comment import Comment
from comnet.domain.model.community import Community
from comnet.domain.model.feed import (
    AggregatedFeedItem,
    FeedCacheEntry,
    FeedEnclosure,
    FeedSource,
    FeedSourceSummary,
    NormalizedFeedItem,
    ParsedFeed,
)
from comnet.domain.model.news import NewsChannel, NewsItem, NewsSubscription
from comnet.domain.model.post import Post
from comnet.domain.model.vote import Vote

__all__ = [
    "Post",
    "Comment",
    "Community",
    "Vote",
    "FeedSource",
    "FeedSourceSummary",
    "FeedEnclosure",
    "NormalizedFeedItem",
    "AggregatedFeedItem",
    "ParsedFeed",
    "FeedCacheEntry",
    "NewsChannel",
    "NewsItem",
    "NewsSubscription",
]
