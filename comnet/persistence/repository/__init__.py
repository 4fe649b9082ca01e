"""Repository implementations."""

from comnet.persistence.repository.comment import PostgresCommentRepository
from comnet.persistence.repository.community import PostgresCommunityRepository
from comnet.persistence.repository.feed_source import JsonFeedSourceRepository
from comnet.persistence.repository.news import (
    PostgresNewsChannelRepository,
    PostgresNewsItemRepository,
    PostgresNewsSubscriptionRepository,
)
from comnet.persistence.repository.post import PostgresPostRepository
from comnet.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresPostRepository",
    "PostgresCommentRepository",
    "PostgresCommunityRepository",
    "PostgresVoteRepository",
    "PostgresNewsChannelRepository",
    "PostgresNewsItemRepository",
    "PostgresNewsSubscriptionRepository",
    "JsonFeedSourceRepository",
]
