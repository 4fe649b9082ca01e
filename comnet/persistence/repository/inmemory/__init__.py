"""In-memory repository implementations for testing."""

from .comment import InMemoryCommentRepository
from .community import InMemoryCommunityRepository
from .feed_source import InMemoryFeedSourceRepository
from .news import (
    InMemoryNewsChannelRepository,
    InMemoryNewsItemRepository,
    InMemoryNewsSubscriptionRepository,
)
from .post import InMemoryPostRepository
from .transaction import InMemoryTransactionManager
from .vote import InMemoryVoteRepository

__all__ = [
    "InMemoryCommentRepository",
    "InMemoryCommunityRepository",
    "InMemoryFeedSourceRepository",
    "InMemoryNewsChannelRepository",
    "InMemoryNewsItemRepository",
    "InMemoryNewsSubscriptionRepository",
    "InMemoryPostRepository",
    "InMemoryTransactionManager",
    "InMemoryVoteRepository",
]
