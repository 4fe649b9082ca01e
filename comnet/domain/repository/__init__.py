"""Repository interfaces for COMNet domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from comnet.domain.repository.comment import CommentRepository
from comnet.domain.repository.community import CommunityRepository
from comnet.domain.repository.feed_cache import FeedCache
from comnet.domain.repository.feed_source import FeedSourceRepository
from comnet.domain.repository.news import (
    NewsChannelRepository,
    NewsItemRepository,
    NewsSubscriptionRepository,
)
from comnet.domain.repository.post import PostRepository
from comnet.domain.repository.transaction import TransactionManager
from comnet.domain.repository.vote import VoteRepository

__all__ = [
    "PostRepository",
    "CommentRepository",
    "CommunityRepository",
    "VoteRepository",
    "FeedCache",
    "FeedSourceRepository",
    "NewsChannelRepository",
    "NewsItemRepository",
    "NewsSubscriptionRepository",
    "TransactionManager",
]
