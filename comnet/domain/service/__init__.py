"""Domain services."""

from .base import Service
from .comment_service import CommentService
from .feed_client import FeedClient
from .feed_service import AggregateFeed, FeedService, RefreshResult
from .jwt_service import JWTService
from .news_ingestion_service import FanOutResult, IngestionResult, NewsIngestionService
from .post_service import PostService
from .vote_service import VoteOutcome, VoteService

__all__ = [
    "AggregateFeed",
    "CommentService",
    "FeedClient",
    "FeedService",
    "FanOutResult",
    "IngestionResult",
    "JWTService",
    "NewsIngestionService",
    "PostService",
    "RefreshResult",
    "Service",
    "VoteOutcome",
    "VoteService",
]
