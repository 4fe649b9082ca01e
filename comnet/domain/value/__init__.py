"""Domain value objects for COMNet."""

from comnet.domain.value.identifiers import (
    CommentId,
    CommunityId,
    FeedSourceId,
    NetworkId,
    NewsChannelId,
    NewsItemId,
    PostId,
    UserId,
    VoteId,
)
from comnet.domain.value.types import (
    CommentSortOrder,
    ContentType,
    PostSortOrder,
    ProcessingState,
    VotableType,
    VoteDirection,
    VoteTally,
)

__all__ = [
    # Identifiers
    "UserId",
    "NetworkId",
    "CommunityId",
    "PostId",
    "CommentId",
    "VoteId",
    "NewsChannelId",
    "NewsItemId",
    "FeedSourceId",
    # Types
    "VoteDirection",
    "VotableType",
    "VoteTally",
    "ContentType",
    "PostSortOrder",
    "CommentSortOrder",
    "ProcessingState",
]
