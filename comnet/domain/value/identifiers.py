"""Strongly typed identifiers for COMNet domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

# Core domain entity identifiers
UserId = NewType("UserId", UUID)
NetworkId = NewType("NetworkId", UUID)
CommunityId = NewType("CommunityId", UUID)
PostId = NewType("PostId", UUID)
CommentId = NewType("CommentId", UUID)
VoteId = NewType("VoteId", UUID)

# News ingestion identifiers
NewsChannelId = NewType("NewsChannelId", UUID)
NewsItemId = NewType("NewsItemId", UUID)

# Feed sources are keyed by a slug from the catalog (e.g. "tagesschau")
FeedSourceId = NewType("FeedSourceId", str)
