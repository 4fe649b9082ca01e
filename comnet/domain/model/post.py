"""Post aggregate root.

Posts belong to a community inside a network and carry denormalized
vote counters that mirror the vote ledger.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field, model_validator

from comnet.domain.model.common import DomainModel
from comnet.domain.value import (
    CommunityId,
    ContentType,
    NetworkId,
    PostId,
    UserId,
    VoteTally,
)


class Post(DomainModel):
    """Post aggregate root.

    ``upvotes``, ``downvotes`` and ``score`` are a cache of the live vote
    aggregate and are only written from a freshly computed VoteTally.
    """

    id: PostId
    network_id: NetworkId
    community_id: CommunityId
    author_id: UserId
    title: str = Field(min_length=1, max_length=300)
    content: Optional[str] = Field(default=None, max_length=10000)
    content_type: ContentType = ContentType.TEXT
    link_url: Optional[str] = None
    media_urls: list[str] = Field(default_factory=list)
    is_pinned: bool = False
    is_locked: bool = False
    is_nsfw: bool = False
    upvotes: int = Field(default=0, ge=0)
    downvotes: int = Field(default=0, ge=0)
    score: int = 0
    comment_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @model_validator(mode="after")
    def validate_link_post(self) -> "Post":
        """Link posts must carry a URL."""
        if self.content_type == ContentType.LINK and not self.link_url:
            raise ValueError("URL is required for link posts")
        return self

    @property
    def tally(self) -> VoteTally:
        """Current denormalized vote counters."""
        return VoteTally(
            upvotes=self.upvotes, downvotes=self.downvotes, score=self.score
        )

    def with_tally(self, tally: VoteTally) -> "Post":
        """Return a copy carrying the given vote counters."""
        return self.model_copy(
            update={
                "upvotes": tally.upvotes,
                "downvotes": tally.downvotes,
                "score": tally.score,
            }
        )
