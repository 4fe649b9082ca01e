"""Comment entity.

Comments are threaded replies on posts. They are votable and carry the
same denormalized counters as posts.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from comnet.domain.model.common import DomainModel
from comnet.domain.value import CommentId, PostId, UserId, VoteTally


class Comment(DomainModel):
    """Comment entity.

    A comment has no network of its own; its visibility is that of its post.
    """

    id: CommentId
    post_id: PostId
    author_id: UserId
    content: str = Field(min_length=1, max_length=2000)
    parent_id: Optional[CommentId] = None
    upvotes: int = Field(default=0, ge=0)
    downvotes: int = Field(default=0, ge=0)
    score: int = 0
    is_deleted: bool = False
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def tally(self) -> VoteTally:
        """Current denormalized vote counters."""
        return VoteTally(
            upvotes=self.upvotes, downvotes=self.downvotes, score=self.score
        )

    def with_tally(self, tally: VoteTally) -> "Comment":
        """Return a copy carrying the given vote counters."""
        return self.model_copy(
            update={
                "upvotes": tally.upvotes,
                "downvotes": tally.downvotes,
                "score": tally.score,
            }
        )
