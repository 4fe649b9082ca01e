"""In-memory comment repository for testing."""

from typing import Optional

from comnet.domain.model.comment import Comment
from comnet.domain.repository.comment import CommentRepository
from comnet.domain.value import CommentId, CommentSortOrder, PostId, VoteTally


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    async def find_by_id(
        self, comment_id: CommentId, for_update: bool = False
    ) -> Optional[Comment]:
        """Find a comment by ID (locking is a no-op)."""
        return self._comments.get(comment_id)

    async def find_by_post(
        self,
        post_id: PostId,
        sort: CommentSortOrder = CommentSortOrder.NEW,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Comment]:
        """Find comments for a post."""
        comments = [c for c in self._comments.values() if c.post_id == post_id]

        if sort == CommentSortOrder.NEW:
            comments.sort(key=lambda c: c.created_at, reverse=True)
        elif sort == CommentSortOrder.OLD:
            comments.sort(key=lambda c: c.created_at)
        elif sort == CommentSortOrder.TOP:
            # Highest score first, earliest first among equal scores
            comments.sort(key=lambda c: c.created_at)
            comments.sort(key=lambda c: c.score, reverse=True)

        return comments[offset : offset + limit]

    async def count_by_post(self, post_id: PostId) -> int:
        """Count comments for a post."""
        return sum(1 for c in self._comments.values() if c.post_id == post_id)

    async def save(self, comment: Comment) -> Comment:
        """Save a comment."""
        self._comments[comment.id] = comment
        return comment

    async def update_vote_counts(
        self, comment_id: CommentId, tally: VoteTally
    ) -> None:
        """Overwrite the vote counters of a comment."""
        comment = self._comments.get(comment_id)
        if comment:
            self._comments[comment_id] = comment.with_tally(tally)
