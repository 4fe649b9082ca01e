"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from comnet.domain.model.comment import Comment
from comnet.domain.value import CommentId, CommentSortOrder, PostId, VoteTally


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(
        self, comment_id: CommentId, for_update: bool = False
    ) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier
            for_update: Lock the row until the current transaction ends

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_post(
        self,
        post_id: PostId,
        sort: CommentSortOrder = CommentSortOrder.NEW,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Comment]:
        """Find comments for a post.

        Ordering:
        - NEW: created_at DESC
        - OLD: created_at ASC
        - TOP: score DESC, then created_at ASC

        Args:
            post_id: The post ID
            sort: Sort order
            limit: Maximum number of comments to return
            offset: Number of comments to skip

        Returns:
            List of comments
        """
        pass

    @abstractmethod
    async def count_by_post(self, post_id: PostId) -> int:
        """Count comments for a post."""
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update)."""
        pass

    @abstractmethod
    async def update_vote_counts(
        self, comment_id: CommentId, tally: VoteTally
    ) -> None:
        """Overwrite the denormalized vote counters of a comment.

        Args:
            comment_id: The comment ID
            tally: Freshly aggregated counters
        """
        pass
