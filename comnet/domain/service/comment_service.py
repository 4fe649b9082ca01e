"""Comment domain service."""

import logfire

from comnet.domain.model.comment import Comment
from comnet.domain.repository import CommentRepository
from comnet.domain.value import CommentId, CommentSortOrder, PostId, VoteTally

from .base import Service


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(self, comment_repository: CommentRepository) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
        """
        self.comment_repository = comment_repository

    async def get_comment_by_id(
        self, comment_id: CommentId, for_update: bool = False
    ) -> Comment | None:
        """Get a comment by ID.

        Args:
            comment_id: Comment ID
            for_update: Lock the comment row for the rest of the transaction

        Returns:
            Comment if found, None otherwise
        """
        with logfire.span(
            "comment_service.get_comment_by_id",
            comment_id=str(comment_id),
            for_update=for_update,
        ):
            comment = await self.comment_repository.find_by_id(
                comment_id, for_update=for_update
            )
            if comment:
                logfire.info("Comment found", comment_id=str(comment_id))
            else:
                logfire.warn("Comment not found", comment_id=str(comment_id))
            return comment

    async def list_comments(
        self,
        post_id: PostId,
        sort: CommentSortOrder = CommentSortOrder.NEW,
        limit: int = 50,
        offset: int = 0,
    ) -> tuple[list[Comment], int]:
        """List comments of a post.

        Args:
            post_id: Post ID
            sort: Sort order (new, old or top)
            limit: Page size
            offset: Number of comments to skip

        Returns:
            Tuple of (page of comments, total count)
        """
        with logfire.span(
            "comment_service.list_comments",
            post_id=str(post_id),
            sort=sort.value,
            limit=limit,
            offset=offset,
        ):
            comments = await self.comment_repository.find_by_post(
                post_id=post_id, sort=sort, limit=limit, offset=offset
            )
            total = await self.comment_repository.count_by_post(post_id)
            logfire.info(
                "Comments retrieved for post",
                post_id=str(post_id),
                count=len(comments),
                total=total,
            )
            return comments, total

    async def update_vote_counts(
        self, comment_id: CommentId, tally: VoteTally
    ) -> None:
        """Overwrite a comment's vote counters with a fresh tally."""
        with logfire.span(
            "comment_service.update_vote_counts",
            comment_id=str(comment_id),
            score=tally.score,
        ):
            await self.comment_repository.update_vote_counts(comment_id, tally)
