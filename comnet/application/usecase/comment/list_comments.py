"""List comments use case."""

from datetime import datetime

from pydantic import BaseModel, Field

from comnet.application.usecase.base import BaseUseCase, parse_uuid
from comnet.domain.service import CommentService, PostService, VoteService
from comnet.domain.value import (
    CommentSortOrder,
    NetworkId,
    PostId,
    UserId,
    VotableType,
    VoteDirection,
)


class CommentItem(BaseModel):
    """Comment item in response."""

    comment_id: str
    post_id: str
    author_id: str
    content: str
    parent_id: str | None
    upvotes: int
    downvotes: int
    score: int
    is_deleted: bool
    created_at: datetime
    updated_at: datetime
    user_vote: int


class ListCommentsRequest(BaseModel):
    """List comments request."""

    post_id: str  # UUID string
    network_id: str
    sort: CommentSortOrder = CommentSortOrder.NEW
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=50, ge=1, le=200)
    user_id: str | None = None  # Current user ID (if authenticated)


class ListCommentsResponse(BaseModel):
    """List comments response."""

    post_id: str
    comments: list[CommentItem]
    total: int
    page: int
    limit: int


class ListCommentsUseCase(BaseUseCase):
    """Use case for listing the comments of a post."""

    def __init__(
        self,
        post_service: PostService,
        comment_service: CommentService,
        vote_service: VoteService,
    ) -> None:
        """Initialize list comments use case.

        Args:
            post_service: Post domain service (visibility check)
            comment_service: Comment domain service
            vote_service: Vote service for the caller's own votes
        """
        self.post_service = post_service
        self.comment_service = comment_service
        self.vote_service = vote_service

    async def execute(self, request: ListCommentsRequest) -> ListCommentsResponse:
        """Execute list comments flow.

        Raises:
            NotFoundError: If the post does not exist in the caller's network
        """
        post = await self.post_service.get_visible_post(
            PostId(parse_uuid(request.post_id, "post_id")),
            NetworkId(parse_uuid(request.network_id, "network_id")),
        )

        comments, total = await self.comment_service.list_comments(
            post_id=post.id,
            sort=request.sort,
            limit=request.limit,
            offset=(request.page - 1) * request.limit,
        )

        user_votes = {}
        if request.user_id and comments:
            user_votes = await self.vote_service.get_user_votes(
                user_id=UserId(parse_uuid(request.user_id, "user_id")),
                votable_type=VotableType.COMMENT,
                votable_ids=[comment.id for comment in comments],
            )

        return ListCommentsResponse(
            post_id=str(post.id),
            comments=[
                CommentItem(
                    comment_id=str(comment.id),
                    post_id=str(comment.post_id),
                    author_id=str(comment.author_id),
                    content=comment.content,
                    parent_id=str(comment.parent_id) if comment.parent_id else None,
                    upvotes=comment.upvotes,
                    downvotes=comment.downvotes,
                    score=comment.score,
                    is_deleted=comment.is_deleted,
                    created_at=comment.created_at,
                    updated_at=comment.updated_at,
                    user_vote=int(user_votes.get(comment.id, VoteDirection.NONE)),
                )
                for comment in comments
            ],
            total=total,
            page=request.page,
            limit=request.limit,
        )
