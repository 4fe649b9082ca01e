"""List posts use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel, Field

from comnet.application.usecase.base import BaseUseCase, parse_uuid
from comnet.domain.model import Post
from comnet.domain.service import PostService, VoteService
from comnet.domain.value import (
    CommunityId,
    ContentType,
    NetworkId,
    PostSortOrder,
    UserId,
    VotableType,
    VoteDirection,
)


class PostItem(BaseModel):
    """Post in responses."""

    post_id: str
    network_id: str
    community_id: str
    author_id: str
    title: str
    content: str | None
    content_type: ContentType
    link_url: str | None
    media_urls: list[str]
    is_pinned: bool
    is_locked: bool
    is_nsfw: bool
    upvotes: int
    downvotes: int
    score: int
    comment_count: int
    created_at: datetime
    updated_at: datetime
    user_vote: int

    @classmethod
    def from_post(cls, post: Post, user_vote: VoteDirection) -> "PostItem":
        return cls(
            post_id=str(post.id),
            network_id=str(post.network_id),
            community_id=str(post.community_id),
            author_id=str(post.author_id),
            title=post.title,
            content=post.content,
            content_type=post.content_type,
            link_url=post.link_url,
            media_urls=post.media_urls,
            is_pinned=post.is_pinned,
            is_locked=post.is_locked,
            is_nsfw=post.is_nsfw,
            upvotes=post.upvotes,
            downvotes=post.downvotes,
            score=post.score,
            comment_count=post.comment_count,
            created_at=post.created_at,
            updated_at=post.updated_at,
            user_vote=int(user_vote),
        )


class ListPostsRequest(BaseModel):
    """List posts request."""

    network_id: str
    sort: PostSortOrder = PostSortOrder.NEW
    community_id: str | None = None
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1, le=100)
    user_id: str | None = None  # Current user ID (if authenticated)


class ListPostsResponse(BaseModel):
    """List posts response."""

    posts: list[PostItem]
    total: int
    page: int
    limit: int


class ListPostsUseCase(BaseUseCase):
    """Use case for listing the posts of a network."""

    def __init__(self, post_service: PostService, vote_service: VoteService) -> None:
        """Initialize list posts use case.

        Args:
            post_service: Post domain service
            vote_service: Vote domain service (caller's own votes)
        """
        self.post_service = post_service
        self.vote_service = vote_service

    async def execute(self, request: ListPostsRequest) -> ListPostsResponse:
        """Execute list posts flow."""
        with logfire.span(
            "list_posts.execute",
            sort=request.sort.value,
            page=request.page,
            limit=request.limit,
        ):
            community_id = (
                CommunityId(parse_uuid(request.community_id, "community_id"))
                if request.community_id
                else None
            )

            posts, total = await self.post_service.list_posts(
                network_id=NetworkId(parse_uuid(request.network_id, "network_id")),
                sort=request.sort,
                community_id=community_id,
                limit=request.limit,
                offset=(request.page - 1) * request.limit,
            )

            # Batch query to avoid N+1
            user_votes = {}
            if request.user_id and posts:
                user_votes = await self.vote_service.get_user_votes(
                    user_id=UserId(parse_uuid(request.user_id, "user_id")),
                    votable_type=VotableType.POST,
                    votable_ids=[post.id for post in posts],
                )

            return ListPostsResponse(
                posts=[
                    PostItem.from_post(
                        post, user_votes.get(post.id, VoteDirection.NONE)
                    )
                    for post in posts
                ],
                total=total,
                page=request.page,
                limit=request.limit,
            )
