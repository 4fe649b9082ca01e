"""Get post use case."""

from pydantic import BaseModel

from comnet.application.usecase.base import BaseUseCase, parse_uuid
from comnet.domain.service import PostService, VoteService
from comnet.domain.value import NetworkId, PostId, UserId, VotableType, VoteDirection

from .list_posts import PostItem


class GetPostRequest(BaseModel):
    """Get post request."""

    post_id: str  # UUID string
    network_id: str
    user_id: str | None = None  # Current user ID (if authenticated)


class GetPostResponse(BaseModel):
    """Get post response."""

    post: PostItem


class GetPostUseCase(BaseUseCase):
    """Use case for getting a single post with the caller's vote."""

    def __init__(self, post_service: PostService, vote_service: VoteService) -> None:
        self.post_service = post_service
        self.vote_service = vote_service

    async def execute(self, request: GetPostRequest) -> GetPostResponse:
        """Execute get post flow.

        Raises:
            NotFoundError: If the post does not exist in the caller's network
        """
        post = await self.post_service.get_visible_post(
            PostId(parse_uuid(request.post_id, "post_id")),
            NetworkId(parse_uuid(request.network_id, "network_id")),
        )

        user_vote = VoteDirection.NONE
        if request.user_id:
            votes = await self.vote_service.get_user_votes(
                user_id=UserId(parse_uuid(request.user_id, "user_id")),
                votable_type=VotableType.POST,
                votable_ids=[post.id],
            )
            user_vote = votes.get(post.id, VoteDirection.NONE)

        return GetPostResponse(post=PostItem.from_post(post, user_vote))
