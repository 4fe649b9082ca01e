"""Cast vote use case."""

from pydantic import BaseModel, Field

from comnet.application.usecase.base import BaseUseCase, parse_uuid
from comnet.domain.service import VoteService
from comnet.domain.value import CommentId, NetworkId, PostId, UserId, VotableType


class CastVoteRequest(BaseModel):
    """Cast vote request."""

    votable_type: VotableType
    votable_id: str  # UUID string
    user_id: str  # User ID from authenticated user
    network_id: str  # Caller's network
    direction: int = Field(strict=True)  # -1, 0 or +1


class CastVoteResponse(BaseModel):
    """Counters of the target after the vote."""

    score: int
    upvotes: int
    downvotes: int
    user_vote: int


class CastVoteUseCase(BaseUseCase):
    """Use case for casting, changing or retracting a vote."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize cast vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: CastVoteRequest) -> CastVoteResponse:
        """Execute cast vote flow.

        Raises:
            InvalidArgumentError: If an ID or the direction is malformed
            NotFoundError: If the target is not visible in the network
            ForbiddenError: If the target is locked
        """
        votable_uuid = parse_uuid(request.votable_id, "votable_id")
        votable_id = (
            PostId(votable_uuid)
            if request.votable_type == VotableType.POST
            else CommentId(votable_uuid)
        )

        outcome = await self.vote_service.cast_vote(
            user_id=UserId(parse_uuid(request.user_id, "user_id")),
            network_id=NetworkId(parse_uuid(request.network_id, "network_id")),
            votable_type=request.votable_type,
            votable_id=votable_id,
            direction=request.direction,
        )

        return CastVoteResponse(
            score=outcome.tally.score,
            upvotes=outcome.tally.upvotes,
            downvotes=outcome.tally.downvotes,
            user_vote=int(outcome.user_vote),
        )
