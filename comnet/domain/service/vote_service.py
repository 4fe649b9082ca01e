"""Vote domain service."""

from datetime import datetime, timezone
from typing import Sequence
from uuid import UUID, uuid4

import logfire

from comnet.domain.error import ForbiddenError, InvalidArgumentError, NotFoundError
from comnet.domain.model.vote import Vote
from comnet.domain.repository import VoteRepository
from comnet.domain.value import (
    CommentId,
    NetworkId,
    PostId,
    UserId,
    VotableType,
    VoteDirection,
    VoteId,
    VoteTally,
)
from comnet.domain.value.common import ValueObject

from .base import Service
from .comment_service import CommentService
from .post_service import PostService


class VoteOutcome(ValueObject):
    """Counters of the target after a vote, plus the caller's own vote."""

    tally: VoteTally
    user_vote: VoteDirection


class VoteService(Service):
    """Domain service for vote operations.

    Counters on posts and comments are recomputed from the vote ledger on
    every mutation. The target row is locked first, so concurrent votes on
    the same target are serialized by the surrounding transaction.
    """

    def __init__(
        self,
        vote_repository: VoteRepository,
        post_service: PostService,
        comment_service: CommentService,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote repository
            post_service: Post domain service
            comment_service: Comment domain service
        """
        self.vote_repository = vote_repository
        self.post_service = post_service
        self.comment_service = comment_service

    async def cast_vote(
        self,
        user_id: UserId,
        network_id: NetworkId,
        votable_type: VotableType,
        votable_id: PostId | CommentId,
        direction: int,
    ) -> VoteOutcome:
        """Cast, change or retract a vote.

        Any existing vote of the user on the target is deleted; a new one is
        inserted unless ``direction`` is 0. Casting the same direction twice
        re-applies it, only 0 retracts.

        Args:
            user_id: Voter
            network_id: Caller's network (visibility scope)
            votable_type: Post or comment
            votable_id: Target ID
            direction: -1, 0 or +1

        Returns:
            Fresh counters of the target and the caller's vote

        Raises:
            InvalidArgumentError: If direction is not -1, 0 or +1
            NotFoundError: If the target does not exist in the network
            ForbiddenError: If the target (or its post) is locked
        """
        with logfire.span(
            "vote_service.cast_vote",
            user_id=str(user_id),
            votable_type=votable_type.value,
            votable_id=str(votable_id),
            direction=direction,
        ):
            vote_direction = self._parse_direction(direction)

            await self._lock_target(votable_type, votable_id, network_id)

            await self.vote_repository.delete_by_user_and_votable(
                user_id=user_id,
                votable_type=votable_type,
                votable_id=votable_id,
            )

            if vote_direction != VoteDirection.NONE:
                await self.vote_repository.save(
                    Vote(
                        id=VoteId(uuid4()),
                        user_id=user_id,
                        votable_type=votable_type,
                        votable_id=UUID(str(votable_id)),
                        direction=vote_direction,
                        created_at=datetime.now(timezone.utc),
                    )
                )

            tally = await self.vote_repository.tally(votable_type, votable_id)

            if votable_type == VotableType.POST:
                await self.post_service.update_vote_counts(PostId(votable_id), tally)
            else:
                await self.comment_service.update_vote_counts(
                    CommentId(votable_id), tally
                )

            logfire.info(
                "Vote recorded",
                votable_type=votable_type.value,
                votable_id=str(votable_id),
                user_id=str(user_id),
                direction=int(vote_direction),
                score=tally.score,
                upvotes=tally.upvotes,
                downvotes=tally.downvotes,
            )

            return VoteOutcome(tally=tally, user_vote=vote_direction)

    async def get_user_votes(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_ids: Sequence[PostId | CommentId],
    ) -> dict[UUID, VoteDirection]:
        """Look up a user's votes on several items.

        Args:
            user_id: User ID
            votable_type: Type of the items
            votable_ids: Items to check

        Returns:
            Mapping of item ID to the user's direction (NONE if not voted)
        """
        if not votable_ids:
            return {}

        votes = await self.vote_repository.find_by_user_and_votables(
            user_id=user_id,
            votable_type=votable_type,
            votable_ids=votable_ids,
        )
        by_item = {UUID(str(vote.votable_id)): vote.direction for vote in votes}

        return {
            UUID(str(vid)): by_item.get(UUID(str(vid)), VoteDirection.NONE)
            for vid in votable_ids
        }

    @staticmethod
    def _parse_direction(direction: int) -> VoteDirection:
        """Validate a raw vote direction."""
        if isinstance(direction, bool) or not isinstance(direction, int):
            raise InvalidArgumentError("Invalid vote direction")
        try:
            return VoteDirection(direction)
        except ValueError:
            raise InvalidArgumentError("Invalid vote direction")

    async def _lock_target(
        self,
        votable_type: VotableType,
        votable_id: PostId | CommentId,
        network_id: NetworkId,
    ) -> None:
        """Lock the target row and check it may receive votes."""
        if votable_type == VotableType.POST:
            post = await self.post_service.get_visible_post(
                PostId(votable_id), network_id, for_update=True
            )
            if post.is_locked:
                logfire.warn("Vote on locked post", post_id=str(votable_id))
                raise ForbiddenError("Post is locked")
            return

        comment = await self.comment_service.get_comment_by_id(
            CommentId(votable_id), for_update=True
        )
        if comment is None:
            raise NotFoundError("Comment", str(votable_id))

        post = await self.post_service.get_post_by_id(comment.post_id)
        if post is None or post.network_id != network_id:
            raise NotFoundError("Comment", str(votable_id))
        if post.is_locked:
            logfire.warn(
                "Vote on comment of locked post",
                comment_id=str(votable_id),
                post_id=str(post.id),
            )
            raise ForbiddenError("Post is locked")
