"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Union

from comnet.domain.model.vote import Vote
from comnet.domain.value import CommentId, PostId, UserId, VotableType, VoteTally

VotableId = Union[PostId, CommentId]


class VoteRepository(ABC):
    """Persistence of votes on posts and comments.

    At most one row exists per (user, votable_type, votable_id). Counters on
    the targets are derived from ``tally``, never kept here.
    """

    @abstractmethod
    async def find_by_user_and_votable(
        self, user_id: UserId, votable_type: VotableType, votable_id: VotableId
    ) -> Optional[Vote]:
        """The caller's current vote on one target, if any."""
        pass

    @abstractmethod
    async def find_by_votable(
        self, votable_type: VotableType, votable_id: VotableId
    ) -> List[Vote]:
        """All current votes on one target."""
        pass

    @abstractmethod
    async def find_by_user_and_votables(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_ids: Sequence[VotableId],
    ) -> List[Vote]:
        """The caller's votes on a page of targets, used to annotate listings."""
        pass

    @abstractmethod
    async def save(self, vote: Vote) -> Vote:
        """Insert a vote.

        Raises:
            IntegrityError: If the user already has a vote on the target
        """
        pass

    @abstractmethod
    async def delete_by_user_and_votable(
        self, user_id: UserId, votable_type: VotableType, votable_id: VotableId
    ) -> bool:
        """Remove the caller's vote on a target.

        Returns:
            False when there was nothing to remove
        """
        pass

    @abstractmethod
    async def tally(self, votable_type: VotableType, votable_id: VotableId) -> VoteTally:
        """Full aggregate over the target's votes.

        ``score`` is upvotes minus downvotes; direction 0 rows never exist.
        """
        pass
