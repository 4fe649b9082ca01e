"""In-memory vote repository for testing."""

from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from comnet.domain.model.vote import Vote
from comnet.domain.repository.vote import VotableId, VoteRepository
from comnet.domain.value import UserId, VotableType, VoteTally

_Key = tuple[UUID, VotableType, UUID]


def _key(user_id: UserId, votable_type: VotableType, votable_id: VotableId) -> _Key:
    return (UUID(str(user_id)), votable_type, UUID(str(votable_id)))


class InMemoryVoteRepository(VoteRepository):
    """Votes keyed like the unique constraint on the votes table."""

    def __init__(self) -> None:
        self._votes: dict[_Key, Vote] = {}

    async def find_by_user_and_votable(
        self, user_id: UserId, votable_type: VotableType, votable_id: VotableId
    ) -> Optional[Vote]:
        return self._votes.get(_key(user_id, votable_type, votable_id))

    async def find_by_votable(
        self, votable_type: VotableType, votable_id: VotableId
    ) -> list[Vote]:
        target = UUID(str(votable_id))
        return [
            vote
            for (_, kind, vid), vote in self._votes.items()
            if kind == votable_type and vid == target
        ]

    async def find_by_user_and_votables(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_ids: Sequence[VotableId],
    ) -> list[Vote]:
        keys = [_key(user_id, votable_type, vid) for vid in votable_ids]
        return [self._votes[key] for key in keys if key in self._votes]

    async def save(self, vote: Vote) -> Vote:
        key = _key(vote.user_id, vote.votable_type, vote.votable_id)
        if key in self._votes:
            raise IntegrityError("Duplicate vote", None, Exception("unique_vote"))

        self._votes[key] = vote
        return vote

    async def delete_by_user_and_votable(
        self, user_id: UserId, votable_type: VotableType, votable_id: VotableId
    ) -> bool:
        return self._votes.pop(_key(user_id, votable_type, votable_id), None) is not None

    async def tally(self, votable_type: VotableType, votable_id: VotableId) -> VoteTally:
        votes = await self.find_by_votable(votable_type, votable_id)
        return VoteTally.from_directions(v.direction for v in votes)
