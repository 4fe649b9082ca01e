"""PostgreSQL implementation of Vote repository."""

from typing import List, Optional, Sequence

from sqlalchemy import and_, case, delete, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from comnet.domain.model import Vote
from comnet.domain.repository.vote import VotableId, VoteRepository
from comnet.domain.value import UserId, VotableType, VoteTally
from comnet.persistence.mappers import row_to_vote, vote_to_dict
from comnet.persistence.tables import votes_table


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _targets(
        self, votable_type: VotableType, votable_id: VotableId
    ):
        return and_(
            votes_table.c.votable_type == votable_type.value,
            votes_table.c.votable_id == votable_id,
        )

    async def find_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: VotableId,
    ) -> Optional[Vote]:
        """Current vote of one user on one target."""
        stmt = select(votes_table).where(
            votes_table.c.user_id == user_id,
            self._targets(votable_type, votable_id),
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def find_by_votable(
        self,
        votable_type: VotableType,
        votable_id: VotableId,
    ) -> List[Vote]:
        stmt = select(votes_table).where(self._targets(votable_type, votable_id))
        result = await self.session.execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]

    async def find_by_user_and_votables(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_ids: Sequence[VotableId],
    ) -> List[Vote]:
        """One query for a whole listing page."""
        if not votable_ids:
            return []

        stmt = select(votes_table).where(
            and_(
                votes_table.c.user_id == user_id,
                votes_table.c.votable_type == votable_type.value,
                votes_table.c.votable_id.in_(votable_ids),
            )
        )
        result = await self.session.execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]

    async def save(self, vote: Vote) -> Vote:
        """Insert; the unique constraint rejects a second vote."""
        stmt = insert(votes_table).values(**vote_to_dict(vote))
        await self.session.execute(stmt)
        await self.session.flush()
        return vote

    async def delete_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: VotableId,
    ) -> bool:
        stmt = delete(votes_table).where(
            votes_table.c.user_id == user_id,
            self._targets(votable_type, votable_id),
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def tally(
        self,
        votable_type: VotableType,
        votable_id: VotableId,
    ) -> VoteTally:
        """Aggregate all current votes on an item in one query."""
        direction = votes_table.c.direction
        stmt = select(
            func.count(case((direction == 1, 1))).label("upvotes"),
            func.count(case((direction == -1, 1))).label("downvotes"),
            func.coalesce(func.sum(direction), 0).label("score"),
        ).where(self._targets(votable_type, votable_id))

        result = await self.session.execute(stmt)
        row = result.one()
        return VoteTally(
            upvotes=row.upvotes, downvotes=row.downvotes, score=int(row.score)
        )
