"""PostgreSQL implementation of Comment repository."""

from typing import List, Optional

from sqlalchemy import asc, desc, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from comnet.domain.model import Comment
from comnet.domain.repository import CommentRepository
from comnet.domain.value import CommentId, CommentSortOrder, PostId, VoteTally
from comnet.persistence.mappers import comment_to_dict, row_to_comment
from comnet.persistence.tables import comments_table

_ORDERINGS = {
    CommentSortOrder.NEW: (desc(comments_table.c.created_at),),
    CommentSortOrder.OLD: (asc(comments_table.c.created_at),),
    CommentSortOrder.TOP: (
        desc(comments_table.c.score),
        asc(comments_table.c.created_at),
    ),
}


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(
        self, comment_id: CommentId, for_update: bool = False
    ) -> Optional[Comment]:
        """Find a comment by ID, optionally locking its row."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        if for_update:
            stmt = stmt.with_for_update()

        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_post(
        self,
        post_id: PostId,
        sort: CommentSortOrder = CommentSortOrder.NEW,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Comment]:
        """Find comments for a post."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.post_id == post_id)
            .order_by(*_ORDERINGS[sort])
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def count_by_post(self, post_id: PostId) -> int:
        """Count comments for a post."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(comments_table.c.post_id == post_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update)."""
        comment_dict = comment_to_dict(comment)

        existing = await self.find_by_id(comment.id)
        if existing:
            stmt = (
                comments_table.update()
                .where(comments_table.c.id == comment.id)
                .values(**comment_dict)
            )
        else:
            stmt = comments_table.insert().values(**comment_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return comment

    async def update_vote_counts(
        self, comment_id: CommentId, tally: VoteTally
    ) -> None:
        """Overwrite the denormalized vote counters of a comment."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(
                upvotes=tally.upvotes,
                downvotes=tally.downvotes,
                score=tally.score,
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()
