"""PostgreSQL implementation of Post repository."""

from typing import List, Optional

import logfire
from sqlalchemy import desc, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from comnet.domain.model import Post
from comnet.domain.repository import PostRepository
from comnet.domain.value import (
    CommunityId,
    NetworkId,
    PostId,
    PostSortOrder,
    VoteTally,
)
from comnet.persistence.mappers import post_to_dict, row_to_post
from comnet.persistence.tables import posts_table

_ORDERINGS = {
    PostSortOrder.NEW: (desc(posts_table.c.created_at),),
    PostSortOrder.HOT: (desc(posts_table.c.score), desc(posts_table.c.created_at)),
    PostSortOrder.TOP: (desc(posts_table.c.score),),
}


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(
        self, post_id: PostId, for_update: bool = False
    ) -> Optional[Post]:
        """Find a post by ID, optionally locking its row."""
        stmt = select(posts_table).where(posts_table.c.id == post_id)
        if for_update:
            stmt = stmt.with_for_update()

        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_post(row._asdict()) if row else None

    async def find_all(
        self,
        network_id: NetworkId,
        sort: PostSortOrder = PostSortOrder.NEW,
        community_id: Optional[CommunityId] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Post]:
        """Find posts of a network with ordering and pagination."""
        with logfire.span(
            "post_repository.find_all",
            network_id=str(network_id),
            sort=sort.value,
            limit=limit,
            offset=offset,
        ):
            stmt = select(posts_table).where(posts_table.c.network_id == network_id)
            if community_id is not None:
                stmt = stmt.where(posts_table.c.community_id == community_id)

            stmt = stmt.order_by(*_ORDERINGS[sort]).limit(limit).offset(offset)

            result = await self.session.execute(stmt)
            posts = [row_to_post(row._asdict()) for row in result.fetchall()]
            logfire.info("Found posts", count=len(posts))
            return posts

    async def count(
        self, network_id: NetworkId, community_id: Optional[CommunityId] = None
    ) -> int:
        """Count posts of a network, optionally within one community."""
        stmt = (
            select(func.count())
            .select_from(posts_table)
            .where(posts_table.c.network_id == network_id)
        )
        if community_id is not None:
            stmt = stmt.where(posts_table.c.community_id == community_id)

        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def save(self, post: Post) -> Post:
        """Save a post (create or update)."""
        with logfire.span("post_repository.save", post_id=str(post.id)):
            post_dict = post_to_dict(post)

            existing = await self.find_by_id(post.id)
            if existing:
                stmt = (
                    posts_table.update()
                    .where(posts_table.c.id == post.id)
                    .values(**post_dict)
                )
            else:
                stmt = posts_table.insert().values(**post_dict)

            await self.session.execute(stmt)
            await self.session.flush()
            return post

    async def update_vote_counts(self, post_id: PostId, tally: VoteTally) -> None:
        """Overwrite the denormalized vote counters of a post."""
        stmt = (
            update(posts_table)
            .where(posts_table.c.id == post_id)
            .values(
                upvotes=tally.upvotes,
                downvotes=tally.downvotes,
                score=tally.score,
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()
