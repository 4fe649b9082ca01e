"""PostgreSQL implementation of Community repository."""

from typing import Optional

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from comnet.domain.model import Community
from comnet.domain.repository import CommunityRepository
from comnet.domain.value import NetworkId
from comnet.persistence.mappers import community_to_dict, row_to_community
from comnet.persistence.tables import communities_table


class PostgresCommunityRepository(CommunityRepository):
    """PostgreSQL implementation of CommunityRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_name(
        self, network_id: NetworkId, name: str
    ) -> Optional[Community]:
        stmt = select(communities_table).where(
            communities_table.c.network_id == network_id,
            communities_table.c.name == name,
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_community(row._asdict()) if row else None

    async def save(self, community: Community) -> Community:
        stmt = insert(communities_table).values(**community_to_dict(community))
        await self.session.execute(stmt)
        await self.session.flush()
        return community
