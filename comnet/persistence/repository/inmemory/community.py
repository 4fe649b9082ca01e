"""In-memory community repository for testing."""

from typing import Optional

from comnet.domain.model.community import Community
from comnet.domain.repository.community import CommunityRepository
from comnet.domain.value import CommunityId, NetworkId


class InMemoryCommunityRepository(CommunityRepository):
    """In-memory implementation of CommunityRepository for testing."""

    def __init__(self) -> None:
        self._communities: dict[CommunityId, Community] = {}

    async def find_by_name(
        self, network_id: NetworkId, name: str
    ) -> Optional[Community]:
        for community in self._communities.values():
            if community.network_id == network_id and community.name == name:
                return community
        return None

    async def save(self, community: Community) -> Community:
        self._communities[community.id] = community
        return community

    def all(self) -> list[Community]:
        return list(self._communities.values())
