"""Community repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from comnet.domain.model.community import Community
from comnet.domain.value import NetworkId


class CommunityRepository(ABC):
    """Repository for Community entity."""

    @abstractmethod
    async def find_by_name(
        self, network_id: NetworkId, name: str
    ) -> Optional[Community]:
        """Find a community by its name within a network."""
        pass

    @abstractmethod
    async def save(self, community: Community) -> Community:
        """Save a community (create)."""
        pass
