"""Community entity."""

from datetime import datetime, timezone

from pydantic import Field

from comnet.domain.model.common import DomainModel
from comnet.domain.value import CommunityId, NetworkId, UserId


class Community(DomainModel):
    """Community inside a network. Names are unique per network."""

    id: CommunityId
    network_id: NetworkId
    name: str = Field(min_length=1, max_length=100)
    display_name: str = Field(min_length=1, max_length=100)
    description: str = ""
    creator_id: UserId
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
