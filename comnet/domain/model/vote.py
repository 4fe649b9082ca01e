"""Vote entity.

Votes are directional (+1 / -1). Each user holds at most one vote per
item (post or comment); retracting a vote deletes the row.
"""

from datetime import datetime, timezone
from uuid import UUID

from pydantic import Field, field_validator

from comnet.domain.model.common import DomainModel
from comnet.domain.value import UserId, VotableType, VoteDirection, VoteId


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - One vote per user per item (enforced by database unique constraint)
    - Direction is UP or DOWN; NONE is a retraction and is never stored
    - Polymorphic reference to votable (post or comment)
    """

    id: VoteId
    user_id: UserId
    votable_type: VotableType
    votable_id: UUID  # PostId or CommentId (both are UUIDs)
    direction: VoteDirection
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator("direction")
    @classmethod
    def validate_direction(cls, v: VoteDirection) -> VoteDirection:
        """Reject storing a retraction."""
        if v == VoteDirection.NONE:
            raise ValueError("A vote with direction 0 cannot be stored")
        return v
