"""Domain value objects for COMNet.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from enum import Enum, IntEnum
from typing import Iterable

from pydantic import Field, model_validator

from comnet.domain.value.common import ValueObject


class VoteDirection(IntEnum):
    """Direction of a vote.

    ``NONE`` is never stored: casting it retracts the voter's vote.
    """

    DOWN = -1
    NONE = 0
    UP = 1


class VotableType(str, Enum):
    """Type of entity that can be voted on."""

    POST = "post"
    COMMENT = "comment"


class ContentType(str, Enum):
    """Kind of content a post carries."""

    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"
    LINK = "link"


class PostSortOrder(str, Enum):
    """Sort order for post listings."""

    NEW = "new"  # created_at DESC
    HOT = "hot"  # score DESC, created_at DESC
    TOP = "top"  # score DESC


class CommentSortOrder(str, Enum):
    """Sort order for comment listings."""

    NEW = "new"  # created_at DESC
    OLD = "old"  # created_at ASC
    TOP = "top"  # score DESC, ties broken by earliest creation


class ProcessingState(str, Enum):
    """Fan-out state of an ingested news item."""

    UNPROCESSED = "unprocessed"
    PROCESSED = "processed"


class VoteTally(ValueObject):
    """Aggregate of all votes on one votable entity.

    Always computed from the vote ledger, never adjusted incrementally.
    """

    upvotes: int = Field(default=0, ge=0)
    downvotes: int = Field(default=0, ge=0)
    score: int = 0

    @model_validator(mode="after")
    def validate_score(self) -> "VoteTally":
        """Score must equal upvotes minus downvotes."""
        if self.score != self.upvotes - self.downvotes:
            raise ValueError("score must equal upvotes - downvotes")
        return self

    @classmethod
    def from_directions(cls, directions: Iterable[int]) -> "VoteTally":
        """Aggregate a sequence of stored vote directions."""
        upvotes = 0
        downvotes = 0
        for direction in directions:
            if direction == VoteDirection.UP:
                upvotes += 1
            elif direction == VoteDirection.DOWN:
                downvotes += 1
        return cls(upvotes=upvotes, downvotes=downvotes, score=upvotes - downvotes)
