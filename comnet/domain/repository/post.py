"""Post repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from comnet.domain.model.post import Post
from comnet.domain.value import (
    CommunityId,
    NetworkId,
    PostId,
    PostSortOrder,
    VoteTally,
)


class PostRepository(ABC):
    """Repository for Post aggregate.

    Defines the contract for post persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(
        self, post_id: PostId, for_update: bool = False
    ) -> Optional[Post]:
        """Find a post by ID.

        Args:
            post_id: The post's unique identifier
            for_update: Lock the row until the current transaction ends

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(
        self,
        network_id: NetworkId,
        sort: PostSortOrder = PostSortOrder.NEW,
        community_id: Optional[CommunityId] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Post]:
        """Find posts of a network with ordering and pagination.

        Args:
            network_id: Network whose posts are listed
            sort: Sort order (new, hot or top)
            community_id: Restrict to one community (None for all)
            limit: Maximum number of posts to return
            offset: Number of posts to skip

        Returns:
            List of posts matching the criteria
        """
        pass

    @abstractmethod
    async def count(
        self, network_id: NetworkId, community_id: Optional[CommunityId] = None
    ) -> int:
        """Count posts of a network, optionally within one community."""
        pass

    @abstractmethod
    async def save(self, post: Post) -> Post:
        """Save a post (create or update)."""
        pass

    @abstractmethod
    async def update_vote_counts(self, post_id: PostId, tally: VoteTally) -> None:
        """Overwrite the denormalized vote counters of a post.

        Args:
            post_id: The post ID
            tally: Freshly aggregated counters
        """
        pass
