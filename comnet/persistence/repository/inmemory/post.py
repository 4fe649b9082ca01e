"""In-memory post repository for testing."""

from typing import Optional

from comnet.domain.model.post import Post
from comnet.domain.repository.post import PostRepository
from comnet.domain.value import (
    CommunityId,
    NetworkId,
    PostId,
    PostSortOrder,
    VoteTally,
)


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self) -> None:
        self._posts: dict[PostId, Post] = {}

    async def find_by_id(
        self, post_id: PostId, for_update: bool = False
    ) -> Optional[Post]:
        """Find a post by ID (locking is a no-op)."""
        return self._posts.get(post_id)

    def _filter(
        self, network_id: NetworkId, community_id: Optional[CommunityId]
    ) -> list[Post]:
        posts = [p for p in self._posts.values() if p.network_id == network_id]
        if community_id is not None:
            posts = [p for p in posts if p.community_id == community_id]
        return posts

    async def find_all(
        self,
        network_id: NetworkId,
        sort: PostSortOrder = PostSortOrder.NEW,
        community_id: Optional[CommunityId] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Post]:
        """Find posts with filtering and pagination."""
        posts = self._filter(network_id, community_id)

        if sort == PostSortOrder.NEW:
            posts.sort(key=lambda p: p.created_at, reverse=True)
        elif sort == PostSortOrder.HOT:
            posts.sort(key=lambda p: (p.score, p.created_at), reverse=True)
        elif sort == PostSortOrder.TOP:
            posts.sort(key=lambda p: p.score, reverse=True)

        return posts[offset : offset + limit]

    async def count(
        self, network_id: NetworkId, community_id: Optional[CommunityId] = None
    ) -> int:
        """Count posts matching the given filters."""
        return len(self._filter(network_id, community_id))

    async def save(self, post: Post) -> Post:
        """Save or update a post."""
        self._posts[post.id] = post
        return post

    async def update_vote_counts(self, post_id: PostId, tally: VoteTally) -> None:
        """Overwrite the vote counters of a post."""
        post = self._posts.get(post_id)
        if post:
            self._posts[post_id] = post.with_tally(tally)
