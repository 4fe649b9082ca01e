"""Post domain service."""

from typing import Optional

import logfire

from comnet.domain.error import NotFoundError
from comnet.domain.model.post import Post
from comnet.domain.repository import PostRepository
from comnet.domain.value import (
    CommunityId,
    NetworkId,
    PostId,
    PostSortOrder,
    VoteTally,
)

from .base import Service


class PostService(Service):
    """Domain service for post operations."""

    def __init__(self, post_repository: PostRepository) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
        """
        self.post_repository = post_repository

    async def create_post(self, post: Post) -> Post:
        """Persist a new post.

        Args:
            post: Post to create

        Returns:
            Saved post
        """
        with logfire.span(
            "post_service.create_post",
            post_id=str(post.id),
            network_id=str(post.network_id),
            community_id=str(post.community_id),
        ):
            saved = await self.post_repository.save(post)
            logfire.info("Post created", post_id=str(saved.id), title=saved.title)
            return saved

    async def get_post_by_id(
        self, post_id: PostId, for_update: bool = False
    ) -> Post | None:
        """Get a post by ID.

        Args:
            post_id: Post ID
            for_update: Lock the post row for the rest of the transaction

        Returns:
            Post if found, None otherwise
        """
        with logfire.span(
            "post_service.get_post_by_id", post_id=str(post_id), for_update=for_update
        ):
            post = await self.post_repository.find_by_id(post_id, for_update=for_update)

            if post:
                logfire.info("Post found", post_id=str(post_id))
            else:
                logfire.warn("Post not found", post_id=str(post_id))

            return post

    async def get_visible_post(
        self, post_id: PostId, network_id: NetworkId, for_update: bool = False
    ) -> Post:
        """Get a post that belongs to the caller's network.

        Posts of other networks are reported as missing.

        Raises:
            NotFoundError: If the post does not exist in the network
        """
        post = await self.get_post_by_id(post_id, for_update=for_update)
        if post is None or post.network_id != network_id:
            raise NotFoundError("Post", str(post_id))
        return post

    async def list_posts(
        self,
        network_id: NetworkId,
        sort: PostSortOrder = PostSortOrder.NEW,
        community_id: Optional[CommunityId] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[Post], int]:
        """List posts of a network.

        Returns:
            Tuple of (page of posts, total count)
        """
        with logfire.span(
            "post_service.list_posts",
            network_id=str(network_id),
            sort=sort.value,
            community_id=str(community_id) if community_id else None,
            limit=limit,
            offset=offset,
        ):
            posts = await self.post_repository.find_all(
                network_id=network_id,
                sort=sort,
                community_id=community_id,
                limit=limit,
                offset=offset,
            )
            total = await self.post_repository.count(
                network_id=network_id, community_id=community_id
            )
            return posts, total

    async def update_vote_counts(self, post_id: PostId, tally: VoteTally) -> None:
        """Overwrite a post's vote counters with a fresh tally."""
        with logfire.span(
            "post_service.update_vote_counts",
            post_id=str(post_id),
            score=tally.score,
        ):
            await self.post_repository.update_vote_counts(post_id, tally)
