"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from comnet.domain.model import (
    Comment,
    Community,
    NewsChannel,
    NewsItem,
    NewsSubscription,
    Post,
    Vote,
)
from comnet.domain.value import (
    CommentId,
    CommunityId,
    ContentType,
    FeedSourceId,
    NetworkId,
    NewsChannelId,
    NewsItemId,
    PostId,
    ProcessingState,
    UserId,
    VotableType,
    VoteDirection,
    VoteId,
)


def _uuid(value: Any) -> UUID:
    """asyncpg returns UUID objects, raw SQL fixtures may return strings."""
    return UUID(value) if isinstance(value, str) else value


def _optional_uuid(value: Any) -> Optional[UUID]:
    return _uuid(value) if value else None


def row_to_post(row: Dict[str, Any]) -> Post:
    """Convert database row to Post domain model.

    Args:
        row: Database row as dict

    Returns:
        Post domain model
    """
    return Post(
        id=PostId(_uuid(row["id"])),
        network_id=NetworkId(_uuid(row["network_id"])),
        community_id=CommunityId(_uuid(row["community_id"])),
        author_id=UserId(_uuid(row["author_id"])),
        title=row["title"],
        content=row.get("content"),
        content_type=ContentType(row["content_type"]),
        link_url=row.get("link_url"),
        media_urls=list(row.get("media_urls") or []),
        is_pinned=row["is_pinned"],
        is_locked=row["is_locked"],
        is_nsfw=row["is_nsfw"],
        upvotes=row["upvotes"],
        downvotes=row["downvotes"],
        score=row["score"],
        comment_count=row["comment_count"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def post_to_dict(post: Post) -> Dict[str, Any]:
    """Convert Post domain model to database dict."""
    data = post.model_dump()
    data["content_type"] = post.content_type.value
    return data


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model."""
    return Comment(
        id=CommentId(_uuid(row["id"])),
        post_id=PostId(_uuid(row["post_id"])),
        author_id=UserId(_uuid(row["author_id"])),
        content=row["content"],
        parent_id=_optional_uuid(row.get("parent_id")),
        upvotes=row["upvotes"],
        downvotes=row["downvotes"],
        score=row["score"],
        is_deleted=row["is_deleted"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict."""
    return comment.model_dump()


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model."""
    return Vote(
        id=VoteId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        votable_type=VotableType(row["votable_type"]),
        votable_id=_uuid(row["votable_id"]),
        direction=VoteDirection(row["direction"]),
        created_at=row["created_at"],
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to database dict."""
    return {
        "id": vote.id,
        "user_id": vote.user_id,
        "votable_type": vote.votable_type.value,
        "votable_id": vote.votable_id,
        "direction": int(vote.direction),
        "created_at": vote.created_at,
    }


def row_to_community(row: Dict[str, Any]) -> Community:
    """Convert database row to Community domain model."""
    return Community(
        id=CommunityId(_uuid(row["id"])),
        network_id=NetworkId(_uuid(row["network_id"])),
        name=row["name"],
        display_name=row["display_name"],
        description=row.get("description") or "",
        creator_id=UserId(_uuid(row["creator_id"])),
        created_at=row["created_at"],
    )


def community_to_dict(community: Community) -> Dict[str, Any]:
    """Convert Community domain model to database dict."""
    return community.model_dump()


def row_to_news_channel(row: Dict[str, Any]) -> NewsChannel:
    """Convert database row to NewsChannel domain model."""
    return NewsChannel(
        id=NewsChannelId(_uuid(row["id"])),
        source_id=FeedSourceId(row["source_id"]),
        name=row["name"],
        description=row.get("description") or "",
        profile_image=row.get("profile_image") or "",
        rss_url=row["rss_url"],
        category=row["category"],
        language=row["language"],
        is_active=row["is_active"],
        last_fetched_at=row.get("last_fetched_at"),
        created_at=row["created_at"],
    )


def news_channel_to_dict(channel: NewsChannel) -> Dict[str, Any]:
    """Convert NewsChannel domain model to database dict."""
    return channel.model_dump()


def row_to_news_item(row: Dict[str, Any]) -> NewsItem:
    """Convert database row to NewsItem domain model."""
    return NewsItem(
        id=NewsItemId(_uuid(row["id"])),
        channel_id=NewsChannelId(_uuid(row["channel_id"])),
        guid=row["guid"],
        title=row["title"],
        content=row.get("content") or "",
        link_url=row.get("link_url") or "",
        pub_date=row["pub_date"],
        state=ProcessingState(row["state"]),
        created_at=row["created_at"],
    )


def news_item_to_dict(item: NewsItem) -> Dict[str, Any]:
    """Convert NewsItem domain model to database dict."""
    data = item.model_dump()
    data["state"] = item.state.value
    return data


def row_to_news_subscription(row: Dict[str, Any]) -> NewsSubscription:
    """Convert database row to NewsSubscription domain model."""
    return NewsSubscription(
        user_id=UserId(_uuid(row["user_id"])),
        network_id=NetworkId(_uuid(row["network_id"])),
        channel_id=NewsChannelId(_uuid(row["channel_id"])),
        created_at=row["created_at"],
    )


def news_subscription_to_dict(subscription: NewsSubscription) -> Dict[str, Any]:
    """Convert NewsSubscription domain model to database dict."""
    return subscription.model_dump()
