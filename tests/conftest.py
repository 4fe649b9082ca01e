"""Test configuration and shared builders."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

from comnet.domain.model.comment import Comment
from comnet.domain.model.feed import FeedSource, NormalizedFeedItem, ParsedFeed
from comnet.domain.model.post import Post
from comnet.domain.value import (
    CommentId,
    CommunityId,
    FeedSourceId,
    NetworkId,
    PostId,
    UserId,
)

BASE_TIME = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


def make_post(network_id: NetworkId | None = None, **overrides) -> Post:
    """Build a text post in the given network."""
    fields = {
        "id": PostId(uuid4()),
        "network_id": network_id or NetworkId(uuid4()),
        "community_id": CommunityId(uuid4()),
        "author_id": UserId(uuid4()),
        "title": "Test Post",
        "content": "Test content",
    }
    fields.update(overrides)
    return Post(**fields)


def make_comment(post_id: PostId, **overrides) -> Comment:
    """Build a top-level comment on a post."""
    fields = {
        "id": CommentId(uuid4()),
        "post_id": post_id,
        "author_id": UserId(uuid4()),
        "content": "Test comment",
    }
    fields.update(overrides)
    return Comment(**fields)


def make_item(guid: str, hours: int = 0, **overrides) -> NormalizedFeedItem:
    """Build a feed item published ``hours`` after BASE_TIME."""
    fields = {
        "title": f"Item {guid}",
        "description": f"About {guid}",
        "link": f"https://example.org/{guid}",
        "pub_date": BASE_TIME + timedelta(hours=hours),
        "guid": guid,
    }
    fields.update(overrides)
    return NormalizedFeedItem(**fields)


def make_feed(*items: NormalizedFeedItem, title: str = "Example Feed") -> ParsedFeed:
    """Build a parsed feed holding the given items."""
    return ParsedFeed(
        title=title,
        link="https://example.org",
        last_build_date=BASE_TIME,
        items=list(items),
    )


def make_source(source_id: str, **overrides) -> FeedSource:
    """Build an enabled feed source reachable at a per-id URL."""
    fields = {
        "id": FeedSourceId(source_id),
        "name": source_id.title(),
        "rss_url": f"https://{source_id}.example.org/rss",
    }
    fields.update(overrides)
    return FeedSource(**fields)
