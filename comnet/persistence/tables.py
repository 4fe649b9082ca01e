"""SQLAlchemy table definitions for COMNet.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Enum,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    SmallInteger,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import ARRAY, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# NETWORKS / USERS
# ============================================================================
networks_table = Table(
    "networks",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("name", String(100), nullable=False, unique=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("username", String(50), nullable=False, unique=True),
    Column(
        "network_id",
        UUID,
        ForeignKey("networks.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# COMMUNITIES TABLE
# ============================================================================
communities_table = Table(
    "communities",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "network_id",
        UUID,
        ForeignKey("networks.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("name", String(100), nullable=False),
    Column("display_name", String(100), nullable=False),
    Column("description", Text, nullable=False, server_default=""),
    Column(
        "creator_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("network_id", "name", name="uq_community_network_name"),
)

# ============================================================================
# POSTS TABLE
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "network_id",
        UUID,
        ForeignKey("networks.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "community_id",
        UUID,
        ForeignKey("communities.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("title", String(300), nullable=False),
    Column("content", Text, nullable=True),
    Column(
        "content_type",
        Enum("text", "image", "video", "link", name="content_type", create_type=False),
        nullable=False,
        server_default="text",
    ),
    Column("link_url", Text, nullable=True),
    Column("media_urls", ARRAY(Text), nullable=False, server_default="{}"),
    Column("is_pinned", Boolean, nullable=False, server_default="false"),
    Column("is_locked", Boolean, nullable=False, server_default="false"),
    Column("is_nsfw", Boolean, nullable=False, server_default="false"),
    Column("upvotes", Integer, nullable=False, server_default="0"),
    Column("downvotes", Integer, nullable=False, server_default="0"),
    Column("score", Integer, nullable=False, server_default="0"),
    Column("comment_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "content_type <> 'link' OR link_url IS NOT NULL",
        name="link_post_requires_url",
    ),
)

Index("idx_posts_network_created_at", posts_table.c.network_id, posts_table.c.created_at.desc())
Index("idx_posts_community_id", posts_table.c.community_id)
Index("idx_posts_score", posts_table.c.score.desc())

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("post_id", UUID, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
    Column(
        "parent_id", UUID, ForeignKey("comments.id", ondelete="CASCADE"), nullable=True
    ),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("content", Text, nullable=False),
    Column("upvotes", Integer, nullable=False, server_default="0"),
    Column("downvotes", Integer, nullable=False, server_default="0"),
    Column("score", Integer, nullable=False, server_default="0"),
    Column("is_deleted", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_comments_post_id", comments_table.c.post_id)
Index("idx_comments_parent_id", comments_table.c.parent_id)
Index("idx_comments_created_at", comments_table.c.created_at)

# ============================================================================
# VOTES TABLE
# ============================================================================
votes_table = Table(
    "votes",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column(
        "votable_type",
        Enum("post", "comment", name="votable_type", create_type=False),
        nullable=False,
    ),
    Column("votable_id", UUID, nullable=False),
    Column("direction", SmallInteger, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("user_id", "votable_type", "votable_id", name="unique_vote"),
    CheckConstraint("direction IN (-1, 1)", name="vote_direction_valid"),
)

Index("idx_votes_votable", votes_table.c.votable_type, votes_table.c.votable_id)

# ============================================================================
# NEWS TABLES
# ============================================================================
news_channels_table = Table(
    "news_channels",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("source_id", String(100), nullable=False, unique=True),
    Column("name", String(200), nullable=False),
    Column("description", Text, nullable=False, server_default=""),
    Column("profile_image", Text, nullable=False, server_default=""),
    Column("rss_url", Text, nullable=False),
    Column("category", String(50), nullable=False, server_default="news"),
    Column("language", String(10), nullable=False, server_default="de"),
    Column("is_active", Boolean, nullable=False, server_default="true"),
    Column("last_fetched_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

news_items_table = Table(
    "news_items",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "channel_id",
        UUID,
        ForeignKey("news_channels.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("guid", Text, nullable=False),
    Column("title", Text, nullable=False),
    Column("content", Text, nullable=False, server_default=""),
    Column("link_url", Text, nullable=False, server_default=""),
    Column("pub_date", TIMESTAMP(timezone=True), nullable=False),
    Column(
        "state",
        Enum("unprocessed", "processed", name="news_item_state", create_type=False),
        nullable=False,
        server_default="unprocessed",
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("channel_id", "guid", name="uq_news_item_channel_guid"),
)

Index(
    "idx_news_items_unprocessed",
    news_items_table.c.pub_date.desc(),
    postgresql_where=news_items_table.c.state == "unprocessed",
)

news_subscriptions_table = Table(
    "news_subscriptions",
    metadata,
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column(
        "channel_id",
        UUID,
        ForeignKey("news_channels.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "network_id",
        UUID,
        ForeignKey("networks.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_news_subscriptions_channel_id", news_subscriptions_table.c.channel_id)
