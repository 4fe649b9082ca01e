"""initial_schema

Create the schema for the COMNet voting engine and news ingestion:
- Networks and users (minimal, owned by the account service)
- Communities
- Posts and comments with denormalized vote counters
- Votes (one row per voter and target, direction -1 or +1)
- News channels, news items and news subscriptions

Revision ID: 3f1c2a9d7b40
Revises:
Create Date: 2026-10-17 09:12:44.318207

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _uuid_pk() -> sa.Column:
    return sa.Column(
        "id",
        sa.UUID(),
        server_default=sa.text("uuid_generate_v4()"),
        nullable=False,
    )


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.TIMESTAMP(timezone=True),
        server_default=sa.text("NOW()"),
        nullable=False,
    )


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # Create ENUM types (idempotent)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE votable_type AS ENUM ('post', 'comment');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    op.execute("""
        DO $$ BEGIN
            CREATE TYPE content_type AS ENUM ('text', 'image', 'video', 'link');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    op.execute("""
        DO $$ BEGIN
            CREATE TYPE news_item_state AS ENUM ('unprocessed', 'processed');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    # ========================================================================
    # NETWORKS / USERS
    # ========================================================================
    op.create_table(
        "networks",
        _uuid_pk(),
        sa.Column("name", sa.String(length=100), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    op.create_table(
        "users",
        _uuid_pk(),
        sa.Column("username", sa.String(length=50), nullable=False),
        sa.Column("network_id", sa.UUID(), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["network_id"], ["networks.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
    )

    # ========================================================================
    # COMMUNITIES
    # ========================================================================
    op.create_table(
        "communities",
        _uuid_pk(),
        sa.Column("network_id", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("display_name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), server_default="", nullable=False),
        sa.Column("creator_id", sa.UUID(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["network_id"], ["networks.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["creator_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("network_id", "name", name="uq_community_network_name"),
    )

    # ========================================================================
    # POSTS
    # ========================================================================
    op.create_table(
        "posts",
        _uuid_pk(),
        sa.Column("network_id", sa.UUID(), nullable=False),
        sa.Column("community_id", sa.UUID(), nullable=False),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("title", sa.String(length=300), nullable=False),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column(
            "content_type",
            postgresql.ENUM(
                "text", "image", "video", "link", name="content_type", create_type=False
            ),
            server_default="text",
            nullable=False,
        ),
        sa.Column("link_url", sa.Text(), nullable=True),
        sa.Column(
            "media_urls",
            postgresql.ARRAY(sa.Text()),
            server_default="{}",
            nullable=False,
        ),
        sa.Column("is_pinned", sa.Boolean(), server_default="false", nullable=False),
        sa.Column("is_locked", sa.Boolean(), server_default="false", nullable=False),
        sa.Column("is_nsfw", sa.Boolean(), server_default="false", nullable=False),
        sa.Column("upvotes", sa.Integer(), server_default="0", nullable=False),
        sa.Column("downvotes", sa.Integer(), server_default="0", nullable=False),
        sa.Column("score", sa.Integer(), server_default="0", nullable=False),
        sa.Column("comment_count", sa.Integer(), server_default="0", nullable=False),
        _created_at(),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.CheckConstraint(
            "content_type <> 'link' OR link_url IS NOT NULL",
            name="link_post_requires_url",
        ),
        sa.ForeignKeyConstraint(["network_id"], ["networks.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["community_id"], ["communities.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_posts_network_created_at",
        "posts",
        ["network_id", sa.text("created_at DESC")],
    )
    op.create_index("idx_posts_community_id", "posts", ["community_id"])
    op.create_index("idx_posts_score", "posts", [sa.text("score DESC")])

    # ========================================================================
    # COMMENTS
    # ========================================================================
    op.create_table(
        "comments",
        _uuid_pk(),
        sa.Column("post_id", sa.UUID(), nullable=False),
        sa.Column("parent_id", sa.UUID(), nullable=True),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("upvotes", sa.Integer(), server_default="0", nullable=False),
        sa.Column("downvotes", sa.Integer(), server_default="0", nullable=False),
        sa.Column("score", sa.Integer(), server_default="0", nullable=False),
        sa.Column("is_deleted", sa.Boolean(), server_default="false", nullable=False),
        _created_at(),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["post_id"], ["posts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["parent_id"], ["comments.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_comments_post_id", "comments", ["post_id"])
    op.create_index("idx_comments_parent_id", "comments", ["parent_id"])
    op.create_index("idx_comments_created_at", "comments", ["created_at"])

    # ========================================================================
    # VOTES
    # ========================================================================
    op.create_table(
        "votes",
        _uuid_pk(),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column(
            "votable_type",
            postgresql.ENUM("post", "comment", name="votable_type", create_type=False),
            nullable=False,
        ),
        sa.Column("votable_id", sa.UUID(), nullable=False),
        sa.Column("direction", sa.SmallInteger(), nullable=False),
        _created_at(),
        sa.CheckConstraint("direction IN (-1, 1)", name="vote_direction_valid"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "user_id", "votable_type", "votable_id", name="unique_vote"
        ),
    )
    op.create_index("idx_votes_votable", "votes", ["votable_type", "votable_id"])

    # ========================================================================
    # NEWS
    # ========================================================================
    op.create_table(
        "news_channels",
        _uuid_pk(),
        sa.Column("source_id", sa.String(length=100), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), server_default="", nullable=False),
        sa.Column("profile_image", sa.Text(), server_default="", nullable=False),
        sa.Column("rss_url", sa.Text(), nullable=False),
        sa.Column(
            "category", sa.String(length=50), server_default="news", nullable=False
        ),
        sa.Column(
            "language", sa.String(length=10), server_default="de", nullable=False
        ),
        sa.Column("is_active", sa.Boolean(), server_default="true", nullable=False),
        sa.Column("last_fetched_at", sa.TIMESTAMP(timezone=True), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("source_id"),
    )

    op.create_table(
        "news_items",
        _uuid_pk(),
        sa.Column("channel_id", sa.UUID(), nullable=False),
        sa.Column("guid", sa.Text(), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), server_default="", nullable=False),
        sa.Column("link_url", sa.Text(), server_default="", nullable=False),
        sa.Column("pub_date", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column(
            "state",
            postgresql.ENUM(
                "unprocessed", "processed", name="news_item_state", create_type=False
            ),
            server_default="unprocessed",
            nullable=False,
        ),
        _created_at(),
        sa.ForeignKeyConstraint(
            ["channel_id"], ["news_channels.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("channel_id", "guid", name="uq_news_item_channel_guid"),
    )
    op.create_index(
        "idx_news_items_unprocessed",
        "news_items",
        [sa.text("pub_date DESC")],
        postgresql_where=sa.text("state = 'unprocessed'"),
    )

    op.create_table(
        "news_subscriptions",
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("channel_id", sa.UUID(), nullable=False),
        sa.Column("network_id", sa.UUID(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["channel_id"], ["news_channels.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(["network_id"], ["networks.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("user_id", "channel_id"),
    )
    op.create_index(
        "idx_news_subscriptions_channel_id", "news_subscriptions", ["channel_id"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("news_subscriptions")
    op.drop_table("news_items")
    op.drop_table("news_channels")
    op.drop_table("votes")
    op.drop_table("comments")
    op.drop_table("posts")
    op.drop_table("communities")
    op.drop_table("users")
    op.drop_table("networks")

    op.execute("DROP TYPE IF EXISTS news_item_state")
    op.execute("DROP TYPE IF EXISTS content_type")
    op.execute("DROP TYPE IF EXISTS votable_type")
