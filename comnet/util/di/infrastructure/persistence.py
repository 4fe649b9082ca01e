"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

import logfire
from dishka import Scope, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from comnet.config import NewsSettings, Settings
from comnet.domain.repository import (
    CommentRepository,
    CommunityRepository,
    FeedSourceRepository,
    NewsChannelRepository,
    NewsItemRepository,
    NewsSubscriptionRepository,
    PostRepository,
    TransactionManager,
    VoteRepository,
)
from comnet.persistence.database import create_engine, create_session_factory
from comnet.persistence.repository import (
    JsonFeedSourceRepository,
    PostgresCommentRepository,
    PostgresCommunityRepository,
    PostgresNewsChannelRepository,
    PostgresNewsItemRepository,
    PostgresNewsSubscriptionRepository,
    PostgresPostRepository,
    PostgresVoteRepository,
)
from comnet.persistence.transaction import SqlAlchemyTransactionManager
from comnet.util.di.base import ProviderBase
from comnet.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        """Provide database engine."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        The session is committed at the end of the request if no exception
        occurred, or rolled back if an exception was raised.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
                logfire.debug("Session committed")
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.APP)
    def get_feed_source_repository(self, settings: NewsSettings) -> FeedSourceRepository:
        """Provide the JSON feed source catalog."""
        return JsonFeedSourceRepository(settings.sources_file)

    @provide(scope=Scope.REQUEST)
    def get_post_repository(self, session: AsyncSession) -> PostRepository:
        """Provide Post repository."""
        return PostgresPostRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(self, session: AsyncSession) -> CommentRepository:
        """Provide Comment repository."""
        return PostgresCommentRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_vote_repository(self, session: AsyncSession) -> VoteRepository:
        """Provide Vote repository."""
        return PostgresVoteRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_community_repository(self, session: AsyncSession) -> CommunityRepository:
        """Provide Community repository."""
        return PostgresCommunityRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_news_channel_repository(
        self, session: AsyncSession
    ) -> NewsChannelRepository:
        """Provide NewsChannel repository."""
        return PostgresNewsChannelRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_news_item_repository(self, session: AsyncSession) -> NewsItemRepository:
        """Provide NewsItem repository."""
        return PostgresNewsItemRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_news_subscription_repository(
        self, session: AsyncSession
    ) -> NewsSubscriptionRepository:
        """Provide NewsSubscription repository."""
        return PostgresNewsSubscriptionRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_transaction_manager(self, session: AsyncSession) -> TransactionManager:
        """Provide explicit commits and savepoints on the request session."""
        return SqlAlchemyTransactionManager(session)
