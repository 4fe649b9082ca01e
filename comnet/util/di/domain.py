"""Domain layer DI providers."""

from uuid import UUID

from dishka import Scope, provide

from comnet.config import AuthSettings, NewsSettings, Settings
from comnet.domain.repository import (
    CommentRepository,
    CommunityRepository,
    FeedCache,
    FeedSourceRepository,
    NewsChannelRepository,
    NewsItemRepository,
    NewsSubscriptionRepository,
    PostRepository,
    TransactionManager,
    VoteRepository,
)
from comnet.domain.service import (
    CommentService,
    FeedClient,
    FeedService,
    JWTService,
    NewsIngestionService,
    PostService,
    VoteService,
)
from comnet.domain.value import NetworkId
from comnet.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session
    lifecycle. The feed service is the exception: it owns the feed cache
    and its per-source locks, which must outlive a single request.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(
        self, auth_settings: AuthSettings, settings: Settings
    ) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(
            auth_settings=auth_settings,
            default_network_id=NetworkId(UUID(settings.default_network_id)),
        )

    @provide
    def get_post_service(self, post_repository: PostRepository) -> PostService:
        """Provide post domain service."""
        return PostService(post_repository=post_repository)

    @provide
    def get_comment_service(
        self, comment_repository: CommentRepository
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(comment_repository=comment_repository)

    @provide
    def get_vote_service(
        self,
        vote_repository: VoteRepository,
        post_service: PostService,
        comment_service: CommentService,
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            vote_repository=vote_repository,
            post_service=post_service,
            comment_service=comment_service,
        )

    @provide(scope=Scope.APP)
    def get_feed_service(
        self,
        feed_client: FeedClient,
        feed_cache: FeedCache,
        source_repository: FeedSourceRepository,
        settings: NewsSettings,
    ) -> FeedService:
        """Provide the application-wide feed service."""
        return FeedService(
            feed_client=feed_client,
            feed_cache=feed_cache,
            source_repository=source_repository,
            settings=settings,
        )

    @provide
    def get_news_ingestion_service(
        self,
        feed_client: FeedClient,
        source_repository: FeedSourceRepository,
        channel_repository: NewsChannelRepository,
        item_repository: NewsItemRepository,
        subscription_repository: NewsSubscriptionRepository,
        community_repository: CommunityRepository,
        post_service: PostService,
        transaction_manager: TransactionManager,
        settings: NewsSettings,
    ) -> NewsIngestionService:
        """Provide news ingestion domain service."""
        return NewsIngestionService(
            feed_client=feed_client,
            source_repository=source_repository,
            channel_repository=channel_repository,
            item_repository=item_repository,
            subscription_repository=subscription_repository,
            community_repository=community_repository,
            post_service=post_service,
            transaction_manager=transaction_manager,
            settings=settings,
        )
