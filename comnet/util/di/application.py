"""Application layer DI providers."""

from dishka import Scope, provide

from comnet.application.usecase.comment import ListCommentsUseCase
from comnet.application.usecase.news import (
    AddSourceUseCase,
    GetAggregateFeedUseCase,
    GetSourceFeedUseCase,
    ListSourcesUseCase,
    RefreshSourcesUseCase,
    RunIngestionUseCase,
)
from comnet.application.usecase.post import GetPostUseCase, ListPostsUseCase
from comnet.application.usecase.vote import CastVoteUseCase
from comnet.domain.service import (
    CommentService,
    FeedService,
    NewsIngestionService,
    PostService,
    VoteService,
)
from comnet.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    # Vote use cases
    @provide
    def get_cast_vote_use_case(self, vote_service: VoteService) -> CastVoteUseCase:
        """Provide cast vote use case."""
        return CastVoteUseCase(vote_service=vote_service)

    # Post use cases
    @provide
    def get_list_posts_use_case(
        self, post_service: PostService, vote_service: VoteService
    ) -> ListPostsUseCase:
        """Provide list posts use case."""
        return ListPostsUseCase(post_service=post_service, vote_service=vote_service)

    @provide
    def get_post_use_case(
        self, post_service: PostService, vote_service: VoteService
    ) -> GetPostUseCase:
        """Provide get post use case."""
        return GetPostUseCase(post_service=post_service, vote_service=vote_service)

    # Comment use cases
    @provide
    def get_list_comments_use_case(
        self,
        post_service: PostService,
        comment_service: CommentService,
        vote_service: VoteService,
    ) -> ListCommentsUseCase:
        """Provide list comments use case."""
        return ListCommentsUseCase(
            post_service=post_service,
            comment_service=comment_service,
            vote_service=vote_service,
        )

    # News use cases
    @provide
    def get_list_sources_use_case(self, feed_service: FeedService) -> ListSourcesUseCase:
        """Provide list sources use case."""
        return ListSourcesUseCase(feed_service=feed_service)

    @provide
    def get_add_source_use_case(self, feed_service: FeedService) -> AddSourceUseCase:
        """Provide add source use case."""
        return AddSourceUseCase(feed_service=feed_service)

    @provide
    def get_aggregate_feed_use_case(
        self, feed_service: FeedService
    ) -> GetAggregateFeedUseCase:
        """Provide aggregate feed use case."""
        return GetAggregateFeedUseCase(feed_service=feed_service)

    @provide
    def get_source_feed_use_case(self, feed_service: FeedService) -> GetSourceFeedUseCase:
        """Provide source feed use case."""
        return GetSourceFeedUseCase(feed_service=feed_service)

    @provide
    def get_refresh_sources_use_case(
        self, feed_service: FeedService
    ) -> RefreshSourcesUseCase:
        """Provide refresh sources use case."""
        return RefreshSourcesUseCase(feed_service=feed_service)

    @provide
    def get_run_ingestion_use_case(
        self, news_ingestion_service: NewsIngestionService
    ) -> RunIngestionUseCase:
        """Provide run ingestion use case."""
        return RunIngestionUseCase(news_ingestion_service=news_ingestion_service)
