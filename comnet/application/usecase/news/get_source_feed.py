"""Get source feed use case."""

from datetime import datetime

from pydantic import BaseModel

from comnet.application.usecase.base import BaseUseCase
from comnet.domain.service import FeedService
from comnet.domain.value import FeedSourceId

from .common import FeedItemInfo, SourceInfo


class GetSourceFeedRequest(BaseModel):
    """Get source feed request."""

    source_id: str


class FeedInfo(BaseModel):
    """Feed channel metadata and items."""

    title: str
    description: str
    link: str
    last_build_date: datetime
    items: list[FeedItemInfo]


class GetSourceFeedResponse(BaseModel):
    """Get source feed response.

    Exactly one of ``feed`` and ``error`` is set.
    """

    source: SourceInfo
    feed: FeedInfo | None
    last_updated: datetime
    error: str | None


class GetSourceFeedUseCase(BaseUseCase):
    """Use case for the cached feed of one source."""

    def __init__(self, feed_service: FeedService) -> None:
        self.feed_service = feed_service

    async def execute(self, request: GetSourceFeedRequest) -> GetSourceFeedResponse:
        """Execute get source feed flow.

        Raises:
            NotFoundError: If the source is unknown or disabled
        """
        entry = await self.feed_service.get_source_feed(FeedSourceId(request.source_id))

        feed = None
        if entry.feed is not None:
            feed = FeedInfo(
                title=entry.feed.title,
                description=entry.feed.description,
                link=entry.feed.link,
                last_build_date=entry.feed.last_build_date,
                items=[FeedItemInfo.from_item(item) for item in entry.feed.items],
            )

        return GetSourceFeedResponse(
            source=SourceInfo.from_source(entry.source),
            feed=feed,
            last_updated=entry.last_updated,
            error=entry.error,
        )
