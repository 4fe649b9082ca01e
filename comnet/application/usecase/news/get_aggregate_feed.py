"""Get aggregate feed use case."""

from datetime import datetime

from pydantic import BaseModel, Field

from comnet.application.usecase.base import BaseUseCase
from comnet.domain.service import FeedService

from .common import FeedItemInfo


class GetAggregateFeedRequest(BaseModel):
    """Get aggregate feed request."""

    max_items: int | None = Field(default=None, ge=1)


class GetAggregateFeedResponse(BaseModel):
    """Get aggregate feed response."""

    items: list[FeedItemInfo]
    total: int
    sources: int  # Number of sources that contributed
    last_updated: datetime


class GetAggregateFeedUseCase(BaseUseCase):
    """Use case for the merged feed of all sources."""

    def __init__(self, feed_service: FeedService) -> None:
        self.feed_service = feed_service

    async def execute(self, request: GetAggregateFeedRequest) -> GetAggregateFeedResponse:
        feed = await self.feed_service.get_aggregate_feed(
            max_total_items=request.max_items
        )
        return GetAggregateFeedResponse(
            items=[FeedItemInfo.from_item(item, item.source) for item in feed.items],
            total=len(feed.items),
            sources=feed.sources_succeeded,
            last_updated=feed.last_updated,
        )
