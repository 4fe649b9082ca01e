"""Refresh feed sources use case."""

from datetime import datetime

from pydantic import BaseModel

from comnet.application.usecase.base import BaseUseCase
from comnet.domain.service import FeedService


class RefreshSourcesResponse(BaseModel):
    """Refresh sources response."""

    message: str
    sources_refreshed: int
    timestamp: datetime


class RefreshSourcesUseCase(BaseUseCase):
    """Use case for dropping the feed cache and refetching every source."""

    def __init__(self, feed_service: FeedService) -> None:
        self.feed_service = feed_service

    async def execute(self, request: None = None) -> RefreshSourcesResponse:
        result = await self.feed_service.refresh_all_sources()
        return RefreshSourcesResponse(
            message="Feeds refreshed",
            sources_refreshed=result.sources_refreshed,
            timestamp=result.timestamp,
        )
