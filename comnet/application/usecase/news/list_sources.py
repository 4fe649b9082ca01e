"""List feed sources use case."""

from pydantic import BaseModel

from comnet.application.usecase.base import BaseUseCase
from comnet.domain.service import FeedService

from .common import SourceInfo


class ListSourcesResponse(BaseModel):
    """List sources response."""

    sources: list[SourceInfo]
    total: int


class ListSourcesUseCase(BaseUseCase):
    """Use case for listing the enabled feed sources."""

    def __init__(self, feed_service: FeedService) -> None:
        self.feed_service = feed_service

    async def execute(self, request: None = None) -> ListSourcesResponse:
        sources = await self.feed_service.list_sources()
        return ListSourcesResponse(
            sources=[SourceInfo.from_source(source) for source in sources],
            total=len(sources),
        )
