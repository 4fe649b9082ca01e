"""Add feed source use case."""

from pydantic import BaseModel

from comnet.application.usecase.base import BaseUseCase
from comnet.domain.service import FeedService

from .common import SourceInfo


class AddSourceRequest(BaseModel):
    """Add source request."""

    name: str
    rss_url: str
    description: str = ""
    profile_image: str = ""
    category: str = "news"
    language: str = "de"


class AddSourceResponse(BaseModel):
    """Add source response."""

    source: SourceInfo
    message: str


class AddSourceUseCase(BaseUseCase):
    """Use case for registering a new feed source."""

    def __init__(self, feed_service: FeedService) -> None:
        self.feed_service = feed_service

    async def execute(self, request: AddSourceRequest) -> AddSourceResponse:
        """Execute add source flow.

        Raises:
            InvalidArgumentError: If the source is incomplete, its URL does
                not yield a feed, or it already exists
        """
        source = await self.feed_service.add_source(
            name=request.name,
            rss_url=request.rss_url,
            description=request.description,
            profile_image=request.profile_image,
            category=request.category,
            language=request.language,
        )
        return AddSourceResponse(
            source=SourceInfo.from_source(source),
            message="Feed source added",
        )
