"""Run news ingestion use case."""

from pydantic import BaseModel

from comnet.application.usecase.base import BaseUseCase
from comnet.domain.service import NewsIngestionService


class RunIngestionResponse(BaseModel):
    """Run ingestion response."""

    items_fetched: int
    posts_created: int
    items_failed: int = 0


class RunIngestionUseCase(BaseUseCase):
    """Use case for one ingestion run (fetch, dedupe, fan out)."""

    def __init__(self, news_ingestion_service: NewsIngestionService) -> None:
        self.news_ingestion_service = news_ingestion_service

    async def execute(self, request: None = None) -> RunIngestionResponse:
        result = await self.news_ingestion_service.run_ingestion()
        return RunIngestionResponse(
            items_fetched=result.items_fetched,
            posts_created=result.posts_created,
            items_failed=result.items_failed,
        )
