"""News feed routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, Query, status

from comnet.application.usecase.news import (
    AddSourceRequest,
    AddSourceResponse,
    AddSourceUseCase,
    GetAggregateFeedRequest,
    GetAggregateFeedResponse,
    GetAggregateFeedUseCase,
    GetSourceFeedRequest,
    GetSourceFeedResponse,
    GetSourceFeedUseCase,
    ListSourcesResponse,
    ListSourcesUseCase,
    RefreshSourcesResponse,
    RefreshSourcesUseCase,
    RunIngestionResponse,
    RunIngestionUseCase,
)
from comnet.domain.error import DomainError
from comnet.domain.service import JWTService
from comnet.interface.api.auth import resolve_caller
from comnet.interface.error import AuthenticationError, to_http_exception

router = APIRouter(prefix="/news", tags=["news"], route_class=DishkaRoute)


@router.get("/sources", response_model=ListSourcesResponse)
async def list_sources(
    list_sources_use_case: FromDishka[ListSourcesUseCase],
) -> ListSourcesResponse:
    """List the enabled feed sources."""
    return await list_sources_use_case.execute()


@router.post(
    "/sources",
    response_model=AddSourceResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_source(
    request: AddSourceRequest,
    add_source_use_case: FromDishka[AddSourceUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> AddSourceResponse:
    """Register a new feed source.

    Requires authentication. The URL must yield a parseable feed.
    """
    try:
        resolve_caller(jwt_service, auth_token, authorization, required=True)
        return await add_source_use_case.execute(request)
    except (AuthenticationError, DomainError) as e:
        logfire.warn("Feed source rejected", rss_url=request.rss_url, error=str(e))
        raise to_http_exception(e)


@router.get("/feed", response_model=GetAggregateFeedResponse)
async def get_aggregate_feed(
    get_aggregate_feed_use_case: FromDishka[GetAggregateFeedUseCase],
    max_items: int | None = Query(default=None, ge=1),
) -> GetAggregateFeedResponse:
    """Merged feed of all healthy sources, newest first."""
    return await get_aggregate_feed_use_case.execute(
        GetAggregateFeedRequest(max_items=max_items)
    )


@router.get("/source/{source_id}", response_model=GetSourceFeedResponse)
async def get_source_feed(
    source_id: str,
    get_source_feed_use_case: FromDishka[GetSourceFeedUseCase],
) -> GetSourceFeedResponse:
    """Cached feed of one source.

    A source whose last fetch failed is returned with an error and no feed.
    """
    try:
        return await get_source_feed_use_case.execute(
            GetSourceFeedRequest(source_id=source_id)
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.post("/refresh", response_model=RefreshSourcesResponse)
async def refresh_sources(
    refresh_sources_use_case: FromDishka[RefreshSourcesUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> RefreshSourcesResponse:
    """Drop the feed cache and refetch every source. Requires authentication."""
    try:
        resolve_caller(jwt_service, auth_token, authorization, required=True)
    except AuthenticationError as e:
        raise to_http_exception(e)
    return await refresh_sources_use_case.execute()


@router.post("/ingest", response_model=RunIngestionResponse)
async def run_ingestion(
    run_ingestion_use_case: FromDishka[RunIngestionUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> RunIngestionResponse:
    """Run one ingestion pass. Requires authentication."""
    try:
        resolve_caller(jwt_service, auth_token, authorization, required=True)
    except AuthenticationError as e:
        raise to_http_exception(e)
    return await run_ingestion_use_case.execute()
