"""News use cases."""

from .add_source import AddSourceRequest, AddSourceResponse, AddSourceUseCase
from .common import FeedEnclosureInfo, FeedItemInfo, SourceInfo, SourceSummaryInfo
from .get_aggregate_feed import (
    GetAggregateFeedRequest,
    GetAggregateFeedResponse,
    GetAggregateFeedUseCase,
)
from .get_source_feed import (
    GetSourceFeedRequest,
    GetSourceFeedResponse,
    GetSourceFeedUseCase,
)
from .list_sources import ListSourcesResponse, ListSourcesUseCase
from .refresh_sources import RefreshSourcesResponse, RefreshSourcesUseCase
from .run_ingestion import RunIngestionResponse, RunIngestionUseCase

__all__ = [
    "AddSourceRequest",
    "AddSourceResponse",
    "AddSourceUseCase",
    "FeedEnclosureInfo",
    "FeedItemInfo",
    "GetAggregateFeedRequest",
    "GetAggregateFeedResponse",
    "GetAggregateFeedUseCase",
    "GetSourceFeedRequest",
    "GetSourceFeedResponse",
    "GetSourceFeedUseCase",
    "ListSourcesResponse",
    "ListSourcesUseCase",
    "RefreshSourcesResponse",
    "RefreshSourcesUseCase",
    "RunIngestionResponse",
    "RunIngestionUseCase",
    "SourceInfo",
    "SourceSummaryInfo",
]
