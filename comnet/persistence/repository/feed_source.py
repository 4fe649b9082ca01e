"""JSON file implementation of the feed source catalog.

The catalog file looks like::

    {
      "sources": [
        {"id": "tagesschau", "name": "Tagesschau", "rssUrl": "https://...", ...}
      ],
      "settings": {"maxItemsPerSource": 100}
    }
"""

import asyncio
import json
from pathlib import Path
from typing import Any, List, Optional

import logfire
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from comnet.domain.model import FeedSource
from comnet.domain.repository import FeedSourceRepository
from comnet.domain.value import FeedSourceId


class CatalogSettings(BaseModel):
    """Global catalog settings."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    max_items_per_source: Optional[int] = Field(default=None, ge=0)


class FeedCatalog(BaseModel):
    """Parsed content of the catalog file."""

    sources: List[FeedSource] = Field(default_factory=list)
    settings: CatalogSettings = Field(default_factory=CatalogSettings)


class JsonFeedSourceRepository(FeedSourceRepository):
    """Feed source catalog backed by a JSON file.

    The file is read once and kept in memory; ``add`` rewrites it.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._catalog: Optional[FeedCatalog] = None
        self._write_lock = asyncio.Lock()

    def _load(self) -> FeedCatalog:
        if self._catalog is not None:
            return self._catalog

        if not self.path.exists():
            logfire.warn("Feed source catalog not found", path=str(self.path))
            self._catalog = FeedCatalog()
            return self._catalog

        with logfire.span("feed_source_repository.load", path=str(self.path)):
            data: Any = json.loads(self.path.read_text(encoding="utf-8"))
            self._catalog = FeedCatalog.model_validate(data)
            logfire.info(
                "Feed source catalog loaded",
                path=str(self.path),
                sources=len(self._catalog.sources),
            )
            return self._catalog

    async def find_enabled(self) -> List[FeedSource]:
        return [source for source in self._load().sources if source.enabled]

    async def find_by_id(self, source_id: FeedSourceId) -> Optional[FeedSource]:
        for source in self._load().sources:
            if source.id == source_id:
                return source
        return None

    async def max_total_items(self) -> Optional[int]:
        return self._load().settings.max_items_per_source

    async def add(self, source: FeedSource) -> FeedSource:
        async with self._write_lock:
            catalog = self._load()
            updated = catalog.model_copy(update={"sources": [*catalog.sources, source]})

            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                json.dumps(
                    updated.model_dump(mode="json", by_alias=True),
                    indent=2,
                    ensure_ascii=False,
                ),
                encoding="utf-8",
            )
            self._catalog = updated
            return source
