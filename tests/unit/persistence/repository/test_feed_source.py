"""Unit tests for the JSON feed source catalog."""

import json

import pytest

from comnet.domain.value import FeedSourceId
from comnet.persistence.repository import JsonFeedSourceRepository
from tests.conftest import make_source

CATALOG = {
    "sources": [
        {
            "id": "tagesschau",
            "name": "Tagesschau",
            "rssUrl": "https://www.tagesschau.de/xml/rss2/",
            "profileImage": "https://www.tagesschau.de/favicon.ico",
            "maxItems": 5,
        },
        {
            "id": "retired",
            "name": "Retired",
            "rssUrl": "https://retired.example.org/rss",
            "enabled": False,
        },
    ],
    "settings": {"maxItemsPerSource": 40},
}


@pytest.fixture
def catalog_path(tmp_path):
    path = tmp_path / "rss-sources.json"
    path.write_text(json.dumps(CATALOG), encoding="utf-8")
    return path


class TestJsonFeedSourceRepository:
    """Tests for JsonFeedSourceRepository."""

    @pytest.mark.asyncio
    async def test_camel_case_catalog_is_loaded(self, catalog_path):
        repo = JsonFeedSourceRepository(catalog_path)

        (source,) = await repo.find_enabled()

        assert source.id == "tagesschau"
        assert source.rss_url == "https://www.tagesschau.de/xml/rss2/"
        assert source.profile_image == "https://www.tagesschau.de/favicon.ico"
        assert source.max_items == 5
        assert source.language == "de"
        assert await repo.max_total_items() == 40

    @pytest.mark.asyncio
    async def test_disabled_sources_are_still_found_by_id(self, catalog_path):
        repo = JsonFeedSourceRepository(catalog_path)

        source = await repo.find_by_id(FeedSourceId("retired"))

        assert source is not None
        assert source.enabled is False

    @pytest.mark.asyncio
    async def test_add_persists_to_file(self, catalog_path):
        repo = JsonFeedSourceRepository(catalog_path)

        await repo.add(make_source("lab-news", name="Lab News"))

        data = json.loads(catalog_path.read_text(encoding="utf-8"))
        assert [s["id"] for s in data["sources"]] == ["tagesschau", "retired", "lab-news"]
        assert data["sources"][-1]["rssUrl"] == "https://lab-news.example.org/rss"
        assert data["settings"]["maxItemsPerSource"] == 40

        reloaded = JsonFeedSourceRepository(catalog_path)
        assert await reloaded.find_by_id(FeedSourceId("lab-news")) is not None

    @pytest.mark.asyncio
    async def test_missing_file_yields_empty_catalog(self, tmp_path):
        repo = JsonFeedSourceRepository(tmp_path / "absent.json")

        assert await repo.find_enabled() == []
        assert await repo.max_total_items() is None

    @pytest.mark.asyncio
    async def test_add_creates_missing_file(self, tmp_path):
        path = tmp_path / "config" / "rss-sources.json"
        repo = JsonFeedSourceRepository(path)

        await repo.add(make_source("alpha"))

        assert path.exists()
        assert [s.id for s in await JsonFeedSourceRepository(path).find_enabled()] == [
            "alpha"
        ]
