"""RSS/Atom feed client implementation.

Downloads feed documents with httpx and normalizes them with feedparser.
"""

import calendar
import html
import re
from datetime import datetime, timezone
from time import struct_time
from typing import Any, Optional

import feedparser
import httpx
import logfire

from comnet.domain.error import UpstreamFetchError
from comnet.domain.model.feed import (
    FeedEnclosure,
    NormalizedFeedItem,
    ParsedFeed,
)
from comnet.domain.service.feed_client import FeedClient

DEFAULT_ITEM_TITLE = "Untitled"

_TAG_RE = re.compile(r"<[^>]+>")
_WHITESPACE_RE = re.compile(r"\s+")


class RssFeedClient(FeedClient):
    """Base class for feed clients.

    Provides type distinction for dependency injection.
    """

    pass


class HttpRssFeedClient(RssFeedClient):
    """Feed client fetching over HTTP."""

    def __init__(self, timeout: float, user_agent: str) -> None:
        """Initialize feed client.

        Args:
            timeout: Per-request timeout in seconds
            user_agent: User-Agent header sent to feed servers
        """
        self.timeout = timeout
        self.user_agent = user_agent

    async def fetch(self, url: str, max_items: Optional[int] = None) -> ParsedFeed:
        """Fetch and normalize a feed.

        Raises:
            UpstreamFetchError: On timeout, network error, HTTP error status
                or a document that is not a feed
        """
        with logfire.span("rss_client.fetch", url=url, max_items=max_items):
            try:
                async with httpx.AsyncClient(follow_redirects=True) as client:
                    response = await client.get(
                        url,
                        headers={"User-Agent": self.user_agent},
                        timeout=self.timeout,
                    )
            except httpx.TimeoutException:
                logfire.warn("Feed request timed out", url=url, timeout=self.timeout)
                raise UpstreamFetchError(url, "timeout")
            except httpx.HTTPError as e:
                logfire.warn("Feed request failed", url=url, error=str(e))
                raise UpstreamFetchError(url, str(e) or type(e).__name__)

            if response.status_code >= 400:
                logfire.warn(
                    "Feed request returned error status",
                    url=url,
                    status_code=response.status_code,
                )
                raise UpstreamFetchError(url, f"HTTP {response.status_code}")

            return self.parse(url, response.content, max_items=max_items)

    def parse(
        self, url: str, content: bytes, max_items: Optional[int] = None
    ) -> ParsedFeed:
        """Normalize a downloaded feed document.

        Raises:
            UpstreamFetchError: If the document is not an RSS or Atom feed
        """
        parsed = feedparser.parse(content)

        if not parsed.get("version") and not parsed.entries:
            logfire.warn(
                "Document is not a feed",
                url=url,
                error=str(parsed.get("bozo_exception", "")),
            )
            raise UpstreamFetchError(url, "not a valid RSS or Atom feed")

        fetched_at = datetime.now(timezone.utc)
        entries = parsed.entries
        if max_items is not None:
            entries = entries[:max_items]

        channel = parsed.feed
        return ParsedFeed(
            title=channel.get("title") or "",
            description=channel.get("subtitle") or channel.get("description") or "",
            link=channel.get("link") or "",
            last_build_date=_to_datetime(channel.get("updated_parsed")) or fetched_at,
            items=[_normalize_entry(entry, fetched_at) for entry in entries],
        )


class MockRssFeedClient(RssFeedClient):
    """Mock feed client for testing.

    Serves feeds registered per URL without network access. Unknown URLs
    fail like a missing document.
    """

    def __init__(self) -> None:
        self.feeds: dict[str, ParsedFeed] = {}
        self.failures: dict[str, str] = {}
        self.calls: list[str] = []

    def add_feed(self, url: str, feed: ParsedFeed) -> None:
        self.feeds[url] = feed
        self.failures.pop(url, None)

    def fail(self, url: str, reason: str = "HTTP 500") -> None:
        self.failures[url] = reason

    def fetch_count(self, url: str) -> int:
        return self.calls.count(url)

    async def fetch(self, url: str, max_items: Optional[int] = None) -> ParsedFeed:
        self.calls.append(url)

        if url in self.failures:
            raise UpstreamFetchError(url, self.failures[url])
        if url not in self.feeds:
            raise UpstreamFetchError(url, "HTTP 404")

        feed = self.feeds[url]
        if max_items is not None:
            feed = feed.model_copy(update={"items": feed.items[:max_items]})
        return feed


def _normalize_entry(entry: Any, fetched_at: datetime) -> NormalizedFeedItem:
    """Apply defaults to a feedparser entry."""
    link = entry.get("link") or ""

    content_html = ""
    if entry.get("content"):
        content_html = entry.content[0].get("value") or ""
    summary = entry.get("summary") or ""

    snippet = _strip_html(content_html or summary)

    return NormalizedFeedItem(
        title=entry.get("title") or DEFAULT_ITEM_TITLE,
        description=snippet or content_html or summary,
        link=link,
        pub_date=(
            _to_datetime(entry.get("published_parsed"))
            or _to_datetime(entry.get("updated_parsed"))
            or fetched_at
        ),
        guid=entry.get("id") or entry.get("guid") or link,
        categories=[tag.get("term") for tag in entry.get("tags", []) if tag.get("term")],
        creator=entry.get("author") or "",
        enclosure=_first_enclosure(entry),
    )


def _first_enclosure(entry: Any) -> Optional[FeedEnclosure]:
    for enclosure in entry.get("enclosures", []):
        href = enclosure.get("href") or enclosure.get("url")
        if not href:
            continue
        length = enclosure.get("length")
        return FeedEnclosure(
            url=href,
            type=enclosure.get("type"),
            length=int(length) if length and str(length).isdigit() else None,
        )
    return None


def _to_datetime(value: Any) -> Optional[datetime]:
    """Convert a feedparser UTC time tuple to an aware datetime."""
    if not isinstance(value, struct_time):
        return None
    try:
        return datetime.fromtimestamp(calendar.timegm(value), tz=timezone.utc)
    except (ValueError, OverflowError):
        return None


def _strip_html(value: str) -> str:
    text = html.unescape(_TAG_RE.sub(" ", value))
    return _WHITESPACE_RE.sub(" ", text).strip()
