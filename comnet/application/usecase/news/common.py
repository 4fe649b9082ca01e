"""Response models shared by the news use cases."""

from datetime import datetime

from pydantic import BaseModel

from comnet.domain.model import FeedSource, FeedSourceSummary, NormalizedFeedItem


class SourceInfo(BaseModel):
    """Public description of a feed source (the feed URL is not exposed)."""

    id: str
    name: str
    description: str
    profile_image: str
    category: str
    language: str

    @classmethod
    def from_source(cls, source: FeedSource) -> "SourceInfo":
        return cls(
            id=source.id,
            name=source.name,
            description=source.description,
            profile_image=source.profile_image,
            category=source.category,
            language=source.language,
        )


class SourceSummaryInfo(BaseModel):
    """Source attached to an aggregated item."""

    id: str
    name: str
    profile_image: str
    category: str

    @classmethod
    def from_summary(cls, summary: FeedSourceSummary) -> "SourceSummaryInfo":
        return cls(
            id=summary.id,
            name=summary.name,
            profile_image=summary.profile_image,
            category=summary.category,
        )


class FeedEnclosureInfo(BaseModel):
    url: str
    type: str | None
    length: int | None


class FeedItemInfo(BaseModel):
    """Feed item in responses."""

    title: str
    description: str
    link: str
    pub_date: datetime
    guid: str
    categories: list[str]
    creator: str
    enclosure: FeedEnclosureInfo | None
    source: SourceSummaryInfo | None = None

    @classmethod
    def from_item(
        cls, item: NormalizedFeedItem, source: FeedSourceSummary | None = None
    ) -> "FeedItemInfo":
        return cls(
            title=item.title,
            description=item.description,
            link=item.link,
            pub_date=item.pub_date,
            guid=item.guid,
            categories=item.categories,
            creator=item.creator,
            enclosure=(
                FeedEnclosureInfo(
                    url=item.enclosure.url,
                    type=item.enclosure.type,
                    length=item.enclosure.length,
                )
                if item.enclosure
                else None
            ),
            source=SourceSummaryInfo.from_summary(source) if source else None,
        )
