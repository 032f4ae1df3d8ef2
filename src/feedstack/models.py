from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

T = TypeVar("T")


class CacheEntry(BaseModel, Generic[T]):
    """A cached payload with its write time and expiry (epoch milliseconds).

    Stored as one JSON document per cache key:
    ``{"data": ..., "timestamp": ..., "expiresAt": ...}``
    """

    model_config = ConfigDict(populate_by_name=True)

    data: T
    timestamp: int
    expires_at: int = Field(..., alias="expiresAt")

    def is_expired(self, now: int) -> bool:
        """An entry is still served at exactly ``expires_at``."""
        return now > self.expires_at


class CacheMetadataEntry(BaseModel):
    """Bookkeeping for one live cache key, kept in the metadata aggregate."""

    model_config = ConfigDict(populate_by_name=True)

    timestamp: int
    expires_at: int = Field(..., alias="expiresAt")
    size: int = Field(..., ge=0, description="UTF-8 byte length of the serialized entry")


CacheMetadata = dict[str, CacheMetadataEntry]
CacheMetadataAdapter: TypeAdapter[CacheMetadata] = TypeAdapter(CacheMetadata)


@dataclass
class CacheStats:
    """Cache size figures for display."""

    size_bytes: int
    key_count: int
    max_size_bytes: int

    @property
    def usage_ratio(self) -> float:
        """Fraction of the size budget in use."""
        if self.max_size_bytes == 0:
            return 0.0
        return self.size_bytes / self.max_size_bytes

    def to_dict(self) -> dict[str, float | int]:
        """Convert to dictionary."""
        return {
            "size_bytes": self.size_bytes,
            "key_count": self.key_count,
            "max_size_bytes": self.max_size_bytes,
            "usage_ratio": self.usage_ratio,
        }


class ArticleSource(BaseModel):
    """Publisher of an article."""

    id: str | int | None = None
    name: str


class Article(BaseModel):
    """A news article as returned by the upstream API."""

    model_config = ConfigDict(populate_by_name=True)

    source: ArticleSource
    author: str | None = None
    title: str
    description: str | None = None
    url: str
    url_to_image: str | None = Field(None, alias="urlToImage")
    published_at: str = Field(..., alias="publishedAt")
    content: str | None = None


ArticleListAdapter: TypeAdapter[list[Article]] = TypeAdapter(list[Article])


class NewsApiResponse(BaseModel):
    """Upstream response envelope."""

    model_config = ConfigDict(populate_by_name=True)

    status: str
    total_results: int = Field(0, alias="totalResults")
    articles: list[Article] = Field(default_factory=list)


class Bookmark(BaseModel):
    """A saved article."""

    model_config = ConfigDict(populate_by_name=True)

    url: str
    title: str
    description: str | None = None
    url_to_image: str | None = Field(None, alias="urlToImage")
    source: ArticleSource | None = None
    author: str | None = None
    published_at: str = Field(..., alias="publishedAt")
    bookmarked_at: str | None = Field(None, alias="bookmarkedAt")

    @classmethod
    def from_article(cls, article: Article) -> "Bookmark":
        """Build a bookmark from a fetched article."""
        return cls(
            url=article.url,
            title=article.title,
            description=article.description,
            url_to_image=article.url_to_image,
            source=article.source,
            author=article.author,
            published_at=article.published_at,
        )


BookmarkListAdapter: TypeAdapter[list[Bookmark]] = TypeAdapter(list[Bookmark])


class Preferences(BaseModel):
    """Default request parameters chosen by the user."""

    model_config = ConfigDict(populate_by_name=True)

    country: str | None = None
    category: str | None = None
    language: str | None = None
    sort_by: str | None = Field(None, alias="sortBy")


class AppSettings(BaseModel):
    """User-facing application settings."""

    model_config = ConfigDict(populate_by_name=True)

    dark_mode: bool | None = Field(None, alias="darkMode")
    notifications_enabled: bool = Field(True, alias="notificationsEnabled")
    notification_categories: list[str] = Field(default_factory=list, alias="notificationCategories")
