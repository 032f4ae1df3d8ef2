"""News service: cache-first article fetching.

On a request the article cache is checked first; on a miss the upstream
source is called, the result written back and the cache size budget
enforced.
"""

from dataclasses import dataclass, field

from feedstack.models import Article
from feedstack.protocols import NewsSource
from feedstack.services.article_cache import ArticleCache
from feedstack.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class FetchResult:
    """Articles returned to the caller and where they came from."""

    articles: list[Article] = field(default_factory=list)
    total_results: int = 0
    cached: bool = False
    last_updated: int | None = None  # epoch ms


class NewsService:
    """Core fetch orchestration.

    Depends on PROTOCOLS, not concrete implementations:
    - NewsSource: newsapi.org client or a fake
    - the cache helpers, which sit on any KeyValueStore

    Upstream errors (``NewsApiError``) propagate to the caller. Cache
    errors never do.
    """

    def __init__(self, source: NewsSource, article_cache: ArticleCache) -> None:
        """Initialize the news service.

        Args:
            source: Upstream article provider (required).
            article_cache: Cache helpers (required).
        """
        self._source = source
        self._articles = article_cache

    async def get_top_headlines(
        self,
        country: str,
        category: str,
        query: str | None = None,
        force_refresh: bool = False,
    ) -> FetchResult:
        """Get top headlines, from cache when possible.

        Args:
            country: Two-letter country code
            category: News category
            query: Optional keyword filter
            force_refresh: Skip the cache read and refetch

        Returns:
            FetchResult with articles and cache provenance
        """
        if not force_refresh:
            hit = await self._articles.get_top_headlines_entry(country, category, query)
            if hit is not None:
                return FetchResult(
                    articles=hit.data,
                    total_results=len(hit.data),
                    cached=True,
                    last_updated=hit.timestamp,
                )

        response = await self._source.top_headlines(country=country, category=category, q=query or None)
        logger.info(
            "headlines_fetched",
            country=country,
            category=category,
            query=query,
            count=len(response.articles),
        )

        written_at = await self._articles.cache_top_headlines(country, category, query, response.articles)
        await self._articles.cache.cleanup()

        return FetchResult(
            articles=response.articles,
            total_results=response.total_results,
            cached=False,
            last_updated=written_at,
        )

    async def search(
        self,
        query: str,
        language: str,
        sort_by: str,
        force_refresh: bool = False,
    ) -> FetchResult:
        """Search articles, from cache when possible.

        Args:
            query: Keywords or phrase
            language: Two-letter language code
            sort_by: relevancy, popularity or publishedAt
            force_refresh: Skip the cache read and refetch

        Returns:
            FetchResult with articles and cache provenance
        """
        if not force_refresh:
            hit = await self._articles.get_search_entry(query, language, sort_by)
            if hit is not None:
                return FetchResult(
                    articles=hit.data,
                    total_results=len(hit.data),
                    cached=True,
                    last_updated=hit.timestamp,
                )

        response = await self._source.everything(q=query, language=language, sort_by=sort_by)
        logger.info("search_fetched", query=query, language=language, sort_by=sort_by, count=len(response.articles))

        written_at = await self._articles.cache_search(query, language, sort_by, response.articles)
        await self._articles.cache.cleanup()

        return FetchResult(
            articles=response.articles,
            total_results=response.total_results,
            cached=False,
            last_updated=written_at,
        )

    @property
    def article_cache(self) -> ArticleCache:
        """Get the cache helpers."""
        return self._articles
