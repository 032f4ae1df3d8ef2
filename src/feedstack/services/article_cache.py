"""Article-specific cache helpers.

Translate headline and search requests into canonical cache keys so that
callers never build keys by hand.
"""

from pydantic import ValidationError

from feedstack.cache import TTLCache, generate_key
from feedstack.entities import CachedResult
from feedstack.models import Article, ArticleListAdapter
from feedstack.utils.logging import get_logger

logger = get_logger(__name__)

TOP_HEADLINES_PREFIX = "top_headlines"
SEARCH_PREFIX = "search"


class ArticleCache:
    """Typed read/write helpers for cached article lists.

    Example:
        ```python
        articles_cache = ArticleCache(cache)
        await articles_cache.cache_top_headlines("us", "technology", None, articles)
        await articles_cache.get_top_headlines("us", "technology", "")  # same key
        ```
    """

    def __init__(self, cache: TTLCache) -> None:
        """Initialize the helpers.

        Args:
            cache: The TTL cache engine (required).
        """
        self._cache = cache

    @staticmethod
    def top_headlines_key(country: str, category: str, query: str | None) -> str:
        """Cache key for a headlines request. A missing query equals an empty one."""
        return generate_key(
            TOP_HEADLINES_PREFIX,
            {"country": country, "category": category, "query": query or ""},
        )

    @staticmethod
    def search_key(query: str, language: str, sort_by: str) -> str:
        """Cache key for a search request."""
        return generate_key(SEARCH_PREFIX, {"query": query, "language": language, "sortBy": sort_by})

    @staticmethod
    def generate_key(prefix: str, params: dict) -> str:
        """Expose key generation for callers that cache other request kinds."""
        return generate_key(prefix, params)

    async def _read(self, key: str) -> CachedResult[list[Article]] | None:
        result = await self._cache.get_entry(key)
        if result is None:
            return None
        try:
            articles = ArticleListAdapter.validate_python(result.data)
        except ValidationError:
            logger.warning("article_cache_invalid_payload", key=key)
            return None
        return CachedResult(data=articles, timestamp=result.timestamp, expires_at=result.expires_at)

    async def _write(self, key: str, articles: list[Article], duration: int | None) -> int | None:
        payload = ArticleListAdapter.dump_python(articles, mode="json", by_alias=True)
        return await self._cache.set(key, payload, duration)

    async def cache_top_headlines(
        self,
        country: str,
        category: str,
        query: str | None,
        articles: list[Article],
        duration: int | None = None,
    ) -> int | None:
        """Cache articles for a headlines request.

        Returns:
            The write timestamp (epoch ms), or None if nothing was cached
        """
        return await self._write(self.top_headlines_key(country, category, query), articles, duration)

    async def get_top_headlines_entry(
        self, country: str, category: str, query: str | None
    ) -> CachedResult[list[Article]] | None:
        """Get cached headlines together with their write time."""
        return await self._read(self.top_headlines_key(country, category, query))

    async def get_top_headlines(self, country: str, category: str, query: str | None) -> list[Article] | None:
        """Get cached headlines, or None on miss."""
        result = await self.get_top_headlines_entry(country, category, query)
        return result.data if result is not None else None

    async def cache_search(
        self,
        query: str,
        language: str,
        sort_by: str,
        articles: list[Article],
        duration: int | None = None,
    ) -> int | None:
        """Cache articles for a search request. Returns the write timestamp."""
        return await self._write(self.search_key(query, language, sort_by), articles, duration)

    async def get_search_entry(
        self, query: str, language: str, sort_by: str
    ) -> CachedResult[list[Article]] | None:
        """Get cached search results together with their write time."""
        return await self._read(self.search_key(query, language, sort_by))

    async def get_search(self, query: str, language: str, sort_by: str) -> list[Article] | None:
        """Get cached search results, or None on miss."""
        result = await self.get_search_entry(query, language, sort_by)
        return result.data if result is not None else None

    async def get_cache_timestamp(self, country: str, category: str, query: str | None) -> int | None:
        """Write time (epoch ms) of cached headlines, for "last updated" display."""
        result = await self._cache.get_entry(self.top_headlines_key(country, category, query))
        return result.timestamp if result is not None else None

    async def get_search_timestamp(self, query: str, language: str, sort_by: str) -> int | None:
        """Write time (epoch ms) of cached search results."""
        result = await self._cache.get_entry(self.search_key(query, language, sort_by))
        return result.timestamp if result is not None else None

    @property
    def cache(self) -> TTLCache:
        """Get the underlying cache engine."""
        return self._cache
