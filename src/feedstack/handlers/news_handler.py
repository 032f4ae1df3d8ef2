"""HTTP handlers for article requests.

Handlers convert between DTOs (API contracts) and service calls.
Upstream failures become 502, anything unexpected becomes 500.
"""

from fastapi import HTTPException, status

from feedstack.dto import ArticlesResponse
from feedstack.repositories import NewsApiError
from feedstack.services import FetchResult, NewsService
from feedstack.utils.logging import get_logger

logger = get_logger(__name__)


def _to_response(result: FetchResult) -> ArticlesResponse:
    return ArticlesResponse(
        articles=result.articles,
        total_results=result.total_results,
        cached=result.cached,
        last_updated=result.last_updated,
    )


class NewsHandler:
    """HTTP handlers for headlines and search.

    Example:
        ```python
        handler = NewsHandler(news_service=news_service)

        @app.get("/news/top-headlines", response_model=ArticlesResponse)
        async def top_headlines(country: str, category: str):
            return await handler.top_headlines(country, category)
        ```
    """

    def __init__(self, news_service: NewsService) -> None:
        """Initialize the news handler.

        Args:
            news_service: The news service for business logic (required).
        """
        self._news = news_service

    async def top_headlines(
        self,
        country: str,
        category: str,
        query: str | None = None,
        refresh: bool = False,
    ) -> ArticlesResponse:
        """Handle GET /news/top-headlines requests.

        Raises:
            HTTPException: 502 if the news API fails, 500 otherwise
        """
        try:
            result = await self._news.get_top_headlines(country, category, query, force_refresh=refresh)
            return _to_response(result)

        except NewsApiError as e:
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=str(e),
            ) from e
        except Exception as e:
            logger.error("top_headlines_failed", exc_info=True)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to load headlines: {e}",
            ) from e

    async def search(
        self,
        query: str,
        language: str,
        sort_by: str,
        refresh: bool = False,
    ) -> ArticlesResponse:
        """Handle GET /news/search requests.

        Raises:
            HTTPException: 502 if the news API fails, 500 otherwise
        """
        try:
            result = await self._news.search(query, language, sort_by, force_refresh=refresh)
            return _to_response(result)

        except NewsApiError as e:
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=str(e),
            ) from e
        except Exception as e:
            logger.error("search_failed", exc_info=True)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to search articles: {e}",
            ) from e
