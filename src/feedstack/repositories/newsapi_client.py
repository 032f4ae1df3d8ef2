"""News API (newsapi.org) client.

Thin async wrapper over the two REST endpoints the app uses:

- ``/v2/top-headlines``: country/category/keyword headlines
- ``/v2/everything``: full search with language and sort order

Only parameters that are actually set are sent. The API key goes in the
``X-Api-Key`` header.
"""

from typing import Any

import httpx
from pydantic import ValidationError

from feedstack.config import settings
from feedstack.models import NewsApiResponse
from feedstack.utils.logging import get_logger

logger = get_logger(__name__)


class NewsApiError(RuntimeError):
    """Raised when the upstream news API cannot be reached or answers with an error."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NewsApiClient:
    """newsapi.org implementation of the NewsSource protocol.

    This class satisfies the NewsSource protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        client = NewsApiClient.create()
        response = await client.top_headlines(country="us", category="technology")
        print(response.total_results, len(response.articles))
        await client.close()
        ```
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the News API client.

        Args:
            api_key: News API key. Defaults to settings.news_api_key.
            base_url: API base URL. Defaults to settings.news_api_base_url.
            timeout: Request timeout in seconds. Defaults to settings.news_api_timeout.
            transport: Optional httpx transport (tests pass ``httpx.MockTransport``).
        """
        self._api_key = api_key if api_key is not None else settings.news_api_key
        self._base_url = base_url or settings.news_api_base_url
        self._timeout = timeout or settings.news_api_timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def create(cls, api_key: str | None = None) -> "NewsApiClient":
        """Factory method to create NewsApiClient with defaults.

        Args:
            api_key: API key. If None, uses settings.

        Returns:
            Configured NewsApiClient
        """
        return cls(api_key=api_key)

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client.

        Returns:
            The httpx.AsyncClient instance
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._client

    @property
    def has_api_key(self) -> bool:
        """Check if a usable API key is configured."""
        return bool(self._api_key) and self._api_key != "your_api_key_here"

    async def _get(self, path: str, params: dict[str, Any]) -> NewsApiResponse:
        if not self.has_api_key:
            raise NewsApiError("News API key is not configured. Set NEWS_API_KEY in your .env file.")

        query = {name: value for name, value in params.items() if value not in (None, "")}
        logger.debug("news_api_request", path=path, params=query)

        try:
            response = await self.client.get(path, params=query, headers={"X-Api-Key": self._api_key})
            response.raise_for_status()
            return NewsApiResponse.model_validate(response.json())
        except httpx.HTTPStatusError as e:
            message = f"News API error: {e.response.status_code}"
            try:
                body = e.response.json()
                if "message" in body:
                    message += f" - {body['message']}"
            except ValueError:
                pass
            raise NewsApiError(message, status_code=e.response.status_code) from e
        except httpx.HTTPError as e:
            raise NewsApiError(f"News API request failed: {e}") from e
        except (ValueError, ValidationError) as e:
            raise NewsApiError(f"Unexpected News API response: {e}") from e

    async def top_headlines(
        self,
        country: str | None = None,
        category: str | None = None,
        q: str | None = None,
        page_size: int | None = None,
        page: int | None = None,
    ) -> NewsApiResponse:
        """Fetch top headlines.

        Args:
            country: Two-letter country code (us, gb, de, ...)
            category: business, entertainment, general, health, science, sports or technology
            q: Keywords to filter on
            page_size: Results per page
            page: Page number

        Returns:
            NewsApiResponse with articles and total count

        Raises:
            NewsApiError: If the key is missing or the request fails
        """
        return await self._get(
            "/v2/top-headlines",
            {"country": country, "category": category, "q": q, "pageSize": page_size, "page": page},
        )

    async def everything(
        self,
        q: str | None = None,
        language: str | None = None,
        sort_by: str | None = None,
        page: int | None = None,
        domains: str | None = None,
        exclude_domains: str | None = None,
        from_: str | None = None,
        to: str | None = None,
    ) -> NewsApiResponse:
        """Search all articles.

        Args:
            q: Keywords or phrase
            language: Two-letter language code
            sort_by: relevancy, popularity or publishedAt
            page: Page number
            domains: Comma-separated domains to restrict to
            exclude_domains: Comma-separated domains to exclude
            from_: Oldest article date (ISO 8601)
            to: Newest article date (ISO 8601)

        Returns:
            NewsApiResponse with articles and total count

        Raises:
            NewsApiError: If the key is missing or the request fails
        """
        return await self._get(
            "/v2/everything",
            {
                "q": q,
                "domains": domains,
                "excludeDomains": exclude_domains,
                "from": from_,
                "to": to,
                "language": language,
                "sortBy": sort_by,
                "page": page,
            },
        )

    async def close(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None
