"""Upstream news source protocol.

The news API is a fixed third-party REST contract. Services only depend on
this protocol so tests can substitute a fake source.
"""

from typing import Protocol, runtime_checkable

from feedstack.models import NewsApiResponse


@runtime_checkable
class NewsSource(Protocol):
    """Protocol for the upstream article provider."""

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
            country: Two-letter country code
            category: News category (business, sports, ...)
            q: Keywords to filter on
            page_size: Results per page
            page: Page number

        Returns:
            The upstream response with articles and total count
        """
        ...

    async def everything(
        self,
        q: str | None = None,
        language: str | None = None,
        sort_by: str | None = None,
        page: int | None = None,
    ) -> NewsApiResponse:
        """Search all articles.

        Args:
            q: Keywords or phrase
            language: Two-letter language code
            sort_by: relevancy, popularity or publishedAt
            page: Page number

        Returns:
            The upstream response with articles and total count
        """
        ...
