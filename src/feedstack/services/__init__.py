"""Service layer for business logic.

Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Cache / Storage -> KeyValueStore
    (HTTP)  -> (Business) -> (Bookkeeping)  -> (Data Access)

Usage:
    ```python
    from feedstack.cache import TTLCache
    from feedstack.repositories import InMemoryKeyValueStore, NewsApiClient
    from feedstack.services import ArticleCache, NewsService

    cache = TTLCache.create(InMemoryKeyValueStore())
    news = NewsService(NewsApiClient.create(), ArticleCache(cache))
    ```
"""

from .article_cache import ArticleCache
from .news_service import FetchResult, NewsService
from .storage_service import BookmarksStorage, OnboardingStorage, PreferencesStorage, SettingsStorage

__all__ = [
    "ArticleCache",
    "FetchResult",
    "NewsService",
    "BookmarksStorage",
    "OnboardingStorage",
    "PreferencesStorage",
    "SettingsStorage",
]
