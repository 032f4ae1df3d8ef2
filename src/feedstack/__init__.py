"""Feedstack - news reader backend with a TTL cache over a key-value store.

This package provides a layered architecture:

Layers:
    - protocols: Interface contracts (KeyValueStore, NewsSource)
    - repositories: Data access implementations (Redis, in-memory, News API)
    - cache: TTL cache engine with size-bounded eviction
    - services: Business logic (article cache helpers, fetching, user storage)
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from feedstack import ArticleCache, InMemoryKeyValueStore, TTLCache

    cache = TTLCache.create(InMemoryKeyValueStore())
    articles = ArticleCache(cache)
    ```

For HTTP API:
    ```python
    from feedstack.api.app import app
    ```
"""

from feedstack.cache import DEFAULT_DURATION, MAX_CACHE_SIZE, TTLCache, generate_key
from feedstack.config import get_redis_client, settings
from feedstack.entities import CachedResult
from feedstack.models import Article, Bookmark, CacheEntry, CacheMetadataEntry, CacheStats
from feedstack.protocols import KeyValueStore, NewsSource
from feedstack.repositories import InMemoryKeyValueStore, NewsApiClient, NewsApiError, RedisKeyValueStore
from feedstack.services import ArticleCache, NewsService
from feedstack.storage import JsonStorage, StorageKeys

__all__ = [
    # Configuration
    "settings",
    "get_redis_client",
    # Protocols (interfaces)
    "KeyValueStore",
    "NewsSource",
    # Cache engine
    "TTLCache",
    "generate_key",
    "DEFAULT_DURATION",
    "MAX_CACHE_SIZE",
    # Storage
    "JsonStorage",
    "StorageKeys",
    # Services (business logic)
    "ArticleCache",
    "NewsService",
    # Repositories (data access)
    "InMemoryKeyValueStore",
    "RedisKeyValueStore",
    "NewsApiClient",
    "NewsApiError",
    # Models
    "Article",
    "Bookmark",
    "CacheEntry",
    "CacheMetadataEntry",
    "CacheStats",
    "CachedResult",
]
