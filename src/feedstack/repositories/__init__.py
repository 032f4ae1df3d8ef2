"""Repository layer for data access.

This layer hides external dependencies (Redis, the news REST API) behind
protocol-based interfaces:
- Easy swapping of implementations (Redis → in-memory, real API → fake)
- Unit testing without network or Redis
- Clear separation of concerns
"""

from feedstack.protocols import KeyValueStore, NewsSource

from .memory_store import InMemoryKeyValueStore
from .newsapi_client import NewsApiClient, NewsApiError
from .redis_store import RedisKeyValueStore

__all__ = [
    "KeyValueStore",
    "NewsSource",
    "InMemoryKeyValueStore",
    "RedisKeyValueStore",
    "NewsApiClient",
    "NewsApiError",
]
