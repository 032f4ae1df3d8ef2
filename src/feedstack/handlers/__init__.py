"""Handler layer for HTTP endpoints.

Handlers depend on services (business logic), not directly on repositories.

Architecture:
    Handler -> Service -> Cache / Storage -> KeyValueStore
"""

from .cache_handler import CacheHandler
from .news_handler import NewsHandler
from .user_handler import UserHandler

__all__ = [
    "CacheHandler",
    "NewsHandler",
    "UserHandler",
]
