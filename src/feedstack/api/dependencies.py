"""Dependency injection configuration for the FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services built and stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Tests pass their own store and news source to ``make_lifespan``
"""

from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from feedstack.cache import TTLCache
from feedstack.config import settings
from feedstack.handlers import CacheHandler, NewsHandler, UserHandler
from feedstack.protocols import KeyValueStore, NewsSource
from feedstack.repositories import InMemoryKeyValueStore, NewsApiClient, RedisKeyValueStore
from feedstack.services import (
    ArticleCache,
    BookmarksStorage,
    NewsService,
    OnboardingStorage,
    PreferencesStorage,
    SettingsStorage,
)
from feedstack.storage import JsonStorage
from feedstack.utils.logging import get_logger

logger = get_logger(__name__)


def get_news_handler(request: Request) -> NewsHandler:
    """Dependency injection for NewsHandler from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The NewsHandler instance from app.state

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "news_handler", None)
    if handler is None:
        raise RuntimeError("NewsHandler not initialized. Check lifespan setup.")
    return handler


def get_cache_handler(request: Request) -> CacheHandler:
    """Dependency injection for CacheHandler from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The CacheHandler instance from app.state

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "cache_handler", None)
    if handler is None:
        raise RuntimeError("CacheHandler not initialized. Check lifespan setup.")
    return handler


def get_user_handler(request: Request) -> UserHandler:
    """Dependency injection for UserHandler from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The UserHandler instance from app.state

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "user_handler", None)
    if handler is None:
        raise RuntimeError("UserHandler not initialized. Check lifespan setup.")
    return handler


def create_store() -> KeyValueStore:
    """Build the key-value store selected by ``STORE_BACKEND``."""
    if settings.store_backend == "memory":
        return InMemoryKeyValueStore()
    return RedisKeyValueStore.create()


def make_lifespan(
    store: KeyValueStore | None = None,
    news_source: NewsSource | None = None,
) -> Callable[[FastAPI], AbstractAsyncContextManager[None]]:
    """Build the lifespan context manager for the app.

    Args:
        store: Key-value store. If None, built from settings.
        news_source: Upstream news provider. If None, a NewsApiClient.

    Returns:
        A lifespan function for ``FastAPI(lifespan=...)``
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Initialize all layers and store them in app.state.

        On startup expired entries are swept and the size budget enforced.
        """
        kv_store = store if store is not None else create_store()
        source = news_source if news_source is not None else NewsApiClient.create()

        cache = TTLCache.create(kv_store)
        json_storage = JsonStorage(kv_store)
        news_service = NewsService(source=source, article_cache=ArticleCache(cache))

        app.state.cache = cache
        app.state.news_handler = NewsHandler(news_service=news_service)
        app.state.cache_handler = CacheHandler(cache=cache)
        app.state.user_handler = UserHandler(
            bookmarks=BookmarksStorage(json_storage),
            preferences=PreferencesStorage(json_storage),
            app_settings=SettingsStorage(json_storage),
            onboarding=OnboardingStorage(json_storage),
        )

        expired = await cache.clear_expired()
        evicted = await cache.cleanup()
        logger.info(
            "feedstack_started",
            store=type(kv_store).__name__,
            expired_removed=expired,
            evicted=evicted,
            news_api_configured=settings.has_news_api_key,
        )

        yield

        del app.state.user_handler
        del app.state.cache_handler
        del app.state.news_handler
        del app.state.cache

        if news_source is None and isinstance(source, NewsApiClient):
            await source.close()
        if store is None and isinstance(kv_store, RedisKeyValueStore):
            await kv_store.close()
        logger.info("feedstack_stopped")

    return lifespan


# Type aliases for cleaner dependency injection
NewsHandlerDep = Annotated[NewsHandler, Depends(get_news_handler)]
CacheHandlerDep = Annotated[CacheHandler, Depends(get_cache_handler)]
UserHandlerDep = Annotated[UserHandler, Depends(get_user_handler)]
