from typing import Any

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware

from feedstack.api.dependencies import CacheHandlerDep, NewsHandlerDep, UserHandlerDep, make_lifespan
from feedstack.config import settings
from feedstack.dto import (
    ArticlesResponse,
    BookmarkMutationResponse,
    BookmarkRequest,
    CacheOperationResponse,
    CacheStatsResponse,
    HealthCheckResponse,
    OnboardingRequest,
    OnboardingResponse,
    PreferencesRequest,
    SettingsRequest,
)
from feedstack.models import AppSettings, Bookmark, Preferences
from feedstack.protocols import KeyValueStore, NewsSource
from feedstack.utils.logging import configure_logging

API_VERSION = "0.1.0"


def create_app(
    store: KeyValueStore | None = None,
    news_source: NewsSource | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        store: Key-value store override (tests use an in-memory store).
        news_source: Upstream news provider override.

    Returns:
        The configured FastAPI app
    """
    app = FastAPI(
        title="Feedstack API",
        description="News reader backend with a TTL cache over a key-value store",
        version=API_VERSION,
        lifespan=make_lifespan(store=store, news_source=news_source),
    )

    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    async def root() -> dict[str, Any]:
        """Root endpoint with API information."""
        return {
            "name": "Feedstack API",
            "version": API_VERSION,
            "endpoints": {
                "news": "/news",
                "cache": "/cache",
                "bookmarks": "/bookmarks",
                "preferences": "/preferences",
                "settings": "/settings",
                "health": "/health",
                "docs": "/docs",
            },
        }

    @app.get("/health", response_model=HealthCheckResponse)
    async def health(handler: CacheHandlerDep) -> HealthCheckResponse:
        """Health check endpoint."""
        return await handler.health_check()

    @app.get("/news/top-headlines", response_model=ArticlesResponse)
    async def top_headlines(
        handler: NewsHandlerDep,
        country: str = Query("us", min_length=2, max_length=2),
        category: str = Query("general"),
        q: str | None = Query(None),
        refresh: bool = Query(False, description="Bypass the cache"),
    ) -> ArticlesResponse:
        """Top headlines for a country and category, served from cache when fresh."""
        return await handler.top_headlines(country, category, q, refresh)

    @app.get("/news/search", response_model=ArticlesResponse)
    async def search(
        handler: NewsHandlerDep,
        q: str = Query(..., min_length=1),
        language: str = Query("en", min_length=2, max_length=2),
        sort_by: str = Query("publishedAt", alias="sortBy", pattern="^(relevancy|popularity|publishedAt)$"),
        refresh: bool = Query(False, description="Bypass the cache"),
    ) -> ArticlesResponse:
        """Search all articles, served from cache when fresh."""
        return await handler.search(q, language, sort_by, refresh)

    @app.get("/cache/stats", response_model=CacheStatsResponse)
    async def cache_stats(handler: CacheHandlerDep) -> CacheStatsResponse:
        """Cache size and entry count."""
        return await handler.get_stats()

    @app.delete("/cache", response_model=CacheOperationResponse)
    async def clear_cache(handler: CacheHandlerDep) -> CacheOperationResponse:
        """Clear all cached articles."""
        return await handler.clear_cache()

    @app.post("/cache/clear-expired", response_model=CacheOperationResponse)
    async def clear_expired(handler: CacheHandlerDep) -> CacheOperationResponse:
        """Remove expired cache entries."""
        return await handler.clear_expired()

    @app.post("/cache/cleanup", response_model=CacheOperationResponse)
    async def cleanup(handler: CacheHandlerDep) -> CacheOperationResponse:
        """Evict the oldest entries if the cache is over budget."""
        return await handler.cleanup()

    @app.get("/bookmarks", response_model=list[Bookmark])
    async def list_bookmarks(handler: UserHandlerDep) -> list[Bookmark]:
        return await handler.list_bookmarks()

    @app.post("/bookmarks", response_model=BookmarkMutationResponse)
    async def add_bookmark(request: BookmarkRequest, handler: UserHandlerDep) -> BookmarkMutationResponse:
        return await handler.add_bookmark(request)

    # Registered before DELETE /bookmarks so "all" is never read as a url
    @app.delete("/bookmarks/all", response_model=BookmarkMutationResponse)
    async def clear_bookmarks(handler: UserHandlerDep) -> BookmarkMutationResponse:
        return await handler.clear_bookmarks()

    @app.delete("/bookmarks", response_model=BookmarkMutationResponse)
    async def remove_bookmark(handler: UserHandlerDep, url: str = Query(...)) -> BookmarkMutationResponse:
        return await handler.remove_bookmark(url)

    @app.get("/preferences", response_model=Preferences)
    async def get_preferences(handler: UserHandlerDep) -> Preferences:
        return await handler.get_preferences()

    @app.put("/preferences", response_model=Preferences)
    async def save_preferences(request: PreferencesRequest, handler: UserHandlerDep) -> Preferences:
        return await handler.save_preferences(request)

    @app.get("/settings", response_model=AppSettings)
    async def get_settings(handler: UserHandlerDep) -> AppSettings:
        return await handler.get_settings()

    @app.put("/settings", response_model=AppSettings)
    async def save_settings(request: SettingsRequest, handler: UserHandlerDep) -> AppSettings:
        return await handler.save_settings(request)

    @app.get("/onboarding", response_model=OnboardingResponse)
    async def get_onboarding(handler: UserHandlerDep) -> OnboardingResponse:
        return await handler.get_onboarding()

    @app.put("/onboarding", response_model=OnboardingResponse)
    async def set_onboarding(request: OnboardingRequest, handler: UserHandlerDep) -> OnboardingResponse:
        return await handler.set_onboarding(request.completed)

    return app


configure_logging()
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "feedstack.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
