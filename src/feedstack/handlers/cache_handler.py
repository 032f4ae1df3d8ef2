"""HTTP handlers for cache maintenance.

The cache engine never raises, so these handlers only translate results
into DTOs.
"""

from feedstack.cache import TTLCache
from feedstack.config import settings
from feedstack.dto import CacheOperationResponse, CacheStatsResponse, HealthCheckResponse


class CacheHandler:
    """HTTP handlers for cache statistics and maintenance.

    Exposes the operations a settings screen needs: size display,
    "clear cache", "clear expired" and an explicit eviction pass.
    """

    def __init__(self, cache: TTLCache) -> None:
        """Initialize the cache handler.

        Args:
            cache: The TTL cache engine (required).
        """
        self._cache = cache

    async def get_stats(self) -> CacheStatsResponse:
        """Handle GET /cache/stats requests."""
        stats = await self._cache.stats()
        return CacheStatsResponse(**stats.to_dict())

    async def clear_cache(self) -> CacheOperationResponse:
        """Handle DELETE /cache requests."""
        count = await self._cache.key_count()
        await self._cache.clear_all()
        return CacheOperationResponse(
            success=True,
            removed_count=count,
            message="Cache cleared successfully",
        )

    async def clear_expired(self) -> CacheOperationResponse:
        """Handle POST /cache/clear-expired requests."""
        count = await self._cache.clear_expired()
        return CacheOperationResponse(
            success=True,
            removed_count=count,
            message=f"Removed {count} expired entries",
        )

    async def cleanup(self) -> CacheOperationResponse:
        """Handle POST /cache/cleanup requests."""
        count = await self._cache.cleanup()
        return CacheOperationResponse(
            success=True,
            removed_count=count,
            message=f"Evicted {count} entries",
        )

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests."""
        store_healthy = await self._cache.store.health_check()
        return HealthCheckResponse(
            status="healthy" if store_healthy else "unhealthy",
            store_healthy=store_healthy,
            news_api_configured=settings.has_news_api_key,
        )
