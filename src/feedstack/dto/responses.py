"""Response DTOs for API endpoints."""

from pydantic import BaseModel, ConfigDict, Field

from feedstack.models import Article


class ArticlesResponse(BaseModel):
    """Response DTO for headline and search requests."""

    model_config = ConfigDict(populate_by_name=True)

    articles: list[Article] = Field(default_factory=list, description="Matching articles")
    total_results: int = Field(..., alias="totalResults", description="Total matches reported", ge=0)
    cached: bool = Field(..., description="Whether the articles were served from cache")
    last_updated: int | None = Field(
        None,
        alias="lastUpdated",
        description="When the articles were fetched (epoch milliseconds)",
    )


class CacheStatsResponse(BaseModel):
    """Response DTO for cache statistics."""

    size_bytes: int = Field(..., description="Total serialized size of cached entries", ge=0)
    key_count: int = Field(..., description="Number of cached entries", ge=0)
    max_size_bytes: int = Field(..., description="Size budget that triggers eviction", ge=0)
    usage_ratio: float = Field(..., description="size_bytes / max_size_bytes", ge=0.0)


class CacheOperationResponse(BaseModel):
    """Response DTO for cache maintenance operations."""

    success: bool = Field(..., description="Whether the operation succeeded")
    removed_count: int | None = Field(None, description="Entries removed, when known")
    message: str = Field(..., description="Human-readable status message")


class BookmarkMutationResponse(BaseModel):
    """Response DTO for adding or removing a bookmark."""

    success: bool = Field(..., description="Whether anything changed")
    message: str = Field(..., description="Human-readable status message")


class OnboardingResponse(BaseModel):
    """Response DTO for the onboarding flag."""

    completed: bool


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    store_healthy: bool = Field(..., description="Whether the key-value store is reachable")
    news_api_configured: bool = Field(..., description="Whether a News API key is set")
