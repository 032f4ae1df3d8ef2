"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for request/response validation and serialization.
"""

from .requests import BookmarkRequest, OnboardingRequest, PreferencesRequest, SettingsRequest
from .responses import (
    ArticlesResponse,
    BookmarkMutationResponse,
    CacheOperationResponse,
    CacheStatsResponse,
    HealthCheckResponse,
    OnboardingResponse,
)

__all__ = [
    "BookmarkRequest",
    "OnboardingRequest",
    "PreferencesRequest",
    "SettingsRequest",
    "ArticlesResponse",
    "BookmarkMutationResponse",
    "CacheOperationResponse",
    "CacheStatsResponse",
    "HealthCheckResponse",
    "OnboardingResponse",
]
