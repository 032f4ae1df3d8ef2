"""Request DTOs for API endpoints."""

from pydantic import BaseModel, Field

from feedstack.models import AppSettings, Bookmark, Preferences

# Stored documents double as request bodies
BookmarkRequest = Bookmark
PreferencesRequest = Preferences
SettingsRequest = AppSettings


class OnboardingRequest(BaseModel):
    """Request DTO for updating the onboarding flag."""

    completed: bool = Field(..., description="Whether onboarding has been completed")
