"""HTTP handlers for user data: bookmarks, preferences, settings, onboarding."""

from fastapi import HTTPException, status

from feedstack.dto import (
    BookmarkMutationResponse,
    BookmarkRequest,
    OnboardingResponse,
    PreferencesRequest,
    SettingsRequest,
)
from feedstack.models import AppSettings, Bookmark, Preferences
from feedstack.services import BookmarksStorage, OnboardingStorage, PreferencesStorage, SettingsStorage


class UserHandler:
    """HTTP handlers for locally persisted user data.

    Storage write failures surface as 500; reads fall back to defaults.
    """

    def __init__(
        self,
        bookmarks: BookmarksStorage,
        preferences: PreferencesStorage,
        app_settings: SettingsStorage,
        onboarding: OnboardingStorage,
    ) -> None:
        """Initialize the user handler.

        Args:
            bookmarks: Bookmark storage (required).
            preferences: Preferences storage (required).
            app_settings: Settings storage (required).
            onboarding: Onboarding storage (required).
        """
        self._bookmarks = bookmarks
        self._preferences = preferences
        self._settings = app_settings
        self._onboarding = onboarding

    async def list_bookmarks(self) -> list[Bookmark]:
        """Handle GET /bookmarks requests."""
        return await self._bookmarks.get_all()

    async def add_bookmark(self, request: BookmarkRequest) -> BookmarkMutationResponse:
        """Handle POST /bookmarks requests."""
        try:
            added = await self._bookmarks.add(request)
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to add bookmark: {e}",
            ) from e

        return BookmarkMutationResponse(
            success=added,
            message="Bookmark added" if added else "Already bookmarked",
        )

    async def remove_bookmark(self, url: str) -> BookmarkMutationResponse:
        """Handle DELETE /bookmarks requests."""
        try:
            removed = await self._bookmarks.remove(url)
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to remove bookmark: {e}",
            ) from e

        if not removed:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"No bookmark for {url}",
            )
        return BookmarkMutationResponse(success=True, message="Bookmark removed")

    async def clear_bookmarks(self) -> BookmarkMutationResponse:
        """Handle DELETE /bookmarks/all requests."""
        try:
            await self._bookmarks.clear()
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to clear bookmarks: {e}",
            ) from e
        return BookmarkMutationResponse(success=True, message="Bookmarks cleared")

    async def get_preferences(self) -> Preferences:
        """Handle GET /preferences requests."""
        return await self._preferences.get_preferences() or Preferences()

    async def save_preferences(self, request: PreferencesRequest) -> Preferences:
        """Handle PUT /preferences requests."""
        try:
            await self._preferences.save_preferences(request)
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to save preferences: {e}",
            ) from e
        return request

    async def get_settings(self) -> AppSettings:
        """Handle GET /settings requests."""
        return await self._settings.get_all()

    async def save_settings(self, request: SettingsRequest) -> AppSettings:
        """Handle PUT /settings requests."""
        try:
            await self._settings.save_all(request)
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to save settings: {e}",
            ) from e
        return request

    async def get_onboarding(self) -> OnboardingResponse:
        """Handle GET /onboarding requests."""
        return OnboardingResponse(completed=await self._onboarding.is_completed())

    async def set_onboarding(self, completed: bool) -> OnboardingResponse:
        """Handle PUT /onboarding requests."""
        try:
            await self._onboarding.set_completed(completed)
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to update onboarding: {e}",
            ) from e
        return OnboardingResponse(completed=completed)
