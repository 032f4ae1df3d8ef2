"""Local-storage helpers for preferences, bookmarks, settings and onboarding.

All of these sit on ``JsonStorage`` under the keys in ``StorageKeys``.
Reads fall back to defaults; write failures propagate.
"""

from datetime import datetime, timezone

from pydantic import ValidationError

from feedstack.models import AppSettings, Bookmark, BookmarkListAdapter, Preferences
from feedstack.storage import JsonStorage, StorageKeys
from feedstack.utils.logging import get_logger

logger = get_logger(__name__)


class PreferencesStorage:
    """User preferences (default request parameters)."""

    def __init__(self, storage: JsonStorage) -> None:
        self._storage = storage

    async def get_preferences(self) -> Preferences | None:
        raw = await self._storage.get_item(StorageKeys.PREFERENCES)
        if raw is None:
            return None
        try:
            return Preferences.model_validate(raw)
        except ValidationError:
            logger.warning("preferences_invalid")
            return None

    async def save_preferences(self, preferences: Preferences) -> None:
        await self._storage.set_item(
            StorageKeys.PREFERENCES,
            preferences.model_dump(mode="json", by_alias=True, exclude_none=True),
        )

    async def get_default_country(self) -> str | None:
        return await self._storage.get_item(StorageKeys.DEFAULT_COUNTRY)

    async def set_default_country(self, country: str) -> None:
        await self._storage.set_item(StorageKeys.DEFAULT_COUNTRY, country)

    async def get_default_category(self) -> str | None:
        return await self._storage.get_item(StorageKeys.DEFAULT_CATEGORY)

    async def set_default_category(self, category: str) -> None:
        await self._storage.set_item(StorageKeys.DEFAULT_CATEGORY, category)

    async def get_default_language(self) -> str | None:
        return await self._storage.get_item(StorageKeys.DEFAULT_LANGUAGE)

    async def set_default_language(self, language: str) -> None:
        await self._storage.set_item(StorageKeys.DEFAULT_LANGUAGE, language)

    async def get_default_sort_by(self) -> str | None:
        return await self._storage.get_item(StorageKeys.DEFAULT_SORT_BY)

    async def set_default_sort_by(self, sort_by: str) -> None:
        await self._storage.set_item(StorageKeys.DEFAULT_SORT_BY, sort_by)


class BookmarksStorage:
    """Saved articles, unique by URL, in insertion order."""

    def __init__(self, storage: JsonStorage) -> None:
        self._storage = storage

    async def get_all(self) -> list[Bookmark]:
        """Get every bookmark.

        Returns:
            Bookmarks in the order they were added, empty if none or unreadable
        """
        raw = await self._storage.get_item(StorageKeys.BOOKMARKS)
        if not raw:
            return []
        try:
            return BookmarkListAdapter.validate_python(raw)
        except ValidationError:
            logger.warning("bookmarks_invalid")
            return []

    async def _save(self, bookmarks: list[Bookmark]) -> None:
        await self._storage.set_item(
            StorageKeys.BOOKMARKS,
            BookmarkListAdapter.dump_python(bookmarks, mode="json", by_alias=True),
        )

    async def add(self, bookmark: Bookmark) -> bool:
        """Add a bookmark unless one with the same URL exists.

        The ``bookmarked_at`` time is stamped here.

        Args:
            bookmark: The article to save

        Returns:
            True if added, False if it was already bookmarked
        """
        bookmarks = await self.get_all()
        if any(existing.url == bookmark.url for existing in bookmarks):
            return False

        stamped = bookmark.model_copy(
            update={"bookmarked_at": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")}
        )
        bookmarks.append(stamped)
        await self._save(bookmarks)
        return True

    async def remove(self, url: str) -> bool:
        """Remove the bookmark with a URL.

        Returns:
            True if something was removed
        """
        bookmarks = await self.get_all()
        remaining = [bookmark for bookmark in bookmarks if bookmark.url != url]
        await self._save(remaining)
        return len(remaining) != len(bookmarks)

    async def is_bookmarked(self, url: str) -> bool:
        bookmarks = await self.get_all()
        return any(bookmark.url == url for bookmark in bookmarks)

    async def clear(self) -> None:
        await self._storage.remove_item(StorageKeys.BOOKMARKS)


class SettingsStorage:
    """Application settings: dark mode and notification choices."""

    def __init__(self, storage: JsonStorage) -> None:
        self._storage = storage

    async def get_dark_mode(self) -> bool | None:
        """None means "follow the system"."""
        return await self._storage.get_item(StorageKeys.DARK_MODE)

    async def set_dark_mode(self, enabled: bool) -> None:
        await self._storage.set_item(StorageKeys.DARK_MODE, enabled)

    async def get_notifications_enabled(self) -> bool:
        enabled = await self._storage.get_item(StorageKeys.NOTIFICATIONS_ENABLED)
        return True if enabled is None else bool(enabled)

    async def set_notifications_enabled(self, enabled: bool) -> None:
        await self._storage.set_item(StorageKeys.NOTIFICATIONS_ENABLED, enabled)

    async def get_notification_categories(self) -> list[str]:
        categories = await self._storage.get_item(StorageKeys.NOTIFICATION_CATEGORIES)
        return list(categories or [])

    async def set_notification_categories(self, categories: list[str]) -> None:
        await self._storage.set_item(StorageKeys.NOTIFICATION_CATEGORIES, categories)

    async def get_all(self) -> AppSettings:
        """Read every setting at once."""
        return AppSettings(
            dark_mode=await self.get_dark_mode(),
            notifications_enabled=await self.get_notifications_enabled(),
            notification_categories=await self.get_notification_categories(),
        )

    async def save_all(self, app_settings: AppSettings) -> None:
        """Write every setting. A dark mode of None is stored as "unset"."""
        if app_settings.dark_mode is None:
            await self._storage.remove_item(StorageKeys.DARK_MODE)
        else:
            await self.set_dark_mode(app_settings.dark_mode)
        await self.set_notifications_enabled(app_settings.notifications_enabled)
        await self.set_notification_categories(app_settings.notification_categories)


class OnboardingStorage:
    """First-run onboarding flag."""

    def __init__(self, storage: JsonStorage) -> None:
        self._storage = storage

    async def is_completed(self) -> bool:
        completed = await self._storage.get_item(StorageKeys.ONBOARDING_COMPLETED)
        return bool(completed) if completed is not None else False

    async def set_completed(self, completed: bool) -> None:
        await self._storage.set_item(StorageKeys.ONBOARDING_COMPLETED, completed)
