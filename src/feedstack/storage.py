"""JSON storage on top of a KeyValueStore.

Every value is JSON-encoded before it reaches the store and decoded on the
way out, so the store itself only ever holds text.
"""

import json
from collections.abc import Sequence
from typing import Any

from feedstack.protocols import KeyValueStore
from feedstack.utils.logging import get_logger

logger = get_logger(__name__)


class StorageKeys:
    """Well-known storage keys."""

    # User preferences
    PREFERENCES = "@feedstack:preferences"
    DEFAULT_COUNTRY = "@feedstack:default_country"
    DEFAULT_CATEGORY = "@feedstack:default_category"
    DEFAULT_LANGUAGE = "@feedstack:default_language"
    DEFAULT_SORT_BY = "@feedstack:default_sort_by"

    # Cache
    CACHE_PREFIX = "@feedstack:cache:"
    CACHE_METADATA = "@feedstack:cache_metadata"

    # Bookmarks
    BOOKMARKS = "@feedstack:bookmarks"

    # Settings
    DARK_MODE = "@feedstack:dark_mode"
    NOTIFICATIONS_ENABLED = "@feedstack:notifications_enabled"
    NOTIFICATION_CATEGORIES = "@feedstack:notification_categories"

    # Onboarding
    ONBOARDING_COMPLETED = "@feedstack:onboarding_completed"


def to_json(value: Any) -> str:
    """Serialize to compact JSON text."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


class JsonStorage:
    """Generic JSON storage operations.

    Reads are forgiving: a value that cannot be decoded is logged and read
    as missing. Writes and removals propagate store errors to the caller.
    """

    def __init__(self, store: KeyValueStore) -> None:
        """Initialize JSON storage.

        Args:
            store: The underlying key-value store (required).
        """
        self._store = store

    async def set_item(self, key: str, value: Any) -> None:
        """Store a JSON-serializable value."""
        try:
            await self._store.set_item(key, to_json(value))
        except Exception:
            logger.error("storage_set_failed", key=key, exc_info=True)
            raise

    async def get_item(self, key: str) -> Any | None:
        """Retrieve a value, or None if missing or undecodable."""
        try:
            raw = await self._store.get_item(key)
            return json.loads(raw) if raw is not None else None
        except Exception:
            logger.error("storage_get_failed", key=key, exc_info=True)
            return None

    async def remove_item(self, key: str) -> None:
        """Remove a value."""
        try:
            await self._store.remove_item(key)
        except Exception:
            logger.error("storage_remove_failed", key=key, exc_info=True)
            raise

    async def multi_get(self, keys: Sequence[str]) -> list[tuple[str, Any | None]]:
        """Retrieve several values; undecodable values come back as None."""
        try:
            items = await self._store.multi_get(keys)
        except Exception:
            logger.error("storage_multi_get_failed", count=len(keys), exc_info=True)
            return [(key, None) for key in keys]

        result = []
        for key, raw in items:
            try:
                result.append((key, json.loads(raw) if raw is not None else None))
            except json.JSONDecodeError:
                logger.warning("storage_decode_failed", key=key)
                result.append((key, None))
        return result

    async def multi_remove(self, keys: Sequence[str]) -> None:
        """Remove several values."""
        try:
            await self._store.multi_remove(keys)
        except Exception:
            logger.error("storage_multi_remove_failed", count=len(keys), exc_info=True)
            raise

    async def get_all_keys(self) -> list[str]:
        """List every key, or an empty list if the store is unavailable."""
        try:
            return await self._store.get_all_keys()
        except Exception:
            logger.error("storage_get_all_keys_failed", exc_info=True)
            return []

    async def clear(self) -> None:
        """Remove everything from the store."""
        try:
            await self._store.clear()
        except Exception:
            logger.error("storage_clear_failed", exc_info=True)
            raise

    @property
    def store(self) -> KeyValueStore:
        """Get the underlying key-value store."""
        return self._store
