"""TTL cache engine on top of a key-value store.

Each cache key holds one ``CacheEntry`` JSON document. A single metadata
aggregate (key -> timestamp/expiry/size) is kept under a well-known key so
that size accounting, expiry sweeps and eviction never have to enumerate
the store.

Every operation is best-effort: failures are logged and turned into a safe
default (None, False, 0 or a no-op). The cache never raises into the fetch
path.
"""

import asyncio
import time
from collections.abc import Callable, Mapping
from typing import Any

from feedstack.config import settings
from feedstack.entities import CachedResult
from feedstack.models import CacheEntry, CacheMetadata, CacheMetadataAdapter, CacheMetadataEntry, CacheStats
from feedstack.protocols import KeyValueStore
from feedstack.storage import StorageKeys
from feedstack.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_DURATION = 60 * 60 * 1000  # 1 hour in milliseconds
MAX_CACHE_SIZE = 50 * 1024 * 1024  # 50 MiB
LOW_WATER_RATIO = 0.8


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def generate_key(prefix: str, params: Mapping[str, Any]) -> str:
    """Build a deterministic cache key from a logical prefix and parameters.

    Parameters are sorted by name and joined as ``name:value`` pairs with
    ``|``. ``None`` is written as an empty string so that an absent value and
    an empty one produce the same key.

    Args:
        prefix: Logical namespace (e.g. "top_headlines", "search")
        params: Request parameters

    Returns:
        The cache key, e.g. ``@feedstack:cache:search:language:en|query:ai|sortBy:relevancy``
    """
    sorted_params = "|".join(
        f"{name}:{'' if params[name] is None else params[name]}" for name in sorted(params)
    )
    return f"{StorageKeys.CACHE_PREFIX}{prefix}:{sorted_params}"


class TTLCache:
    """Expiring, size-bounded cache backed by a KeyValueStore.

    The payload type is opaque: anything pydantic can dump to JSON may be
    cached. Mutations of the metadata aggregate are serialized behind an
    ``asyncio.Lock`` so concurrent writers cannot overwrite each other's
    updates.

    Example:
        ```python
        from feedstack.cache import TTLCache
        from feedstack.repositories import InMemoryKeyValueStore

        cache = TTLCache(InMemoryKeyValueStore())
        await cache.set("greeting", {"text": "hello"}, duration=60_000)
        await cache.get("greeting")  # {"text": "hello"}
        ```
    """

    def __init__(
        self,
        store: KeyValueStore,
        *,
        default_duration: int = DEFAULT_DURATION,
        max_size: int = MAX_CACHE_SIZE,
        low_water_ratio: float = LOW_WATER_RATIO,
        clock: Callable[[], int] = now_ms,
        metadata_key: str = StorageKeys.CACHE_METADATA,
    ) -> None:
        """Initialize the cache engine.

        Args:
            store: Key-value store backend (required).
            default_duration: Entry lifetime in milliseconds when ``set`` gets none.
            max_size: Size budget in bytes that triggers eviction.
            low_water_ratio: Fraction of ``max_size`` that eviction drives down to.
            clock: Returns the current time in epoch milliseconds.
            metadata_key: Storage key of the metadata aggregate.
        """
        if default_duration <= 0:
            raise ValueError("default_duration must be positive")
        if not 0 < low_water_ratio <= 1:
            raise ValueError("low_water_ratio must be in (0, 1]")

        self._store = store
        self._default_duration = default_duration
        self._max_size = max_size
        self._low_water_ratio = low_water_ratio
        self._clock = clock
        self._metadata_key = metadata_key
        self._lock = asyncio.Lock()

    @classmethod
    def create(
        cls,
        store: KeyValueStore,
        default_duration: int | None = None,
        max_size: int | None = None,
        low_water_ratio: float | None = None,
    ) -> "TTLCache":
        """Factory method to create a TTLCache with defaults from settings.

        Args:
            store: Key-value store backend (required).
            default_duration: Entry lifetime in ms. If None, uses settings.
            max_size: Size budget in bytes. If None, uses settings.
            low_water_ratio: Eviction target ratio. If None, uses settings.

        Returns:
            Configured TTLCache instance
        """
        return cls(
            store,
            default_duration=default_duration or settings.cache_default_duration_ms,
            max_size=max_size or settings.cache_max_size,
            low_water_ratio=low_water_ratio or settings.cache_low_water_ratio,
        )

    # ------------------------------------------------------------------
    # metadata aggregate
    # ------------------------------------------------------------------

    async def _read_metadata(self) -> CacheMetadata:
        """Read the aggregate. An undecodable aggregate reads as empty and is
        overwritten by the next mutation."""
        raw = await self._store.get_item(self._metadata_key)
        if raw is None:
            return {}
        try:
            return CacheMetadataAdapter.validate_json(raw)
        except ValueError:
            logger.warning("cache_metadata_invalid", key=self._metadata_key)
            return {}

    async def _write_metadata(self, metadata: CacheMetadata) -> None:
        text = CacheMetadataAdapter.dump_json(metadata, by_alias=True).decode()
        await self._store.set_item(self._metadata_key, text)

    async def _remove_keys(self, keys: list[str]) -> None:
        """Batch-remove entries and drop their metadata. Caller holds the lock."""
        if not keys:
            return
        await self._store.multi_remove(keys)
        metadata = await self._read_metadata()
        for key in keys:
            metadata.pop(key, None)
        await self._write_metadata(metadata)

    # ------------------------------------------------------------------
    # entry operations
    # ------------------------------------------------------------------

    async def set(self, key: str, data: Any, duration: int | None = None) -> int | None:
        """Store data under a key with an expiry.

        Writes the entry, then upserts its metadata record (timestamp, expiry,
        serialized byte size). Errors are logged and the write is dropped.

        Args:
            key: The cache key
            data: JSON-serializable payload
            duration: Lifetime in milliseconds. Defaults to the engine default.

        Returns:
            The write timestamp (epoch ms), or None if nothing was stored
        """
        duration = self._default_duration if duration is None else duration
        if duration <= 0:
            logger.warning("cache_set_rejected", key=key, duration=duration)
            return None

        try:
            now = self._clock()
            entry = CacheEntry[Any](data=data, timestamp=now, expires_at=now + duration)
            text = entry.model_dump_json(by_alias=True)
            size = len(text.encode("utf-8"))

            async with self._lock:
                await self._store.set_item(key, text)
                metadata = await self._read_metadata()
                metadata[key] = CacheMetadataEntry(
                    timestamp=entry.timestamp,
                    expires_at=entry.expires_at,
                    size=size,
                )
                await self._write_metadata(metadata)

            logger.debug("cache_set", key=key, size=size, expires_at=entry.expires_at)
            return entry.timestamp
        except Exception:
            logger.error("cache_set_failed", key=key, exc_info=True)
            return None

    async def get_entry(self, key: str) -> CachedResult[Any] | None:
        """Retrieve a live entry together with its timestamps.

        A stale entry is removed (entry and metadata) and reported as a miss.

        Args:
            key: The cache key

        Returns:
            CachedResult if a live entry exists, None otherwise
        """
        try:
            raw = await self._store.get_item(key)
            if raw is None:
                logger.debug("cache_miss", key=key)
                return None

            entry = CacheEntry[Any].model_validate_json(raw)
            if entry.is_expired(self._clock()):
                logger.debug("cache_stale", key=key, expires_at=entry.expires_at)
                await self._remove_if_stale(key)
                return None

            logger.debug("cache_hit", key=key)
            return CachedResult(data=entry.data, timestamp=entry.timestamp, expires_at=entry.expires_at)
        except Exception:
            logger.error("cache_get_failed", key=key, exc_info=True)
            return None

    async def get(self, key: str) -> Any | None:
        """Retrieve live data for a key.

        Args:
            key: The cache key

        Returns:
            The cached payload, or None on miss, expiry or failure
        """
        result = await self.get_entry(key)
        return result.data if result is not None else None

    async def remove(self, key: str) -> None:
        """Remove an entry and its metadata record. Missing keys are a no-op.

        Args:
            key: The cache key
        """
        try:
            async with self._lock:
                await self._store.remove_item(key)
                metadata = await self._read_metadata()
                if metadata.pop(key, None) is not None:
                    await self._write_metadata(metadata)
            logger.debug("cache_removed", key=key)
        except Exception:
            logger.error("cache_remove_failed", key=key, exc_info=True)

    async def _remove_if_stale(self, key: str) -> None:
        """Remove an entry only if it is still expired once the lock is held.

        A ``set`` can land between a stale read and the removal; its fresh
        entry must survive.
        """
        async with self._lock:
            raw = await self._store.get_item(key)
            if raw is not None:
                entry = CacheEntry[Any].model_validate_json(raw)
                if not entry.is_expired(self._clock()):
                    return
                await self._store.remove_item(key)
            metadata = await self._read_metadata()
            if metadata.pop(key, None) is not None:
                await self._write_metadata(metadata)
        logger.debug("cache_removed", key=key)

    async def is_valid(self, key: str) -> bool:
        """Check if a live entry exists, without evicting stale ones.

        Args:
            key: The cache key

        Returns:
            True if an entry exists and has not expired
        """
        try:
            raw = await self._store.get_item(key)
            if raw is None:
                return False
            entry = CacheEntry[Any].model_validate_json(raw)
            return not entry.is_expired(self._clock())
        except Exception:
            logger.error("cache_is_valid_failed", key=key, exc_info=True)
            return False

    # ------------------------------------------------------------------
    # bulk operations
    # ------------------------------------------------------------------

    async def get_metadata(self) -> CacheMetadata:
        """Get the metadata aggregate.

        Returns:
            Mapping of cache key to metadata, empty if never written or unreadable
        """
        try:
            return await self._read_metadata()
        except Exception:
            logger.error("cache_metadata_read_failed", exc_info=True)
            return {}

    async def clear_expired(self) -> int:
        """Remove every entry whose expiry has passed.

        Intended for periodic use (e.g. on startup) rather than per read.

        Returns:
            Number of entries removed
        """
        try:
            async with self._lock:
                now = self._clock()
                metadata = await self._read_metadata()
                expired = [key for key, meta in metadata.items() if meta.expires_at < now]
                await self._remove_keys(expired)

            if expired:
                logger.info("cache_expired_cleared", count=len(expired))
            return len(expired)
        except Exception:
            logger.error("cache_clear_expired_failed", exc_info=True)
            return 0

    async def clear_all(self) -> None:
        """Remove every cached entry and the metadata aggregate itself.

        Entries the aggregate lost track of (for instance after it was
        corrupted) are found by their key prefix and removed too.
        """
        try:
            async with self._lock:
                tracked = set((await self._read_metadata()).keys())
                prefixed = {
                    key
                    for key in await self._store.get_all_keys()
                    if key.startswith(StorageKeys.CACHE_PREFIX)
                }
                keys = sorted(tracked | prefixed)
                if keys:
                    await self._store.multi_remove(keys)
                await self._store.remove_item(self._metadata_key)
            logger.info("cache_cleared", count=len(keys))
        except Exception:
            logger.error("cache_clear_all_failed", exc_info=True)

    async def get_size(self) -> int:
        """Total serialized size of all entries in bytes.

        Returns:
            Sum of metadata sizes, or 0 on failure
        """
        metadata = await self.get_metadata()
        return sum(meta.size for meta in metadata.values())

    async def key_count(self) -> int:
        """Number of entries tracked in the metadata aggregate."""
        return len(await self.get_metadata())

    async def stats(self) -> CacheStats:
        """Get cache size figures for display."""
        metadata = await self.get_metadata()
        return CacheStats(
            size_bytes=sum(meta.size for meta in metadata.values()),
            key_count=len(metadata),
            max_size_bytes=self._max_size,
        )

    async def cleanup(self) -> int:
        """Evict the oldest-written entries once the size budget is exceeded.

        No-op while the total size is within ``max_size``. Otherwise entries
        are removed in ascending ``timestamp`` order until the total is at or
        below the low-water mark.

        Returns:
            Number of entries evicted
        """
        try:
            async with self._lock:
                metadata = await self._read_metadata()
                size = sum(meta.size for meta in metadata.values())
                if size <= self._max_size:
                    return 0

                low_water = self._max_size * self._low_water_ratio
                current = size
                to_evict: list[str] = []
                for key, meta in sorted(metadata.items(), key=lambda item: item[1].timestamp):
                    if current <= low_water:
                        break
                    to_evict.append(key)
                    current -= meta.size

                await self._remove_keys(to_evict)

            logger.info("cache_evicted", count=len(to_evict), size_before=size, size_after=current)
            return len(to_evict)
        except Exception:
            logger.error("cache_cleanup_failed", exc_info=True)
            return 0

    @property
    def max_size(self) -> int:
        """Get the size budget in bytes."""
        return self._max_size

    @property
    def default_duration(self) -> int:
        """Get the default entry lifetime in milliseconds."""
        return self._default_duration

    @property
    def store(self) -> KeyValueStore:
        """Get the underlying key-value store (for testing)."""
        return self._store
