"""Redis implementation of KeyValueStore.

Keys live directly in the Redis keyspace. ``get_all_keys`` and ``clear`` are
scoped to a namespace prefix so the store can share a Redis database with
other applications.
"""

from collections.abc import Sequence

import redis.asyncio as redis

from feedstack.config import get_redis_client

DEFAULT_NAMESPACE = "@feedstack:"


class RedisKeyValueStore:
    """Redis implementation of the KeyValueStore protocol.

    This class satisfies the KeyValueStore protocol through structural
    typing - no explicit inheritance needed.

    The client must be created with ``decode_responses=True`` so reads
    return ``str``.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        namespace: str = DEFAULT_NAMESPACE,
    ) -> None:
        """Initialize the Redis key-value store.

        Args:
            redis_client: asyncio Redis client. If None, creates default.
            namespace: Key prefix that scopes ``get_all_keys`` and ``clear``.
        """
        self._client = redis_client or get_redis_client()
        self._namespace = namespace

    @classmethod
    def create(cls, namespace: str = DEFAULT_NAMESPACE) -> "RedisKeyValueStore":
        """Factory method to create RedisKeyValueStore with defaults.

        Args:
            namespace: Key prefix. Defaults to "@feedstack:".

        Returns:
            Configured RedisKeyValueStore
        """
        return cls(namespace=namespace)

    async def get_item(self, key: str) -> str | None:
        """Read a value.

        Args:
            key: The storage key

        Returns:
            The stored text, or None if missing
        """
        return await self._client.get(key)

    async def set_item(self, key: str, value: str) -> None:
        """Store a value.

        Args:
            key: The storage key
            value: The text to store
        """
        await self._client.set(key, value)

    async def remove_item(self, key: str) -> None:
        """Delete a key (no-op if missing)."""
        await self._client.delete(key)

    async def multi_get(self, keys: Sequence[str]) -> list[tuple[str, str | None]]:
        """Read several keys with a single MGET.

        Args:
            keys: The storage keys

        Returns:
            (key, value-or-None) pairs in request order
        """
        if not keys:
            return []
        values = await self._client.mget(list(keys))
        return list(zip(keys, values))

    async def multi_remove(self, keys: Sequence[str]) -> None:
        """Delete several keys with a single DEL."""
        if not keys:
            return
        await self._client.delete(*keys)

    async def get_all_keys(self) -> list[str]:
        """List every key under the namespace.

        Returns:
            Matching keys (SCAN, not KEYS, to avoid blocking Redis)
        """
        return [key async for key in self._client.scan_iter(match=f"{self._namespace}*")]

    async def clear(self) -> None:
        """Delete every key under the namespace."""
        keys = await self.get_all_keys()
        if keys:
            await self._client.delete(*keys)

    async def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(await self._client.ping())
        except Exception:
            return False

    async def close(self) -> None:
        """Close the Redis connection pool.

        Should be called when shutting down the application.
        """
        await self._client.aclose()

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client
