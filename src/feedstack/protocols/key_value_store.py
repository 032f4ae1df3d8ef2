"""Key-value store protocol.

Defines the interface for the persistent string-to-text storage that the
cache engine and the local-storage helpers are built on.

Implementations can include:
- Redis (default, durable across process restarts)
- In-memory dict (tests, single-process development)
- Any other async key-value backend
"""

from collections.abc import Sequence
from typing import Protocol, runtime_checkable


@runtime_checkable
class KeyValueStore(Protocol):
    """Protocol for async key-value storage backends.

    Values are opaque text. Callers serialize to JSON before ``set_item``
    and deserialize after ``get_item``. Any method may raise on I/O
    failure; the cache engine absorbs those errors, storage helpers do not.

    Example:
        ```python
        from feedstack.protocols import KeyValueStore

        store: KeyValueStore = RedisKeyValueStore.create()
        store: KeyValueStore = InMemoryKeyValueStore()
        ```
    """

    async def get_item(self, key: str) -> str | None:
        """Read the value stored under a key.

        Args:
            key: The storage key

        Returns:
            The stored text, or None if the key does not exist
        """
        ...

    async def set_item(self, key: str, value: str) -> None:
        """Store a value under a key, replacing any previous value.

        Args:
            key: The storage key
            value: The text to store
        """
        ...

    async def remove_item(self, key: str) -> None:
        """Remove a key. Removing a missing key is a no-op.

        Args:
            key: The storage key
        """
        ...

    async def multi_get(self, keys: Sequence[str]) -> list[tuple[str, str | None]]:
        """Read several keys at once.

        Args:
            keys: The storage keys, in order

        Returns:
            (key, value-or-None) pairs in the same order as ``keys``
        """
        ...

    async def multi_remove(self, keys: Sequence[str]) -> None:
        """Remove several keys in one call.

        Args:
            keys: The storage keys to remove
        """
        ...

    async def get_all_keys(self) -> list[str]:
        """List every key in the store.

        Returns:
            All stored keys
        """
        ...

    async def clear(self) -> None:
        """Remove every key in the store."""
        ...

    async def health_check(self) -> bool:
        """Check if the store is reachable.

        Returns:
            True if healthy, False otherwise
        """
        ...
