"""In-memory implementation of KeyValueStore.

Process-local and not durable. Used in tests and when ``STORE_BACKEND`` is
``memory``.
"""

from collections.abc import Sequence


class InMemoryKeyValueStore:
    """Dict-backed implementation of the KeyValueStore protocol.

    This class satisfies the KeyValueStore protocol through structural
    typing - no explicit inheritance needed.
    """

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        """Initialize the store.

        Args:
            initial: Optional starting contents.
        """
        self._data: dict[str, str] = dict(initial or {})

    async def get_item(self, key: str) -> str | None:
        return self._data.get(key)

    async def set_item(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(f"value for {key!r} must be str, got {type(value).__name__}")
        self._data[key] = value

    async def remove_item(self, key: str) -> None:
        self._data.pop(key, None)

    async def multi_get(self, keys: Sequence[str]) -> list[tuple[str, str | None]]:
        return [(key, self._data.get(key)) for key in keys]

    async def multi_remove(self, keys: Sequence[str]) -> None:
        for key in keys:
            self._data.pop(key, None)

    async def get_all_keys(self) -> list[str]:
        return list(self._data.keys())

    async def clear(self) -> None:
        self._data.clear()

    async def health_check(self) -> bool:
        return True

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data
