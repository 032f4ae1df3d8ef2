"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Any class implementing the required methods satisfies the protocol.

Usage:
    ```python
    from feedstack.protocols import KeyValueStore, NewsSource

    store: KeyValueStore = RedisKeyValueStore.create()  # works
    store: KeyValueStore = InMemoryKeyValueStore()      # also works
    ```
"""

from .key_value_store import KeyValueStore
from .news_source import NewsSource

__all__ = [
    "KeyValueStore",
    "NewsSource",
]
