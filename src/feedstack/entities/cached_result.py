"""Cached result domain entity."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class CachedResult(Generic[T]):
    """A live cache hit: the payload together with when it was written.

    Attributes:
        data: The cached payload
        timestamp: Write time (epoch milliseconds)
        expires_at: Expiry instant (epoch milliseconds)
    """

    data: T
    timestamp: int
    expires_at: int

    @property
    def cached_at_datetime(self) -> datetime:
        """Convert the write time to an aware UTC datetime."""
        return datetime.fromtimestamp(self.timestamp / 1000, tz=timezone.utc)
