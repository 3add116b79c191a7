"""Simple in-memory TTL cache. No Redis needed for a single-upstream gateway.

Note: Each uvicorn worker has its own cache instance, and entries are never
purged, only overwritten. Stale entries for rarely requested dates stay in
memory for the life of the process.
"""

import time
from dataclasses import dataclass
from typing import Any, Callable


@dataclass(frozen=True)
class CacheEntry:
    data: Any
    fetched_at: float


class TTLCache:
    def __init__(self, ttl_seconds: float = 3600, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._store: dict[str, CacheEntry] = {}

    def get(self, key: str) -> Any | None:
        """Return the cached value if it is still fresh, else None."""
        entry = self._store.get(key)
        if entry is not None and self._clock() - entry.fetched_at < self.ttl_seconds:
            return entry.data
        return None

    def set(self, key: str, value: Any) -> None:
        self._store[key] = CacheEntry(data=value, fetched_at=self._clock())

    def __len__(self) -> int:
        return len(self._store)
