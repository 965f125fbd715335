from collections.abc import Callable
from threading import RLock
from time import monotonic
from typing import Any


class TTLCache:
    """Process-wide key/value cache with a single staleness window.

    Entries are never evicted in the background. Freshness is checked on
    read and stale entries are simply overwritten by the next `put`.
    """

    def __init__(
        self, ttl_seconds: float, clock: Callable[[], float] = monotonic
    ) -> None:
        self.ttl_seconds = max(0.0, ttl_seconds)
        self._clock = clock
        self._entries: dict[str, tuple[float, Any]] = {}
        self._lock = RLock()

    def get(self, key: str) -> tuple[Any, float] | None:
        """Return `(value, age_seconds)` for a stored key, fresh or not."""

        with self._lock:
            entry = self._entries.get(key)
        if entry is None:
            return None
        stored_at, value = entry
        return value, self._clock() - stored_at

    def get_fresh(self, key: str) -> Any | None:
        """Return the cached value, treating entries at or past the TTL as misses."""

        hit = self.get(key)
        if hit is None:
            return None
        value, age = hit
        if age >= self.ttl_seconds:
            return None
        return value

    def put(self, key: str, value: Any) -> None:
        with self._lock:
            self._entries[key] = (self._clock(), value)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
