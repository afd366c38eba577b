from __future__ import annotations

import time
from dataclasses import dataclass
from threading import Lock
from typing import Any, Callable


@dataclass
class CacheEntry:
    value: Any
    expires_at: float


class TTLCache:
    """Process-wide key/value store where each entry expires independently.

    Expired entries are dropped lazily on read; ``purge_expired`` can be used
    for an explicit sweep.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._store: dict[str, CacheEntry] = {}
        self._hits = 0
        self._misses = 0
        self._lock = Lock()

    def get(self, key: str) -> Any | None:
        now = self._clock()
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                self._misses += 1
                return None
            if entry.expires_at <= now:
                self._store.pop(key, None)
                self._misses += 1
                return None
            self._hits += 1
            return entry.value

    def set(self, key: str, value: Any, ttl_ms: int):
        if ttl_ms <= 0:
            raise ValueError("ttl_ms must be positive")
        expires_at = self._clock() + ttl_ms / 1000
        with self._lock:
            self._store[key] = CacheEntry(value=value, expires_at=expires_at)

    def purge_expired(self) -> int:
        now = self._clock()
        with self._lock:
            expired = [key for key, entry in self._store.items() if entry.expires_at <= now]
            for key in expired:
                del self._store[key]
            return len(expired)

    def clear(self):
        with self._lock:
            self._store.clear()

    def metrics(self) -> dict[str, int]:
        with self._lock:
            return {"hits": self._hits, "misses": self._misses, "size": len(self._store)}
