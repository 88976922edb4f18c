from __future__ import annotations

import logging
import math
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

V = TypeVar("V")


@dataclass
class _CacheEntry(Generic[V]):
    value: V
    expires_at: float
    # Monotonically increasing access counter; lowest value is the LRU entry.
    last_access: int


class InMemoryTTLCache(Generic[V]):
    """In-memory LRU+TTL cache for list pages.

    Limitation: per-process only. Every operation (including the eviction
    scan) runs under a single lock, so one instance can be shared by all
    request handlers of the process.
    """

    def __init__(
        self,
        *,
        ttl_seconds: float = 30.0,
        max_items: int = 10_000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds is None or not math.isfinite(float(ttl_seconds)) or float(ttl_seconds) < 0:
            raise ValueError(f"ttl_seconds must be >= 0, got {ttl_seconds!r}")
        if int(max_items) != max_items or int(max_items) < 1:
            raise ValueError(f"max_items must be a positive integer, got {max_items!r}")
        self._ttl_seconds = float(ttl_seconds)
        self._max_items = int(max_items)
        self._clock = clock
        self._lock = threading.Lock()
        self._store: Dict[str, _CacheEntry[V]] = {}
        self._access_counter = 0

    @property
    def ttl_seconds(self) -> float:
        return self._ttl_seconds

    @property
    def max_items(self) -> int:
        return self._max_items

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)

    def _expiry(self) -> float:
        if self._ttl_seconds == 0:
            return math.inf
        return self._clock() + self._ttl_seconds

    def _is_expired(self, entry: _CacheEntry[V], now: float) -> bool:
        return now > entry.expires_at

    def get(self, key: str) -> Optional[V]:
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            if self._is_expired(entry, self._clock()):
                del self._store[key]
                return None
            self._access_counter += 1
            entry.last_access = self._access_counter
            return entry.value

    def set(self, key: str, value: V) -> None:
        with self._lock:
            self._access_counter += 1
            self._store[key] = _CacheEntry(
                value=value,
                expires_at=self._expiry(),
                last_access=self._access_counter,
            )
            self._enforce_max_items()

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._store.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._store.clear()
            self._access_counter = 0

    def cleanup_expired(self) -> int:
        with self._lock:
            now = self._clock()
            expired = [k for k, v in self._store.items() if self._is_expired(v, now)]
            for k in expired:
                del self._store[k]
            return len(expired)

    def _enforce_max_items(self) -> None:
        # Caller holds the lock. A set grows the store by at most one entry,
        # so a single eviction restores the bound.
        if len(self._store) <= self._max_items:
            return
        lru_key = min(self._store, key=lambda k: self._store[k].last_access)
        del self._store[lru_key]
        logger.debug("list cache evicted LRU key (size=%d)", len(self._store))


def build_list_cache(
    *,
    backend: str = "memory",
    ttl_seconds: float = 30.0,
    max_items: int = 10_000,
) -> InMemoryTTLCache:
    name = (backend or "memory").strip().lower()
    if name in {"memory", "in-memory", "in_memory"}:
        return InMemoryTTLCache(ttl_seconds=ttl_seconds, max_items=max_items)
    raise ValueError(f"Unsupported MY_LIST_CACHE_BACKEND='{backend}' (expected memory)")
