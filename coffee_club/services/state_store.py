"""
In-Memory State Store for Coffee Club
=====================================

Holds open customization dialogs and buyer carts between requests. Neither
is persisted: a dialog that is closed, cancelled or expired is simply
dropped (nothing was committed), and a cart lives only until checkout.

Eviction Strategy:
------------------
1. **TTL-based**: Entries not accessed within `ttl_seconds` are expired.
   Checked on access and, probabilistically, on writes (~1% of calls) to
   avoid a dedicated cleanup task.

2. **LRU-based**: When the store reaches `max_size`, the oldest 10% of
   entries (by last access time) are evicted to make room.

Thread Safety:
--------------
All operations are protected by a threading.Lock because FastAPI runs sync
endpoints in a thread pool. Entries that are changed in place (carts) are
changed through `update`, which holds the lock for the whole change.

Instances live on `app.state` (see app_factory.py); there is no module-level
store.
"""

import logging
import random
import threading
import time
import uuid
from typing import Any, Callable, Dict, Generic, Optional, Tuple, TypeVar


logger = logging.getLogger(__name__)

T = TypeVar("T")


class StateStore(Generic[T]):
    """TTL + LRU bounded in-memory key/value store."""

    def __init__(
        self,
        name: str,
        ttl_seconds: int,
        max_size: int,
        clock: Callable[[], float] = time.time,
    ):
        self.name = name
        self.ttl_seconds = ttl_seconds
        self.max_size = max_size
        self._clock = clock
        self._entries: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    # -------------------------------------------------------------------------
    # Maintenance
    # -------------------------------------------------------------------------

    def _is_expired(self, entry: Dict[str, Any], now: float) -> bool:
        return now - entry["last_access"] > self.ttl_seconds

    def cleanup_expired(self) -> int:
        """Remove expired entries. Returns the number removed."""
        now = self._clock()
        with self._lock:
            expired = [k for k, e in self._entries.items() if self._is_expired(e, now)]
            for key in expired:
                del self._entries[key]

        if expired:
            logger.debug("Expired %d %s entries", len(expired), self.name)
        return len(expired)

    def _evict_oldest(self) -> None:
        # Caller holds the lock
        count = max(1, self.max_size // 10)
        oldest = sorted(self._entries.items(), key=lambda item: item[1]["last_access"])[:count]
        for key, _ in oldest:
            del self._entries[key]
        logger.info("Evicted %d %s entries (store full)", len(oldest), self.name)

    # -------------------------------------------------------------------------
    # Access
    # -------------------------------------------------------------------------

    def new_key(self) -> str:
        return uuid.uuid4().hex

    def get(self, key: str) -> Optional[T]:
        """Return a live entry and refresh its access time, else None."""
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._is_expired(entry, now):
                del self._entries[key]
                return None
            entry["last_access"] = now
            return entry["data"]

    def put(self, key: str, value: T) -> None:
        if random.random() < 0.01:
            self.cleanup_expired()

        now = self._clock()
        with self._lock:
            if key not in self._entries and len(self._entries) >= self.max_size:
                self._evict_oldest()
            self._entries[key] = {"data": value, "last_access": now}

    def update(
        self,
        key: str,
        mutate: Callable[[T], Any],
        default: Optional[Callable[[], T]] = None,
    ) -> Tuple[Optional[T], Any]:
        """
        Run `mutate` on the live entry for `key` while holding the store lock.

        Concurrent requests on the same entry (two adds to one cart) are
        applied one after the other. A missing or expired entry is created
        with `default()` when given.

        Returns:
            (entry, result of mutate), or (None, None) when there is no entry
        """
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and self._is_expired(entry, now):
                del self._entries[key]
                entry = None
            if entry is None:
                if default is None:
                    return None, None
                if len(self._entries) >= self.max_size:
                    self._evict_oldest()
                entry = {"data": default(), "last_access": now}
                self._entries[key] = entry
            entry["last_access"] = now
            return entry["data"], mutate(entry["data"])

    def pop(self, key: str) -> Optional[T]:
        with self._lock:
            entry = self._entries.pop(key, None)
        return entry["data"] if entry is not None else None

    def clear(self) -> int:
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        return count
