"""Time-bounded memoization of chat responses."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

from ..domain import ChatResponse
from ..domain.utils import normalize_cache_key

DEFAULT_TTL_SECONDS = 300.0


@dataclass(frozen=True)
class CacheEntry:
    response: ChatResponse
    created_at: float


class ResponseCache:
    """Thread-safe cache of chat responses keyed by normalized message text.

    Entries expire ``ttl_seconds`` after being written; an expired entry is
    never returned and is evicted when read. There is no size bound: entries
    only go away by expiring (see ``purge_expired``).

    The cache is constructed once by the composition root and injected into
    the chat service, so tests can use their own instance and clock.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def _is_fresh(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.created_at < self.ttl_seconds

    def get(self, query: str) -> ChatResponse | None:
        """Return the cached response for ``query`` if it has not expired."""
        key = normalize_cache_key(query)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._is_fresh(entry, self._clock()):
                return entry.response
            del self._entries[key]
            return None

    def put(self, query: str, response: ChatResponse) -> None:
        """Store ``response`` for ``query``; the last write for a key wins."""
        key = normalize_cache_key(query)
        entry = CacheEntry(response=response, created_at=self._clock())
        with self._lock:
            self._entries[key] = entry

    def purge_expired(self) -> int:
        """Drop every expired entry. Returns how many were removed."""
        with self._lock:
            now = self._clock()
            stale = [key for key, entry in self._entries.items() if not self._is_fresh(entry, now)]
            for key in stale:
                del self._entries[key]
        return len(stale)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
