"""In-memory TTL cache for fixture query results, keyed by query id."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from .fixtures import QueryResult


logger = logging.getLogger(__name__)

DEFAULT_TTL = 10 * 60
DEFAULT_PURGE_INTERVAL = 15 * 60


@dataclass(frozen=True)
class CacheEntry:
    result: QueryResult
    created_at: float
    ttl: float

    def is_valid(self, now: float) -> bool:
        return now < self.created_at + self.ttl


class ResultCache:
    """
    Per-key TTL cache with a periodic purge of expired entries.

    Expired entries read as a miss. Independently of reads, a purge pass runs
    whenever `purge_interval` has passed since the last one, so an entry
    nobody reads is gone at most `ttl + purge_interval` after it was stored.
    """

    def __init__(
        self,
        ttl: float = DEFAULT_TTL,
        purge_interval: float = DEFAULT_PURGE_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl = ttl
        self.purge_interval = purge_interval
        self._clock = clock
        self._store: Dict[str, CacheEntry] = {}
        self._last_purge = clock()

    def get(self, key: str) -> Optional[QueryResult]:
        now = self._clock()
        self._maybe_purge(now)

        entry = self._store.get(key)
        if entry is None:
            logger.debug("Cache miss: %s", key)
            return None
        if not entry.is_valid(now):
            logger.debug("Cache entry expired: %s", key)
            del self._store[key]
            return None
        logger.debug("Cache hit: %s", key)
        return entry.result

    def set(self, key: str, result: QueryResult) -> None:
        now = self._clock()
        self._maybe_purge(now)
        self._store[key] = CacheEntry(result=result, created_at=now, ttl=self.ttl)

    def purge_expired(self) -> int:
        """Drop every expired entry; returns how many were removed."""
        now = self._clock()
        self._last_purge = now
        expired = [k for k, e in self._store.items() if not e.is_valid(now)]
        for key in expired:
            del self._store[key]
        if expired:
            logger.debug("Purged %d expired cache entries", len(expired))
        return len(expired)

    def _maybe_purge(self, now: float) -> None:
        if self.purge_interval and now - self._last_purge >= self.purge_interval:
            self.purge_expired()

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: object) -> bool:
        return key in self._store
