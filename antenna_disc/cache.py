"""Bounded LRU cache of pattern sample sets.

Pattern sets are small, so a few hundred of them are cheap to keep in memory
and save a store round trip per query. The cache is an ``OrderedDict`` kept in
least- to most-recently-used order:

- hit: ``move_to_end`` (O(1))
- miss: fetch from the store, append, and evict ``popitem(last=False)`` if
  over capacity

Insertion appends at the MRU end, so among entries that were never touched
again the earliest inserted one is evicted first.

One ``RLock`` covers the whole "check, and on miss fetch-insert-evict"
sequence. This serializes recency updates and guarantees that concurrent first
accesses to the same pattern trigger a single fetch. Failed fetches are not
cached: the next call for that id goes back to the store.
"""

import logging
from collections import OrderedDict
from dataclasses import dataclass
from threading import RLock
from typing import List

from .patterns import PatternSampleSet
from .store import PatternStore


logger = logging.getLogger(__name__)

DEFAULT_CACHE_CAPACITY = 500


@dataclass(frozen=True)
class CacheStats:
    """Snapshot of cache counters."""
    hits: int
    misses: int
    evictions: int
    failures: int
    size: int
    capacity: int


class PatternCache:
    """LRU cache in front of a ``PatternStore``, keyed by pattern id."""

    def __init__(self, store: PatternStore, capacity: int = DEFAULT_CACHE_CAPACITY):
        capacity = int(capacity)
        if capacity < 1:
            raise ValueError("cache capacity must be >= 1")
        self._store = store
        self._capacity = capacity
        self._entries: "OrderedDict[str, PatternSampleSet]" = OrderedDict()
        self._lock = RLock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0
        self._failures = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def store(self) -> PatternStore:
        return self._store

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, pattern_id: object) -> bool:
        # membership check only; recency is left alone
        with self._lock:
            return pattern_id in self._entries

    def keys(self) -> List[str]:
        """Cached pattern ids, least recently used first."""
        with self._lock:
            return list(self._entries.keys())

    def get_or_load(self, pattern_id: str) -> PatternSampleSet:
        """Return the sample set for ``pattern_id``, fetching it on a miss.

        Store failures (PatternNotFoundError, MalformedPatternError, backend
        errors) propagate unchanged and leave the cache as it was.
        """
        with self._lock:
            entry = self._entries.get(pattern_id)
            if entry is not None:
                self._entries.move_to_end(pattern_id)
                self._hits += 1
                return entry

            self._misses += 1
            logger.debug("Pattern cache miss for %s", pattern_id)
            try:
                entry = self._store.fetch(pattern_id)
            except Exception:
                self._failures += 1
                logger.debug("Loading pattern %s failed; not cached", pattern_id)
                raise
            self._entries[pattern_id] = entry
            if len(self._entries) > self._capacity:
                evicted, _ = self._entries.popitem(last=False)
                self._evictions += 1
                logger.debug("Evicted pattern %s (capacity %d)", evicted, self._capacity)
            return entry

    def invalidate(self, pattern_id: str) -> bool:
        """Drop ``pattern_id`` from the cache. Returns True if it was cached."""
        with self._lock:
            return self._entries.pop(pattern_id, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                hits=self._hits,
                misses=self._misses,
                evictions=self._evictions,
                failures=self._failures,
                size=len(self._entries),
                capacity=self._capacity,
            )
