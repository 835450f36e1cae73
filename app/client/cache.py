"""
Query Cache
===========
In-memory cache for API reads, keyed by query keys such as
``("movies",)`` or ``("movie", 12)``.

Features:
- Optional TTL (Time To Live) per entry
- LRU (Least Recently Used) eviction
- Invalidation of one key, or of every key starting with a prefix

Usage:
    cache = QueryCache()
    movies = cache.get(("movies",))
    if movies is None:
        movies = fetch()
        cache.set(("movies",), movies)

    # After a mutation
    cache.invalidate(("movies",))
"""
from collections import OrderedDict
from datetime import datetime, timedelta
from typing import Any, Hashable, Optional, Tuple
import logging

logger = logging.getLogger(__name__)

QueryKey = Tuple[Hashable, ...]


class QueryCache:
    """
    Simple in-memory cache with TTL and LRU eviction.
    One instance per client; nothing is shared between processes.
    """

    def __init__(self, max_size: int = 256, default_ttl: Optional[int] = None):
        """
        Args:
            max_size: Maximum number of entries (LRU eviction)
            default_ttl: Seconds an entry stays fresh (None = until invalidated)
        """
        self._cache: "OrderedDict[QueryKey, Tuple[Any, Optional[datetime]]]" = OrderedDict()
        self._max_size = max_size
        self._default_ttl = default_ttl
        self._hits = 0
        self._misses = 0

    def get(self, key: QueryKey) -> Optional[Any]:
        """Cached value, or None if missing or expired"""
        if key not in self._cache:
            self._misses += 1
            return None

        value, expiry = self._cache[key]

        if expiry and datetime.now() > expiry:
            del self._cache[key]
            self._misses += 1
            return None

        # Move to end (LRU)
        self._cache.move_to_end(key)
        self._hits += 1
        logger.debug(f"Cache hit for {key}")
        return value

    def set(self, key: QueryKey, value: Any, ttl: Optional[int] = None) -> None:
        ttl = ttl if ttl is not None else self._default_ttl
        expiry = datetime.now() + timedelta(seconds=ttl) if ttl else None

        self._cache[key] = (value, expiry)
        self._cache.move_to_end(key)

        if len(self._cache) > self._max_size:
            oldest_key = next(iter(self._cache))
            del self._cache[oldest_key]
            logger.debug(f"Evicted cache key: {oldest_key}")

    def invalidate(self, key: QueryKey) -> None:
        """Drop every entry whose key starts with ``key``"""
        stale = [cached for cached in self._cache if cached[:len(key)] == key]
        for cached in stale:
            del self._cache[cached]
        if stale:
            logger.debug(f"Invalidated {len(stale)} cache entries for {key}")

    def __contains__(self, key: QueryKey) -> bool:
        return key in self._cache

    def clear(self) -> None:
        self._cache.clear()
        self._hits = 0
        self._misses = 0

    def get_stats(self) -> dict:
        total_requests = self._hits + self._misses
        hit_rate = (self._hits / total_requests * 100) if total_requests > 0 else 0

        return {
            'size': len(self._cache),
            'max_size': self._max_size,
            'hits': self._hits,
            'misses': self._misses,
            'hit_rate': f"{hit_rate:.2f}%"
        }
