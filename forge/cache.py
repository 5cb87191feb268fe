"""
In-process response cache for GitHub API fetches.
"""

import copy
import logging
import threading
import time
from urllib.parse import urlencode

from cachetools import TTLCache

from config.settings import CACHE_TTL, CACHE_MAX_SIZE

logger = logging.getLogger(__name__)


def is_unset(value):
    """True for query values that are omitted from requests."""
    return value is None or value == ""


def make_cache_key(name, path, params=None):
    """Build a deterministic cache key from the method name, path and query parameters.

    Parameters are sorted by name and unset values (None or "") are dropped,
    mirroring what is actually sent upstream, so two calls share a key only
    when they would issue the same request.
    """
    query = urlencode(sorted((k, v) for k, v in (params or {}).items() if not is_unset(v)))
    return f"{name}:{path}?{query}"


class ResponseCache:
    """TTL cache with ``remember(key, ttl, producer)`` semantics.

    Values are deep-copied on the way in and out so callers never share
    mutable state with the cache. ``maxsize`` bounds the total entry count
    across every TTL.
    """

    def __init__(self, ttl=CACHE_TTL, maxsize=CACHE_MAX_SIZE, timer=time.monotonic):
        self.ttl = ttl
        self.maxsize = maxsize
        self.timer = timer
        # One TTLCache per distinct TTL; TTLCache only supports a single ttl
        self._caches = {}
        self._lock = threading.RLock()
        self.statistics = {"hits": 0, "misses": 0}

    def __repr__(self):
        return f"ResponseCache(ttl={self.ttl}, size={len(self)})"

    def _cache_for(self, ttl):
        cache = self._caches.get(ttl)
        if cache is None:
            cache = self._caches[ttl] = TTLCache(maxsize=self.maxsize, ttl=ttl, timer=self.timer)
        return cache

    def _make_room(self):
        # Shared budget: evict from the fullest per-TTL cache until one slot is free
        while sum(len(cache) for cache in self._caches.values()) >= self.maxsize:
            max(self._caches.values(), key=len).popitem()

    def _lookup(self, key):
        for cache in self._caches.values():
            if key in cache:
                return True, cache[key]
        return False, None

    def get(self, key, default=None):
        """Return the cached value for key, or default when missing or expired."""
        with self._lock:
            found, value = self._lookup(key)
        return copy.deepcopy(value) if found else default

    def remember(self, key, ttl, producer):
        """Return the cached value for key, calling producer() on a miss.

        The produced value is stored for ttl seconds. If producer raises,
        the exception propagates and nothing is stored.
        """
        ttl = self.ttl if ttl is None else ttl
        with self._lock:
            found, value = self._lookup(key)
            if found:
                self.statistics["hits"] += 1
                logger.debug(f"Cache hit: {key}")
                return copy.deepcopy(value)
            self.statistics["misses"] += 1

        logger.debug(f"Cache miss: {key}")
        value = producer()

        with self._lock:
            self._make_room()
            self._cache_for(ttl)[key] = copy.deepcopy(value)
        return value

    def clear(self):
        """Drop every cached entry."""
        with self._lock:
            self._caches.clear()

    def stats(self):
        """Get cache statistics."""
        with self._lock:
            return {
                "hits": self.statistics["hits"],
                "misses": self.statistics["misses"],
                "size": len(self),
            }

    def __contains__(self, key):
        with self._lock:
            return self._lookup(key)[0]

    def __len__(self):
        with self._lock:
            return sum(len(cache) for cache in self._caches.values())
