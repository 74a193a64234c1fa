"""
Response Cache - in-memory TTL cache for provider results.

Enabled per provider by `cache_results`; entries expire after `cache_ttl`
seconds. Keys are built from the operation name and the normalized inputs
so "Clean kitchen " and "clean kitchen" share an entry.

Only successful results are stored. A fallback is never cached, so a
transient outage doesn't stick around for the whole TTL.
"""

import time
from collections import OrderedDict
from typing import Any, Callable, Dict, Hashable, Optional, Tuple

DEFAULT_MAX_ENTRIES = 256

CacheKey = Tuple[Hashable, ...]


def make_cache_key(operation: str, *parts: Any) -> CacheKey:
    """Build a cache key; string parts are stripped and lower-cased."""
    normalized = []
    for part in parts:
        if isinstance(part, str):
            part = part.strip().lower()
        elif part is None:
            part = ""
        normalized.append(part)
    return (operation, *normalized)


class ResponseCache:
    """
    Cache with Time-To-Live (TTL) and maximum size, least recently used
    entries evicted first.

    Values must be pydantic models or lists; both are copied on the way in
    and on the way out so callers can't alter cached entries.
    """

    def __init__(
        self,
        ttl_seconds: int,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        timer: Callable[[], float] = time.monotonic,
    ):
        """
        Args:
            ttl_seconds: Time to live in seconds
            max_entries: Maximum number of items in cache
            timer: Clock returning seconds
        """
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._timer = timer
        self._cache: "OrderedDict[CacheKey, Tuple[Any, float]]" = OrderedDict()

    def get(self, key: CacheKey) -> Optional[Any]:
        """Get a copy of an item if it exists and has not expired."""
        if key not in self._cache:
            return None

        value, stored_at = self._cache[key]

        if self._timer() - stored_at > self.ttl_seconds:
            del self._cache[key]
            return None

        # Move to end (LRU)
        self._cache.move_to_end(key)
        return _copy(value)

    def set(self, key: CacheKey, value: Any) -> None:
        if key in self._cache:
            del self._cache[key]
        elif len(self._cache) >= self.max_entries:
            self._cache.popitem(last=False)

        self._cache[key] = (_copy(value), self._timer())

    def clear(self) -> None:
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)

    def get_stats(self) -> Dict[str, Any]:
        return {
            "size": len(self._cache),
            "max_entries": self.max_entries,
            "ttl_seconds": self.ttl_seconds,
        }


def _copy(value: Any) -> Any:
    if hasattr(value, "model_copy"):
        return value.model_copy(deep=True)
    if isinstance(value, list):
        return list(value)
    return value
