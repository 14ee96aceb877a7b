"""
In-memory cache backend.

A thread-safe, per-process dictionary with per-key expiry. Useful for tests,
single-process deployments, and as a reference implementation of the
backend contract. Values are deep-copied on the way in and out, so callers
never share cached objects.
"""

import copy
import logging
import threading
import time
from typing import Any, Callable, Dict, Optional, Tuple

from ...domain.cache.repository_interfaces import CacheBackend
from ...domain.cache.value_objects import ABSENT

logger = logging.getLogger(__name__)


class InMemoryBackend(CacheBackend):
    """TTL-based in-memory backend backed by a dict."""

    def __init__(self, clock: Callable[[], float] = time.time):
        self._store: Dict[str, Tuple[Any, Optional[float]]] = {}
        self._clock = clock
        self._lock = threading.Lock()

    def _live_item(self, key: str) -> Optional[Tuple[Any, Optional[float]]]:
        # Caller holds the lock; expired items are evicted lazily on access.
        item = self._store.get(key)
        if item is None:
            return None
        _, expires_at = item
        if expires_at is not None and self._clock() >= expires_at:
            del self._store[key]
            logger.debug(f"Evicted expired cache key: {key}")
            return None
        return item

    def fetch(self, key: str) -> Any:
        with self._lock:
            item = self._live_item(key)
        if item is None:
            return ABSENT
        return copy.deepcopy(item[0])

    def store(self, key: str, value: Any, ttl_seconds: int) -> None:
        expires_at = self._clock() + ttl_seconds if ttl_seconds > 0 else None
        with self._lock:
            self._store[key] = (copy.deepcopy(value), expires_at)

    def contains(self, key: str) -> bool:
        with self._lock:
            return self._live_item(key) is not None

    def remove(self, key: str) -> None:
        with self._lock:
            self._store.pop(key, None)

    def clear(self) -> None:
        """Drop every key."""
        with self._lock:
            self._store.clear()

    def __len__(self) -> int:
        with self._lock:
            return sum(1 for key in list(self._store) if self._live_item(key) is not None)
