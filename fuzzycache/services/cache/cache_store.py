"""
Cache Store Service

Thin orchestration layer between application code and a cache backend.
Applies the key prefix and translates between raw backend values and
CacheEntry envelopes. Freshness rules live on the entry itself.
"""

import logging
import random
import time
from typing import Callable, Optional, Type

from ...domain.cache.entities import CacheEntry
from ...domain.cache.repository_interfaces import CacheBackend
from ...domain.cache.value_objects import DEFAULT_FUZZ_FACTOR, DEFAULT_LIFETIME_SECONDS

logger = logging.getLogger(__name__)


class CacheStore:
    """
    Cache wrapper providing fuzzy and stale-while-revalidate caching.

    ``get`` never fails for a missing key: it returns an expired entry for
    the caller to populate and pass back to ``save``. Backend errors are not
    caught here.

    ``get`` followed by ``save`` is not atomic. Concurrent callers working on
    the same key may both recompute and the last write wins; add a lock
    around the recompute if only one caller should do it.
    """

    entry_class: Type[CacheEntry] = CacheEntry

    def __init__(
        self,
        backend: CacheBackend,
        prefix: str = "",
        *,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.time,
        default_lifetime_seconds: int = DEFAULT_LIFETIME_SECONDS,
        default_fuzz_factor: float = DEFAULT_FUZZ_FACTOR,
    ):
        self._backend = backend
        self._prefix = prefix
        self._rng = rng
        self._clock = clock
        self.default_lifetime_seconds = default_lifetime_seconds
        self.default_fuzz_factor = default_fuzz_factor

    def _backend_key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    def get(self, key: str) -> CacheEntry:
        """
        Get the entry for key.

        Args:
            key: Unprefixed cache key

        Returns:
            Entry built from the stored envelope, or an expired entry when
            the backend holds nothing for the key
        """
        backend_key = self._backend_key(key)
        entry = self.entry_class(
            key,
            self._backend.fetch(backend_key),
            lifetime_seconds=self.default_lifetime_seconds,
            fuzz_factor=self.default_fuzz_factor,
            rng=self._rng,
            clock=self._clock,
        )
        logger.debug(
            f"Cache read: {backend_key}",
            extra={"key": backend_key, "hit": entry.is_valid()},
        )
        return entry

    def save(self, entry: CacheEntry) -> "CacheStore":
        """
        Store an entry, stamping it with the current time.

        The backend TTL is the entry's fuzzed lifetime, drawn once per save.
        """
        entry.set_stored_at(int(self._clock()))
        backend_key = self._backend_key(entry.get_key())
        ttl_seconds = entry.get_lifetime_seconds()

        self._backend.store(backend_key, entry.get_envelope(), ttl_seconds)
        logger.debug(
            f"Cache write: {backend_key}",
            extra={"key": backend_key, "ttl_seconds": ttl_seconds},
        )
        return self

    def has_key(self, key: str) -> bool:
        """Check if the backend holds a value for key."""
        return self._backend.contains(self._backend_key(key))

    def delete(self, key: str) -> "CacheStore":
        """Delete key from the backend."""
        backend_key = self._backend_key(key)
        self._backend.remove(backend_key)
        logger.debug(f"Cache delete: {backend_key}")
        return self

    def get_prefix(self) -> str:
        return self._prefix

    def set_prefix(self, prefix: str) -> "CacheStore":
        self._prefix = prefix
        return self

    def get_backend(self) -> CacheBackend:
        return self._backend

    def set_backend(self, backend: CacheBackend) -> "CacheStore":
        self._backend = backend
        return self
