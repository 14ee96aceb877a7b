"""
Cache Domain Module

Domain-Driven Design implementation of fuzzy, stale-while-revalidate caching.
Contains the cache entry entity, value objects and the backend interface.
"""

from .entities import CacheEntry, fuzz
from .repository_interfaces import CacheBackend
from .value_objects import (
    ABSENT,
    DEFAULT_FUZZ_FACTOR,
    DEFAULT_LIFETIME_SECONDS,
    CacheEntryState,
    CacheEnvelope,
    is_absent,
)

__all__ = [
    "CacheEntry",
    "fuzz",
    "CacheBackend",
    "ABSENT",
    "DEFAULT_FUZZ_FACTOR",
    "DEFAULT_LIFETIME_SECONDS",
    "CacheEntryState",
    "CacheEnvelope",
    "is_absent",
]
