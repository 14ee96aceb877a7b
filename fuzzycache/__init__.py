"""
fuzzycache

Cache layer adding fuzzed lifetimes and stale-while-revalidate semantics
on top of any key/value backend.
"""

from .domain.cache import (
    ABSENT,
    CacheBackend,
    CacheEntry,
    CacheEntryState,
    CacheEnvelope,
    fuzz,
    is_absent,
)
from .infrastructure.backends import InMemoryBackend
from .services.cache import CacheStore, create_cache_store

__version__ = "1.0.0"

__all__ = [
    "ABSENT",
    "CacheBackend",
    "CacheEntry",
    "CacheEntryState",
    "CacheEnvelope",
    "CacheStore",
    "InMemoryBackend",
    "create_cache_store",
    "fuzz",
    "is_absent",
]
