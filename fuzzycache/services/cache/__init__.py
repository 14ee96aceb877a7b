"""
Cache Services

High-level cache store and its construction from settings.
"""

from .cache_store import CacheStore
from .factory import create_backend, create_cache_store

__all__ = ["CacheStore", "create_backend", "create_cache_store"]
