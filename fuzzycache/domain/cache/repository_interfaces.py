"""
Cache Backend Interface

Abstract backend contract following the DDD Repository pattern.
Defines the four operations a key/value store must provide to sit
behind a CacheStore.
"""

from abc import ABC, abstractmethod
from typing import Any


class CacheBackend(ABC):
    """
    Abstract key/value storage backend.

    Backends own persistence, eviction and transport. Implementations must
    return ``ABSENT`` from ``fetch`` for a missing key and let their own
    failures propagate.
    """

    @abstractmethod
    def fetch(self, key: str) -> Any:
        """Fetch the raw value stored under key, or ABSENT if there is none."""
        pass

    @abstractmethod
    def store(self, key: str, value: Any, ttl_seconds: int) -> None:
        """Store value under key. A TTL of zero or less means no expiry."""
        pass

    @abstractmethod
    def contains(self, key: str) -> bool:
        """Check if key exists in the backend."""
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """Remove key from the backend. Removing a missing key is a no-op."""
        pass
