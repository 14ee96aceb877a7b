"""Build a CacheStore from settings."""

import logging
import random
from typing import Optional

from ...core.config import Settings, get_settings
from ...domain.cache.repository_interfaces import CacheBackend
from ...infrastructure.backends.memory import InMemoryBackend
from ...infrastructure.redis.redis_backend import RedisBackend
from .cache_store import CacheStore

logger = logging.getLogger(__name__)


def create_backend(settings: Optional[Settings] = None) -> CacheBackend:
    """Create the backend selected by CACHE_BACKEND."""
    settings = settings or get_settings()
    if settings.uses_redis:
        return RedisBackend.from_settings(settings)
    return InMemoryBackend()


def create_cache_store(
    settings: Optional[Settings] = None,
    backend: Optional[CacheBackend] = None,
    rng: Optional[random.Random] = None,
) -> CacheStore:
    """
    Create a cache store configured from settings.

    Args:
        settings: Settings to use, the cached global settings when omitted
        backend: Backend to wrap, built from settings when omitted
        rng: Random source for lifetime fuzzing

    Returns:
        Configured CacheStore
    """
    settings = settings or get_settings()
    if backend is None:
        backend = create_backend(settings)

    logger.info(
        f"Cache store created with {type(backend).__name__}",
        extra={
            "prefix": settings.CACHE_PREFIX,
            "default_lifetime_seconds": settings.CACHE_DEFAULT_LIFETIME_SECONDS,
            "default_fuzz_factor": settings.CACHE_DEFAULT_FUZZ_FACTOR,
        },
    )
    return CacheStore(
        backend,
        settings.CACHE_PREFIX,
        rng=rng,
        default_lifetime_seconds=settings.CACHE_DEFAULT_LIFETIME_SECONDS,
        default_fuzz_factor=settings.CACHE_DEFAULT_FUZZ_FACTOR,
    )
