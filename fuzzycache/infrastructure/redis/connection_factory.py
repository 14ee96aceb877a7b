"""
Redis Connection Factory

Builds pooled redis-py clients from settings.
"""

import logging
from typing import Optional

import redis
from redis import ConnectionPool, Redis

from ...core.config import Settings, get_settings
from .exceptions import RedisConfigurationException

logger = logging.getLogger(__name__)


def create_connection_pool(settings: Optional[Settings] = None) -> ConnectionPool:
    """
    Create a Redis connection pool from settings.

    Raises:
        RedisConfigurationException: If the Redis URL cannot be parsed
    """
    settings = settings or get_settings()

    try:
        pool = ConnectionPool.from_url(
            settings.REDIS_URL,
            encoding="utf-8",
            decode_responses=True,
            socket_connect_timeout=settings.REDIS_CONNECTION_TIMEOUT,
            socket_timeout=settings.REDIS_OPERATION_TIMEOUT,
            max_connections=settings.REDIS_MAX_CONNECTIONS,
        )
    except ValueError as e:
        logger.error(f"Invalid Redis URL: {e}")
        raise RedisConfigurationException(
            message=f"Invalid Redis URL: {str(e)}",
            config_key="REDIS_URL",
            original_error=e,
        )

    logger.info(
        "Redis connection pool created",
        extra={"max_connections": settings.REDIS_MAX_CONNECTIONS},
    )
    return pool


def create_redis_client(settings: Optional[Settings] = None) -> Redis:
    """Create a Redis client backed by a fresh connection pool."""
    return redis.Redis(connection_pool=create_connection_pool(settings))
