"""
Redis Infrastructure Module

Redis-backed cache storage.

This module provides:
- RedisBackend: CacheBackend implementation over a redis-py client
- Connection pool construction from settings
- JSON codec for envelopes and raw values
- Exception hierarchy preserving the original Redis errors
- OpenTelemetry spans around every operation
"""

from .redis_backend import RedisBackend
from .connection_factory import create_connection_pool, create_redis_client
from .serialization import encode_value, decode_value
from .exceptions import (
    CacheBackendException,
    RedisBackendException,
    RedisConnectionException,
    RedisOperationTimeoutException,
    RedisConfigurationException,
    RedisSerializationException,
)

__all__ = [
    # Backend
    "RedisBackend",
    # Connection management
    "create_connection_pool",
    "create_redis_client",
    # Serialization
    "encode_value",
    "decode_value",
    # Exceptions
    "CacheBackendException",
    "RedisBackendException",
    "RedisConnectionException",
    "RedisOperationTimeoutException",
    "RedisConfigurationException",
    "RedisSerializationException",
]
