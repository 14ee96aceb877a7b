"""
Redis Cache Backend

Infrastructure implementation of the cache backend interface using Redis.
Values are stored as JSON text with a native Redis expiry.
"""

import logging
from typing import Any, NoReturn, Optional

from redis import Redis
from redis.exceptions import (
    ConnectionError as RedisConnectionError,
    TimeoutError as RedisTimeoutError,
    RedisError,
)

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

from ...core.config import Settings
from ...domain.cache.repository_interfaces import CacheBackend
from ...domain.cache.value_objects import ABSENT
from .connection_factory import create_redis_client
from .exceptions import (
    RedisBackendException,
    RedisConnectionException,
    RedisOperationTimeoutException,
    RedisSerializationException,
)
from .serialization import decode_value, encode_value

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


class RedisBackend(CacheBackend):
    """Redis implementation of the cache backend."""

    def __init__(self, client: Redis):
        self.client = client

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "RedisBackend":
        """Create a backend with a pooled client built from settings."""
        return cls(create_redis_client(settings))

    def fetch(self, key: str) -> Any:
        """Fetch and decode the value stored under key."""
        with tracer.start_as_current_span("redis_backend.fetch") as span:
            span.set_attribute("cache.key", key)
            try:
                raw = self.client.get(key)
            except RedisError as e:
                self._fail(span, "get", key, e)

            if raw is None:
                span.set_attribute("cache.hit", False)
                return ABSENT

            span.set_attribute("cache.hit", True)
            try:
                return decode_value(raw)
            except ValueError as e:
                logger.exception(f"Failed to decode cached value {key}: {e}")
                span.set_status(Status(StatusCode.ERROR, str(e)))
                raise RedisSerializationException(
                    message=f"Failed to decode cached value: {str(e)}",
                    key=key,
                    original_error=e,
                ) from e

    def store(self, key: str, value: Any, ttl_seconds: int) -> None:
        """Encode value and store it with an expiry (none when ttl <= 0)."""
        with tracer.start_as_current_span("redis_backend.store") as span:
            span.set_attribute("cache.key", key)
            span.set_attribute("cache.ttl_seconds", ttl_seconds)
            try:
                encoded = encode_value(value)
            except (TypeError, ValueError) as e:
                logger.exception(f"Failed to encode cache value {key}: {e}")
                span.set_status(Status(StatusCode.ERROR, str(e)))
                raise RedisSerializationException(
                    message=f"Failed to encode cache value: {str(e)}",
                    key=key,
                    original_error=e,
                ) from e

            try:
                if ttl_seconds > 0:
                    self.client.set(key, encoded, ex=int(ttl_seconds))
                else:
                    self.client.set(key, encoded)
            except RedisError as e:
                self._fail(span, "set", key, e)

            logger.debug(
                f"Stored cache value: {key}",
                extra={"key": key, "ttl_seconds": ttl_seconds},
            )

    def contains(self, key: str) -> bool:
        """Check if key exists in Redis."""
        with tracer.start_as_current_span("redis_backend.contains") as span:
            span.set_attribute("cache.key", key)
            try:
                return bool(self.client.exists(key))
            except RedisError as e:
                self._fail(span, "exists", key, e)

    def remove(self, key: str) -> None:
        """Delete key from Redis."""
        with tracer.start_as_current_span("redis_backend.remove") as span:
            span.set_attribute("cache.key", key)
            try:
                self.client.delete(key)
            except RedisError as e:
                self._fail(span, "delete", key, e)

    def close(self) -> None:
        """Release the client's connection pool."""
        self.client.close()

    def _fail(self, span: trace.Span, operation: str, key: str, error: RedisError) -> NoReturn:
        """Log, mark the span and re-raise a Redis error as a backend exception."""
        logger.exception(f"Redis {operation} failed for {key}: {error}")
        span.set_status(Status(StatusCode.ERROR, str(error)))

        if isinstance(error, RedisTimeoutError):
            raise RedisOperationTimeoutException(
                operation=operation, key=key, original_error=error
            ) from error
        if isinstance(error, RedisConnectionError):
            raise RedisConnectionException(
                message=f"Redis connection failed during {operation}",
                key=key,
                original_error=error,
            ) from error
        raise RedisBackendException(
            message=f"Redis {operation} failed: {str(error)}",
            details={"operation": operation, "key": key},
            original_error=error,
        ) from error
