"""
Cache Backend Exceptions

Backend-specific exceptions for cache storage operations.
Errors are never swallowed: every exception preserves the original error
as its cause so callers can inspect what the store reported.
"""

from typing import Optional, Any, Dict


class CacheBackendException(Exception):
    """Base exception for cache backend errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class RedisBackendException(CacheBackendException):
    """Base exception for Redis backend errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = "REDIS_ERROR",
        details: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        details = dict(details or {})
        if original_error:
            details["original_error"] = str(original_error)
            details["original_error_type"] = type(original_error).__name__

        super().__init__(message=message, error_code=error_code, details=details)
        if original_error:
            self.__cause__ = original_error


class RedisConnectionException(RedisBackendException):
    """Raised when Redis connection fails or is lost."""

    def __init__(
        self,
        message: str = "Redis connection failed",
        key: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        details = {"key": key} if key else {}
        super().__init__(
            message=message,
            error_code="REDIS_CONNECTION_ERROR",
            details=details,
            original_error=original_error,
        )


class RedisOperationTimeoutException(RedisBackendException):
    """Raised when Redis operation times out."""

    def __init__(
        self,
        operation: str,
        key: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        details = {"operation": operation}
        if key:
            details["key"] = key

        super().__init__(
            message=f"Redis operation '{operation}' timed out",
            error_code="REDIS_TIMEOUT_ERROR",
            details=details,
            original_error=original_error,
        )


class RedisConfigurationException(RedisBackendException):
    """Raised when Redis configuration is invalid."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None,
        original_error: Optional[Exception] = None,
    ):
        details = {}
        if config_key:
            details["config_key"] = config_key
        if config_value is not None:
            details["config_value"] = str(config_value)

        super().__init__(
            message=message,
            error_code="REDIS_CONFIGURATION_ERROR",
            details=details,
            original_error=original_error,
        )


class RedisSerializationException(RedisBackendException):
    """Raised when a value cannot be encoded to or decoded from Redis."""

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        details = {"key": key} if key else {}
        super().__init__(
            message=message,
            error_code="REDIS_SERIALIZATION_ERROR",
            details=details,
            original_error=original_error,
        )
