"""
Custom exceptions for launch synchronization.

Fetchers and caches raise these so the coordinator can decide,
in one place, which failures route to the cached fallback.
"""


class LaunchSyncError(Exception):
    """Base exception for all launch sync errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigError(LaunchSyncError):
    """Raised when settings cannot be loaded or hold invalid values."""

    def __init__(self, key: str, reason: str, source: str | None = None):
        details = {"key": key, "reason": reason}
        if source:
            details["source"] = source
        super().__init__(f"Invalid configuration for {key}: {reason}", details)
        self.key = key
        self.reason = reason
        self.source = source


class LaunchDecodeError(LaunchSyncError):
    """Raised when a wire object does not match the launch record shape."""

    def __init__(self, field: str, reason: str, value: object = None):
        details = {"field": field, "reason": reason}
        if value is not None:
            details["value"] = repr(value)
        super().__init__(f"Cannot decode launch field {field}: {reason}", details)
        self.field = field
        self.reason = reason
        self.value = value


class RemoteFetchError(LaunchSyncError):
    """Raised when the remote launch list cannot be fetched.

    Covers transport failures, timeouts, non-2xx responses and
    payloads that are not a valid launch list.
    """

    def __init__(
        self,
        endpoint: str,
        reason: str,
        status: int | None = None,
        cause: Exception | None = None,
    ):
        details: dict = {"endpoint": endpoint, "reason": reason}
        if status is not None:
            details["status"] = status
        if cause:
            details["cause"] = str(cause)
        super().__init__(f"Fetch from {endpoint} failed: {reason}", details)
        self.endpoint = endpoint
        self.reason = reason
        self.status = status
        self.cause = cause


class CacheError(LaunchSyncError):
    """Base exception for local cache failures."""


class CacheNotInitializedError(CacheError):
    """Raised when the cache is used before initialize() or after close()."""

    def __init__(self, operation: str):
        super().__init__(
            f"Launch cache not initialized for {operation}", {"operation": operation}
        )
        self.operation = operation


class CacheOpenError(CacheError):
    """Raised when the cache storage cannot be opened or its schema created."""

    def __init__(self, path: str, cause: Exception | None = None):
        details = {"path": path}
        if cause:
            details["cause"] = str(cause)
        super().__init__(f"Failed to open launch cache: {path}", details)
        self.path = path
        self.cause = cause


class CacheReadError(CacheError):
    """Raised when cached launches cannot be read."""

    def __init__(self, path: str, cause: Exception | None = None):
        details = {"path": path}
        if cause:
            details["cause"] = str(cause)
        super().__init__(f"Failed to read launch cache: {path}", details)
        self.path = path
        self.cause = cause


class CacheWriteError(CacheError):
    """Raised when replacing the cached launches fails.

    The replace is rolled back, so the cache still holds its prior contents.
    """

    def __init__(self, path: str, count: int, cause: Exception | None = None):
        details: dict = {"path": path, "count": count}
        if cause:
            details["cause"] = str(cause)
        super().__init__(f"Failed to replace {count} cached launches in {path}", details)
        self.path = path
        self.count = count
        self.cause = cause
