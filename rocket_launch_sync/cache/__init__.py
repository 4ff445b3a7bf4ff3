"""
Local launch caches.

A cache keeps the most recent known-good launch list for use when the
remote source is unreachable.
"""

from .base import LaunchCache
from .sqlite import SQLiteCacheConfig, SQLiteLaunchCache

__all__ = [
    "LaunchCache",
    "SQLiteLaunchCache",
    "SQLiteCacheConfig",
]
