"""
Rocket Launch Sync

Offline-tolerant launch list synchronization.

Provides:
- A remote fetcher for the SpaceX launches API (aiohttp)
- A durable SQLite cache with atomic whole-list replacement (aiosqlite)
- A coordinator that fetches, persists, and falls back to the cache on failure

Usage:

    >>> from rocket_launch_sync import LaunchSyncCoordinator, load_settings
    >>> settings = load_settings()
    >>> async with await LaunchSyncCoordinator.from_settings(settings) as sync:
    ...     result = await sync.refresh()
    ...     if result.has_data:
    ...         show(result.launches, stale=result.status is SyncStatus.STALE)

Or as a single-shot stream:

    >>> async for launches in sync.latest_launches():
    ...     show(launches)
"""

from .cache import LaunchCache, SQLiteCacheConfig, SQLiteLaunchCache
from .config import SyncSettings, load_settings
from .exceptions import (
    CacheError,
    CacheNotInitializedError,
    CacheOpenError,
    CacheReadError,
    CacheWriteError,
    ConfigError,
    LaunchDecodeError,
    LaunchSyncError,
    RemoteFetchError,
)
from .models import Links, Patch, RocketLaunch
from .remote import LaunchFetcher, SpaceXFetcherConfig, SpaceXLaunchFetcher
from .sync import LaunchSyncCoordinator, SyncResult, SyncStatus

__all__ = [
    # Records
    "RocketLaunch",
    "Links",
    "Patch",
    # Remote
    "LaunchFetcher",
    "SpaceXLaunchFetcher",
    "SpaceXFetcherConfig",
    # Cache
    "LaunchCache",
    "SQLiteLaunchCache",
    "SQLiteCacheConfig",
    # Sync
    "LaunchSyncCoordinator",
    "SyncResult",
    "SyncStatus",
    # Settings
    "SyncSettings",
    "load_settings",
    # Exceptions
    "LaunchSyncError",
    "ConfigError",
    "LaunchDecodeError",
    "RemoteFetchError",
    "CacheError",
    "CacheNotInitializedError",
    "CacheOpenError",
    "CacheReadError",
    "CacheWriteError",
]

__version__ = "0.1.0"
