"""
Launch synchronization.

Fetch from the remote source, persist to the cache, fall back to the
cache on failure.
"""

from .coordinator import LaunchSyncCoordinator, SyncResult, SyncStatus

__all__ = [
    "LaunchSyncCoordinator",
    "SyncResult",
    "SyncStatus",
]
