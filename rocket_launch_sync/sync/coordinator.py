"""
Launch synchronization coordinator.

Orchestrates one sync per call:
- Fetch: full launch list from the remote source
- Persist: replace the local cache, committed before anything is emitted
- Fallback: on any fetch or persist failure, serve the cached list instead
"""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from ..cache.base import LaunchCache
from ..exceptions import CacheWriteError, RemoteFetchError
from ..models import RocketLaunch
from ..remote.base import LaunchFetcher

if TYPE_CHECKING:
    from ..config import SyncSettings

logger = logging.getLogger(__name__)


class SyncStatus(Enum):
    """Outcome of a single sync."""

    FRESH = "fresh"  # Remote list fetched and cached
    STALE = "stale"  # Remote failed, cached list served
    EMPTY = "empty"  # Remote failed, nothing cached


@dataclass
class SyncResult:
    """Result of a sync operation."""

    status: SyncStatus
    launches: list[RocketLaunch] = field(default_factory=list)
    error: str | None = None
    duration_ms: int = 0

    @property
    def has_data(self) -> bool:
        """True when the result carries a list consumers should render."""
        return self.status is not SyncStatus.EMPTY


class LaunchSyncCoordinator:
    """Single entry point for the launch list.

    The remote source is the source of truth when reachable; the cache only
    keeps the most recent known-good list for when it is not. Errors are
    never raised to the consumer on the fallback path, they are logged and
    reported through SyncResult.error.

    Example:
        >>> async with await LaunchSyncCoordinator.from_settings(settings) as sync:
        ...     async for launches in sync.latest_launches():
        ...         render(launches)
    """

    def __init__(self, fetcher: LaunchFetcher, cache: LaunchCache):
        """Initialize the coordinator.

        Args:
            fetcher: Remote launch source
            cache: Local launch cache; the coordinator is its only writer
        """
        self.fetcher = fetcher
        self.cache = cache

    @classmethod
    async def from_settings(cls, settings: SyncSettings) -> LaunchSyncCoordinator:
        """Build a coordinator with the SpaceX fetcher and SQLite cache."""
        from ..cache.sqlite import SQLiteLaunchCache
        from ..remote.spacex import SpaceXLaunchFetcher

        cache = SQLiteLaunchCache(settings.cache)
        await cache.initialize()
        return cls(fetcher=SpaceXLaunchFetcher(settings.fetcher), cache=cache)

    async def refresh(self) -> SyncResult:
        """Run fetch, persist and fallback once.

        Returns:
            FRESH with the fetched list (possibly empty), STALE with the
            cached list, or EMPTY when the remote failed and the cache is empty

        Raises:
            CacheReadError: If the fallback read itself fails
        """
        started = time.monotonic()

        try:
            launches = await self.fetcher.fetch_all()
            await self.cache.replace_all(launches)
        except (RemoteFetchError, CacheWriteError) as e:
            logger.warning(f"Launch sync failed, falling back to cache: {e}")
            result = await self._fallback(str(e))
        else:
            result = SyncResult(status=SyncStatus.FRESH, launches=launches)

        result.duration_ms = int((time.monotonic() - started) * 1000)
        logger.info(
            f"Launch sync finished: status={result.status.value}, "
            f"launches={len(result.launches)}, duration_ms={result.duration_ms}"
        )
        return result

    async def _fallback(self, error: str) -> SyncResult:
        cached = await self.cache.read_all()
        if not cached:
            return SyncResult(status=SyncStatus.EMPTY, error=error)
        return SyncResult(status=SyncStatus.STALE, launches=cached, error=error)

    async def latest_launches(self) -> AsyncIterator[list[RocketLaunch]]:
        """Yield the latest launch list at most once.

        Each iteration is a fresh sync. Nothing is yielded when the remote
        fails and the cache is empty.
        """
        result = await self.refresh()
        if result.has_data:
            yield result.launches

    async def close(self) -> None:
        """Close the fetcher and the cache."""
        try:
            await self.fetcher.close()
        finally:
            await self.cache.close()

    async def __aenter__(self) -> LaunchSyncCoordinator:
        return self

    async def __aexit__(self, exc_type: type, exc_val: Exception, exc_tb: object) -> None:
        await self.close()
