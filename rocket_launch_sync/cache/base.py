"""
Abstract base class for local launch caches.

A cache holds exactly one launch list: the last one written. It never
updates or deletes individual records.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..models import RocketLaunch


class LaunchCache(ABC):
    """Durable, replacement-only store for the launch list."""

    @abstractmethod
    async def initialize(self) -> None:
        """
        Open the underlying storage and ensure the schema exists.

        Raises:
            CacheOpenError: If the storage cannot be opened or created
        """
        pass

    @abstractmethod
    async def read_all(self) -> list[RocketLaunch]:
        """
        Read every cached launch.

        Returns:
            Launches in the order they were written; empty list when
            nothing is cached

        Raises:
            CacheReadError: If the storage cannot be read
        """
        pass

    @abstractmethod
    async def replace_all(self, launches: list[RocketLaunch]) -> None:
        """
        Atomically replace the cached launches.

        Either every old record is gone and every new one is present,
        or the cache is left exactly as it was.

        Args:
            launches: New launch list, stored in the given order

        Raises:
            CacheWriteError: If the replace fails (prior state kept)
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release storage resources."""
        pass

    async def __aenter__(self) -> LaunchCache:
        await self.initialize()
        return self

    async def __aexit__(self, exc_type: type, exc_val: Exception, exc_tb: object) -> None:
        await self.close()
