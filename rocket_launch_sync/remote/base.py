"""
Abstract base class for remote launch sources.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..models import RocketLaunch


class LaunchFetcher(ABC):
    """Read-only provider of the complete remote launch list."""

    @abstractmethod
    async def fetch_all(self) -> list[RocketLaunch]:
        """
        Fetch the current full launch list.

        One network call per invocation, no internal retry.

        Returns:
            Launches in server-provided order

        Raises:
            RemoteFetchError: On any transport, status or decode failure
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release network resources."""
        pass

    async def __aenter__(self) -> LaunchFetcher:
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: type, exc_val: Exception, exc_tb: object) -> None:
        """Async context manager exit."""
        await self.close()
