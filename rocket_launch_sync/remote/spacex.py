"""
SpaceX API launch fetcher.

Performs a single GET against the launches endpoint with aiohttp and
decodes the JSON array into RocketLaunch records.
"""

from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass

import aiohttp

from ..exceptions import LaunchDecodeError, RemoteFetchError
from ..models import RocketLaunch, launches_from_wire
from .base import LaunchFetcher

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://api.spacexdata.com/v5/launches"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_USER_AGENT = "rocket-launch-sync"


@dataclass
class SpaceXFetcherConfig:
    """Configuration for the SpaceX launch fetcher."""

    endpoint: str = DEFAULT_ENDPOINT
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_env(cls) -> SpaceXFetcherConfig:
        """Create config from environment variables.

        Optional env vars:
            ROCKET_SYNC_ENDPOINT: Launches URL (default: SpaceX v5 launches)
            ROCKET_SYNC_TIMEOUT: Total request timeout in seconds (default: 30)
        """
        endpoint = os.environ.get("ROCKET_SYNC_ENDPOINT", DEFAULT_ENDPOINT)
        timeout_str = os.environ.get("ROCKET_SYNC_TIMEOUT", str(DEFAULT_TIMEOUT_SECONDS))

        return cls(
            endpoint=endpoint,
            timeout_seconds=float(timeout_str),
        )


class SpaceXLaunchFetcher(LaunchFetcher):
    """
    Fetches the full launch list from the SpaceX REST API.

    Every failure mode is reported as RemoteFetchError:
    - connection and DNS errors
    - timeouts
    - non-2xx status codes
    - bodies that are not JSON or not a valid launch array
    """

    def __init__(
        self,
        config: SpaceXFetcherConfig | None = None,
        session: aiohttp.ClientSession | None = None,
    ):
        """
        Initialize the fetcher.

        Args:
            config: Fetcher configuration (defaults to SpaceXFetcherConfig())
            session: Optional shared client session; the fetcher will not close it
        """
        self.config = config or SpaceXFetcherConfig()
        self._session = session
        self._owns_session = session is None

    @property
    def endpoint(self) -> str:
        return self.config.endpoint

    def _ensure_session(self) -> aiohttp.ClientSession:
        """Lazily create the client session inside the running loop."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.config.timeout_seconds),
                headers={
                    "Accept": "application/json",
                    "User-Agent": self.config.user_agent,
                },
            )
            self._owns_session = True
        return self._session

    async def fetch_all(self) -> list[RocketLaunch]:
        """Fetch and decode every launch from the configured endpoint."""
        session = self._ensure_session()
        endpoint = self.config.endpoint

        logger.debug(f"Fetching launches from {endpoint}")
        try:
            async with session.get(endpoint) as response:
                if not 200 <= response.status < 300:
                    raise RemoteFetchError(
                        endpoint, f"unexpected status {response.status}", status=response.status
                    )
                payload = await response.json(content_type=None)
        except RemoteFetchError:
            raise
        except asyncio.TimeoutError as e:
            raise RemoteFetchError(endpoint, "request timed out", cause=e) from e
        except aiohttp.ClientError as e:
            raise RemoteFetchError(endpoint, f"transport error: {e}", cause=e) from e
        except (ValueError, RecursionError) as e:
            # JSONDecodeError and UnicodeDecodeError are ValueErrors; deep nesting
            # exhausts the decoder stack
            raise RemoteFetchError(endpoint, "malformed JSON body", cause=e) from e

        try:
            launches = launches_from_wire(payload)
        except LaunchDecodeError as e:
            raise RemoteFetchError(endpoint, e.message, cause=e) from e

        logger.info(f"Fetched {len(launches)} launches from {endpoint}")
        return launches

    async def close(self) -> None:
        """Close the client session if this fetcher created it."""
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
        self._session = None
