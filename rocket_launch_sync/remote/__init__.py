"""
Remote launch sources.

Each source performs one fetch of the complete launch list per call.
"""

from .base import LaunchFetcher
from .spacex import DEFAULT_ENDPOINT, SpaceXFetcherConfig, SpaceXLaunchFetcher

__all__ = [
    "LaunchFetcher",
    "SpaceXLaunchFetcher",
    "SpaceXFetcherConfig",
    "DEFAULT_ENDPOINT",
]
