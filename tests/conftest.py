"""
Shared test configuration and fixtures.

Provides sample launches in both wire and record form, an in-memory
SQLite cache, scripted fetchers, and a local aiohttp server for
exercising the real SpaceX fetcher without network access.
"""

import logging
from collections.abc import Awaitable, Callable

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from rocket_launch_sync.cache.sqlite import SQLiteCacheConfig, SQLiteLaunchCache
from rocket_launch_sync.exceptions import RemoteFetchError
from rocket_launch_sync.models import Links, Patch, RocketLaunch
from rocket_launch_sync.remote.base import LaunchFetcher

logger = logging.getLogger(__name__)

LAUNCHES_PATH = "/v5/launches"

FALCONSAT_WIRE = {
    "flight_number": 1,
    "name": "FalconSat",
    "date_utc": "2006-03-24T22:30:00.000Z",
    "details": "Engine failure at 33 seconds and loss of vehicle",
    "success": False,
    "links": {
        "patch": {
            "small": "https://images2.imgbox.com/3c/0e/T8iJcSN3_o.png",
            "large": "https://images2.imgbox.com/40/e3/GypSkayF_o.png",
        },
        "article": "https://www.space.com/2196-spacex-inaugural-falcon-1-rocket-lost-launch.html",
    },
}

DEMOSAT_WIRE = {
    "flight_number": 2,
    "name": "DemoSat",
    "date_utc": "2007-03-21T01:10:00.000Z",
    "details": "Successful first stage burn and transition to second stage",
    "success": True,
    "links": {
        "patch": {
            "small": "https://images2.imgbox.com/4f/e3/I0lkuJ2e_o.png",
            "large": "https://images2.imgbox.com/3d/86/cnu0pan8_o.png",
        },
        "article": None,
    },
}

# Unknown outcome: "success" is absent altogether, not null
TRAILBLAZER_WIRE = {
    "flight_number": 3,
    "name": "Trailblazer",
    "date_utc": "2008-08-03T03:34:00.000Z",
    "details": None,
    "links": {"patch": None, "article": None},
    "rocket": "5e9d0d95eda69955f709d1eb",
}


class StaticFetcher(LaunchFetcher):
    """Fetcher returning a fixed launch list and counting calls."""

    def __init__(self, launches: list[RocketLaunch]):
        self.launches = launches
        self.calls = 0
        self.closed = False

    async def fetch_all(self) -> list[RocketLaunch]:
        self.calls += 1
        return list(self.launches)

    async def close(self) -> None:
        self.closed = True


class FailingFetcher(LaunchFetcher):
    """Fetcher that always fails like an unreachable remote."""

    def __init__(self, reason: str = "connection refused"):
        self.reason = reason
        self.calls = 0
        self.closed = False

    async def fetch_all(self) -> list[RocketLaunch]:
        self.calls += 1
        raise RemoteFetchError("https://launches.test/v5/launches", self.reason)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def falconsat() -> RocketLaunch:
    return RocketLaunch(
        flight_number=1,
        mission_name="FalconSat",
        launch_date_utc="2006-03-24T22:30:00.000Z",
        details="Engine failure at 33 seconds and loss of vehicle",
        launch_success=False,
        links=Links(
            patch=Patch(
                small="https://images2.imgbox.com/3c/0e/T8iJcSN3_o.png",
                large="https://images2.imgbox.com/40/e3/GypSkayF_o.png",
            ),
            article="https://www.space.com/2196-spacex-inaugural-falcon-1-rocket-lost-launch.html",
        ),
    )


@pytest.fixture
def demosat() -> RocketLaunch:
    return RocketLaunch(
        flight_number=2,
        mission_name="DemoSat",
        launch_date_utc="2007-03-21T01:10:00.000Z",
        details="Successful first stage burn and transition to second stage",
        launch_success=True,
        links=Links(
            patch=Patch(
                small="https://images2.imgbox.com/4f/e3/I0lkuJ2e_o.png",
                large="https://images2.imgbox.com/3d/86/cnu0pan8_o.png",
            ),
            article=None,
        ),
    )


@pytest.fixture
def trailblazer() -> RocketLaunch:
    return RocketLaunch(
        flight_number=3,
        mission_name="Trailblazer",
        launch_date_utc="2008-08-03T03:34:00.000Z",
    )


@pytest.fixture
def cached_mission() -> RocketLaunch:
    return RocketLaunch(
        flight_number=2,
        mission_name="Cached Mission",
        launch_date_utc="2024-01-01T00:00:00Z",
        launch_success=True,
        links=Links(patch=Patch(None, None), article=None),
    )


@pytest.fixture
async def sqlite_cache():
    """Fixture providing an initialized in-memory SQLite cache."""
    cache = await SQLiteLaunchCache.create(SQLiteCacheConfig(db_path=":memory:"))
    yield cache
    await cache.close()


@pytest.fixture
async def launch_server() -> Callable[[Callable[..., Awaitable[web.StreamResponse]]], Awaitable[str]]:
    """
    Fixture providing a factory for local launch servers.

    Call it with an aiohttp handler; it returns the launches URL.
    """
    servers: list[TestServer] = []

    async def start(handler: Callable[..., Awaitable[web.StreamResponse]]) -> str:
        app = web.Application()
        app.router.add_get(LAUNCHES_PATH, handler)
        server = TestServer(app)
        await server.start_server()
        servers.append(server)
        return str(server.make_url(LAUNCHES_PATH))

    yield start

    for server in servers:
        await server.close()


def json_handler(payload: object, status: int = 200) -> Callable[..., Awaitable[web.Response]]:
    """Build a handler that always answers with ``payload`` as JSON."""

    async def handler(request: web.Request) -> web.Response:
        return web.json_response(payload, status=status)

    return handler


def nested_array_handler(depth: int = 200_000) -> Callable[..., Awaitable[web.Response]]:
    """Build a handler answering with arrays nested past the decoder's stack limit."""
    body = "[" * depth + "]" * depth

    async def handler(request: web.Request) -> web.Response:
        return web.Response(text=body, content_type="application/json")

    return handler
