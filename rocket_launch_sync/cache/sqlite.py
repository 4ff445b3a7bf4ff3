"""
SQLite launch cache.

Stores the launch list in a single ``launches`` table with aiosqlite.
Statements run on aiosqlite's worker thread, off the event loop.
"""

from __future__ import annotations

import asyncio
import logging
import os
import sqlite3
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import aiosqlite

from ..exceptions import (
    CacheNotInitializedError,
    CacheOpenError,
    CacheReadError,
    CacheWriteError,
)
from ..models import Links, Patch, RocketLaunch
from .base import LaunchCache

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path.home() / ".rocket_launch_sync" / "launches.db"

# Column order shared by INSERT and SELECT
LAUNCH_COLUMNS = (
    "position",
    "flight_number",
    "mission_name",
    "launch_date_utc",
    "details",
    "launch_success",
    "has_patch",
    "patch_small",
    "patch_large",
    "article_url",
)

_CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS launches (
    position INTEGER NOT NULL PRIMARY KEY,
    flight_number INTEGER NOT NULL,
    mission_name TEXT NOT NULL,
    launch_date_utc TEXT NOT NULL,
    details TEXT,
    launch_success INTEGER CHECK (launch_success IN (0, 1)),
    has_patch INTEGER NOT NULL DEFAULT 0,
    patch_small TEXT,
    patch_large TEXT,
    article_url TEXT
)
"""

_INSERT_SQL = (
    f"INSERT INTO launches ({', '.join(LAUNCH_COLUMNS)}) "
    f"VALUES ({', '.join('?' for _ in LAUNCH_COLUMNS)})"
)

_SELECT_SQL = f"SELECT {', '.join(LAUNCH_COLUMNS)} FROM launches ORDER BY position"


@dataclass
class SQLiteCacheConfig:
    """Configuration for the SQLite launch cache."""

    db_path: str | Path = DEFAULT_DB_PATH

    @classmethod
    def from_env(cls) -> SQLiteCacheConfig:
        """Create config from environment variables.

        Optional env vars:
            ROCKET_SYNC_SQLITE_PATH: Database file, or ":memory:"
                (default: ~/.rocket_launch_sync/launches.db)
        """
        db_path = os.environ.get("ROCKET_SYNC_SQLITE_PATH", str(DEFAULT_DB_PATH))
        return cls(db_path=db_path)

    @property
    def is_memory(self) -> bool:
        return str(self.db_path) == ":memory:"


def _launch_to_row(position: int, launch: RocketLaunch) -> tuple[Any, ...]:
    patch = launch.links.patch
    # None stays NULL so an unknown outcome is not read back as a failure
    success = None if launch.launch_success is None else int(launch.launch_success)
    return (
        position,
        launch.flight_number,
        launch.mission_name,
        launch.launch_date_utc,
        launch.details,
        success,
        1 if patch is not None else 0,
        patch.small if patch is not None else None,
        patch.large if patch is not None else None,
        launch.links.article,
    )


def _row_to_launch(row: tuple[Any, ...]) -> RocketLaunch:
    (
        _position,
        flight_number,
        mission_name,
        launch_date_utc,
        details,
        success,
        has_patch,
        patch_small,
        patch_large,
        article_url,
    ) = row
    return RocketLaunch(
        flight_number=flight_number,
        mission_name=mission_name,
        launch_date_utc=launch_date_utc,
        details=details,
        launch_success=None if success is None else bool(success),
        links=Links(
            patch=Patch(small=patch_small, large=patch_large) if has_patch else None,
            article=article_url,
        ),
    )


class SQLiteLaunchCache(LaunchCache):
    """
    SQLite-backed launch cache.

    Features:
    - Whole-table replace inside one BEGIN IMMEDIATE transaction
    - Rollback on any failure, including task cancellation
    - Reads and writes serialized by an asyncio.Lock, so a read never
      sees a table cleared by an in-flight replace
    - Stable order via an explicit position column
    """

    def __init__(self, config: SQLiteCacheConfig | None = None):
        """
        Initialize SQLite cache.

        Args:
            config: Cache configuration (defaults to SQLiteCacheConfig())
        """
        self.config = config or SQLiteCacheConfig()
        self.conn: aiosqlite.Connection | None = None
        self._initialized = False
        self._lock = asyncio.Lock()

    @classmethod
    async def create(cls, config: SQLiteCacheConfig | None = None) -> SQLiteLaunchCache:
        """Create and initialize SQLite cache."""
        if config is None:
            config = SQLiteCacheConfig.from_env()

        cache = cls(config)
        await cache.initialize()
        return cache

    @property
    def path(self) -> str:
        return str(self.config.db_path)

    async def initialize(self) -> None:
        """Open the connection and create the launches table."""
        if self._initialized:
            return

        db_path = self.path if self.config.is_memory else str(Path(self.path).expanduser())
        try:
            if not self.config.is_memory:
                Path(db_path).parent.mkdir(parents=True, exist_ok=True)
            # Autocommit mode: transactions are opened and closed explicitly
            self.conn = await aiosqlite.connect(db_path, isolation_level=None)
            if not self.config.is_memory:
                await self.conn.execute("PRAGMA journal_mode = WAL")
            await self.conn.execute(_CREATE_TABLE_SQL)
        except (sqlite3.Error, OSError) as e:
            if self.conn is not None:
                await self.conn.close()
                self.conn = None
            raise CacheOpenError(self.path, cause=e) from e

        self._initialized = True
        logger.info(f"SQLite launch cache initialized: {self.path}")

    async def read_all(self) -> list[RocketLaunch]:
        """Read every cached launch in write order."""
        if self.conn is None:
            raise CacheNotInitializedError("read_all")

        async with self._lock:
            try:
                async with self.conn.execute(_SELECT_SQL) as cursor:
                    rows = await cursor.fetchall()
            except sqlite3.Error as e:
                raise CacheReadError(self.path, cause=e) from e

        return [_row_to_launch(tuple(row)) for row in rows]

    async def replace_all(self, launches: list[RocketLaunch]) -> None:
        """Clear the table and insert ``launches`` in one transaction."""
        if self.conn is None:
            raise CacheNotInitializedError("replace_all")

        rows = [_launch_to_row(position, launch) for position, launch in enumerate(launches)]

        async with self._lock:
            try:
                await self.conn.execute("BEGIN IMMEDIATE")
                await self.conn.execute("DELETE FROM launches")
                await self.conn.executemany(_INSERT_SQL, rows)
                await self.conn.execute("COMMIT")
            except sqlite3.Error as e:
                await self._rollback()
                raise CacheWriteError(self.path, len(rows), cause=e) from e
            except BaseException:
                await self._rollback()
                raise

        logger.debug(f"Replaced cached launches with {len(rows)} records")

    async def _rollback(self) -> None:
        # Issued unconditionally: a cancelled BEGIN still runs on the worker
        # thread, and statements there execute in submission order.
        if self.conn is None:
            return
        try:
            await self.conn.execute("ROLLBACK")
        except sqlite3.OperationalError as e:
            logger.debug(f"Rollback skipped, no open transaction: {e}")

    async def close(self) -> None:
        """Close the database connection."""
        if self.conn is not None:
            await self.conn.close()
            self.conn = None
        self._initialized = False
