"""Command line front end for the launch sync.

Usage:
    rocket-launch-sync [sync|show] [--config PATH] [--db PATH] [--endpoint URL]
                       [--timeout SECONDS] [--json] [--log-level LEVEL]
                       [--log-format text|json]

`sync` (default) refreshes from the remote source, falling back to the
cache. `show` prints the cache without touching the network.

Exit codes: 0 when launches were shown, 1 when there was nothing to show,
2 on configuration errors.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import TextIO

from .cache.sqlite import SQLiteLaunchCache
from .config import LOG_FORMATS, SyncSettings, load_settings
from .exceptions import ConfigError, LaunchSyncError
from .logging_utils import SyncLoggerAdapter, configure_logging, get_sync_logger
from .models import RocketLaunch
from .sync import LaunchSyncCoordinator, SyncResult, SyncStatus

EXIT_OK = 0
EXIT_EMPTY = 1
EXIT_CONFIG = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rocket-launch-sync",
        description="Fetch the latest rocket launches, caching them for offline use.",
    )
    parser.add_argument(
        "command",
        nargs="?",
        choices=("sync", "show"),
        default="sync",
        help="sync from the remote source (default) or show the cached launches",
    )
    parser.add_argument("--config", type=Path, help="settings YAML file")
    parser.add_argument("--db", help="SQLite cache path, or :memory:")
    parser.add_argument("--endpoint", help="launches URL")
    parser.add_argument("--timeout", type=float, help="request timeout in seconds")
    parser.add_argument("--json", action="store_true", help="print machine-readable JSON")
    parser.add_argument("--log-level", help="logging level (default: INFO)")
    parser.add_argument("--log-format", choices=LOG_FORMATS, help="log line format")
    return parser


def resolve_settings(args: argparse.Namespace) -> SyncSettings:
    """Load file and environment settings, then apply command line flags."""
    settings = load_settings(args.config)

    overrides: dict[str, object] = {}
    if args.endpoint is not None:
        overrides["endpoint"] = args.endpoint
    if args.timeout is not None:
        overrides["timeout_seconds"] = args.timeout
    if args.db is not None:
        overrides["db_path"] = args.db
    if args.log_level is not None:
        overrides["log_level"] = args.log_level
    if args.log_format is not None:
        overrides["log_format"] = args.log_format

    return settings.update(overrides, source="command line")


def _format_outcome(launch: RocketLaunch) -> str:
    if launch.launch_success is None:
        return "unknown"
    return "success" if launch.launch_success else "failure"


def print_launches(
    launches: list[RocketLaunch],
    status: str,
    error: str | None = None,
    as_json: bool = False,
    out: TextIO | None = None,
) -> None:
    out = out or sys.stdout
    if as_json:
        payload = {
            "status": status,
            "error": error,
            "launches": [launch.to_wire() for launch in launches],
        }
        out.write(json.dumps(payload, indent=2) + "\n")
        return

    out.write(f"status: {status} ({len(launches)} launches)\n")
    if error:
        out.write(f"last error: {error}\n")
    for launch in launches:
        out.write(
            f"#{launch.flight_number:<4} {launch.launch_date_utc:<26} "
            f"{_format_outcome(launch):<8} {launch.mission_name}\n"
        )


async def run_sync(settings: SyncSettings, as_json: bool = False) -> SyncResult:
    async with await LaunchSyncCoordinator.from_settings(settings) as coordinator:
        result = await coordinator.refresh()
    print_launches(result.launches, result.status.value, result.error, as_json=as_json)
    return result


async def run_show(settings: SyncSettings, as_json: bool = False) -> list[RocketLaunch]:
    async with SQLiteLaunchCache(settings.cache) as cache:
        launches = await cache.read_all()
    print_launches(launches, "cached", as_json=as_json)
    return launches


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = resolve_settings(args)
    except ConfigError as e:
        sys.stderr.write(f"rocket-launch-sync: {e.message}\n")
        return EXIT_CONFIG

    configure_logging(settings.log_level, settings.log_format)
    log = SyncLoggerAdapter.for_settings(get_sync_logger("cli"), settings)
    log.debug(f"Running {args.command}")

    try:
        if args.command == "show":
            launches = asyncio.run(run_show(settings, as_json=args.json))
            return EXIT_OK if launches else EXIT_EMPTY

        result = asyncio.run(run_sync(settings, as_json=args.json))
    except LaunchSyncError as e:
        log.error(f"{args.command} failed: {e.message}")
        return EXIT_EMPTY

    if result.status is SyncStatus.EMPTY:
        log.warning("No launches available: remote failed and the cache is empty")
        return EXIT_EMPTY
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
