"""
Settings for the launch sync.

Settings come from ~/.rocket_launch_sync/settings.yaml when present:

```yaml
rocket_launch_sync:
  endpoint: "https://api.spacexdata.com/v5/launches"
  timeout_seconds: 30
  db_path: "~/.rocket_launch_sync/launches.db"
  log_level: "INFO"
  log_format: "text"   # or "json"
```

Environment variables override the file:
ROCKET_SYNC_ENDPOINT, ROCKET_SYNC_TIMEOUT, ROCKET_SYNC_SQLITE_PATH,
ROCKET_SYNC_LOG_LEVEL, ROCKET_SYNC_LOG_FORMAT.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .cache.sqlite import SQLiteCacheConfig
from .exceptions import ConfigError
from .remote.spacex import SpaceXFetcherConfig

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = Path.home() / ".rocket_launch_sync" / "settings.yaml"
SETTINGS_SECTION = "rocket_launch_sync"
LOG_FORMATS = ("text", "json")

# Environment variable -> settings key
ENV_OVERRIDES = {
    "ROCKET_SYNC_ENDPOINT": "endpoint",
    "ROCKET_SYNC_TIMEOUT": "timeout_seconds",
    "ROCKET_SYNC_SQLITE_PATH": "db_path",
    "ROCKET_SYNC_LOG_LEVEL": "log_level",
    "ROCKET_SYNC_LOG_FORMAT": "log_format",
}


@dataclass
class SyncSettings:
    """Complete configuration for one coordinator plus logging."""

    fetcher: SpaceXFetcherConfig = field(default_factory=SpaceXFetcherConfig)
    cache: SQLiteCacheConfig = field(default_factory=SQLiteCacheConfig)
    log_level: str = "INFO"
    log_format: str = "text"

    @classmethod
    def from_dict(cls, data: dict[str, Any], source: str | None = None) -> SyncSettings:
        """Build settings from a flat mapping, validating each value."""
        return cls().update(data, source)

    def update(self, data: dict[str, Any], source: str | None = None) -> SyncSettings:
        """Apply the keys present in ``data`` on top of the current values."""
        if "endpoint" in data:
            endpoint = str(data["endpoint"])
            if not endpoint.startswith(("http://", "https://")):
                raise ConfigError("endpoint", "must be an http(s) URL", source)
            self.fetcher.endpoint = endpoint

        if "timeout_seconds" in data:
            try:
                timeout = float(data["timeout_seconds"])
            except (TypeError, ValueError) as e:
                raise ConfigError("timeout_seconds", "must be a number", source) from e
            if timeout <= 0:
                raise ConfigError("timeout_seconds", "must be positive", source)
            self.fetcher.timeout_seconds = timeout

        if "db_path" in data:
            self.cache.db_path = str(data["db_path"])

        if "log_level" in data:
            level = str(data["log_level"]).upper()
            if not isinstance(logging.getLevelName(level), int):
                raise ConfigError("log_level", f"unknown level {level}", source)
            self.log_level = level

        if "log_format" in data:
            fmt = str(data["log_format"]).lower()
            if fmt not in LOG_FORMATS:
                raise ConfigError("log_format", f"must be one of {LOG_FORMATS}", source)
            self.log_format = fmt

        return self


def _read_settings_file(path: Path) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(SETTINGS_SECTION, f"invalid YAML: {e}", str(path)) from e

    if not isinstance(raw, dict):
        raise ConfigError(SETTINGS_SECTION, "settings file must be a mapping", str(path))

    section = raw.get(SETTINGS_SECTION, {})
    if not isinstance(section, dict):
        raise ConfigError(SETTINGS_SECTION, "section must be a mapping", str(path))
    return section


def load_settings(path: Path | None = None, env: dict[str, str] | None = None) -> SyncSettings:
    """Load settings from the YAML file, then apply environment overrides.

    Args:
        path: Settings file. Defaults to ~/.rocket_launch_sync/settings.yaml;
            a missing default file is not an error, a missing explicit one is
        env: Environment mapping (defaults to os.environ)

    Raises:
        ConfigError: If the file or any value is invalid
    """
    env = os.environ if env is None else env
    data: dict[str, Any] = {}

    settings_path = path or DEFAULT_SETTINGS_PATH
    if settings_path.exists():
        data.update(_read_settings_file(settings_path))
        logger.debug(f"Loaded settings from {settings_path}")
    elif path is not None:
        raise ConfigError(SETTINGS_SECTION, "settings file not found", str(path))

    for var, key in ENV_OVERRIDES.items():
        if var in env:
            data[key] = env[var]

    return SyncSettings.from_dict(data, source=str(settings_path))
