"""
Logging setup for the launch sync.

Plain text logging for interactive use, and single-line JSON logging
for log collectors that expect structured records.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import PurePath
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .config import SyncSettings

PACKAGE_LOGGER = "rocket_launch_sync"
TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# Attributes present on every LogRecord; anything else came from `extra`
_STANDARD_ATTRS = frozenset(
    {
        "name", "msg", "args", "created", "filename", "funcName",
        "levelname", "levelno", "lineno", "module", "msecs",
        "pathname", "process", "processName", "relativeCreated",
        "stack_info", "exc_info", "exc_text", "thread", "threadName",
        "taskName", "message",
    }
)


def _component(logger_name: str) -> str | None:
    """Module path below the package, e.g. 'cache.sqlite'."""
    prefix = PACKAGE_LOGGER + "."
    if logger_name.startswith(prefix):
        return logger_name[len(prefix):]
    return None


def _json_safe(value: Any) -> Any:
    if isinstance(value, PurePath):
        return str(value)
    try:
        json.dumps(value)
    except (TypeError, ValueError):
        return str(value)
    return value


class StructuredJsonFormatter(logging.Formatter):
    """
    Formats each record as one JSON object per line.

    Always present: timestamp (record creation time, UTC ISO 8601), level,
    logger and message. Records from this package also carry a
    ``component`` such as ``sync.coordinator``. Context passed through
    ``extra`` (endpoint, db_path, launch counts) is copied in, with values
    JSON cannot encode rendered as strings.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_obj: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        component = _component(record.name)
        if component:
            log_obj["component"] = component

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        log_obj.update(
            (key, _json_safe(value))
            for key, value in record.__dict__.items()
            if key not in _STANDARD_ATTRS and not key.startswith("_")
        )

        return json.dumps(log_obj, default=str)


def configure_logging(
    level: int | str = logging.INFO,
    fmt: str = "text",
    logger_name: str | None = None,
) -> logging.Logger:
    """
    Configure logging for the CLI or an embedding application.

    Args:
        level: Logging level, as int or name
        fmt: "text" for human-readable lines, "json" for structured records
        logger_name: Specific logger to configure (default: root logger)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(logger_name)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    # stdout carries launch listings, so logs go to stderr
    handler = logging.StreamHandler(sys.stderr)
    if fmt == "json":
        handler.setFormatter(StructuredJsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    logger.addHandler(handler)
    logger.setLevel(level)

    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)

    return logger


def configure_structured_logging(
    level: int | str = logging.INFO,
    logger_name: str | None = None,
) -> logging.Logger:
    """Configure JSON logging; shorthand for ``configure_logging(level, "json")``."""
    return configure_logging(level, "json", logger_name=logger_name)


def get_sync_logger(name: str) -> logging.Logger:
    """
    Get a logger under the package namespace.

    Args:
        name: Component name (e.g., 'cli', 'cache')

    Returns:
        Logger instance with name 'rocket_launch_sync.{name}'
    """
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")


class SyncLoggerAdapter(logging.LoggerAdapter):
    """
    Tags every record with the endpoint and cache path of one sync setup.

    Context left as None is omitted. Fields passed through ``extra`` on a
    single call take precedence over the adapter's context.
    """

    def __init__(
        self,
        logger: logging.Logger,
        endpoint: str | None = None,
        db_path: str | PurePath | None = None,
    ):
        context = {"endpoint": endpoint, "db_path": db_path}
        super().__init__(
            logger, {key: _json_safe(value) for key, value in context.items() if value is not None}
        )

    @classmethod
    def for_settings(cls, logger: logging.Logger, settings: SyncSettings) -> SyncLoggerAdapter:
        return cls(logger, endpoint=settings.fetcher.endpoint, db_path=settings.cache.db_path)

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs
