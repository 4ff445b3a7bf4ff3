"""
Launch record types.

Records are immutable value objects. Optional wire fields stay optional
all the way through: a missing ``success`` is ``None``, never ``False``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .exceptions import LaunchDecodeError


def _required(data: dict[str, Any], key: str, kind: type) -> Any:
    if key not in data:
        raise LaunchDecodeError(key, "missing required field")
    value = data[key]
    # bool is an int subclass; a flight number of True is not a flight number
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise LaunchDecodeError(key, f"expected {kind.__name__}", value)
    return value


def _optional(data: dict[str, Any], key: str, kind: type) -> Any:
    value = data.get(key)
    if value is not None and not isinstance(value, kind):
        raise LaunchDecodeError(key, f"expected {kind.__name__} or null", value)
    return value


def _optional_object(data: dict[str, Any], key: str) -> dict[str, Any] | None:
    value = data.get(key)
    if value is not None and not isinstance(value, dict):
        raise LaunchDecodeError(key, "expected object or null", value)
    return value


@dataclass(frozen=True)
class Patch:
    """Mission patch image URLs."""

    small: str | None = None
    large: str | None = None

    @classmethod
    def from_wire(cls, data: dict[str, Any]) -> Patch:
        return cls(
            small=_optional(data, "small", str),
            large=_optional(data, "large", str),
        )

    def to_wire(self) -> dict[str, Any]:
        return {"small": self.small, "large": self.large}


@dataclass(frozen=True)
class Links:
    """External links attached to a launch."""

    patch: Patch | None = None
    article: str | None = None

    @classmethod
    def from_wire(cls, data: dict[str, Any]) -> Links:
        patch = _optional_object(data, "patch")
        return cls(
            patch=Patch.from_wire(patch) if patch is not None else None,
            article=_optional(data, "article", str),
        )

    def to_wire(self) -> dict[str, Any]:
        return {
            "patch": self.patch.to_wire() if self.patch is not None else None,
            "article": self.article,
        }


@dataclass(frozen=True)
class RocketLaunch:
    """A single launch record.

    Attributes:
        flight_number: Ordinal identifying the launch
        mission_name: Mission name
        launch_date_utc: ISO-8601 launch time, kept as text
        details: Free-form description, if any
        launch_success: True/False, or None when the outcome is unknown
        links: Patch images and article link
    """

    flight_number: int
    mission_name: str
    launch_date_utc: str
    details: str | None = None
    launch_success: bool | None = None
    links: Links = field(default_factory=Links)

    @classmethod
    def from_wire(cls, data: dict[str, Any]) -> RocketLaunch:
        """Decode one launch object from the remote JSON payload.

        Unknown keys are ignored. Missing optional keys decode to None.

        Raises:
            LaunchDecodeError: If a required field is missing or a field
                has the wrong type
        """
        if not isinstance(data, dict):
            raise LaunchDecodeError("launch", "expected object", data)

        links = _optional_object(data, "links")
        return cls(
            flight_number=_required(data, "flight_number", int),
            mission_name=_required(data, "name", str),
            launch_date_utc=_required(data, "date_utc", str),
            details=_optional(data, "details", str),
            launch_success=_optional(data, "success", bool),
            links=Links.from_wire(links) if links is not None else Links(),
        )

    def to_wire(self) -> dict[str, Any]:
        """Serialize using the remote field names."""
        return {
            "flight_number": self.flight_number,
            "name": self.mission_name,
            "date_utc": self.launch_date_utc,
            "details": self.details,
            "success": self.launch_success,
            "links": self.links.to_wire(),
        }


def launches_from_wire(payload: Any) -> list[RocketLaunch]:
    """Decode a full launch list, preserving payload order."""
    if not isinstance(payload, list):
        raise LaunchDecodeError("launches", "expected JSON array", type(payload).__name__)
    return [RocketLaunch.from_wire(item) for item in payload]
