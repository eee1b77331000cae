"""
Domain value objects and the routing error taxonomy.

Patterns used
-------------
- **Value Object** ``Coordinate``: immutable, validated on construction,
  ordered by ``(lat, lng)`` so planner tie-breaks are deterministic.
- ``RouteResult`` is assembled once per request and never mutated; it
  exposes plain structured data via ``to_dict`` and leaves serialisation
  to the API layer.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from .enums import DistanceUnit, KM_CONVERSIONS


# ── Errors ────────────────────────────────────────────────────────────


class RoutingError(Exception):
    """Base class for every failure raised by the routing core."""


class InvalidInputError(RoutingError, ValueError):
    """Raised when caller-supplied geometry violates its contract."""


class InvalidCoordinateError(InvalidInputError):
    """Latitude / longitude out of range or not a finite number."""


class InvalidPolygonError(InvalidInputError):
    """A ring with fewer than three distinct vertices."""


class RouteBlockedError(RoutingError):
    """No route avoiding the specified borders exists."""


class RouteCancelledError(RoutingError):
    """The caller signalled cancellation while the planner was running."""


# ── Value Objects ─────────────────────────────────────────────────────


@dataclass(frozen=True, order=True)
class Coordinate:
    lat: float
    lng: float

    def __post_init__(self) -> None:
        if not (math.isfinite(self.lat) and math.isfinite(self.lng)):
            raise InvalidCoordinateError(
                f"Coordinate must be finite, got ({self.lat}, {self.lng})"
            )
        if not -90.0 <= self.lat <= 90.0:
            raise InvalidCoordinateError(f"Latitude {self.lat} outside [-90, 90]")
        if not -180.0 <= self.lng <= 180.0:
            raise InvalidCoordinateError(f"Longitude {self.lng} outside [-180, 180]")

    def to_dict(self) -> dict[str, float]:
        return {"lat": self.lat, "lng": self.lng}


@dataclass(frozen=True)
class Distances:
    km: float
    miles: float
    nm: float

    @classmethod
    def from_km(cls, km: float) -> Distances:
        """Apply the fixed conversion constants to a total in kilometres."""
        return cls(
            km=km,
            miles=km * KM_CONVERSIONS[DistanceUnit.MILES],
            nm=km * KM_CONVERSIONS[DistanceUnit.NM],
        )

    def to_dict(self) -> dict[str, float]:
        return {
            DistanceUnit.KM.value: self.km,
            DistanceUnit.MILES.value: self.miles,
            DistanceUnit.NM.value: self.nm,
        }


@dataclass(frozen=True)
class RouteResult:
    path: tuple[Coordinate, ...]
    distances: Distances
    midpoint: Coordinate

    def to_dict(self) -> dict:
        return {
            "path": [p.to_dict() for p in self.path],
            "distances": self.distances.to_dict(),
            "midpoint": self.midpoint.to_dict(),
        }
