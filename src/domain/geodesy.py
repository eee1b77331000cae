"""
Great-circle geodesy on a spherical Earth.

Assumption
----------
The Earth is modelled as a sphere of radius 6 371 km.  The ellipsoidal
error (up to ~0.5 %) is well inside what flight-distance estimates need,
and every function here stays closed-form.

Complexity: O(1) per pair of points; O(n) for paths and centroids.
"""

from __future__ import annotations

import math
from typing import Sequence

from .entities import Coordinate, Distances

EARTH_RADIUS_KM = 6_371.0


def central_angle(a: Coordinate, b: Coordinate) -> float:
    """Return the central angle in **radians** between two points (haversine)."""
    lat1_r, lat2_r = math.radians(a.lat), math.radians(b.lat)
    dlat = math.radians(b.lat - a.lat)
    dlng = math.radians(b.lng - a.lng)

    h = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1_r) * math.cos(lat2_r) * math.sin(dlng / 2) ** 2
    )
    h = min(1.0, max(0.0, h))
    return 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def haversine_km(a: Coordinate, b: Coordinate) -> float:
    """Return the great-circle distance in **km** between two points."""
    return central_angle(a, b) * EARTH_RADIUS_KM


def path_length_km(points: Sequence[Coordinate]) -> float:
    """Sum of great-circle hops between consecutive points.  O(n)."""
    total = 0.0
    for i in range(len(points) - 1):
        total += haversine_km(points[i], points[i + 1])
    return total


def convert_km(km: float) -> Distances:
    """Express a total in kilometres in every supported unit."""
    return Distances.from_km(km)


def _to_vector(p: Coordinate) -> tuple[float, float, float]:
    lat_r, lng_r = math.radians(p.lat), math.radians(p.lng)
    return (
        math.cos(lat_r) * math.cos(lng_r),
        math.cos(lat_r) * math.sin(lng_r),
        math.sin(lat_r),
    )


def _from_vector(x: float, y: float, z: float) -> Coordinate:
    lng_r = math.atan2(y, x)
    lat_r = math.atan2(z, math.sqrt(x * x + y * y))
    return Coordinate(math.degrees(lat_r), math.degrees(lng_r))


def spherical_centroid(points: Sequence[Coordinate]) -> Coordinate:
    """
    Average the points as 3-D unit vectors and project back to lat/lng.

    Unlike a plain mean of latitudes and longitudes this stays correct
    across the antimeridian and near the poles.  An empty sequence gives
    ``Coordinate(0, 0)``.
    """
    if not points:
        return Coordinate(0.0, 0.0)

    sx = sy = sz = 0.0
    for p in points:
        x, y, z = _to_vector(p)
        sx += x
        sy += y
        sz += z

    n = len(points)
    return _from_vector(sx / n, sy / n, sz / n)


def interpolate(a: Coordinate, b: Coordinate, fraction: float) -> Coordinate:
    """Point at *fraction* (0..1) of the way along the great circle a -> b."""
    d = central_angle(a, b)
    sin_d = math.sin(d)
    if sin_d < 1e-12:
        return a if fraction < 0.5 else b

    wa = math.sin((1 - fraction) * d) / sin_d
    wb = math.sin(fraction * d) / sin_d
    xa, ya, za = _to_vector(a)
    xb, yb, zb = _to_vector(b)
    return _from_vector(wa * xa + wb * xb, wa * ya + wb * yb, wa * za + wb * zb)


def _antipodal_pivot(a: Coordinate) -> Coordinate:
    """A point 90 degrees north of *a* along its meridian (or over the pole)."""
    if a.lat < 0:
        return Coordinate(a.lat + 90.0, a.lng)
    lng = a.lng + 180.0 if a.lng <= 0 else a.lng - 180.0
    return Coordinate(90.0 - a.lat, lng)


def sample_great_circle(
    a: Coordinate, b: Coordinate, step_km: float = 50.0
) -> list[Coordinate]:
    """
    Return ``[a, ..., b]`` with evenly spaced great-circle points between
    them, so that no hop is longer than *step_km*.

    Antipodal endpoints have no unique great circle; the path is pinned
    through a pivot point 90 degrees north of *a*.
    """
    if step_km <= 0:
        raise ValueError("step_km must be positive")

    d = central_angle(a, b)
    if d > math.pi - 1e-6:
        pivot = _antipodal_pivot(a)
        return sample_great_circle(a, pivot, step_km)[:-1] + sample_great_circle(
            pivot, b, step_km
        )

    n = max(1, math.ceil(d * EARTH_RADIUS_KM / step_km))
    return [a] + [interpolate(a, b, i / n) for i in range(1, n)] + [b]
