"""
Route assembler.

Turns two resolved endpoints and a set of forbidden country codes into a
``RouteResult``:

  codes --(polygon_lookup)--> polygons --(planner)--> path
  path  --(geodesy)--> distances (km / miles / nm) + spherical midpoint

Unknown country codes are skipped: a code the border provider cannot
resolve does not fail the request.

The function is pure; border data is borrowed from the caller for the
duration of one call and nothing is cached between calls.
"""

from __future__ import annotations

import logging
import threading
from typing import Iterable, Mapping, Optional, Sequence

from .entities import Coordinate, RouteResult
from .geodesy import convert_km, path_length_km, spherical_centroid
from .planner import plan_path
from .polygons import Polygon

logger = logging.getLogger(__name__)


def normalize_codes(codes: Iterable[str]) -> list[str]:
    """Strip, upper-case, de-duplicate and sort country codes."""
    return sorted({c.strip().upper() for c in codes if c and c.strip()})


def resolve_polygons(
    codes: Iterable[str], polygon_lookup: Mapping[str, Sequence[Polygon]]
) -> list[Polygon]:
    polygons: list[Polygon] = []
    for code in normalize_codes(codes):
        rings = polygon_lookup.get(code)
        if not rings:
            logger.debug("No border polygons for country %s; ignoring", code)
            continue
        polygons.extend(rings)
    return polygons


def compute_route(
    origin: Coordinate,
    destination: Coordinate,
    forbidden_codes: Iterable[str],
    polygon_lookup: Mapping[str, Sequence[Polygon]],
    *,
    step_km: float = 50.0,
    cancel_event: Optional[threading.Event] = None,
) -> RouteResult:
    """
    Compute path, distances and midpoint between two coordinates.

    With no resolvable forbidden borders the path is the direct
    great-circle hop.  Otherwise the planner is asked for a detour and its
    ``RouteBlockedError`` / ``RouteCancelledError`` propagate unchanged.
    """
    polygons = resolve_polygons(forbidden_codes, polygon_lookup)

    if polygons:
        path = plan_path(
            origin,
            destination,
            polygons,
            step_km=step_km,
            cancel_event=cancel_event,
        )
    else:
        path = [origin, destination]

    return RouteResult(
        path=tuple(path),
        distances=convert_km(path_length_km(path)),
        midpoint=spherical_centroid(path),
    )
