"""
Border polygons and containment / crossing tests.

Projection choice
-----------------
Rings are tested in the (lng, lat) plane, i.e. an equirectangular
approximation.  For country-sized rings that do not enclose a pole the
error is negligible next to the simplification already present in border
data.  The plane tests themselves are shapely predicates on a prepared
geometry, built once per ring.

Great-circle segments are *not* straight in that plane, so a segment is
first sampled (``sample_great_circle``) and tested as a polyline.

Antimeridian
------------
Ring longitudes are unwrapped at construction so that consecutive vertices
never jump by more than 180 degrees; a ring straddling +/-180 therefore
lives in one continuous range such as ``[170, 190]``.  Query points and
segments are tried at offsets of -360, 0 and +360 degrees against it.

Border data usually stores such a country as a MultiPolygon cut along
+/-180.  ``merge_antimeridian_parts`` glues those parts back together so
the cut is not mistaken for a border a route may run along.
"""

from __future__ import annotations

from typing import Sequence

from shapely.geometry import LineString, Point
from shapely.geometry import Polygon as ShapelyPolygon
from shapely.ops import unary_union
from shapely.prepared import prep

from .entities import Coordinate, InvalidPolygonError
from .geodesy import sample_great_circle

_EPS = 1e-12
_SHIFTS = (-360.0, 0.0, 360.0)
ANTIMERIDIAN = 180.0


def unwrap_longitudes(lngs: Sequence[float]) -> list[float]:
    """
    Make a longitude sequence continuous (no jumps over 180 degrees).

    Each value is the input plus a whole multiple of 360, so a longitude
    that occurs in two sequences unwraps to bit-identical floats.
    """
    if not lngs:
        return []
    out = [float(lngs[0])]
    for lng in lngs[1:]:
        out.append(lng + 360.0 * round((out[-1] - lng) / 360.0))
    return out


class Polygon:
    """
    One closed ring of a country's border.

    A trailing vertex equal to the first is dropped (rings are implicitly
    closed) together with consecutive duplicates.  At least three distinct
    vertices are required.
    """

    __slots__ = (
        "vertices", "xs", "ys", "min_x", "max_x", "min_y", "max_y", "shape", "_prepared",
    )

    def __init__(self, vertices: Sequence[Coordinate]):
        pts: list[Coordinate] = []
        for v in vertices:
            if not pts or pts[-1] != v:
                pts.append(v)
        if len(pts) > 1 and pts[0] == pts[-1]:
            pts.pop()
        if len(set(pts)) < 3:
            raise InvalidPolygonError(
                f"A ring needs at least 3 distinct vertices, got {len(set(pts))}"
            )

        self.vertices: tuple[Coordinate, ...] = tuple(pts)
        self.xs = unwrap_longitudes([p.lng for p in pts])
        self.ys = [p.lat for p in pts]
        self.min_x, self.max_x = min(self.xs), max(self.xs)
        self.min_y, self.max_y = min(self.ys), max(self.ys)

        shape = ShapelyPolygon(list(zip(self.xs, self.ys)))
        if not shape.is_valid:
            # self-touching rings from coarse border data
            shape = shape.buffer(0)
        self.shape = shape
        self._prepared = prep(shape)

    def __len__(self) -> int:
        return len(self.vertices)

    def __repr__(self) -> str:
        return f"Polygon({len(self.vertices)} vertices)"

    def adjacent_pairs(self):
        """Yield each pair of consecutive ring vertices (closing pair included)."""
        n = len(self.vertices)
        for i in range(n):
            yield self.vertices[i], self.vertices[(i + 1) % n]

    def shifts_for(self, x_lo: float, x_hi: float) -> list[float]:
        """Longitude offsets that bring ``[x_lo, x_hi]`` onto the ring's range."""
        return [
            s
            for s in _SHIFTS
            if x_hi + s >= self.min_x - _EPS and x_lo + s <= self.max_x + _EPS
        ]

    def touches_antimeridian(self) -> bool:
        return self.min_x <= -ANTIMERIDIAN or self.max_x >= ANTIMERIDIAN


# ── Public tests ──────────────────────────────────────────────────────


def contains_point(polygon: Polygon, p: Coordinate) -> bool:
    """Strict point-in-polygon in the (lng, lat) plane; the boundary is outside."""
    if p.lat < polygon.min_y or p.lat > polygon.max_y:
        return False
    return any(
        polygon._prepared.contains(Point(p.lng + shift, p.lat))
        for shift in polygon.shifts_for(p.lng, p.lng)
    )


def intersects_segment(
    polygon: Polygon, p1: Coordinate, p2: Coordinate, step_km: float = 50.0
) -> bool:
    """
    True if the great-circle segment p1 -> p2 enters the polygon interior.

    The segment is sampled into hops of at most *step_km* and tested as a
    polyline.  Meeting the ring only on its boundary (ending on a vertex,
    running along an edge) is not an intersection.
    """
    samples = sample_great_circle(p1, p2, step_km)
    xs = unwrap_longitudes([s.lng for s in samples])
    ys = [s.lat for s in samples]

    if max(ys) < polygon.min_y - _EPS or min(ys) > polygon.max_y + _EPS:
        return False

    for shift in polygon.shifts_for(min(xs), max(xs)):
        line = LineString([(x + shift, y) for x, y in zip(xs, ys)])
        if polygon._prepared.intersects(line) and not polygon._prepared.touches(line):
            return True
    return False


# ── Antimeridian seams ────────────────────────────────────────────────


def _on_antimeridian_side(polygon: Polygon) -> ShapelyPolygon:
    """The ring's shape moved so it touches +180 rather than -180."""
    if polygon.min_x <= -ANTIMERIDIAN:
        return ShapelyPolygon([(x + 360.0, y) for x, y in zip(polygon.xs, polygon.ys)])
    return polygon.shape


def _wrap(x: float) -> float:
    if x > ANTIMERIDIAN:
        return x - 360.0
    if x < -ANTIMERIDIAN:
        return x + 360.0
    return x


def merge_antimeridian_parts(polygons: Sequence[Polygon]) -> list[Polygon]:
    """
    Glue the rings of one country that were cut along +/-180.

    Rings that do not reach the antimeridian are returned unchanged.  The
    others are unioned on the +180 side; each resulting exterior ring
    becomes one ``Polygon`` again.
    """
    seam = [p for p in polygons if p.touches_antimeridian()]
    if len(seam) < 2:
        return list(polygons)

    merged = unary_union([_on_antimeridian_side(p) for p in seam])
    parts = getattr(merged, "geoms", [merged])

    out = [p for p in polygons if not p.touches_antimeridian()]
    for part in parts:
        coords = list(part.exterior.coords)
        out.append(Polygon([Coordinate(y, _wrap(x)) for x, y in coords]))
    return out
