"""
GeoJSON -> border polygons.

Border documents are stored as GeoJSON (coordinates in ``[lng, lat]``
order).  Accepted shapes: FeatureCollection, Feature, GeometryCollection,
Polygon and MultiPolygon.  Only exterior rings are used: an interior ring
(hole) is treated as part of the country, so routes avoid enclaves of a
forbidden country's outer ring as well.
"""

from __future__ import annotations

import json
from typing import Any, Union

from src.domain.entities import Coordinate, InvalidInputError
from src.domain.polygons import Polygon, merge_antimeridian_parts


class InvalidGeoJSON(ValueError):
    """Raised when a border document cannot be read as GeoJSON rings."""


def _ring(coords: Any) -> Polygon:
    try:
        return Polygon([Coordinate(float(pt[1]), float(pt[0])) for pt in coords])
    except InvalidInputError:
        raise
    except (TypeError, IndexError, ValueError) as exc:
        raise InvalidGeoJSON(f"Malformed ring: {exc}") from exc


def _exterior_rings(geometry: dict[str, Any]) -> list[Polygon]:
    kind = geometry.get("type")
    coords = geometry.get("coordinates")

    if kind == "Polygon":
        return [_ring(coords[0])] if coords else []
    if kind == "MultiPolygon":
        return [_ring(poly[0]) for poly in coords or [] if poly]
    if kind == "GeometryCollection":
        rings: list[Polygon] = []
        for g in geometry.get("geometries", []):
            rings.extend(_exterior_rings(g))
        return rings
    raise InvalidGeoJSON(f"Unsupported geometry type: {kind!r}")


def rings_from_geojson(document: Union[str, dict[str, Any]]) -> list[Polygon]:
    """
    Parse a GeoJSON document (or its JSON text) into border rings.

    Parts cut along +/-180 are glued back into one ring per landmass.
    """
    return merge_antimeridian_parts(_document_rings(document))


def _document_rings(document: Union[str, dict[str, Any]]) -> list[Polygon]:
    if isinstance(document, str):
        try:
            document = json.loads(document)
        except json.JSONDecodeError as exc:
            raise InvalidGeoJSON(f"Border document is not JSON: {exc}") from exc
    if not isinstance(document, dict):
        raise InvalidGeoJSON("Border document must be a JSON object")

    kind = document.get("type")
    if kind == "FeatureCollection":
        rings: list[Polygon] = []
        for feature in document.get("features", []):
            rings.extend(_document_rings(feature))
        return rings
    if kind == "Feature":
        geometry = document.get("geometry")
        return _exterior_rings(geometry) if geometry else []
    return _exterior_rings(document)
