"""
Bridge between Geometry trees and shapely geometries.

from_shapely is exact. to_shapely is used for measuring and has to accept
trees GEOS refuses to build, so it is lenient: a ring that is unclosed or too
short to be a LinearRing becomes the LineString through its coordinates, a
single-coordinate line string becomes a zero-length line, and rings that
enclose nothing are dropped from polygons.
"""

from __future__ import annotations

import shapely
from shapely.geometry.base import BaseGeometry

from geovalidator.geometry.types import Coordinate, Geometry, GeometryType


def from_shapely(shape: BaseGeometry, srid: int = 0) -> Geometry:
    """
    Convert a shapely geometry into a Geometry tree carrying ``srid``.

    Raises ValueError for shapes outside the seven supported tags, such as a
    GeometryCollection.
    """
    kind = GeometryType(shape.geom_type)
    if shape.is_empty:
        return Geometry(kind, srid=srid)
    if kind.is_leaf:
        coordinates = tuple(Coordinate(float(x), float(y)) for x, y in shapely.get_coordinates(shape))
        return Geometry(kind, coordinates=coordinates, srid=srid)
    if kind == GeometryType.POLYGON:
        rings = [shape.exterior, *shape.interiors]
        return Geometry(kind, geometries=tuple(from_shapely(ring, srid) for ring in rings), srid=srid)
    return Geometry(kind, geometries=tuple(from_shapely(part, srid) for part in shape.geoms), srid=srid)


def to_shapely(geometry: Geometry) -> BaseGeometry:
    """Build the shapely geometry used to measure ``geometry``."""
    match geometry.geometry_type:
        case GeometryType.POINT:
            return shapely.Point(_xy(geometry)[0]) if not geometry.is_empty else shapely.Point()
        case GeometryType.LINE_STRING:
            return _line(_xy(geometry))
        case GeometryType.LINEAR_RING:
            points = _xy(geometry)
            if len(points) >= 4 and points[0] == points[-1]:
                return shapely.LinearRing(points)
            return _line(points)
        case GeometryType.POLYGON:
            return _polygon(geometry)
        case GeometryType.MULTI_POINT:
            return shapely.MultiPoint([_xy(point)[0] for point in geometry.geometries or () if not point.is_empty])
        case GeometryType.MULTI_LINE_STRING:
            lines = [_line(_xy(line)) for line in geometry.geometries or () if not line.is_empty]
            return shapely.MultiLineString(lines)
        case GeometryType.MULTI_POLYGON:
            polygons = [_polygon(polygon) for polygon in geometry.geometries or ()]
            return shapely.MultiPolygon([polygon for polygon in polygons if not polygon.is_empty])


def ring_to_polygon(ring: Geometry) -> shapely.Polygon:
    """The area a ring encloses, closing it if needed; empty when it encloses nothing."""
    closed = _closed(_xy(ring))
    return shapely.Polygon(closed) if len(closed) >= 4 else shapely.Polygon()


# ── Helpers ───────────────────────────────────────────────────────────────────


def _xy(geometry: Geometry) -> list[tuple[float, float]]:
    return [(c.x, c.y) for c in geometry.coordinates or ()]


def _closed(points: list[tuple[float, float]]) -> list[tuple[float, float]]:
    if points and points[0] != points[-1]:
        return [*points, points[0]]
    return points


def _line(points: list[tuple[float, float]]) -> shapely.LineString:
    if not points:
        return shapely.LineString()
    if len(points) == 1:
        return shapely.LineString([points[0], points[0]])
    return shapely.LineString(points)


def _polygon(polygon: Geometry) -> shapely.Polygon:
    rings = polygon.geometries or ()
    if not rings:
        return shapely.Polygon()
    shell = _closed(_xy(rings[0]))
    if len(shell) < 4:
        return shapely.Polygon()
    holes = [hole for hole in (_closed(_xy(ring)) for ring in rings[1:]) if len(hole) >= 4]
    return shapely.Polygon(shell, holes)
