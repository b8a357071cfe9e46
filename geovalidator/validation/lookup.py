"""
Ring lookup: which ring of an areal geometry encloses a point.

Boundary points count as enclosed. Holes take precedence over their shell,
and among the polygons of a multi polygon the one with the smallest shell
wins, so the result is always the innermost ring.
"""

from __future__ import annotations

from typing import Optional

from geovalidator.geometry.service import get_area
from geovalidator.geometry.types import Coordinate, Geometry, GeometryType
from geovalidator.index.types import GeometryIndex
from geovalidator.indexed.views import IndexedLinearRing, IndexedMultiPolygon, IndexedPolygon


def ring_index_containing(geometry: Geometry, point: Coordinate) -> Optional[GeometryIndex]:
    """
    Index of the innermost ring whose area contains or touches ``point``.

    Returns None when no ring does. Only LinearRing, Polygon and MultiPolygon
    geometries have rings; any other shape raises ValueError.
    """
    match geometry.geometry_type:
        case GeometryType.LINEAR_RING:
            ring = IndexedLinearRing(geometry)
            return ring.index if not ring.is_empty and ring.contains_coordinate(point) else None
        case GeometryType.POLYGON:
            return _polygon_ring_containing(IndexedPolygon(geometry), point)
        case GeometryType.MULTI_POLYGON:
            best: Optional[GeometryIndex] = None
            best_area = 0.0
            for polygon in IndexedMultiPolygon(geometry).polygons:
                found = _polygon_ring_containing(polygon, point)
                if found is None or polygon.shell is None:
                    continue
                area = get_area(polygon.shell.geometry)
                if best is None or area < best_area:
                    best, best_area = found, area
            return best
        case _:
            raise ValueError(f"{geometry.geometry_type.value} has no rings to search")


def _polygon_ring_containing(polygon: IndexedPolygon, point: Coordinate) -> Optional[GeometryIndex]:
    for hole in polygon.holes:
        if not hole.is_empty and hole.contains_coordinate(point):
            return hole.index
    shell = polygon.shell
    if shell is not None and not shell.is_empty and shell.contains_coordinate(point):
        return shell.index
    return None
