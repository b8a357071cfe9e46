"""
Geometry measures: bounds, point count, area, length, centroid, distance,
intersection and simplicity.

All functions are pure and never mutate their input. Empty geometries have no
bounds and no centroid (None), zero area and zero length.
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from typing import Optional

import shapely

from geovalidator.config.registry import get_tolerances
from geovalidator.geometry.shapes import ring_to_polygon, to_shapely
from geovalidator.geometry.types import Bbox, Coordinate, Geometry, GeometryType
from geovalidator.predicates.containment import touches
from geovalidator.predicates.segments import distance_point_to_segment, segments_intersect


def to_polygon(bounds: Bbox) -> Geometry:
    """Return the rectangular Polygon covering ``bounds``."""
    ring = Geometry.leaf(
        GeometryType.LINEAR_RING,
        (bounds.x, bounds.y),
        (bounds.max_x, bounds.y),
        (bounds.max_x, bounds.max_y),
        (bounds.x, bounds.max_y),
        (bounds.x, bounds.y),
    )
    return Geometry(GeometryType.POLYGON, geometries=(ring,))


def to_line_string(c1: Coordinate, c2: Coordinate, srid: int = 0) -> Geometry:
    """Return the two-point LineString c1-c2."""
    return Geometry(GeometryType.LINE_STRING, coordinates=(c1, c2), srid=srid)


def get_bounds(geometry: Geometry) -> Optional[Bbox]:
    """Smallest Bbox covering every coordinate, or None for an empty geometry."""
    points = [(c.x, c.y) for c in all_coordinates(geometry)]
    if not points:
        return None
    min_x, min_y, max_x, max_y = shapely.MultiPoint(points).bounds
    return Bbox(min_x, min_y, max_x - min_x, max_y - min_y)


def get_num_points(geometry: Geometry) -> int:
    """Total number of coordinates in the geometry tree."""
    return sum(1 for _ in all_coordinates(geometry))


def is_closed(geometry: Geometry) -> bool:
    """True if a leaf has at least two coordinates and its first equals its last."""
    coordinates = geometry.coordinates
    return bool(coordinates) and len(coordinates) > 1 and coordinates[0] == coordinates[-1]


def get_area(geometry: Geometry) -> float:
    """Planar area; polygon holes are subtracted from their shell and a ring measures what it encloses."""
    match geometry.geometry_type:
        case GeometryType.LINEAR_RING:
            return float(ring_to_polygon(geometry).area)
        case GeometryType.POLYGON | GeometryType.MULTI_POLYGON:
            return float(to_shapely(geometry).area)
        case _:
            return 0.0


def get_length(geometry: Geometry) -> float:
    """Summed length of every line string and ring in the tree."""
    return float(to_shapely(geometry).length)


def get_centroid(geometry: Geometry) -> Optional[Coordinate]:
    """
    Centre of mass of the geometry, or None if it is empty.

    Points average their coordinates, lines weight by length and areas by
    area. A ring is weighted as the area it encloses.
    """
    if geometry.is_empty:
        return None
    if geometry.geometry_type == GeometryType.LINEAR_RING:
        shape = ring_to_polygon(geometry)
    else:
        shape = to_shapely(geometry)
    centroid = shape.centroid
    if centroid.is_empty:
        return None
    return Coordinate(float(centroid.x), float(centroid.y))


def get_distance(geometry: Geometry, point: Coordinate) -> float:
    """Shortest distance from ``point`` to any vertex or edge of the geometry."""
    best = math.inf
    for leaf in _leaves(geometry):
        coordinates = leaf.coordinates or ()
        if len(coordinates) == 1:
            best = min(best, coordinates[0].distance(point))
        for a, b in _segments(coordinates):
            best = min(best, distance_point_to_segment(a, b, point))
    return best


def intersects(one: Geometry, two: Geometry) -> bool:
    """
    Boundary intersection test.

    A point intersects a geometry when it lies on one of its vertices or
    edges; a line string intersects when one of its segments crosses a
    segment of the other geometry or one of its vertices touches it; areal
    geometries intersect when their boundaries cross. Empty geometries never
    intersect.
    """
    if one.is_empty or two.is_empty:
        return False
    match one.geometry_type:
        case GeometryType.POINT:
            return _point_on(two, one.coordinates[0])
        case GeometryType.MULTI_POINT | GeometryType.MULTI_LINE_STRING:
            return any(intersects(child, two) for child in one.geometries or ())
        case GeometryType.LINE_STRING:
            return _segments_cross(one, two) or any(touches(two, c) for c in one.coordinates)
        case _:
            return _segments_cross(one, two)


def is_simple(geometry: Geometry) -> bool:
    """
    True if no two segments of a line cross each other.

    For multi line strings the members must additionally not intersect each
    other. Closed rings are simple as long as no segment crosses another.
    """
    if geometry.is_empty:
        return True
    if geometry.geometries:
        children = geometry.geometries
        if not all(is_simple(child) for child in children):
            return False
        if geometry.geometry_type == GeometryType.MULTI_LINE_STRING:
            for i, child in enumerate(children):
                if any(intersects(child, other) for other in children[i + 1 :]):
                    return False
        return True
    segments = list(_segments(geometry.coordinates or ()))
    for i, (a, b) in enumerate(segments):
        for c, d in segments[i + 1 :]:
            if segments_intersect(a, b, c, d):
                return False
    return True


def all_coordinates(geometry: Geometry) -> Iterator[Coordinate]:
    """Depth-first iteration over every coordinate of the tree."""
    for leaf in _leaves(geometry):
        yield from leaf.coordinates or ()


# ── Helpers ───────────────────────────────────────────────────────────────────


def _leaves(geometry: Geometry) -> Iterator[Geometry]:
    if geometry.geometries:
        for child in geometry.geometries:
            yield from _leaves(child)
    elif geometry.coordinates:
        yield geometry


def _segments(coordinates: tuple[Coordinate, ...]) -> Iterator[tuple[Coordinate, Coordinate]]:
    for i in range(len(coordinates) - 1):
        yield coordinates[i], coordinates[i + 1]


def _segments_cross(one: Geometry, two: Geometry) -> bool:
    others = [s for leaf in _leaves(two) for s in _segments(leaf.coordinates or ())]
    return any(
        segments_intersect(a, b, c, d)
        for leaf in _leaves(one)
        for a, b in _segments(leaf.coordinates or ())
        for c, d in others
    )


def _point_on(geometry: Geometry, point: Coordinate) -> bool:
    tolerance = get_tolerances().point_tolerance
    for leaf in _leaves(geometry):
        coordinates = leaf.coordinates or ()
        if len(coordinates) == 1:
            if coordinates[0] == point:
                return True
        elif any(distance_point_to_segment(a, b, point) < tolerance for a, b in _segments(coordinates)):
            return True
    return False
