"""
Point containment predicates.

point_in_ring and is_within test strict interior containment with an even-odd
ray cast. touches tests boundary contact within the configured touch
tolerance. Containment-with-touching, as used by hole and shell nesting rules,
is the disjunction of the two.
"""

from __future__ import annotations

from collections.abc import Sequence

from geovalidator.config.registry import get_tolerances
from geovalidator.geometry.types import Coordinate, Geometry, GeometryType
from geovalidator.predicates.segments import distance_point_to_segment


def point_in_ring(coordinates: Sequence[Coordinate], point: Coordinate) -> bool:
    """
    Even-odd ray-casting test of ``point`` against a ring's coordinates.

    The coordinates are walked cyclically (the last vertex connects back to
    the first), so an unclosed ring is treated as if it were closed.
    Horizontal edges are skipped; vertical edges count as a crossing as soon
    as the y-range test passes. Rings with fewer than 4 coordinates contain
    nothing.
    """
    if coordinates is None or len(coordinates) < 4:
        return False

    counter = 0
    num = len(coordinates)
    c1 = coordinates[0]
    for i in range(1, num + 1):
        c2 = coordinates[i % num]
        if (
            min(c1.y, c2.y) < point.y <= max(c1.y, c2.y)
            and point.x <= max(c1.x, c2.x)
            and c1.y != c2.y
        ):
            if c1.x == c2.x:
                counter += 1
            else:
                x_intercept = (point.y - c1.y) * (c2.x - c1.x) / (c2.y - c1.y) + c1.x
                if point.x <= x_intercept:
                    counter += 1
        c1 = c2
    return counter % 2 != 0


def is_within(geometry: Geometry, point: Coordinate) -> bool:
    """
    Strict interior containment for areal geometries.

    A LinearRing contains what its ray cast says; a Polygon contains points
    inside its shell and outside every hole; a MultiPolygon contains points
    contained by any member. Every other shape contains nothing.
    """
    match geometry.geometry_type:
        case GeometryType.LINEAR_RING:
            return point_in_ring(geometry.coordinates or (), point)
        case GeometryType.POLYGON:
            rings = geometry.geometries or ()
            if not rings or not point_in_ring(rings[0].coordinates or (), point):
                return False
            return not any(point_in_ring(hole.coordinates or (), point) for hole in rings[1:])
        case GeometryType.MULTI_POLYGON:
            return any(is_within(polygon, point) for polygon in geometry.geometries or ())
        case _:
            return False


def touches(geometry: Geometry, point: Coordinate) -> bool:
    """
    Return True if ``point`` lies on the boundary of ``geometry``.

    A point touches a line string or ring when it equals one of its vertices
    or lies within the touch tolerance of one of its edges. Multi geometries
    and polygons are searched recursively through their children.
    """
    if geometry.geometries:
        return any(touches(child, point) for child in geometry.geometries)
    coordinates = geometry.coordinates
    if not coordinates:
        return False
    tolerance = get_tolerances().touch_tolerance
    if geometry.geometry_type == GeometryType.POINT:
        return coordinates[0].distance(point) < tolerance
    return touches_line(coordinates, point, tolerance)


def touches_line(coordinates: Sequence[Coordinate], point: Coordinate, tolerance: float) -> bool:
    """Vertex equality first (the common case), then distance to each edge."""
    if any(c == point for c in coordinates):
        return True
    return any(
        distance_point_to_segment(coordinates[i - 1], coordinates[i], point) < tolerance
        for i in range(1, len(coordinates))
    )


def contains_or_touches(geometry: Geometry, point: Coordinate) -> bool:
    """Containment-with-touching: strict interior or boundary."""
    return is_within(geometry, point) or touches(geometry, point)
