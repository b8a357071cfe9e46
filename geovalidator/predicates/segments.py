"""
Segment predicates: intersection, projection and distance.

All functions are pure and operate on Coordinate values. The intersection test
is exact on the input floats (no tolerance): touching at an endpoint is never
an intersection, overlapping collinear segments always are.
"""

from __future__ import annotations

from typing import Optional

from geovalidator.config.registry import get_tolerances
from geovalidator.geometry.types import Coordinate


def cross(a1: Coordinate, a2: Coordinate, b1: Coordinate, b2: Coordinate) -> float:
    """Cross product of the vectors a1→a2 and b1→b2."""
    return (a2.x - a1.x) * (b2.y - b1.y) - (a2.y - a1.y) * (b2.x - b1.x)


def segments_intersect(a: Coordinate, b: Coordinate, c: Coordinate, d: Coordinate) -> bool:
    """
    Return True if segment a-b and segment c-d intersect.

    - Degenerate (zero-length) segments never intersect anything.
    - Collinear segments intersect only when they overlap over a positive
      length; sharing a single endpoint is a touch, not an intersection.
    - Parallel, non-collinear segments never intersect.
    - Otherwise both intersection parameters must lie strictly inside (0, 1),
      so touching at an endpoint of either segment is excluded.
    """
    if a == b or c == d:
        return False
    c1 = cross(a, c, a, b)
    c2 = cross(a, b, c, d)
    if c1 == 0 and c2 == 0:
        return _collinear_overlap(a, b, c, d)
    if c2 == 0:
        return False
    u = c1 / c2
    t = cross(a, c, c, d) / c2
    return 0 < t < 1 and 0 < u < 1


def _collinear_overlap(a: Coordinate, b: Coordinate, c: Coordinate, d: Coordinate) -> bool:
    # Project c and d on a-b; the shared stretch is the clipped parameter range.
    dx = b.x - a.x
    dy = b.y - a.y
    length_sq = dx * dx + dy * dy
    tc = ((c.x - a.x) * dx + (c.y - a.y) * dy) / length_sq
    td = ((d.x - a.x) * dx + (d.y - a.y) * dy) / length_sq
    low = max(0.0, min(tc, td))
    high = min(1.0, max(tc, td))
    return high > low


def line_segment_intersection(
    a: Coordinate, b: Coordinate, c: Coordinate, d: Coordinate
) -> Optional[Coordinate]:
    """
    Return the point where segment a-b crosses segment c-d.

    Returns None when the segments are parallel (including collinear overlap)
    or when they do not cross strictly inside both segments.
    """
    denom = (d.y - c.y) * (b.x - a.x) - (d.x - c.x) * (b.y - a.y)
    if denom == 0:
        return None
    u1 = ((d.x - c.x) * (a.y - c.y) - (d.y - c.y) * (a.x - c.x)) / denom
    if u1 <= 0 or u1 >= 1:
        return None
    u2 = ((b.x - a.x) * (a.y - c.y) - (b.y - a.y) * (a.x - c.x)) / denom
    if u2 <= 0 or u2 >= 1:
        return None
    return Coordinate(a.x + u1 * (b.x - a.x), a.y + u1 * (b.y - a.y))


def distance(c1: Coordinate, c2: Coordinate) -> float:
    """Euclidean distance between two coordinates."""
    return c1.distance(c2)


def nearest_point_on_segment(c1: Coordinate, c2: Coordinate, point: Coordinate) -> Coordinate:
    """
    Return the point of segment c1-c2 nearest to ``point``.

    When the perpendicular foot falls outside the segment (projection parameter
    below the configured projection epsilon, or above 1) the nearer endpoint is
    returned instead.
    """
    length_sq = (c2.x - c1.x) ** 2 + (c2.y - c1.y) ** 2
    if length_sq == 0:
        return c1
    u = ((point.x - c1.x) * (c2.x - c1.x) + (point.y - c1.y) * (c2.y - c1.y)) / length_sq
    if u < get_tolerances().projection_epsilon or u > 1:
        return c1 if point.distance(c1) < point.distance(c2) else c2
    return Coordinate(c1.x + u * (c2.x - c1.x), c1.y + u * (c2.y - c1.y))


def distance_point_to_segment(c1: Coordinate, c2: Coordinate, point: Coordinate) -> float:
    """Shortest distance between ``point`` and segment c1-c2."""
    return nearest_point_on_segment(c1, c2, point).distance(point)
