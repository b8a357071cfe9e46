"""
Geometric predicates: stateless numeric functions over coordinates.

Exposed names
-------------
segments_intersect         -- exact segment intersection (touch allowed, overlap forbidden)
line_segment_intersection  -- crossing point of two segments, or None
nearest_point_on_segment   -- projection of a point on a segment
distance_point_to_segment  -- distance from a point to a segment
point_in_ring              -- even-odd ray cast
is_within                  -- strict interior containment for rings, polygons, multi-polygons
touches                    -- boundary contact within the touch tolerance
contains_or_touches        -- containment-with-touching
"""

from .containment import contains_or_touches, is_within, point_in_ring, touches
from .segments import (
    cross,
    distance,
    distance_point_to_segment,
    line_segment_intersection,
    nearest_point_on_segment,
    segments_intersect,
)

__all__ = [
    # segments
    "cross",
    "segments_intersect",
    "line_segment_intersection",
    "distance",
    "nearest_point_on_segment",
    "distance_point_to_segment",
    # containment
    "point_in_ring",
    "is_within",
    "touches",
    "contains_or_touches",
]
