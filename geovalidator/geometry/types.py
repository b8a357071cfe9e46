"""
Core type definitions for the geometry layer.

A Geometry is an immutable tagged tree node: leaf tags hold a tuple of
coordinates, interior tags hold a tuple of child geometries. The tag set is
closed (GeometryType). Construction fails fast when the payload does not match
the tag.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

# ── Enums ──────────────────────────────────────────────────────────────────────


class GeometryType(str, Enum):
    """The seven planar geometry shapes."""

    POINT = "Point"
    LINE_STRING = "LineString"
    LINEAR_RING = "LinearRing"
    POLYGON = "Polygon"
    MULTI_POINT = "MultiPoint"
    MULTI_LINE_STRING = "MultiLineString"
    MULTI_POLYGON = "MultiPolygon"

    @property
    def is_leaf(self) -> bool:
        """Leaf shapes carry coordinates; all others carry child geometries."""
        return self in _LEAF_TYPES

    @property
    def child_type(self) -> Optional[GeometryType]:
        """The tag of this shape's children, or None for leaf shapes."""
        return _CHILD_TYPES.get(self)


_LEAF_TYPES = frozenset({GeometryType.POINT, GeometryType.LINE_STRING, GeometryType.LINEAR_RING})

_CHILD_TYPES = {
    GeometryType.POLYGON: GeometryType.LINEAR_RING,
    GeometryType.MULTI_POINT: GeometryType.POINT,
    GeometryType.MULTI_LINE_STRING: GeometryType.LINE_STRING,
    GeometryType.MULTI_POLYGON: GeometryType.POLYGON,
}


# ── Value objects ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Coordinate:
    """A 2-D coordinate. Equality is exact."""

    x: float
    y: float

    def distance(self, other: Coordinate) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class Bbox:
    """Axis-aligned bounding box anchored at its lower-left corner."""

    x: float
    y: float
    width: float
    height: float

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def max_y(self) -> float:
        return self.y + self.height

    def union(self, other: Bbox) -> Bbox:
        min_x = min(self.x, other.x)
        min_y = min(self.y, other.y)
        return Bbox(
            x=min_x,
            y=min_y,
            width=max(self.max_x, other.max_x) - min_x,
            height=max(self.max_y, other.max_y) - min_y,
        )


# ── Runtime objects ────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Geometry:
    """
    Immutable geometry tree node.

    Leaf tags (Point, LineString, LinearRing) hold ``coordinates`` and never
    ``geometries``; interior tags hold ``geometries`` and never
    ``coordinates``. For a Polygon, child 0 is the shell and children 1..n are
    holes. ``None`` and an empty tuple both mean "no payload".
    """

    geometry_type: GeometryType
    coordinates: Optional[tuple[Coordinate, ...]] = None
    geometries: Optional[tuple[Geometry, ...]] = None
    srid: int = 0

    def __post_init__(self) -> None:
        # Accept lists at construction sites and silently promote to tuples.
        if isinstance(self.coordinates, list):
            object.__setattr__(self, "coordinates", tuple(self.coordinates))
        if isinstance(self.geometries, list):
            object.__setattr__(self, "geometries", tuple(self.geometries))

        kind = GeometryType(self.geometry_type)
        object.__setattr__(self, "geometry_type", kind)
        if kind.is_leaf and self.geometries:
            raise ValueError(f"{kind.value} cannot hold child geometries")
        if not kind.is_leaf and self.coordinates:
            raise ValueError(f"{kind.value} cannot hold coordinates directly")
        if kind == GeometryType.POINT and self.coordinates and len(self.coordinates) > 1:
            raise ValueError(f"a Point holds at most one coordinate, got {len(self.coordinates)}")

    @property
    def is_empty(self) -> bool:
        return not self.coordinates and not self.geometries

    @classmethod
    def leaf(cls, geometry_type: GeometryType, *points: tuple[float, float], srid: int = 0) -> Geometry:
        """Build a leaf geometry from ``(x, y)`` tuples."""
        return cls(geometry_type, coordinates=tuple(Coordinate(x, y) for x, y in points), srid=srid)
