"""
Indexed views: read-only wrappers that decorate a geometry tree with the
GeometryIndex of every ring, edge and sub-geometry.

Views are built once per validation pass by walking the geometry top-down.
Children are owned downward only; an edge knows its owning ring by index path,
not by reference. Indices handed to the lookup methods (get_ring, get_edge,
adjacent_edges, affected_edges) are relative to the view they are called on.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import Optional

from geovalidator.geometry.service import to_line_string
from geovalidator.geometry.types import Coordinate, Geometry, GeometryType
from geovalidator.index import service as index_service
from geovalidator.index.types import GeometryIndex, GeometryIndexNotFoundError, GeometryIndexType
from geovalidator.predicates.containment import is_within, touches
from geovalidator.predicates.segments import line_segment_intersection, segments_intersect
from geovalidator.wkt.codec import to_wkt

# ── Edges and intersections ────────────────────────────────────────────────────


@dataclass(frozen=True, eq=False)
class IndexedEdge:
    """
    One edge of a ring, with its absolute EDGE index and the index of the
    ring it belongs to.

    Equality is identity: two edges with equal coordinates at different
    positions are different edges.
    """

    start: Coordinate
    end: Coordinate
    index: GeometryIndex
    ring_index: GeometryIndex
    srid: int = 0

    @property
    def geometry(self) -> Geometry:
        return to_line_string(self.start, self.end, srid=self.srid)

    def to_wkt(self) -> str:
        return to_wkt(self.geometry)

    def __str__(self) -> str:
        return self.to_wkt()


@dataclass(frozen=True, eq=False)
class IndexedIntersection:
    """An unordered pair of intersecting edges."""

    edge1: IndexedEdge
    edge2: IndexedEdge

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IndexedIntersection):
            return NotImplemented
        return (other.edge1 is self.edge1 and other.edge2 is self.edge2) or (
            other.edge1 is self.edge2 and other.edge2 is self.edge1
        )

    def __hash__(self) -> int:
        return hash(frozenset((id(self.edge1), id(self.edge2))))

    @property
    def crossing_point(self) -> Optional[Coordinate]:
        """Where the edges cross, or None when they overlap or meet at a vertex."""
        return line_segment_intersection(self.edge1.start, self.edge1.end, self.edge2.start, self.edge2.end)

    def __str__(self) -> str:
        return f"{self.edge1}X{self.edge2}"


# ── Rings and line strings ─────────────────────────────────────────────────────


class IndexedLinearRing:
    """
    A ring plus its index. The edge list is built on first access and reused
    for the lifetime of the view, so edge identity is stable within a pass.
    """

    def __init__(self, geometry: Geometry, index: GeometryIndex = GeometryIndex.ROOT) -> None:
        self.geometry = geometry
        self.index = index
        self.coordinates: tuple[Coordinate, ...] = geometry.coordinates or ()

    @property
    def is_empty(self) -> bool:
        return not self.coordinates

    @property
    def is_too_few_points(self) -> bool:
        return 0 < len(self.coordinates) < 4

    @property
    def is_closed(self) -> bool:
        return len(self.coordinates) > 1 and self.coordinates[0] == self.coordinates[-1]

    @property
    def is_shell(self) -> bool:
        return index_service.is_shell(self.index)

    @property
    def is_hole(self) -> bool:
        return not self.is_shell

    @cached_property
    def edges(self) -> tuple[IndexedEdge, ...]:
        coords = self.coordinates
        if len(coords) == 1:
            # A lone coordinate still yields one zero-length edge.
            pairs = [(coords[0], coords[0])]
        else:
            pairs = [(coords[i], coords[i + 1]) for i in range(len(coords) - 1)]
        return tuple(
            IndexedEdge(
                start,
                end,
                index=index_service.append(self.index, GeometryIndexType.EDGE, i),
                ring_index=self.index,
                srid=self.geometry.srid,
            )
            for i, (start, end) in enumerate(pairs)
        )

    def get_edge(self, index: GeometryIndex) -> IndexedEdge:
        """
        Resolve a 1-length EDGE index. Edge n-1 (the closing vertex position)
        is the same edge as n-2.
        """
        if index.index_type != GeometryIndexType.EDGE or len(index.values) != 1:
            raise GeometryIndexNotFoundError(f"expected a 1-length edge index, got {index}")
        i = index.value
        if i >= len(self.coordinates):
            raise GeometryIndexNotFoundError(f"edge {i} is out of range 0..{len(self.coordinates) - 1}")
        if i == len(self.coordinates) - 1 and i > 0:
            i -= 1
        return self.edges[i]

    def adjacent_edges(self, index: GeometryIndex) -> list[IndexedEdge]:
        """The edges sharing the vertex addressed by a 1-length VERTEX index."""
        if len(index.values) != 1:
            raise GeometryIndexNotFoundError(f"expected a 1-length vertex index, got {index}")
        return [self.get_edge(e) for e in index_service.adjacent_edges(self.geometry, index)]

    def affected_edges(self, index: GeometryIndex) -> list[IndexedEdge]:
        """
        Edges whose shape changed when the vertex or edge at ``index`` moved.

        Moving a vertex changes its adjacent edges; moving an edge moves both
        of its end vertices and so changes the adjacent edges of each.
        """
        match index.index_type:
            case GeometryIndexType.VERTEX:
                return self.adjacent_edges(index)
            case GeometryIndexType.EDGE:
                if len(index.values) != 1:
                    raise GeometryIndexNotFoundError(f"expected a 1-length edge index, got {index}")
                affected: list[IndexedEdge] = []
                for vertex in index_service.adjacent_vertices(self.geometry, index):
                    for edge in self.adjacent_edges(vertex):
                        if not any(edge is seen for seen in affected):
                            affected.append(edge)
                return affected
            case _:
                raise GeometryIndexNotFoundError(f"expected a vertex or edge index, got {index}")

    def get_intersections(self, edge: IndexedEdge) -> list[IndexedIntersection]:
        """
        Every intersection between ``edge`` and the edges of this ring.

        An edge of this ring is never tested against itself, and a ring with
        two or fewer coordinates (or a closed ring with three) has too few
        independent edges to intersect itself.
        """
        result: list[IndexedIntersection] = []
        if self.is_empty:
            return result
        own = edge.ring_index == self.index
        n = len(self.coordinates)
        if own and (n <= 2 or (self.is_closed and n <= 3)):
            return result
        for i in range(n - 1):
            if own and i == edge.index.value:
                continue
            if segments_intersect(self.coordinates[i], self.coordinates[i + 1], edge.start, edge.end):
                result.append(IndexedIntersection(self.edges[i], edge))
        return result

    def contains_coordinate(self, coordinate: Coordinate) -> bool:
        return is_within(self.geometry, coordinate) or touches(self.geometry, coordinate)

    def contains_ring(self, ring: IndexedLinearRing) -> bool:
        """Every coordinate of ``ring`` lies inside this ring or on its boundary."""
        if self.is_empty or ring.is_empty:
            return False
        return all(self.contains_coordinate(c) for c in ring.coordinates)

    def to_wkt(self) -> str:
        return to_wkt(self.geometry)

    def __str__(self) -> str:
        return self.to_wkt()


class IndexedLineString:
    def __init__(self, geometry: Geometry, index: GeometryIndex = GeometryIndex.ROOT) -> None:
        self.geometry = geometry
        self.index = index
        self.coordinates: tuple[Coordinate, ...] = geometry.coordinates or ()

    @property
    def is_too_few_points(self) -> bool:
        return len(self.coordinates) == 1

    def to_wkt(self) -> str:
        return to_wkt(self.geometry)

    def __str__(self) -> str:
        return self.to_wkt()


class IndexedMultiLineString:
    def __init__(self, geometry: Geometry, index: GeometryIndex = GeometryIndex.ROOT) -> None:
        self.geometry = geometry
        self.index = index
        self.line_strings: tuple[IndexedLineString, ...] = tuple(
            IndexedLineString(line, index_service.append(index, GeometryIndexType.GEOMETRY, i))
            for i, line in enumerate(geometry.geometries or ())
        )

    def get_line_string(self, i: int) -> IndexedLineString:
        if not 0 <= i < len(self.line_strings):
            raise GeometryIndexNotFoundError(
                f"line string {i} is out of range 0..{len(self.line_strings) - 1}"
            )
        return self.line_strings[i]

    def to_wkt(self) -> str:
        return to_wkt(self.geometry)


# ── Polygons ───────────────────────────────────────────────────────────────────


class IndexedPolygon:
    """
    A polygon's rings with their indices. Ring 0 is the shell, rings 1..n
    are the holes.
    """

    def __init__(self, geometry: Geometry, index: GeometryIndex = GeometryIndex.ROOT) -> None:
        self.geometry = geometry
        self.index = index
        self.rings: tuple[IndexedLinearRing, ...] = tuple(
            IndexedLinearRing(ring, index_service.append(index, GeometryIndexType.GEOMETRY, i))
            for i, ring in enumerate(geometry.geometries or ())
        )

    @property
    def is_empty(self) -> bool:
        return not self.rings

    @property
    def shell(self) -> Optional[IndexedLinearRing]:
        return self.rings[0] if self.rings else None

    @property
    def holes(self) -> tuple[IndexedLinearRing, ...]:
        return self.rings[1:]

    def get_ring(self, i: int) -> IndexedLinearRing:
        if not 0 <= i < len(self.rings):
            raise GeometryIndexNotFoundError(f"ring {i} is out of range 0..{len(self.rings) - 1}")
        return self.rings[i]

    def get_edge(self, index: GeometryIndex) -> IndexedEdge:
        """Resolve a 2-length EDGE index (ring, edge)."""
        return self._ring_of(index).get_edge(index_service.child(index))

    def adjacent_edges(self, index: GeometryIndex) -> list[IndexedEdge]:
        """Resolve a 2-length VERTEX index (ring, vertex) to its adjacent edges."""
        return self._ring_of(index).adjacent_edges(index_service.child(index))

    def affected_edges(self, index: GeometryIndex) -> list[IndexedEdge]:
        return self._ring_of(index).affected_edges(index_service.child(index))

    def _ring_of(self, index: GeometryIndex) -> IndexedLinearRing:
        if len(index.values) != 2:
            raise GeometryIndexNotFoundError(f"expected a 2-length index into a polygon, got {index}")
        return self.get_ring(index.values[0])

    def to_wkt(self) -> str:
        return to_wkt(self.geometry)

    def __str__(self) -> str:
        return self.to_wkt()


class IndexedMultiPolygon:
    """
    The member polygons of a multi polygon, plus a table of every ring keyed
    by its absolute index.
    """

    def __init__(self, geometry: Geometry, index: GeometryIndex = GeometryIndex.ROOT) -> None:
        self.geometry = geometry
        self.index = index
        self.polygons: tuple[IndexedPolygon, ...] = tuple(
            IndexedPolygon(polygon, index_service.append(index, GeometryIndexType.GEOMETRY, i))
            for i, polygon in enumerate(geometry.geometries or ())
        )
        self._rings: dict[GeometryIndex, IndexedLinearRing] = {
            ring.index: ring for polygon in self.polygons for ring in polygon.rings
        }

    def get_polygon(self, i: int) -> IndexedPolygon:
        if not 0 <= i < len(self.polygons):
            raise GeometryIndexNotFoundError(f"polygon {i} is out of range 0..{len(self.polygons) - 1}")
        return self.polygons[i]

    def find_ring(self, index: GeometryIndex) -> IndexedLinearRing:
        """Look up a ring by its absolute GEOMETRY index."""
        ring = self._rings.get(index)
        if ring is None:
            raise GeometryIndexNotFoundError(f"no ring at index {index}")
        return ring

    def get_edge(self, index: GeometryIndex) -> IndexedEdge:
        """Resolve a 3-length EDGE index (polygon, ring, edge)."""
        if len(index.values) != 3:
            raise GeometryIndexNotFoundError(f"expected a 3-length index into a multi polygon, got {index}")
        return self.get_polygon(index.values[0]).get_edge(index_service.child(index))

    def to_wkt(self) -> str:
        return to_wkt(self.geometry)


IndexedGeometry = (
    IndexedLineString | IndexedLinearRing | IndexedPolygon | IndexedMultiLineString | IndexedMultiPolygon
)


def index_geometry(geometry: Geometry) -> IndexedGeometry:
    """Wrap a geometry in the indexed view for its shape."""
    match geometry.geometry_type:
        case GeometryType.LINE_STRING:
            return IndexedLineString(geometry)
        case GeometryType.LINEAR_RING:
            return IndexedLinearRing(geometry)
        case GeometryType.POLYGON:
            return IndexedPolygon(geometry)
        case GeometryType.MULTI_LINE_STRING:
            return IndexedMultiLineString(geometry)
        case GeometryType.MULTI_POLYGON:
            return IndexedMultiPolygon(geometry)
        case _:
            raise ValueError(f"{geometry.geometry_type.value} has no indexed view")
