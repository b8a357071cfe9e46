"""
Geometry index operations: building, navigating and resolving index paths.

All functions take and return GeometryIndex values. Functions that resolve an
index against a geometry raise GeometryIndexNotFoundError when the index does
not address anything in it.
"""

from __future__ import annotations

from geovalidator.geometry.types import Coordinate, Geometry, GeometryType
from geovalidator.index.types import GeometryIndex, GeometryIndexNotFoundError, GeometryIndexType


def create(index_type: GeometryIndexType, *values: int) -> GeometryIndex:
    """Build an index from its selectors, e.g. ``create(VERTEX, 1, 3)``."""
    return GeometryIndex(tuple(values), index_type)


def parent(index: GeometryIndex) -> GeometryIndex:
    """The index of the sub-geometry one level up. The root has no parent."""
    if index.is_root:
        raise GeometryIndexNotFoundError("the root index has no parent")
    return GeometryIndex(index.values[:-1], GeometryIndexType.GEOMETRY)


def child(index: GeometryIndex) -> GeometryIndex:
    """
    The same index relative to the top-level sub-geometry it runs through.

    ``child(geometry1.vertex3)`` is ``vertex3``: the vertex as seen from ring 1.
    """
    if len(index.values) < 2:
        raise GeometryIndexNotFoundError(f"index {index} has no child path")
    return GeometryIndex(index.values[1:], index.index_type)


def append(index: GeometryIndex, index_type: GeometryIndexType, value: int) -> GeometryIndex:
    """Extend a GEOMETRY index with one more selector; parent() undoes this."""
    if index.index_type != GeometryIndexType.GEOMETRY:
        raise GeometryIndexNotFoundError(f"cannot append to {index.index_type.value} index {index}")
    return GeometryIndex(index.values + (value,), index_type)


def is_shell(index: GeometryIndex) -> bool:
    """
    True if the ring addressed by ``index`` (or owning the addressed vertex or
    edge) is a shell, i.e. the last selector of the ring's path is 0.

    A stand-alone ring (the root index) bounds its own area and counts as a
    shell.
    """
    ring_path = index.values if index.index_type == GeometryIndexType.GEOMETRY else index.values[:-1]
    return not ring_path or ring_path[-1] == 0


def is_hole(index: GeometryIndex) -> bool:
    return not is_shell(index)


def get_geometry(geometry: Geometry, index: GeometryIndex) -> Geometry:
    """
    Resolve the sub-geometry addressed by ``index``.

    For a VERTEX or EDGE index this is the leaf owning the vertex or edge.
    """
    path = index.values if index.index_type == GeometryIndexType.GEOMETRY else index.values[:-1]
    current = geometry
    for depth, selector in enumerate(path):
        children = current.geometries or ()
        if not children or selector >= len(children):
            raise GeometryIndexNotFoundError(
                f"index {index} selector {selector} at depth {depth} is out of range "
                f"for {current.geometry_type.value} with {len(children)} children"
            )
        current = children[selector]
    return current


def get_vertex(geometry: Geometry, index: GeometryIndex) -> Coordinate:
    """Resolve the coordinate addressed by a VERTEX index."""
    _require_type(index, GeometryIndexType.VERTEX)
    coordinates = _leaf(geometry, index).coordinates or ()
    if index.value >= len(coordinates):
        raise GeometryIndexNotFoundError(
            f"vertex {index.value} of index {index} is out of range 0..{len(coordinates) - 1}"
        )
    return coordinates[index.value]


def edge_count(coordinates: tuple[Coordinate, ...]) -> int:
    """Number of edges of a leaf: one per consecutive pair, one self edge for a lone coordinate."""
    return max(len(coordinates) - 1, 1) if coordinates else 0


def adjacent_edges(geometry: Geometry, index: GeometryIndex) -> list[GeometryIndex]:
    """
    The one or two EDGE indices that share the vertex addressed by ``index``.

    On a LinearRing the first and last vertex are the same point, so both map
    to the first and the last edge.
    """
    _require_type(index, GeometryIndexType.VERTEX)
    leaf = get_geometry(geometry, index)
    coordinates = leaf.coordinates or ()
    vertex = index.value
    if vertex >= len(coordinates):
        raise GeometryIndexNotFoundError(
            f"vertex {vertex} of index {index} is out of range 0..{len(coordinates) - 1}"
        )
    last_edge = edge_count(coordinates) - 1
    if leaf.geometry_type == GeometryType.LINEAR_RING and vertex in (0, len(coordinates) - 1):
        candidates = [0, last_edge]
    else:
        candidates = [vertex - 1, vertex]
    edges: list[int] = []
    for e in candidates:
        if 0 <= e <= last_edge and e not in edges:
            edges.append(e)
    ring_path = index.values[:-1]
    return [GeometryIndex(ring_path + (e,), GeometryIndexType.EDGE) for e in edges]


def adjacent_vertices(geometry: Geometry, index: GeometryIndex) -> list[GeometryIndex]:
    """
    The VERTEX indices at both ends of the edge addressed by ``index``.

    On a LinearRing the closing position ``n - 1`` names the last edge, the
    same one ``n - 2`` does.
    """
    _require_type(index, GeometryIndexType.EDGE)
    leaf = _leaf(geometry, index)
    coordinates = leaf.coordinates or ()
    edge = index.value
    if leaf.geometry_type == GeometryType.LINEAR_RING and 0 < edge == len(coordinates) - 1:
        edge -= 1
    if edge >= edge_count(coordinates):
        raise GeometryIndexNotFoundError(
            f"edge {edge} of index {index} is out of range 0..{edge_count(coordinates) - 1}"
        )
    ring_path = index.values[:-1]
    vertices = [edge] if len(coordinates) == 1 else [edge, edge + 1]
    return [GeometryIndex(ring_path + (v,), GeometryIndexType.VERTEX) for v in vertices]


# ── Helpers ───────────────────────────────────────────────────────────────────


def _require_type(index: GeometryIndex, index_type: GeometryIndexType) -> None:
    if index.index_type != index_type:
        raise GeometryIndexNotFoundError(
            f"expected a {index_type.value} index, got {index.index_type.value} index {index}"
        )


def _leaf(geometry: Geometry, index: GeometryIndex) -> Geometry:
    leaf = get_geometry(geometry, index)
    if not leaf.geometry_type.is_leaf:
        raise GeometryIndexNotFoundError(
            f"index {index} addresses a {leaf.geometry_type.value}, which has no vertices or edges"
        )
    return leaf
