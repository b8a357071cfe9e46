"""
Validation engine.

validate() runs either a full pass over a geometry or, when given the index of
the one part that changed, an incremental pass restricted to what that change
can affect. Each call builds fresh indexed views and a fresh
GeometryValidationContext, and returns an immutable ValidationResult.

Rule order within a pass determines the scalar state (the state of the first
violation):

  LinearRing       closure, point count, edge pairs
  Polygon          each ring, hole containment, hole nesting, cross-ring edges
  MultiPolygon     shell nesting, each polygon, cross-polygon edges
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Optional

from geovalidator.geometry.types import Geometry, GeometryType
from geovalidator.index import service as index_service
from geovalidator.index.types import GeometryIndex, GeometryIndexNotFoundError, GeometryIndexType
from geovalidator.indexed.views import (
    IndexedEdge,
    IndexedIntersection,
    IndexedLinearRing,
    IndexedLineString,
    IndexedMultiLineString,
    IndexedMultiPolygon,
    IndexedPolygon,
)
from geovalidator.predicates.segments import segments_intersect
from geovalidator.validation.context import GeometryValidationContext, ValidationResult

logger = logging.getLogger(__name__)


def validate(geometry: Geometry, index: Optional[GeometryIndex] = None) -> ValidationResult:
    """
    Validate ``geometry``, fully or incrementally.

    Parameters
    ----------
    geometry:
        The geometry to validate. It is never modified.
    index:
        The index (relative to ``geometry``) of the vertex, edge or
        sub-geometry that changed. When omitted the whole geometry is checked.

    Returns
    -------
    A ValidationResult holding the state of the first violation (VALID when
    there is none) and every violation found.

    Raises
    ------
    GeometryIndexNotFoundError
        If ``index`` has the wrong kind or length for the geometry's shape, or
        a selector is out of range.
    """
    context = GeometryValidationContext()
    if index is None:
        logger.debug("Full validation of %s", geometry.geometry_type.value)
        _validate_full(context, geometry)
    else:
        logger.debug("Incremental validation of %s at %s", geometry.geometry_type.value, index)
        _validate_incremental(context, geometry, index)
    result = context.to_result()
    logger.debug("Validation finished: %s with %d violation(s)", result.state.name, len(result.violations))
    return result


def is_valid(geometry: Geometry, index: Optional[GeometryIndex] = None) -> bool:
    """Convenience wrapper: True if validate() finds no violation."""
    return validate(geometry, index).valid


# ── Full validation ────────────────────────────────────────────────────────────


def _validate_full(context: GeometryValidationContext, geometry: Geometry) -> None:
    match geometry.geometry_type:
        case GeometryType.POINT | GeometryType.MULTI_POINT:
            pass
        case GeometryType.LINE_STRING:
            _validate_line_string(context, IndexedLineString(geometry))
        case GeometryType.LINEAR_RING:
            _validate_ring(context, IndexedLinearRing(geometry))
        case GeometryType.POLYGON:
            _validate_polygon(context, IndexedPolygon(geometry))
        case GeometryType.MULTI_LINE_STRING:
            for line in IndexedMultiLineString(geometry).line_strings:
                _validate_line_string(context, line)
        case GeometryType.MULTI_POLYGON:
            _validate_multi_polygon(context, IndexedMultiPolygon(geometry))


def _validate_line_string(context: GeometryValidationContext, line: IndexedLineString) -> None:
    if line.is_too_few_points:
        context.add_too_few_points(line)


def _validate_ring(context: GeometryValidationContext, ring: IndexedLinearRing) -> None:
    if ring.is_empty:
        return
    if not ring.is_closed:
        context.add_ring_not_closed(ring)
    if ring.is_too_few_points:
        context.add_too_few_points(ring)
    # Every unordered pair, including those the incremental query skips as too small.
    edges = ring.edges
    for i, edge in enumerate(edges):
        for other in edges[i + 1 :]:
            if _edges_intersect(edge, other):
                context.add_ring_self_intersection(IndexedIntersection(edge, other))


def _validate_polygon(context: GeometryValidationContext, polygon: IndexedPolygon) -> None:
    for ring in polygon.rings:
        _validate_ring(context, ring)

    shell = polygon.shell
    holes = [hole for hole in polygon.holes if not hole.is_empty]
    if shell is not None:
        for hole in holes:
            if not shell.contains_ring(hole):
                context.add_hole_outside_shell(hole, shell)
    for i, hole in enumerate(holes):
        for other in holes[i + 1 :]:
            _check_nested_holes(context, hole, other)

    for ring in polygon.rings:
        others = [other for other in polygon.rings if other is not ring]
        _check_edges_against(context, ring.edges, others)


def _validate_multi_polygon(context: GeometryValidationContext, multi_polygon: IndexedMultiPolygon) -> None:
    polygons = multi_polygon.polygons
    for i, polygon in enumerate(polygons):
        for other in polygons[i + 1 :]:
            _check_nested_shells(context, polygon, other)
    for polygon in polygons:
        _validate_polygon(context, polygon)
    for i, polygon in enumerate(polygons):
        for other in polygons[i + 1 :]:
            _check_edges_against(context, _all_edges(polygon), other.rings)


# ── Incremental validation ─────────────────────────────────────────────────────


def _validate_incremental(context: GeometryValidationContext, geometry: Geometry, index: GeometryIndex) -> None:
    match geometry.geometry_type:
        case GeometryType.POINT | GeometryType.MULTI_POINT:
            pass
        case GeometryType.LINE_STRING:
            _require_leaf_index(index)
            _validate_line_string_incremental(context, IndexedLineString(geometry), index)
        case GeometryType.LINEAR_RING:
            _require_leaf_index(index)
            _validate_ring_incremental(context, IndexedLinearRing(geometry), index)
        case GeometryType.POLYGON:
            _validate_polygon_incremental(context, IndexedPolygon(geometry), index)
        case GeometryType.MULTI_LINE_STRING:
            multi_line = IndexedMultiLineString(geometry)
            if not 1 <= len(index.values) <= 2:
                raise GeometryIndexNotFoundError(
                    f"expected a 1- or 2-length index into a multi line string, got {index}"
                )
            line = multi_line.get_line_string(index.values[0])
            if len(index.values) == 1:
                _require_type(index, GeometryIndexType.GEOMETRY)
                _validate_line_string(context, line)
            else:
                _validate_line_string_incremental(context, line, index_service.child(index))
        case GeometryType.MULTI_POLYGON:
            _validate_multi_polygon_incremental(context, IndexedMultiPolygon(geometry), index)


def _validate_line_string_incremental(
    context: GeometryValidationContext, line: IndexedLineString, index: GeometryIndex
) -> None:
    if index.index_type == GeometryIndexType.VERTEX:
        index_service.get_vertex(line.geometry, index)
    else:
        index_service.adjacent_vertices(line.geometry, index)
    _validate_line_string(context, line)


def _validate_ring_incremental(
    context: GeometryValidationContext, ring: IndexedLinearRing, index: GeometryIndex
) -> None:
    """Closure plus the edges touched by the change, each against the whole ring."""
    if ring.is_empty:
        return
    affected = ring.affected_edges(index)
    if ring.is_too_few_points:
        # Still being digitized: nothing to check until it has 4 coordinates.
        return
    if not ring.is_closed:
        context.add_ring_not_closed(ring)
    for edge in affected:
        for intersection in ring.get_intersections(edge):
            context.add_ring_self_intersection(intersection)


def _validate_polygon_incremental(
    context: GeometryValidationContext, polygon: IndexedPolygon, index: GeometryIndex
) -> None:
    match len(index.values):
        case 1:
            _require_type(index, GeometryIndexType.GEOMETRY)
            ring = polygon.get_ring(index.value)
            if ring.is_empty:
                return
            _check_ring_containment(context, polygon, ring)
        case 2:
            _require_leaf_index(index)
            ring = polygon.get_ring(index.values[0])
            if ring.is_empty:
                return
            ring_index = index_service.child(index)
            if len(ring.coordinates) <= 4:
                _check_ring_containment(context, polygon, ring)
            _validate_ring_incremental(context, ring, ring_index)
            others = [other for other in polygon.rings if other is not ring]
            _check_edges_against(context, ring.affected_edges(ring_index), others)
        case _:
            raise GeometryIndexNotFoundError(f"expected a 1- or 2-length index into a polygon, got {index}")


def _validate_multi_polygon_incremental(
    context: GeometryValidationContext, multi_polygon: IndexedMultiPolygon, index: GeometryIndex
) -> None:
    if not 1 <= len(index.values) <= 3:
        raise GeometryIndexNotFoundError(f"expected a 1- to 3-length index into a multi polygon, got {index}")
    polygon = multi_polygon.get_polygon(index.values[0])
    others = [other for other in multi_polygon.polygons if other is not polygon]
    other_rings = [ring for other in others for ring in other.rings]

    if len(index.values) == 1:
        _require_type(index, GeometryIndexType.GEOMETRY)
        for other in others:
            _check_nested_shells(context, other, polygon)
        _validate_polygon(context, polygon)
        _check_edges_against(context, _all_edges(polygon), other_rings)
        return

    polygon_index = index_service.child(index)
    _validate_polygon_incremental(context, polygon, polygon_index)
    ring = polygon.get_ring(index.values[1])
    if ring.is_empty:
        return
    if ring.is_shell:
        for other in others:
            _check_nested_shells(context, other, polygon)
    if len(index.values) == 2:
        changed: Iterable[IndexedEdge] = ring.edges
    else:
        changed = ring.affected_edges(index_service.child(polygon_index))
    _check_edges_against(context, changed, other_rings)


# ── Shared checks ──────────────────────────────────────────────────────────────


def _check_ring_containment(
    context: GeometryValidationContext, polygon: IndexedPolygon, ring: IndexedLinearRing
) -> None:
    """Containment of one ring against the other rings of its polygon."""
    if ring.is_shell:
        for hole in polygon.holes:
            if not hole.is_empty and not ring.contains_ring(hole):
                context.add_hole_outside_shell(hole, ring)
        return
    shell = polygon.shell
    if shell is not None and not shell.contains_ring(ring):
        context.add_hole_outside_shell(ring, shell)
    for other in polygon.holes:
        if other is not ring and not other.is_empty:
            _check_nested_holes(context, other, ring)


def _check_nested_holes(context: GeometryValidationContext, hole: IndexedLinearRing, other: IndexedLinearRing) -> None:
    if hole.contains_ring(other):
        context.add_nested_holes(hole, other)
    elif other.contains_ring(hole):
        context.add_nested_holes(other, hole)


def _check_nested_shells(context: GeometryValidationContext, polygon: IndexedPolygon, other: IndexedPolygon) -> None:
    shell, other_shell = polygon.shell, other.shell
    if shell is None or other_shell is None:
        return
    if shell.contains_ring(other_shell):
        context.add_nested_shells(shell, other_shell)
    elif other_shell.contains_ring(shell):
        context.add_nested_shells(other_shell, shell)


def _check_edges_against(
    context: GeometryValidationContext, edges: Iterable[IndexedEdge], rings: Iterable[IndexedLinearRing]
) -> None:
    """Every edge against every edge of the given (other) rings."""
    rings = list(rings)
    for edge in edges:
        for ring in rings:
            for intersection in ring.get_intersections(edge):
                context.add_self_intersection(intersection)


def _edges_intersect(edge: IndexedEdge, other: IndexedEdge) -> bool:
    return segments_intersect(edge.start, edge.end, other.start, other.end)


def _all_edges(polygon: IndexedPolygon) -> list[IndexedEdge]:
    return [edge for ring in polygon.rings for edge in ring.edges]


def _require_type(index: GeometryIndex, index_type: GeometryIndexType) -> None:
    if index.index_type != index_type:
        raise GeometryIndexNotFoundError(f"expected a {index_type.value} index, got {index}")


def _require_leaf_index(index: GeometryIndex) -> None:
    if index.index_type == GeometryIndexType.GEOMETRY:
        raise GeometryIndexNotFoundError(f"expected a vertex or edge index, got {index}")
