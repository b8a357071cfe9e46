"""
Tests for incremental validation: validate(geometry, index).

Covers:
  - Rings: affected edges only, rings still being digitized
  - Polygons: ring indices, vertex and edge indices, empty rings
  - Multi polygons: shell nesting and cross-polygon edges for one changed part
  - Line strings and points
  - Index errors for the wrong kind, length or range
  - Agreement with a full pass after moving one vertex (property-based)
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from geovalidator.geometry import Coordinate, Geometry, GeometryType
from geovalidator.index import GeometryIndexNotFoundError, GeometryIndexType, create
from geovalidator.validation import (
    GeometryValidationState,
    HoleOutsideShellViolation,
    NestedShellsViolation,
    RingSelfIntersectionViolation,
    SelfIntersectionViolation,
    TooFewPointsViolation,
    validate,
)
from geovalidator.wkt import to_geometry

GEOMETRY = GeometryIndexType.GEOMETRY
VERTEX = GeometryIndexType.VERTEX
EDGE = GeometryIndexType.EDGE

BOW_TIE = "LINEARRING (0 0, 10 10, 10 0, 0 10, 0 0)"
HOLE_OUTSIDE_SHELL = "POLYGON ((0 0, 1 0, 1 1, 0 1, 0 0),(2 2, 2 3,  3 3, 3 2, 2 2))"


def moved(ring_text, vertex, x, y):
    """The ring with one vertex replaced."""
    ring = to_geometry(ring_text)
    coordinates = list(ring.coordinates)
    coordinates[vertex] = Coordinate(x, y)
    return Geometry(ring.geometry_type, coordinates=coordinates)


# ── Rings ──────────────────────────────────────────────────────────────────────


class TestRing:
    @pytest.mark.parametrize(
        "index", [create(VERTEX, 1), create(VERTEX, 2), create(EDGE, 1), create(EDGE, 3), create(EDGE, 4)]
    )
    def test_bow_tie(self, index):
        result = validate(to_geometry(BOW_TIE), index)
        assert result.violations == (RingSelfIntersectionViolation(create(EDGE, 0), create(EDGE, 2)),)

    def test_closing_edge_position_is_the_last_edge(self):
        ring = to_geometry("LINEARRING (0 0, 10 0, 10 10, 0 10, 0 0)")
        assert validate(ring, create(EDGE, 4)) == validate(ring, create(EDGE, 3))
        assert validate(ring, create(EDGE, 4)).valid

    def test_edge_past_closing_position(self):
        with pytest.raises(GeometryIndexNotFoundError):
            validate(to_geometry(BOW_TIE), create(EDGE, 5))

    def test_agrees_with_full_pass(self):
        ring = to_geometry(BOW_TIE)
        assert validate(ring, create(VERTEX, 1)) == validate(ring)

    def test_unrelated_vertex_is_not_checked(self):
        # Only edges 3 and 4 move with vertex 4; neither crosses anything.
        ring = to_geometry("LINEARRING (0 0, 10 10, 10 0, 0 10, -5 5, 0 0)")
        assert validate(ring, create(VERTEX, 4)).valid
        assert not validate(ring).valid

    def test_ring_being_digitized_is_valid(self):
        ring = to_geometry("LINEARRING (0 0, 10 0, 0 0)")
        assert validate(ring, create(VERTEX, 1)).valid
        assert validate(ring).state == GeometryValidationState.TOO_FEW_POINTS

    def test_unclosed_ring(self):
        ring = to_geometry("LINEARRING (0 0, 10 0, 10 10, 0 10)")
        result = validate(ring, create(VERTEX, 3))
        assert result.state == GeometryValidationState.RING_NOT_CLOSED

    def test_empty_ring(self):
        assert validate(to_geometry("LINEARRING EMPTY"), create(VERTEX, 0)).valid


# ── Polygons ───────────────────────────────────────────────────────────────────


class TestPolygon:
    square_with_hole = "POLYGON ((0 0, 10 0, 10 10, 0 10, 0 0),(2 2, 4 2, 4 4, 2 4, 2 2))"

    def test_moved_hole_vertex_crosses_shell(self):
        polygon = to_geometry("POLYGON ((0 0, 10 0, 10 10, 0 10, 0 0),(2 2, 4 2, 12 4, 2 4, 2 2))")
        result = validate(polygon, create(VERTEX, 1, 2))
        assert result.state == GeometryValidationState.SELF_INTERSECTION
        assert result.violations == (
            SelfIntersectionViolation(create(EDGE, 0, 1), create(EDGE, 1, 1)),
            SelfIntersectionViolation(create(EDGE, 0, 1), create(EDGE, 1, 2)),
        )
        # A full pass also reports that the hole no longer fits in the shell.
        assert validate(polygon).state == GeometryValidationState.HOLE_OUTSIDE_SHELL

    @pytest.mark.parametrize(
        "index", [create(VERTEX, 1, 2), create(EDGE, 0, 3), create(EDGE, 0, 4), create(EDGE, 1, 4)]
    )
    def test_valid_vertex_move(self, index):
        assert validate(to_geometry(self.square_with_hole), index).valid

    @pytest.mark.parametrize("ring", [0, 1])
    def test_closing_edge_position_is_the_last_edge(self, ring):
        polygon = to_geometry("POLYGON ((0 0, 10 0, 10 10, 0 10, 0 0),(2 2, 4 2, 12 4, 2 4, 2 2))")
        assert validate(polygon, create(EDGE, ring, 4)) == validate(polygon, create(EDGE, ring, 3))

    def test_moved_hole_closing_edge(self):
        polygon = to_geometry("POLYGON ((0 0, 10 0, 10 10, 0 10, 0 0),(2 2, 4 2, 12 4, 2 4, 2 2))")
        result = validate(polygon, create(EDGE, 1, 4))
        assert result.violations == (SelfIntersectionViolation(create(EDGE, 0, 1), create(EDGE, 1, 2)),)

    @pytest.mark.parametrize("ring", [0, 1])
    def test_ring_index_checks_containment(self, ring):
        result = validate(to_geometry(HOLE_OUTSIDE_SHELL), create(GEOMETRY, ring))
        assert result.violations == (HoleOutsideShellViolation(create(GEOMETRY, 1), create(GEOMETRY, 0)),)

    def test_empty_hole(self):
        polygon = to_geometry("POLYGON ((0 0, 10 0, 10 10, 0 10, 0 0), EMPTY)")
        assert validate(polygon, create(GEOMETRY, 1)).valid

    def test_hole_being_digitized_is_valid(self):
        polygon = to_geometry("POLYGON ((0 0, 10 0, 10 10, 0 10, 0 0), (2 2, 3 2))")
        assert validate(polygon, create(VERTEX, 1, 1)).valid
        assert validate(polygon).state == GeometryValidationState.RING_NOT_CLOSED

    def test_hole_being_digitized_outside_shell(self):
        polygon = to_geometry("POLYGON ((0 0, 10 0, 10 10, 0 10, 0 0), (2 2, 20 2))")
        result = validate(polygon, create(VERTEX, 1, 1))
        assert [type(v) for v in result.violations] == [HoleOutsideShellViolation, SelfIntersectionViolation]
        assert result.violations[1] == SelfIntersectionViolation(create(EDGE, 0, 1), create(EDGE, 1, 0))

    @pytest.mark.parametrize(
        "index",
        [
            create(GEOMETRY, 5),
            create(VERTEX, 0),
            create(VERTEX, 0, 0, 1),
            create(VERTEX, 0, 9),
            create(GEOMETRY, 0, 1),
        ],
    )
    def test_bad_index(self, index):
        with pytest.raises(GeometryIndexNotFoundError):
            validate(to_geometry(self.square_with_hole), index)


# ── Multi polygons ─────────────────────────────────────────────────────────────


class TestMultiPolygon:
    crossing = "MULTIPOLYGON (((0 0, 4 0, 4 4, 0 4, 0 0)),((10 10, 14 10, 2 2, 10 14, 10 10)))"

    def test_moved_vertex_crosses_other_polygon(self):
        multi = to_geometry(self.crossing)
        result = validate(multi, create(VERTEX, 1, 0, 2))
        assert set(result.violations) == {
            SelfIntersectionViolation(create(EDGE, 0, 0, 1), create(EDGE, 1, 0, 1)),
            SelfIntersectionViolation(create(EDGE, 0, 0, 2), create(EDGE, 1, 0, 2)),
        }
        assert set(result.violations) == set(validate(multi).violations)

    def test_ring_index(self):
        multi = to_geometry(self.crossing)
        assert set(validate(multi, create(GEOMETRY, 1, 0)).violations) == set(validate(multi).violations)

    def test_polygon_index(self):
        multi = to_geometry(self.crossing)
        assert set(validate(multi, create(GEOMETRY, 0)).violations) == set(validate(multi).violations)

    def test_nested_shells(self):
        multi = to_geometry("MULTIPOLYGON (((1 1, 9 1, 9 9, 1 9, 1 1)),((2 2, 8 2, 8 8, 2 8, 2 2)))")
        result = validate(multi, create(VERTEX, 1, 0, 2))
        assert result.violations == (NestedShellsViolation(create(GEOMETRY, 0, 0), create(GEOMETRY, 1, 0)),)

    @pytest.mark.parametrize("index", [create(EDGE, 0, 0, 0, 1), create(GEOMETRY, 3), create(VERTEX, 1)])
    def test_bad_index(self, index):
        with pytest.raises(GeometryIndexNotFoundError):
            validate(to_geometry(self.crossing), index)


# ── Lines and points ───────────────────────────────────────────────────────────


class TestLinesAndPoints:
    def test_line_string(self):
        result = validate(to_geometry("LINESTRING (1 1)"), create(VERTEX, 0))
        assert result.violations == (TooFewPointsViolation(create(GEOMETRY)),)

    def test_line_string_rejects_geometry_index(self):
        with pytest.raises(GeometryIndexNotFoundError):
            validate(to_geometry("LINESTRING (0 0, 1 1)"), create(GEOMETRY, 0))

    def test_multi_line_string_member(self):
        multi = to_geometry("MULTILINESTRING ((0 0, 1 1), (2 2))")
        assert validate(multi, create(GEOMETRY, 1)).violations == (TooFewPointsViolation(create(GEOMETRY, 1)),)
        assert validate(multi, create(VERTEX, 1, 0)).state == GeometryValidationState.TOO_FEW_POINTS
        assert validate(multi, create(EDGE, 0, 0)).valid

    @pytest.mark.parametrize("text", ["POINT (1 1)", "MULTIPOINT ((1 1), (2 2))"])
    def test_points_are_always_valid(self, text):
        assert validate(to_geometry(text), create(VERTEX, 0)).valid


# ── Equivalence with a full pass ───────────────────────────────────────────────

OCTAGON = "LINEARRING (3 0, 6 0, 9 3, 9 6, 6 9, 3 9, 0 6, 0 3, 3 0)"


class TestEquivalence:
    @given(st.integers(1, 7), st.integers(-3, 12), st.integers(-3, 12))
    def test_moving_one_vertex(self, vertex, x, y):
        ring = moved(OCTAGON, vertex, x, y)
        full = validate(ring)
        incremental = validate(ring, create(VERTEX, vertex))
        assert incremental.state == full.state
        assert set(incremental.violations) == set(full.violations)
