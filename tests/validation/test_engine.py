"""
Tests for full validation passes.

Covers:
  - Every produced violation kind on its reference fixture
  - Violation indices, ordering and scalar state
  - Line strings, multi line strings, points and empty geometries
  - Descriptions and the validation result wrapper
  - Independent passes running concurrently
"""

from concurrent.futures import ThreadPoolExecutor

import pytest

from geovalidator.geometry import Geometry, GeometryType
from geovalidator.index import GeometryIndex, GeometryIndexType, create, get_geometry
from geovalidator.validation import (
    GeometryValidationState,
    HoleOutsideShellViolation,
    NestedHolesViolation,
    NestedShellsViolation,
    RingNotClosedViolation,
    RingSelfIntersectionViolation,
    SelfIntersectionViolation,
    TooFewPointsViolation,
    is_valid,
    validate,
)
from geovalidator.wkt import to_geometry, to_wkt

GEOMETRY = GeometryIndexType.GEOMETRY
EDGE = GeometryIndexType.EDGE

HOLE_OUTSIDE_SHELL = "POLYGON ((0 0, 1 0, 1 1, 0 1, 0 0),(2 2, 2 3,  3 3, 3 2, 2 2))"
NESTED_HOLES = "POLYGON ((0 0, 10 0, 10 10, 0 10, 0 0),(1 1, 9 1, 9 9, 1 9, 1 1),(2 2, 8 2, 8 8, 2 8, 2 2))"
NESTED_SHELLS = "MULTIPOLYGON (((1 1, 9 1, 9 9, 1 9, 1 1)),((2 2, 8 2, 8 8, 2 8, 2 2)))"
RING_NOT_CLOSED = (
    "POLYGON ((0 0, 10 0, 10 10, 0 10, 0 0), (1 1, 2 1, 2 2, 1 2, 1 1),"
    "(2 2, 3 2, 3 3, 2 3),(3 3, 3 4, 4 4, 4 3, 3 3))"
)
RING_SELF_INTERSECTION = "POLYGON ((1 1, 9 1, 9 9, 1 9, 1 1),(2 2, 8 2, 2 8, 8 8, 2 2))"
SELF_INTERSECTION = "POLYGON ((0 0, 10 0, 10 10, 0 10, 0 0),(1 1, 9 1, 9 9, 1 9, 1 1),(5 0, 10 5, 5 10, 0 5, 5 0))"
TOO_FEW_POINTS = "POLYGON ((0 0, 10 0, 0 0))"

VALID = [
    "POLYGON ((0 0, 10 0, 10 10, 0 10, 0 0), (2 2, 4 2, 4 4, 2 4, 2 2))",
    "MULTIPOLYGON (((0 0, 4 0, 4 4, 0 4, 0 0)), ((10 10, 14 10, 14 14, 10 14, 10 10)))",
    "LINEARRING (0 0, 10 0, 10 10, 0 10, 0 0)",
    "LINESTRING (0 0, 10 10, 10 0, 0 10)",
    "MULTILINESTRING ((0 0, 1 1), (0 1, 1 0))",
    "POINT (1 1)",
    "MULTIPOINT ((1 1), (1 1))",
]


def wkt_at(geometry, index):
    return to_wkt(get_geometry(geometry, index))


# ── Reference fixtures ─────────────────────────────────────────────────────────


class TestViolationKinds:
    def test_hole_outside_shell(self):
        polygon = to_geometry(HOLE_OUTSIDE_SHELL)
        result = validate(polygon)
        assert not result.valid
        assert result.state == GeometryValidationState.HOLE_OUTSIDE_SHELL
        (violation,) = result.violations
        assert isinstance(violation, HoleOutsideShellViolation)
        assert violation.hole == create(GEOMETRY, 1)
        assert violation.shell == create(GEOMETRY, 0)
        assert wkt_at(polygon, violation.hole) == "LINEARRING (2 2, 2 3, 3 3, 3 2, 2 2)"

    def test_nested_holes(self):
        result = validate(to_geometry(NESTED_HOLES))
        assert result.state == GeometryValidationState.NESTED_HOLES
        assert result.violations == (NestedHolesViolation(create(GEOMETRY, 1), create(GEOMETRY, 2)),)

    def test_nested_shells(self):
        result = validate(to_geometry(NESTED_SHELLS))
        assert result.state == GeometryValidationState.NESTED_SHELLS
        assert result.violations == (NestedShellsViolation(create(GEOMETRY, 0, 0), create(GEOMETRY, 1, 0)),)

    def test_ring_not_closed(self):
        polygon = to_geometry(RING_NOT_CLOSED)
        result = validate(polygon)
        assert result.state == GeometryValidationState.RING_NOT_CLOSED
        assert result.violations == (RingNotClosedViolation(create(GEOMETRY, 2)),)
        assert wkt_at(polygon, create(GEOMETRY, 2)) == "LINEARRING (2 2, 3 2, 3 3, 2 3)"

    def test_ring_self_intersection(self):
        result = validate(to_geometry(RING_SELF_INTERSECTION))
        assert result.state == GeometryValidationState.RING_SELF_INTERSECTION
        assert result.violations == (RingSelfIntersectionViolation(create(EDGE, 1, 1), create(EDGE, 1, 3)),)

    def test_self_intersection(self):
        result = validate(to_geometry(SELF_INTERSECTION))
        assert result.state == GeometryValidationState.SELF_INTERSECTION
        assert len(result.violations) == 8
        assert all(isinstance(v, SelfIntersectionViolation) for v in result.violations)
        # The diamond crosses the middle ring twice per side and only touches the shell.
        assert all(v.edge1.values[0] == 1 and v.edge2.values[0] == 2 for v in result.violations)

    def test_too_few_points(self):
        result = validate(to_geometry(TOO_FEW_POINTS))
        assert result.state == GeometryValidationState.TOO_FEW_POINTS
        assert result.violations == (
            TooFewPointsViolation(create(GEOMETRY, 0)),
            RingSelfIntersectionViolation(create(EDGE, 0, 0), create(EDGE, 0, 1)),
        )

    @pytest.mark.parametrize("text", VALID)
    def test_valid(self, text):
        result = validate(to_geometry(text))
        assert result.valid
        assert result.state == GeometryValidationState.VALID
        assert result.violations == ()
        assert is_valid(to_geometry(text))


# ── Ordering and edge cases ────────────────────────────────────────────────────


class TestOrdering:
    def test_ring_not_closed_does_not_stop_later_checks(self):
        ring = to_geometry("LINEARRING (0 0, 10 10, 10 0, 0 10)")
        result = validate(ring)
        assert result.state == GeometryValidationState.RING_NOT_CLOSED
        assert [type(v) for v in result.violations] == [RingNotClosedViolation, RingSelfIntersectionViolation]

    def test_ring_structure_comes_before_containment(self):
        polygon = to_geometry("POLYGON ((0 0, 1 0, 1 1, 0 1, 0 0), (2 2, 3 2, 3 3, 2 3))")
        result = validate(polygon)
        assert [type(v) for v in result.violations] == [RingNotClosedViolation, HoleOutsideShellViolation]

    def test_nested_shells_come_before_polygon_checks(self):
        multi = to_geometry("MULTIPOLYGON (((0 0, 10 0, 10 10, 0 10, 0 0)), ((2 2, 4 2, 4 4, 2 4)))")
        result = validate(multi)
        assert [type(v) for v in result.violations] == [NestedShellsViolation, RingNotClosedViolation]

    def test_bow_tie_ring(self):
        result = validate(to_geometry("LINEARRING (0 0, 10 10, 10 0, 0 10, 0 0)"))
        assert result.violations == (RingSelfIntersectionViolation(create(EDGE, 0), create(EDGE, 2)),)

    def test_crossing_polygons(self):
        multi = to_geometry("MULTIPOLYGON (((0 0, 4 0, 4 4, 0 4, 0 0)), ((2 2, 6 2, 6 6, 2 6, 2 2)))")
        result = validate(multi)
        assert result.state == GeometryValidationState.SELF_INTERSECTION
        assert set(result.violations) == {
            SelfIntersectionViolation(create(EDGE, 0, 0, 1), create(EDGE, 1, 0, 0)),
            SelfIntersectionViolation(create(EDGE, 0, 0, 2), create(EDGE, 1, 0, 3)),
        }

    def test_empty_hole_is_skipped(self):
        assert validate(to_geometry("POLYGON ((0 0, 10 0, 10 10, 0 10, 0 0), EMPTY)")).valid

    @pytest.mark.parametrize("kind", list(GeometryType))
    def test_empty_geometries_are_valid(self, kind):
        assert validate(Geometry(kind)).valid


class TestLineStrings:
    def test_single_coordinate(self):
        result = validate(to_geometry("LINESTRING (1 1)"))
        assert result.violations == (TooFewPointsViolation(GeometryIndex.ROOT),)

    def test_multi_line_string_member(self):
        result = validate(to_geometry("MULTILINESTRING ((0 0, 1 1), (2 2))"))
        assert result.violations == (TooFewPointsViolation(create(GEOMETRY, 1)),)

    def test_self_crossing_line_is_valid(self):
        assert is_valid(to_geometry("LINESTRING (0 0, 10 10, 10 0, 0 10)"))


# ── Violations ─────────────────────────────────────────────────────────────────


class TestViolations:
    def test_description_names_the_rings(self):
        (violation,) = validate(to_geometry(HOLE_OUTSIDE_SHELL)).violations
        assert "LINEARRING (2 2, 2 3, 3 3, 3 2, 2 2)" in violation.description
        assert str(violation) == violation.description

    def test_intersection_description_has_crossing_point(self):
        (violation,) = validate(to_geometry(RING_SELF_INTERSECTION)).violations
        assert "LINESTRING (8 2, 2 8)" in violation.description
        assert "LINESTRING (8 8, 2 2)" in violation.description
        assert "at (5.0 5.0)" in violation.description

    def test_description_is_not_compared(self):
        one = HoleOutsideShellViolation(create(GEOMETRY, 1), create(GEOMETRY, 0), description="a")
        two = HoleOutsideShellViolation(create(GEOMETRY, 1), create(GEOMETRY, 0), description="b")
        assert one == two
        assert hash(one) == hash(two)

    def test_geometry_indices(self):
        violation = NestedHolesViolation(create(GEOMETRY, 1), create(GEOMETRY, 2))
        assert violation.geometry_indices == (create(GEOMETRY, 1), create(GEOMETRY, 2))
        assert str(violation) == "NESTED_HOLES: geometry1, geometry2"

    def test_state_is_fixed_per_kind(self):
        assert TooFewPointsViolation(GeometryIndex.ROOT).state == GeometryValidationState.TOO_FEW_POINTS

    def test_state_codes(self):
        assert GeometryValidationState.VALID == 0
        assert GeometryValidationState.RING_NOT_CLOSED == 10
        assert GeometryValidationState.VALID.is_valid
        assert not GeometryValidationState.NESTED_SHELLS.is_valid


# ── Concurrency ────────────────────────────────────────────────────────────────


class TestConcurrency:
    def test_passes_do_not_share_state(self):
        fixtures = [HOLE_OUTSIDE_SHELL, NESTED_HOLES, NESTED_SHELLS, RING_NOT_CLOSED, SELF_INTERSECTION, *VALID] * 4
        geometries = [to_geometry(text) for text in fixtures]
        expected = [validate(g) for g in geometries]
        with ThreadPoolExecutor(max_workers=8) as pool:
            actual = list(pool.map(validate, geometries))
        assert actual == expected
