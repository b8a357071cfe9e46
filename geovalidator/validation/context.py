"""
Validation context: the violations recorded during one validation pass.

A context is created per call and never shared. Intersections are recorded at
most once per unordered pair of edge indices, whichever edge was visited
first, with the lower edge index stored as ``edge1``. The scalar state of a
pass is the state of its first violation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Union

from geovalidator.index.types import GeometryIndex
from geovalidator.indexed.views import IndexedIntersection, IndexedLinearRing, IndexedLineString
from geovalidator.validation.state import GeometryValidationState
from geovalidator.validation.violations import (
    HoleOutsideShellViolation,
    NestedHolesViolation,
    NestedShellsViolation,
    RingNotClosedViolation,
    RingSelfIntersectionViolation,
    SelfIntersectionViolation,
    TooFewPointsViolation,
    ValidationViolation,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of one validation pass: the scalar state and every violation found."""

    state: GeometryValidationState
    violations: tuple[ValidationViolation, ...] = ()

    @property
    def valid(self) -> bool:
        return self.state.is_valid


class GeometryValidationContext:
    """Accumulates violations for a single pass."""

    def __init__(self) -> None:
        self._violations: list[ValidationViolation] = []
        self._intersections: set[frozenset[GeometryIndex]] = set()

    # ── Recording ──────────────────────────────────────────────────────────────

    def add_hole_outside_shell(self, hole: IndexedLinearRing, shell: IndexedLinearRing) -> None:
        self._add(
            HoleOutsideShellViolation(
                hole.index,
                shell.index,
                description=f"Hole {hole.index} {hole.to_wkt()} lies outside shell {shell.index} {shell.to_wkt()}",
            )
        )

    def add_nested_holes(self, hole: IndexedLinearRing, nested_hole: IndexedLinearRing) -> None:
        self._add(
            NestedHolesViolation(
                hole.index,
                nested_hole.index,
                description=(
                    f"Hole {nested_hole.index} {nested_hole.to_wkt()} lies inside hole {hole.index} {hole.to_wkt()}"
                ),
            )
        )

    def add_nested_shells(self, shell: IndexedLinearRing, nested_shell: IndexedLinearRing) -> None:
        self._add(
            NestedShellsViolation(
                shell.index,
                nested_shell.index,
                description=(
                    f"Shell {nested_shell.index} {nested_shell.to_wkt()} lies inside shell {shell.index} "
                    f"{shell.to_wkt()}"
                ),
            )
        )

    def add_ring_not_closed(self, ring: IndexedLinearRing) -> None:
        self._add(RingNotClosedViolation(ring.index, description=f"Ring {ring.index} {ring.to_wkt()} is not closed"))

    def add_too_few_points(self, geometry: Union[IndexedLinearRing, IndexedLineString]) -> None:
        self._add(
            TooFewPointsViolation(
                geometry.index,
                description=f"Geometry {geometry.index} {geometry.to_wkt()} has too few points",
            )
        )

    def add_ring_self_intersection(self, intersection: IndexedIntersection) -> bool:
        """Record an intersection between two edges of one ring; False if the pair was already recorded."""
        return self._add_intersection(intersection, RingSelfIntersectionViolation)

    def add_self_intersection(self, intersection: IndexedIntersection) -> bool:
        """Record an intersection between edges of two rings; False if the pair was already recorded."""
        return self._add_intersection(intersection, SelfIntersectionViolation)

    def clear(self) -> None:
        self._violations.clear()
        self._intersections.clear()

    # ── Reading ────────────────────────────────────────────────────────────────

    @property
    def violations(self) -> tuple[ValidationViolation, ...]:
        return tuple(self._violations)

    @property
    def is_valid(self) -> bool:
        return not self._violations

    @property
    def state(self) -> GeometryValidationState:
        if not self._violations:
            return GeometryValidationState.VALID
        return self._violations[0].state

    def to_result(self) -> ValidationResult:
        return ValidationResult(self.state, self.violations)

    # ── Helpers ────────────────────────────────────────────────────────────────

    def _add(self, violation: ValidationViolation) -> None:
        logger.debug("Recorded %s: %s", violation.state.name, violation)
        self._violations.append(violation)

    def _add_intersection(
        self,
        intersection: IndexedIntersection,
        kind: type[RingSelfIntersectionViolation] | type[SelfIntersectionViolation],
    ) -> bool:
        edge1, edge2 = sorted((intersection.edge1, intersection.edge2), key=lambda edge: edge.index)
        key = frozenset((edge1.index, edge2.index))
        if key in self._intersections:
            return False
        self._intersections.add(key)
        crossing = intersection.crossing_point
        where = f" at ({crossing.x} {crossing.y})" if crossing is not None else ""
        self._add(
            kind(
                edge1.index,
                edge2.index,
                description=(
                    f"Edge {edge1.index} {edge1.to_wkt()} intersects edge {edge2.index} {edge2.to_wkt()}{where}"
                ),
            )
        )
        return True
