"""
Violation types.

Each violation is an immutable record of the GeometryIndex values of the
offending parts plus a human-readable description. The description is for
display only and does not take part in equality.

DisconnectedInteriorViolation, DuplicateRingsViolation and
InvalidCoordinateViolation are part of the closed set of kinds but no
validation rule produces them.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import ClassVar

from geovalidator.index.types import GeometryIndex
from geovalidator.validation.state import GeometryValidationState


@dataclass(frozen=True)
class ValidationViolation:
    """Base class: ``state`` is fixed per subclass."""

    state: ClassVar[GeometryValidationState]

    description: str = field(default="", compare=False, kw_only=True)

    @property
    def geometry_indices(self) -> tuple[GeometryIndex, ...]:
        """The indices of the offending parts, in declaration order."""
        return tuple(getattr(self, f.name) for f in fields(self) if f.name != "description")

    def __str__(self) -> str:
        return self.description or f"{self.state.name}: {', '.join(str(i) for i in self.geometry_indices)}"


# ── Ring and polygon structure ─────────────────────────────────────────────────


@dataclass(frozen=True)
class HoleOutsideShellViolation(ValidationViolation):
    state: ClassVar[GeometryValidationState] = GeometryValidationState.HOLE_OUTSIDE_SHELL

    hole: GeometryIndex
    shell: GeometryIndex


@dataclass(frozen=True)
class NestedHolesViolation(ValidationViolation):
    state: ClassVar[GeometryValidationState] = GeometryValidationState.NESTED_HOLES

    hole: GeometryIndex
    nested_hole: GeometryIndex


@dataclass(frozen=True)
class NestedShellsViolation(ValidationViolation):
    state: ClassVar[GeometryValidationState] = GeometryValidationState.NESTED_SHELLS

    shell: GeometryIndex
    nested_shell: GeometryIndex


@dataclass(frozen=True)
class RingNotClosedViolation(ValidationViolation):
    state: ClassVar[GeometryValidationState] = GeometryValidationState.RING_NOT_CLOSED

    ring: GeometryIndex


@dataclass(frozen=True)
class TooFewPointsViolation(ValidationViolation):
    """A ring with fewer than 4 coordinates or a line string with exactly 1."""

    state: ClassVar[GeometryValidationState] = GeometryValidationState.TOO_FEW_POINTS

    geometry: GeometryIndex


# ── Intersections ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class RingSelfIntersectionViolation(ValidationViolation):
    """Two edges of the same ring intersect."""

    state: ClassVar[GeometryValidationState] = GeometryValidationState.RING_SELF_INTERSECTION

    edge1: GeometryIndex
    edge2: GeometryIndex


@dataclass(frozen=True)
class SelfIntersectionViolation(ValidationViolation):
    """Edges of two different rings of the same geometry intersect."""

    state: ClassVar[GeometryValidationState] = GeometryValidationState.SELF_INTERSECTION

    edge1: GeometryIndex
    edge2: GeometryIndex


# ── Reserved ───────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class DisconnectedInteriorViolation(ValidationViolation):
    state: ClassVar[GeometryValidationState] = GeometryValidationState.DISCONNECTED_INTERIOR

    geometry: GeometryIndex


@dataclass(frozen=True)
class DuplicateRingsViolation(ValidationViolation):
    state: ClassVar[GeometryValidationState] = GeometryValidationState.DUPLICATE_RINGS

    ring1: GeometryIndex
    ring2: GeometryIndex


@dataclass(frozen=True)
class InvalidCoordinateViolation(ValidationViolation):
    state: ClassVar[GeometryValidationState] = GeometryValidationState.INVALID_COORDINATE

    vertex: GeometryIndex
