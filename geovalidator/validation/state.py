"""Validation states and their numeric codes."""

from __future__ import annotations

from enum import Enum


class GeometryValidationState(int, Enum):
    """
    Outcome of a validation pass. Only VALID is valid; every other member
    names the kind of the first violation found.
    """

    VALID = 0
    HOLE_OUTSIDE_SHELL = 1
    NESTED_HOLES = 2
    DISCONNECTED_INTERIOR = 3
    SELF_INTERSECTION = 4
    RING_SELF_INTERSECTION = 5
    NESTED_SHELLS = 6
    DUPLICATE_RINGS = 7
    TOO_FEW_POINTS = 8
    INVALID_COORDINATE = 9
    RING_NOT_CLOSED = 10

    @property
    def is_valid(self) -> bool:
        return self is GeometryValidationState.VALID
