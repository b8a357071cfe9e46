"""
Geometry validation public API.

Exposed names
-------------
validate                    -- full or incremental validation → ValidationResult
is_valid                    -- convenience wrapper returning a bool
ring_index_containing       -- innermost ring enclosing a point, or None
ValidationResult            -- immutable (state, violations) outcome of one pass
GeometryValidationState     -- VALID or the kind of the first violation
GeometryValidationContext   -- per-pass violation accumulator
ValidationViolation         -- base class of every violation kind
"""

from .state import GeometryValidationState
from .violations import (
    DisconnectedInteriorViolation,
    DuplicateRingsViolation,
    HoleOutsideShellViolation,
    InvalidCoordinateViolation,
    NestedHolesViolation,
    NestedShellsViolation,
    RingNotClosedViolation,
    RingSelfIntersectionViolation,
    SelfIntersectionViolation,
    TooFewPointsViolation,
    ValidationViolation,
)
from .context import GeometryValidationContext, ValidationResult
from .engine import is_valid, validate
from .lookup import ring_index_containing

__all__ = [
    # entry points
    "validate",
    "is_valid",
    "ring_index_containing",
    # results
    "ValidationResult",
    "GeometryValidationState",
    "GeometryValidationContext",
    # violations
    "ValidationViolation",
    "HoleOutsideShellViolation",
    "NestedHolesViolation",
    "NestedShellsViolation",
    "RingNotClosedViolation",
    "RingSelfIntersectionViolation",
    "SelfIntersectionViolation",
    "TooFewPointsViolation",
    "DisconnectedInteriorViolation",
    "DuplicateRingsViolation",
    "InvalidCoordinateViolation",
]
