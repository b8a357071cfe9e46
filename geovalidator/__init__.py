"""
geovalidator: planar geometry validation and addressing.

Exposed names
-------------
Geometry, GeometryType, Coordinate, Bbox      -- geometry data model
GeometryIndex, GeometryIndexType              -- index paths into a geometry
GeometryIndexNotFoundError                    -- index does not address anything
validate, is_valid, ring_index_containing     -- validation entry points
ValidationResult, GeometryValidationState     -- validation outcome
to_geometry, to_wkt, to_ewkt, WktError        -- WKT codec
"""

from geovalidator.geometry import Bbox, Coordinate, Geometry, GeometryType
from geovalidator.index import GeometryIndex, GeometryIndexNotFoundError, GeometryIndexType
from geovalidator.validation import (
    GeometryValidationState,
    ValidationResult,
    is_valid,
    ring_index_containing,
    validate,
)
from geovalidator.wkt import WktError, to_ewkt, to_geometry, to_wkt

__all__ = [
    "Geometry",
    "GeometryType",
    "Coordinate",
    "Bbox",
    "GeometryIndex",
    "GeometryIndexType",
    "GeometryIndexNotFoundError",
    "validate",
    "is_valid",
    "ring_index_containing",
    "ValidationResult",
    "GeometryValidationState",
    "to_geometry",
    "to_wkt",
    "to_ewkt",
    "WktError",
]
