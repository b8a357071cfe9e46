"""
Geometry data model and measures.

Exposed names
-------------
GeometryType     -- the seven planar shapes (str enum)
Coordinate       -- immutable (x, y) pair
Bbox             -- axis-aligned bounding box
Geometry         -- immutable tagged tree node
get_bounds       -- bounding box of a geometry, or None when empty
get_num_points   -- total coordinate count
is_closed        -- first coordinate equals last
get_area         -- planar area, holes subtracted
get_length       -- summed length of lines and rings
get_centroid     -- centre of mass, or None when empty
get_distance     -- distance from a point to the geometry
intersects       -- boundary intersection test
is_simple        -- no self-crossing segments
to_polygon       -- polygon covering a Bbox
to_line_string   -- two-point line string
from_shapely     -- Geometry tree from a shapely geometry
to_shapely       -- shapely geometry for measuring a Geometry tree
"""

from .types import Bbox, Coordinate, Geometry, GeometryType
from .shapes import from_shapely, to_shapely
from .service import (
    all_coordinates,
    get_area,
    get_bounds,
    get_centroid,
    get_distance,
    get_length,
    get_num_points,
    intersects,
    is_closed,
    is_simple,
    to_line_string,
    to_polygon,
)

__all__ = [
    # types
    "GeometryType",
    "Coordinate",
    "Bbox",
    "Geometry",
    # measures
    "all_coordinates",
    "get_bounds",
    "get_num_points",
    "is_closed",
    "get_area",
    "get_length",
    "get_centroid",
    "get_distance",
    "intersects",
    "is_simple",
    "to_polygon",
    "to_line_string",
    # shapely bridge
    "from_shapely",
    "to_shapely",
]
