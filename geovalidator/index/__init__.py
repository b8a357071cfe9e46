"""
Geometry index: addressing vertices, edges and sub-geometries.

Exposed names
-------------
GeometryIndex               -- immutable index path (selectors + terminal kind)
GeometryIndexType           -- GEOMETRY | VERTEX | EDGE
GeometryIndexNotFoundError  -- index does not address anything (a ValueError)
create, parent, child, append
is_shell, is_hole
get_geometry, get_vertex
adjacent_edges, adjacent_vertices
"""

from .types import GeometryIndex, GeometryIndexNotFoundError, GeometryIndexType
from .service import (
    adjacent_edges,
    adjacent_vertices,
    append,
    child,
    create,
    edge_count,
    get_geometry,
    get_vertex,
    is_hole,
    is_shell,
    parent,
)

__all__ = [
    # types
    "GeometryIndex",
    "GeometryIndexType",
    "GeometryIndexNotFoundError",
    # navigation
    "create",
    "parent",
    "child",
    "append",
    "is_shell",
    "is_hole",
    # resolution
    "get_geometry",
    "get_vertex",
    "edge_count",
    "adjacent_edges",
    "adjacent_vertices",
]
