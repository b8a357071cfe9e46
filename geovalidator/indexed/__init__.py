"""
Indexed views over geometry trees.

Exposed names
-------------
IndexedEdge             -- edge with its EDGE index and owning ring index
IndexedIntersection     -- unordered pair of intersecting edges
IndexedLinearRing       -- ring with lazily built edges and intersection queries
IndexedLineString       -- line string with its index
IndexedMultiLineString  -- member line strings
IndexedPolygon          -- shell and holes
IndexedMultiPolygon     -- member polygons and an index-keyed ring table
index_geometry          -- wrap a geometry in the view for its shape
"""

from .views import (
    IndexedEdge,
    IndexedGeometry,
    IndexedIntersection,
    IndexedLinearRing,
    IndexedLineString,
    IndexedMultiLineString,
    IndexedMultiPolygon,
    IndexedPolygon,
    index_geometry,
)

__all__ = [
    "IndexedEdge",
    "IndexedIntersection",
    "IndexedLinearRing",
    "IndexedLineString",
    "IndexedMultiLineString",
    "IndexedPolygon",
    "IndexedMultiPolygon",
    "IndexedGeometry",
    "index_geometry",
]
