"""
WKT / EWKT codec.

Exposed names
-------------
to_geometry  -- parse WKT or EWKT text into a Geometry
to_wkt       -- render a Geometry as WKT
to_ewkt      -- render a Geometry as EWKT (``SRID=n;...``)
WktError     -- parse or format failure (a ValueError)
"""

from .codec import WktError, to_ewkt, to_geometry, to_wkt

__all__ = ["to_geometry", "to_wkt", "to_ewkt", "WktError"]
