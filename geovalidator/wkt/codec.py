"""
Well-Known-Text codec.

to_geometry parses WKT (``POLYGON ((0 0, 1 0, 1 1, 0 0))``) and EWKT
(``SRID=4326;POINT (1 2)``) into Geometry trees; to_wkt and to_ewkt render
them back. Keywords are case-insensitive and ``EMPTY`` is accepted wherever a
parenthesised group is. Every parse failure raises WktError.

Text is read by GEOS through shapely. GEOS will not build rings that are
unclosed or shorter than 4 coordinates, nor single-coordinate line strings,
which are exactly the shapes validation reports on; for those the nesting is
walked here and each coordinate list is still read by GEOS. Rendering stays
local for the same reason.
"""

from __future__ import annotations

import re

import shapely
from shapely.errors import ShapelyError
from shapely.geometry.base import BaseGeometry

from geovalidator.geometry.shapes import from_shapely
from geovalidator.geometry.types import Coordinate, Geometry, GeometryType


class WktError(ValueError):
    """Raised when text cannot be parsed as WKT or a geometry cannot be rendered."""


_KEYWORDS: dict[str, GeometryType] = {
    "POINT": GeometryType.POINT,
    "LINESTRING": GeometryType.LINE_STRING,
    "LINEARRING": GeometryType.LINEAR_RING,
    "POLYGON": GeometryType.POLYGON,
    "MULTIPOINT": GeometryType.MULTI_POINT,
    "MULTILINESTRING": GeometryType.MULTI_LINE_STRING,
    "MULTIPOLYGON": GeometryType.MULTI_POLYGON,
}

_TYPE_KEYWORDS = {kind: keyword for keyword, kind in _KEYWORDS.items()}

_SRID = re.compile(r"^\s*SRID\s*=\s*(-?\d+)\s*;(.*)$", re.IGNORECASE | re.DOTALL)
_KEYWORD = re.compile(r"\s*([A-Za-z]+)")
_EMPTY = re.compile(r"\s*EMPTY\b", re.IGNORECASE)
_COORDINATE_LIST = re.compile(r"\s*\(([^()]*)\)")
_OPEN = re.compile(r"\s*\(")
_CLOSE = re.compile(r"\s*\)")
_COMMA = re.compile(r"\s*,")


# ── Parsing ────────────────────────────────────────────────────────────────────


def to_geometry(text: str) -> Geometry:
    """
    Parse WKT or EWKT text into a Geometry.

    Raises
    ------
    WktError
        On an unsupported keyword, coordinates that are not 2-D, unparsable
        numbers, unbalanced parentheses, trailing text, or a point holding
        more than one coordinate. GEOS errors are chained as the cause.
    """
    if not isinstance(text, str) or not text.strip():
        raise WktError("Error while parsing WKT: empty input")
    srid = 0
    match = _SRID.match(text)
    if match:
        srid = int(match.group(1))
        text = match.group(2)
    try:
        shape = shapely.from_wkt(text)
    except ShapelyError as exc:
        return _StructureReader(text, srid, exc).read()
    return _from_shape(shape, srid)


def _from_shape(shape: BaseGeometry, srid: int) -> Geometry:
    if shapely.has_z(shape):
        raise WktError("Error while parsing WKT: expected 2-D coordinates")
    try:
        return from_shapely(shape, srid)
    except ValueError as exc:
        raise WktError(f"Error while parsing WKT: unsupported geometry type {shape.geom_type!r}") from exc


def _read_coordinates(text: str) -> tuple[Coordinate, ...]:
    """Read a bare coordinate list such as ``0 0, 1 0`` with GEOS."""
    try:
        points = shapely.from_wkt(f"MULTIPOINT ({text})")
    except ShapelyError as exc:
        raise WktError(f"Error while parsing WKT: invalid coordinate list ({text.strip()})") from exc
    if shapely.has_z(points):
        raise WktError("Error while parsing WKT: expected 2-D coordinates")
    return tuple(Coordinate(float(x), float(y)) for x, y in shapely.get_coordinates(points))


class _StructureReader:
    """Walks the nesting of text GEOS refused, without checking ring closure or length."""

    def __init__(self, text: str, srid: int, cause: ShapelyError) -> None:
        self._text = text
        self._pos = 0
        self._srid = srid
        self._cause = cause

    def _error(self, message: str) -> WktError:
        return WktError(f"Error while parsing WKT: {message}")

    def _accept(self, pattern: re.Pattern) -> bool:
        match = pattern.match(self._text, self._pos)
        if match:
            self._pos = match.end()
        return match is not None

    def _expect(self, pattern: re.Pattern, token: str) -> None:
        if not self._accept(pattern):
            raise self._error(f"expected {token!r} at offset {self._pos}") from self._cause

    def read(self) -> Geometry:
        match = _KEYWORD.match(self._text)
        kind = _KEYWORDS.get(match.group(1).upper()) if match else None
        if kind is None:
            keyword = self._text.split("(")[0].strip()
            raise self._error(f"unsupported geometry type {keyword!r}") from self._cause
        self._pos = match.end()
        geometry = self._body(kind)
        rest = self._text[self._pos :].strip()
        if rest:
            raise self._error(f"unexpected trailing text {rest!r}") from self._cause
        return geometry

    def _body(self, kind: GeometryType) -> Geometry:
        if self._accept(_EMPTY):
            return Geometry(kind, srid=self._srid)
        if kind == GeometryType.MULTI_POINT:
            # GEOS accepts any multi point that is well formed.
            return _from_shape(self._multi_point(), self._srid)
        child_kind = kind.child_type
        if child_kind is None:
            return self._leaf(kind)
        self._expect(_OPEN, "(")
        children = [self._body(child_kind)]
        while self._accept(_COMMA):
            children.append(self._body(child_kind))
        self._expect(_CLOSE, ")")
        return Geometry(kind, geometries=tuple(children), srid=self._srid)

    def _leaf(self, kind: GeometryType) -> Geometry:
        match = _COORDINATE_LIST.match(self._text, self._pos)
        if match is None:
            raise self._error(f"expected a parenthesised coordinate list at offset {self._pos}") from self._cause
        self._pos = match.end()
        coordinates = _read_coordinates(match.group(1))
        if kind == GeometryType.POINT and len(coordinates) != 1:
            raise self._error(f"a point holds exactly one coordinate, got {len(coordinates)}") from self._cause
        return Geometry(kind, coordinates=coordinates, srid=self._srid)

    def _multi_point(self) -> BaseGeometry:
        if _OPEN.match(self._text, self._pos) is None:
            raise self._error(f"expected '(' at offset {self._pos}") from self._cause
        start = self._pos
        depth = 0
        for offset in range(start, len(self._text)):
            char = self._text[offset]
            if char == "(":
                depth += 1
            elif char == ")":
                depth -= 1
                if depth == 0:
                    self._pos = offset + 1
                    group = self._text[start : self._pos]
                    try:
                        return shapely.from_wkt(f"MULTIPOINT {group}")
                    except ShapelyError as exc:
                        raise WktError(f"Error while parsing WKT: invalid multi point {group.strip()}") from exc
        raise self._error(f"unbalanced parentheses after offset {start}") from self._cause


# ── Formatting ─────────────────────────────────────────────────────────────────


def to_wkt(geometry: Geometry) -> str:
    """Render a geometry as WKT, e.g. ``LINESTRING (0 0, 1 1)``."""
    keyword = _TYPE_KEYWORDS.get(GeometryType(geometry.geometry_type))
    if keyword is None:
        raise WktError(f"Error while formatting WKT: unsupported geometry type {geometry.geometry_type!r}")
    return f"{keyword} {_format_body(geometry)}"


def to_ewkt(geometry: Geometry) -> str:
    """Render a geometry as EWKT, prefixing its SRID."""
    return f"SRID={geometry.srid};{to_wkt(geometry)}"


def _format_body(geometry: Geometry) -> str:
    if geometry.is_empty:
        return "EMPTY"
    if geometry.geometries:
        return "(" + ", ".join(_format_body(child) for child in geometry.geometries) + ")"
    return "(" + ", ".join(f"{_format_number(c.x)} {_format_number(c.y)}" for c in geometry.coordinates or ()) + ")"


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))
