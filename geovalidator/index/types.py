"""
Geometry index value type.

A GeometryIndex is a path of non-negative selectors from the root of a geometry
tree down to a sub-geometry, a vertex or an edge. The kind of the terminal
selector is carried by ``index_type``. Indices are plain values: equality,
hashing and ordering are structural, so they work as dict keys and sort
deterministically.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class GeometryIndexType(str, Enum):
    """What the last selector of an index addresses."""

    GEOMETRY = "geometry"
    VERTEX = "vertex"
    EDGE = "edge"


class GeometryIndexNotFoundError(ValueError):
    """
    Raised when an index does not address anything in the given geometry.

    This is a caller contract violation (wrong kind, wrong length, selector out
    of range, or a path that runs through a leaf) and is never recovered from.
    """


@dataclass(frozen=True, order=True)
class GeometryIndex:
    """
    Immutable path into a geometry tree.

    ``GeometryIndex((1, 3), GeometryIndexType.VERTEX)`` addresses vertex 3 of
    child 1 (the first hole of a polygon). The empty path with kind GEOMETRY
    is the root: the geometry itself.
    """

    values: tuple[int, ...] = ()
    index_type: GeometryIndexType = GeometryIndexType.GEOMETRY

    ROOT: ClassVar[GeometryIndex]

    def __post_init__(self) -> None:
        if isinstance(self.values, list):
            object.__setattr__(self, "values", tuple(self.values))
        object.__setattr__(self, "index_type", GeometryIndexType(self.index_type))
        if any(v < 0 for v in self.values):
            raise ValueError(f"index selectors must be non-negative, got {self.values}")
        if self.index_type != GeometryIndexType.GEOMETRY and not self.values:
            raise ValueError(f"a {self.index_type.value} index needs at least one selector")

    @property
    def value(self) -> int:
        """The terminal selector."""
        if not self.values:
            raise GeometryIndexNotFoundError("the root index has no terminal selector")
        return self.values[-1]

    @property
    def is_root(self) -> bool:
        return not self.values

    def __str__(self) -> str:
        if not self.values:
            return "root"
        parts = [f"geometry{v}" for v in self.values[:-1]]
        parts.append(f"{self.index_type.value}{self.values[-1]}")
        return ".".join(parts)


GeometryIndex.ROOT = GeometryIndex()
