"""Canonical geometry model.

A closed tagged union of frozen dataclasses, one per geometry type, plus
``UnsupportedGeometry`` for type codes the binary decoder recognises but
does not decode. All coordinates are ``(lon, lat)`` in WGS 84.

Only ``Polygon`` and ``MultiPolygon`` are produced by the decoders; the
remaining variants exist so that downstream code can match on the full
union and so the binary decoder has a place to grow.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from shapely.geometry.base import BaseGeometry

Coordinate = tuple[float, float]
Ring = tuple[Coordinate, ...]


class GeometryType(IntEnum):
    """Base geometry type codes shared by the binary encoding and the model."""

    POINT = 1
    LINESTRING = 2
    POLYGON = 3
    MULTIPOINT = 4
    MULTILINESTRING = 5
    MULTIPOLYGON = 6
    GEOMETRY_COLLECTION = 7


def _coords(seq: tuple[Coordinate, ...]) -> list[list[float]]:
    return [[x, y] for x, y in seq]


class _ShapelyMixin:
    """Conversion helpers shared by the concrete geometry types."""

    __slots__ = ()

    def to_shapely(self) -> BaseGeometry:
        """Build the equivalent shapely geometry."""
        from shapely.geometry import shape

        return shape(self.to_geojson())

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        """``(min_lon, min_lat, max_lon, max_lat)``."""
        return tuple(self.to_shapely().bounds)  # type: ignore[return-value]


@dataclass(frozen=True, slots=True)
class Point(_ShapelyMixin):
    geom_type: ClassVar[str] = "Point"

    coordinates: Coordinate

    def to_geojson(self) -> dict[str, Any]:
        return {"type": self.geom_type, "coordinates": list(self.coordinates)}


@dataclass(frozen=True, slots=True)
class LineString(_ShapelyMixin):
    geom_type: ClassVar[str] = "LineString"

    coordinates: tuple[Coordinate, ...]

    def to_geojson(self) -> dict[str, Any]:
        return {"type": self.geom_type, "coordinates": _coords(self.coordinates)}


@dataclass(frozen=True, slots=True)
class Polygon(_ShapelyMixin):
    """A polygon as an ordered sequence of closed rings.

    Attributes:
        rings: Ring 0 is the outer boundary, the rest are holes. Holes are
            decoded structurally only; containment and winding are not
            checked.
    """

    geom_type: ClassVar[str] = "Polygon"

    rings: tuple[Ring, ...]

    @property
    def exterior(self) -> Ring:
        return self.rings[0]

    @property
    def interiors(self) -> tuple[Ring, ...]:
        return self.rings[1:]

    def to_geojson(self) -> dict[str, Any]:
        return {"type": self.geom_type, "coordinates": [_coords(r) for r in self.rings]}


@dataclass(frozen=True, slots=True)
class MultiPoint(_ShapelyMixin):
    geom_type: ClassVar[str] = "MultiPoint"

    coordinates: tuple[Coordinate, ...]

    def to_geojson(self) -> dict[str, Any]:
        return {"type": self.geom_type, "coordinates": _coords(self.coordinates)}


@dataclass(frozen=True, slots=True)
class MultiLineString(_ShapelyMixin):
    geom_type: ClassVar[str] = "MultiLineString"

    lines: tuple[tuple[Coordinate, ...], ...]

    def to_geojson(self) -> dict[str, Any]:
        return {"type": self.geom_type, "coordinates": [_coords(line) for line in self.lines]}


@dataclass(frozen=True, slots=True)
class MultiPolygon(_ShapelyMixin):
    geom_type: ClassVar[str] = "MultiPolygon"

    polygons: tuple[Polygon, ...]

    def to_geojson(self) -> dict[str, Any]:
        return {
            "type": self.geom_type,
            "coordinates": [[_coords(r) for r in p.rings] for p in self.polygons],
        }


@dataclass(frozen=True, slots=True)
class GeometryCollection(_ShapelyMixin):
    geom_type: ClassVar[str] = "GeometryCollection"

    geometries: tuple[Geometry, ...]

    def to_geojson(self) -> dict[str, Any]:
        return {
            "type": self.geom_type,
            "geometries": [g.to_geojson() for g in self.geometries],
        }


@dataclass(frozen=True, slots=True)
class UnsupportedGeometry:
    """A recognised type code the decoder does not decode yet.

    This is a value, not an error: the record is counted and skipped.
    """

    type_code: int

    @property
    def type_name(self) -> str:
        try:
            return GeometryType(self.type_code).name
        except ValueError:
            return f"UNKNOWN_{self.type_code}"


Geometry = (
    Point
    | LineString
    | Polygon
    | MultiPoint
    | MultiLineString
    | MultiPolygon
    | GeometryCollection
)
