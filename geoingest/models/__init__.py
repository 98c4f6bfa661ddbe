"""Data models and schemas.

Defines the canonical structures produced by every parser:
- Geometry: closed union of geometry types plus ``UnsupportedGeometry``
- Feature: decoded geometry with its attribute record
- BatchResult / ColumnManifest: batch output and ordered column names
- Diagnostics / Notice: rejected-record summary and user-facing notices
"""

from geoingest.models.batch import BatchResult, ColumnManifest
from geoingest.models.diagnostics import Diagnostics, Notice
from geoingest.models.feature import AttributeValue, Feature
from geoingest.models.geometry import (
    Coordinate,
    Geometry,
    GeometryCollection,
    GeometryType,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
    Ring,
    UnsupportedGeometry,
)

__all__ = [
    "AttributeValue",
    "BatchResult",
    "ColumnManifest",
    "Coordinate",
    "Diagnostics",
    "Feature",
    "Geometry",
    "GeometryCollection",
    "GeometryType",
    "LineString",
    "MultiLineString",
    "MultiPoint",
    "MultiPolygon",
    "Notice",
    "Point",
    "Polygon",
    "Ring",
    "UnsupportedGeometry",
]
