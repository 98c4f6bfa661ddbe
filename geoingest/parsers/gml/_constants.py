"""Shared constants for GML feature-collection parsing."""

from __future__ import annotations

GML_NAMESPACES = frozenset(
    {
        "http://www.opengis.net/gml",
        "http://www.opengis.net/gml/3.2",
    }
)
OGR_NAMESPACE = "http://ogr.maptools.org/"

# Element local names
FEATURE_COLLECTION = "FeatureCollection"
FEATURE_MEMBER = "featureMember"
GEOMETRY_PROPERTY = "geometryProperty"
MULTI_POLYGON = "MultiPolygon"
POLYGON_MEMBER = "polygonMember"
POLYGON = "Polygon"
OUTER_BOUNDARY = "outerBoundaryIs"
LINEAR_RING = "LinearRing"
COORDINATES = "coordinates"

# Separators inside <gml:coordinates> text
COORDINATE_SEPARATOR = ","
