"""Geospatial vector ingestion.

Decodes hex-encoded binary polygons and GML feature collections into a
single canonical feature model in WGS 84 longitude/latitude.
"""

__version__ = "0.1.0"
