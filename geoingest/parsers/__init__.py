"""Parsers for external geometry encodings.

Each parser turns one input batch into a canonical ``BatchResult``:
- wkb: hex-encoded binary polygons from a table column
- gml: WFS/OGR GML feature collections
- assemble: shared feature assembly and record fan-out
"""
