"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: CRS codes, column names, notice defaults
- exceptions: Record/batch exception hierarchy
- reprojection: Source CRS → WGS 84 via pyproj
"""
