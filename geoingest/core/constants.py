"""Shared ingestion constants.

Centralises CRS identifiers, column names and notice defaults that are
shared between the binary and XML decoders, the assembler and config.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Coordinate reference systems
# ---------------------------------------------------------------------------

TARGET_CRS: str = "EPSG:4326"
"""Output CRS of every canonical feature (longitude/latitude, WGS 84)."""

DEFAULT_MERCATOR_CRS: str = "EPSG:3857"
"""Source CRS of GML coordinates (Web Mercator)."""

DEFAULT_NATIONAL_GRID_CRS: str = "EPSG:2180"
"""Source CRS of WKB coordinates (Polish national grid, PUWG 1992)."""

# ---------------------------------------------------------------------------
# Feature identity and column manifest
# ---------------------------------------------------------------------------

ID_COLUMN: str = "id"
GEOMETRY_COLUMN: str = "geometry"

DEFAULT_ID_KEYS: tuple[str, ...] = ("id", "fid")
"""Attribute keys consulted, in order, for a feature identifier."""

SYNTHETIC_ID_PREFIX: str = "feature-"

# ---------------------------------------------------------------------------
# Notices
# ---------------------------------------------------------------------------

DEFAULT_NOTICE_DURATION_MS: int = 5000
