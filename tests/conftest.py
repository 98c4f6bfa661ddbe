"""Shared pytest fixtures for the geoingest test suite."""

from __future__ import annotations

import struct
from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

from geoingest.core.reprojection import LatLng

# ---------------------------------------------------------------------------
# Path fixtures
# ---------------------------------------------------------------------------

TESTS_DIR = Path(__file__).parent
DATA_DIR = TESTS_DIR / "data"


@pytest.fixture()
def data_dir() -> Path:
    """Return the path to the test data directory."""
    return DATA_DIR


@pytest.fixture()
def wfs_gml(data_dir: Path) -> Path:
    """WFS-flavoured GML with two parcels (one unclosed ring, one bad token)."""
    return data_dir / "wfs_parcels.gml"


@pytest.fixture()
def ogr_gml(data_dir: Path) -> Path:
    """OGR-flavoured GML with three buildings (one without valid geometry)."""
    return data_dir / "ogr_buildings.gml"


# ---------------------------------------------------------------------------
# Reprojectors
# ---------------------------------------------------------------------------


def _identity(x: float, y: float) -> LatLng:
    return LatLng(lat=y, lng=x)


@pytest.fixture()
def identity_reproject() -> Callable[[float, float], LatLng]:
    """Reprojector that maps ``(x, y)`` straight to ``(lon, lat)``."""
    return _identity


# ---------------------------------------------------------------------------
# WKB builders
# ---------------------------------------------------------------------------

UNIT_SQUARE = [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)]


def _polygon_wkb_hex(
    rings: Sequence[Sequence[tuple[float, float]]],
    *,
    type_code: int = 3,
    srid: int | None = None,
    srid_flag: bool = False,
    byte_order: int = 1,
) -> str:
    """Encode rings as little-endian WKB hex, optionally with an SRID."""
    raw_type = type_code | (0x20000000 if srid_flag else 0)
    parts = [struct.pack("<BI", byte_order, raw_type)]
    if srid is not None:
        parts.append(struct.pack("<I", srid))
    parts.append(struct.pack("<I", len(rings)))
    for ring in rings:
        parts.append(struct.pack("<I", len(ring)))
        for x, y in ring:
            parts.append(struct.pack("<dd", x, y))
    return b"".join(parts).hex()


def _point_wkb_hex(x: float, y: float) -> str:
    return struct.pack("<BIdd", 1, 1, x, y).hex()


@pytest.fixture()
def polygon_wkb_hex() -> Callable[..., str]:
    """Builder: ``polygon_wkb_hex(rings, *, type_code, srid, srid_flag, byte_order)``."""
    return _polygon_wkb_hex


@pytest.fixture()
def point_wkb_hex() -> Callable[[float, float], str]:
    """Builder for a 2D little-endian WKB Point."""
    return _point_wkb_hex


@pytest.fixture()
def unit_square_hex() -> str:
    """WKB hex for an unclosed unit square polygon (1 ring, 4 points)."""
    return _polygon_wkb_hex([UNIT_SQUARE])
