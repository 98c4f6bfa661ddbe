"""Coordinate reprojection to WGS 84 longitude/latitude.

Two source projections feed the pipeline: Web Mercator for GML documents
and the Polish national grid (PUWG 1992) for WKB table columns. Both are
thin wrappers over ``pyproj.Transformer`` with ``always_xy=True`` so that
inputs are always ``(easting, northing)`` and outputs ``(lon, lat)``.

Transformers are cached per CRS pair; they are thread-safe for
``transform`` calls, so cached instances can be shared across decode
workers.
"""

from __future__ import annotations

import logging
from functools import lru_cache, partial
from typing import TYPE_CHECKING, NamedTuple, Protocol

from geoingest.core.constants import (
    DEFAULT_MERCATOR_CRS,
    DEFAULT_NATIONAL_GRID_CRS,
    TARGET_CRS,
)

if TYPE_CHECKING:
    from pyproj import Transformer

logger = logging.getLogger("geoingest.core.reprojection")


class LatLng(NamedTuple):
    """A reprojected WGS 84 position."""

    lat: float
    lng: float


class Reprojector(Protocol):
    """Maps a source-CRS ``(x, y)`` pair to a WGS 84 ``LatLng``."""

    def __call__(self, x: float, y: float) -> LatLng: ...


@lru_cache(maxsize=8)
def get_transformer(source_crs: str, target_crs: str = TARGET_CRS) -> Transformer:
    """Return a cached ``pyproj.Transformer`` for a CRS pair."""
    from pyproj import Transformer

    logger.debug("Building transformer %s -> %s", source_crs, target_crs)
    return Transformer.from_crs(source_crs, target_crs, always_xy=True)


def to_wgs84(x: float, y: float, *, source_crs: str) -> LatLng:
    """Reproject one ``(x, y)`` pair from ``source_crs`` to WGS 84."""
    lng, lat = get_transformer(source_crs).transform(x, y)
    return LatLng(lat=float(lat), lng=float(lng))


def mercator_to_wgs84(x: float, y: float) -> LatLng:
    """Reproject a Web Mercator (EPSG:3857) pair to WGS 84."""
    return to_wgs84(x, y, source_crs=DEFAULT_MERCATOR_CRS)


def national_grid_to_wgs84(x: float, y: float) -> LatLng:
    """Reproject a PUWG 1992 (EPSG:2180) pair to WGS 84."""
    return to_wgs84(x, y, source_crs=DEFAULT_NATIONAL_GRID_CRS)


def reprojector_for(source_crs: str) -> Reprojector:
    """Return a reprojector bound to ``source_crs``."""
    if source_crs == DEFAULT_MERCATOR_CRS:
        return mercator_to_wgs84
    if source_crs == DEFAULT_NATIONAL_GRID_CRS:
        return national_grid_to_wgs84
    return partial(to_wgs84, source_crs=source_crs)
