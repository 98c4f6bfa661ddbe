"""GML polygon geometry decoder.

Supports ``gml:MultiPolygon`` made of single-ring polygon members, each
ring given as ``outerBoundaryIs/LinearRing/coordinates`` text. The rings of
all surviving members form one polygon wrapped in a ``MultiPolygon``.
Decoding is split in two so that element access stays on the calling thread:

- ``outer_ring_texts`` walks the tree and returns plain strings
- ``decode_ring_texts`` parses, reprojects, validates and closes them
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from geoingest.core.exceptions import MalformedGeometryError, NoGeometryError
from geoingest.models.geometry import MultiPolygon, Polygon
from geoingest.parsers._rings import is_finite_pair, validate_ring
from geoingest.parsers.gml._constants import (
    COORDINATE_SEPARATOR,
    COORDINATES,
    LINEAR_RING,
    MULTI_POLYGON,
    OUTER_BOUNDARY,
    POLYGON,
    POLYGON_MEMBER,
)
from geoingest.parsers.gml._document import gml_child, gml_children

if TYPE_CHECKING:
    from collections.abc import Sequence

    from lxml.etree import _Element

    from geoingest.core.reprojection import Reprojector
    from geoingest.models.geometry import Coordinate, Ring

logger = logging.getLogger("geoingest.parsers.gml")


def decode_gml_geometry(
    geometry_property: _Element | None, reproject: Reprojector, *, context: str = "feature"
) -> MultiPolygon:
    """Decode a feature's geometry property into a ``MultiPolygon``.

    Raises:
        NoGeometryError: If no valid polygon member remains.
    """
    texts = outer_ring_texts(geometry_property, context=context)
    return decode_ring_texts(texts, reproject, context=context)


def outer_ring_texts(geometry_property: _Element | None, *, context: str) -> list[str | None]:
    """Return the outer-ring coordinate text of every polygon member.

    A member without coordinate text yields ``None`` in its slot.

    Raises:
        NoGeometryError: If there is no geometry property, no MultiPolygon
            or no polygon member.
    """
    if geometry_property is None:
        msg = f"No geometry property in {context}"
        raise NoGeometryError(msg)

    multi = gml_child(geometry_property, MULTI_POLYGON)
    if multi is None:
        msg = f"No gml:{MULTI_POLYGON} in {context}"
        raise NoGeometryError(msg)

    members = gml_children(multi, POLYGON_MEMBER)
    if not members:
        msg = f"gml:{MULTI_POLYGON} has no polygon members in {context}"
        raise NoGeometryError(msg)

    return [_member_coordinates_text(member) for member in members]


def decode_ring_texts(
    texts: Sequence[str | None], reproject: Reprojector, *, context: str
) -> MultiPolygon:
    """Turn outer-ring texts into a ``MultiPolygon``, dropping bad members.

    Raises:
        NoGeometryError: If no member yields a valid ring.
    """
    rings: list[Ring] = []
    for member_idx, text in enumerate(texts):
        label = f"polygon member {member_idx} of {context}"
        if not text:
            logger.warning("Dropping %s: no outer boundary coordinates", label)
            continue
        try:
            ring = validate_ring(parse_coordinates_text(text, reproject), label)
        except MalformedGeometryError as exc:
            logger.warning("Dropping %s: %s", label, exc)
            continue
        rings.append(ring)

    if not rings:
        msg = f"No valid polygon member in {context}"
        raise NoGeometryError(msg)
    return MultiPolygon(polygons=(Polygon(rings=tuple(rings)),))


def parse_coordinates_text(text: str, reproject: Reprojector) -> list[Coordinate]:
    """Parse ``x,y x,y ...`` text to reprojected ``(lon, lat)`` pairs.

    Tokens that do not hold exactly two finite numbers are dropped.
    """
    coords: list[Coordinate] = []
    for token in text.split():
        parts = token.split(COORDINATE_SEPARATOR)
        if len(parts) != 2:
            continue
        try:
            x = float(parts[0])
            y = float(parts[1])
        except ValueError:
            continue
        if not is_finite_pair(x, y):
            continue
        position = reproject(x, y)
        coords.append((position.lng, position.lat))
    return coords


def _member_coordinates_text(member: _Element) -> str | None:
    node: _Element | None = member
    for name in (POLYGON, OUTER_BOUNDARY, LINEAR_RING, COORDINATES):
        node = gml_child(node, name) if node is not None else None
    if node is None or not node.text:
        return None
    return node.text.strip() or None
