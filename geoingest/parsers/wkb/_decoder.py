"""Binary (WKB-style) polygon decoder.

Layout: ``[1-byte order][uint32 type]([uint32 SRID])?[body]`` where a
Polygon body is ``[uint32 rings]{[uint32 points][points x (f64 x, f64 y)]}``.

Every declared count is checked against the remaining bytes before the
loop it drives, so a corrupt count fails the record instead of reading
out of bounds. Only Polygon is decoded; other base types come back as
``UnsupportedGeometry``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from geoingest.core.exceptions import MalformedGeometryError
from geoingest.models.geometry import GeometryType, Polygon, UnsupportedGeometry
from geoingest.parsers._rings import validate_ring
from geoingest.parsers.wkb._constants import (
    HEADER_WIDTH,
    POINT_WIDTH,
    SRID_FLAG,
    TYPE_CODE_MASK,
    UINT32_WIDTH,
)

if TYPE_CHECKING:
    from geoingest.core.reprojection import Reprojector
    from geoingest.models.geometry import Coordinate, Ring
    from geoingest.parsers.wkb._buffer import ByteOrder, HexBuffer

logger = logging.getLogger("geoingest.parsers.wkb")


def decode_wkb(
    buffer: HexBuffer, reproject: Reprojector, *, context: str = "record"
) -> Polygon | UnsupportedGeometry:
    """Decode one geometry record.

    Args:
        buffer: The record's bytes.
        reproject: Maps each source ``(x, y)`` to WGS 84.
        context: Label used in error messages (e.g. ``"row 3"``).

    Returns:
        A ``Polygon`` with closed rings, or ``UnsupportedGeometry`` for any
        other base type code.

    Raises:
        MalformedBufferError: If a fixed-width read runs past the end or the
            byte-order marker is not little-endian.
        MalformedGeometryError: If a count overruns the buffer, a ring has
            fewer than 3 points, or a reprojected coordinate is non-finite.
    """
    byte_order, offset = buffer.read_byte_order(0)
    raw_type, offset = buffer.read_uint32(offset, byte_order)
    type_code = raw_type & TYPE_CODE_MASK

    if has_srid_prefix(buffer, byte_order, raw_type):
        srid, offset = buffer.read_uint32(offset, byte_order)
        logger.debug("Skipping SRID %d in %s", srid, context)

    if type_code != GeometryType.POLYGON:
        return UnsupportedGeometry(type_code)

    polygon, offset = _decode_polygon(buffer, offset, byte_order, reproject, context)
    if buffer.remaining(offset):
        logger.debug("Ignoring %d trailing byte(s) in %s", buffer.remaining(offset), context)
    return polygon


def has_srid_prefix(buffer: HexBuffer, byte_order: ByteOrder, raw_type: int) -> bool:
    """Decide whether a 4-byte SRID follows the type code.

    True when the SRID flag bit is set. Producers that omit the flag are
    detected structurally: the polygon body fits the buffer exactly only
    if four extra bytes are skipped after the header. This is stricter than
    treating every record that starts with ``01`` and is at least 18 hex
    characters long as carrying an SRID, but it is still a guess: a plain
    polygon followed by trailing bytes is misread when the walk shifted by
    four bytes happens to end exactly at the buffer end.
    """
    if raw_type & SRID_FLAG:
        return True
    if raw_type & TYPE_CODE_MASK != GeometryType.POLYGON:
        return False
    end = len(buffer)
    return (
        _polygon_body_end(buffer, HEADER_WIDTH, byte_order) != end
        and _polygon_body_end(buffer, HEADER_WIDTH + UINT32_WIDTH, byte_order) == end
    )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _polygon_body_end(buffer: HexBuffer, offset: int, byte_order: ByteOrder) -> int | None:
    """Walk the polygon counts from ``offset``; return the end offset or None."""
    if buffer.remaining(offset) < UINT32_WIDTH:
        return None
    ring_count, offset = buffer.read_uint32(offset, byte_order)
    if ring_count * UINT32_WIDTH > buffer.remaining(offset):
        return None
    for _ in range(ring_count):
        if buffer.remaining(offset) < UINT32_WIDTH:
            return None
        point_count, offset = buffer.read_uint32(offset, byte_order)
        offset += point_count * POINT_WIDTH
        if offset > len(buffer):
            return None
    return offset


def _decode_polygon(
    buffer: HexBuffer,
    offset: int,
    byte_order: ByteOrder,
    reproject: Reprojector,
    context: str,
) -> tuple[Polygon, int]:
    ring_count, offset = buffer.read_uint32(offset, byte_order)
    if ring_count == 0:
        msg = f"Polygon has no rings in {context}"
        raise MalformedGeometryError(msg)
    if ring_count * UINT32_WIDTH > buffer.remaining(offset):
        msg = (
            f"Ring count {ring_count} overruns the {buffer.remaining(offset)} "
            f"remaining byte(s) in {context}"
        )
        raise MalformedGeometryError(msg)

    rings: list[Ring] = []
    for ring_idx in range(ring_count):
        ring, offset = _decode_ring(
            buffer, offset, byte_order, reproject, f"ring {ring_idx} of {context}"
        )
        rings.append(ring)
    return Polygon(rings=tuple(rings)), offset


def _decode_ring(
    buffer: HexBuffer,
    offset: int,
    byte_order: ByteOrder,
    reproject: Reprojector,
    context: str,
) -> tuple[Ring, int]:
    point_count, offset = buffer.read_uint32(offset, byte_order)
    if point_count * POINT_WIDTH > buffer.remaining(offset):
        msg = (
            f"Point count {point_count} overruns the {buffer.remaining(offset)} "
            f"remaining byte(s) in {context}"
        )
        raise MalformedGeometryError(msg)

    coords: list[Coordinate] = []
    for _ in range(point_count):
        x, offset = buffer.read_float64(offset, byte_order)
        y, offset = buffer.read_float64(offset, byte_order)
        position = reproject(x, y)
        coords.append((position.lng, position.lat))

    return validate_ring(coords, context), offset
