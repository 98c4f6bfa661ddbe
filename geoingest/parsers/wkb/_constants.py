"""Constants for the WKB-style binary geometry encoding."""

from __future__ import annotations

# Byte-order marker values
LITTLE_ENDIAN_MARKER = 0x01

# Fixed field widths in bytes
BYTE_ORDER_WIDTH = 1
UINT32_WIDTH = 4
FLOAT64_WIDTH = 8
POINT_WIDTH = 2 * FLOAT64_WIDTH

# Top three bits of the type code carry Z / M / SRID extension flags
TYPE_CODE_MASK = 0x1FFFFFFF
SRID_FLAG = 0x20000000

# Header without SRID: order marker + type code
HEADER_WIDTH = BYTE_ORDER_WIDTH + UINT32_WIDTH
