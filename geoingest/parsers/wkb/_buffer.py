"""Byte-order-aware cursor reads over a decoded hex buffer.

The reader holds only the immutable bytes. Every read takes an offset and
returns ``(value, new_offset)``, so the position is owned by the caller and
never shared between concurrent decodes.
"""

from __future__ import annotations

import re
import struct
from enum import Enum

from geoingest.core.exceptions import MalformedBufferError
from geoingest.parsers.wkb._constants import (
    BYTE_ORDER_WIDTH,
    FLOAT64_WIDTH,
    LITTLE_ENDIAN_MARKER,
    UINT32_WIDTH,
)

_WHITESPACE = re.compile(r"\s+")


class ByteOrder(Enum):
    """Byte order of multi-byte fields, valued by its ``struct`` prefix."""

    LITTLE = "<"
    BIG = ">"


class HexBuffer:
    """Read-only view over one geometry record's bytes."""

    __slots__ = ("_data",)

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)

    @classmethod
    def from_hex(cls, text: str) -> HexBuffer:
        """Decode hex text (case-insensitive, whitespace ignored).

        Raises:
            MalformedBufferError: If the text is empty, has an odd number of
                digits, or contains non-hex characters.
        """
        cleaned = _WHITESPACE.sub("", text or "")
        if not cleaned:
            msg = "Empty hex geometry string"
            raise MalformedBufferError(msg)
        try:
            return cls(bytes.fromhex(cleaned))
        except ValueError as exc:
            msg = f"Invalid hex geometry string ({len(cleaned)} chars): {exc}"
            raise MalformedBufferError(msg) from exc

    def __len__(self) -> int:
        return len(self._data)

    def remaining(self, offset: int) -> int:
        """Number of bytes left after ``offset``."""
        return max(len(self._data) - offset, 0)

    def _require(self, offset: int, width: int) -> None:
        if offset < 0 or self.remaining(offset) < width:
            msg = (
                f"Need {width} byte(s) at offset {offset}, "
                f"only {self.remaining(offset)} of {len(self._data)} remain"
            )
            raise MalformedBufferError(msg)

    def read_byte(self, offset: int) -> tuple[int, int]:
        self._require(offset, BYTE_ORDER_WIDTH)
        return self._data[offset], offset + BYTE_ORDER_WIDTH

    def read_byte_order(self, offset: int) -> tuple[ByteOrder, int]:
        """Read the 1-byte order marker; only little-endian is accepted.

        Raises:
            MalformedBufferError: For any marker other than ``0x01``.
        """
        marker, offset = self.read_byte(offset)
        if marker != LITTLE_ENDIAN_MARKER:
            msg = f"Unsupported byte-order marker 0x{marker:02X} (expected 0x01)"
            raise MalformedBufferError(msg)
        return ByteOrder.LITTLE, offset

    def read_uint32(self, offset: int, byte_order: ByteOrder) -> tuple[int, int]:
        self._require(offset, UINT32_WIDTH)
        (value,) = struct.unpack_from(f"{byte_order.value}I", self._data, offset)
        return value, offset + UINT32_WIDTH

    def read_float64(self, offset: int, byte_order: ByteOrder) -> tuple[float, int]:
        self._require(offset, FLOAT64_WIDTH)
        (value,) = struct.unpack_from(f"{byte_order.value}d", self._data, offset)
        return value, offset + FLOAT64_WIDTH
