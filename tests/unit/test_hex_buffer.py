"""Tests for the HexBuffer reader.

Covers:
- Hex text decoding (case, whitespace, invalid digits, odd length)
- Byte-order marker handling
- uint32 / float64 reads in both byte orders
- Reads past the end of the buffer
"""

from __future__ import annotations

import struct

import pytest

from geoingest.core.exceptions import MalformedBufferError
from geoingest.parsers.wkb import ByteOrder, HexBuffer


class TestFromHex:
    """Hex text → bytes."""

    def test_decodes_lowercase(self) -> None:
        assert len(HexBuffer.from_hex("01ff")) == 2

    def test_case_insensitive(self) -> None:
        lower = HexBuffer.from_hex("0a0b")
        upper = HexBuffer.from_hex("0A0B")
        assert lower.read_byte(0) == upper.read_byte(0)

    def test_whitespace_stripped(self) -> None:
        buf = HexBuffer.from_hex("  01 02\n03\t04  ")
        assert len(buf) == 4
        assert buf.read_byte(3) == (4, 4)

    def test_invalid_character_rejected(self) -> None:
        with pytest.raises(MalformedBufferError, match="Invalid hex"):
            HexBuffer.from_hex("01zz")

    def test_odd_length_rejected(self) -> None:
        with pytest.raises(MalformedBufferError):
            HexBuffer.from_hex("010")

    def test_empty_rejected(self) -> None:
        with pytest.raises(MalformedBufferError, match="Empty"):
            HexBuffer.from_hex("   ")


class TestByteOrder:
    """The 1-byte order marker."""

    def test_little_endian_marker(self) -> None:
        order, offset = HexBuffer(b"\x01").read_byte_order(0)
        assert order is ByteOrder.LITTLE
        assert offset == 1

    def test_big_endian_marker_rejected(self) -> None:
        with pytest.raises(MalformedBufferError, match="0x00"):
            HexBuffer(b"\x00").read_byte_order(0)

    def test_garbage_marker_rejected(self) -> None:
        with pytest.raises(MalformedBufferError, match="0x7F"):
            HexBuffer(b"\x7f").read_byte_order(0)


class TestFixedWidthReads:
    """uint32 and float64 reads."""

    def test_uint32_little(self) -> None:
        buf = HexBuffer(struct.pack("<I", 3))
        assert buf.read_uint32(0, ByteOrder.LITTLE) == (3, 4)

    def test_uint32_big(self) -> None:
        buf = HexBuffer(struct.pack(">I", 3))
        assert buf.read_uint32(0, ByteOrder.BIG) == (3, 4)

    def test_float64_little(self) -> None:
        buf = HexBuffer(struct.pack("<d", 21.5))
        assert buf.read_float64(0, ByteOrder.LITTLE) == (21.5, 8)

    def test_float64_big(self) -> None:
        buf = HexBuffer(struct.pack(">d", -0.25))
        assert buf.read_float64(0, ByteOrder.BIG) == (-0.25, 8)

    def test_offset_is_advanced_not_stored(self) -> None:
        buf = HexBuffer(struct.pack("<II", 7, 9))
        first, offset = buf.read_uint32(0, ByteOrder.LITTLE)
        second, end = buf.read_uint32(offset, ByteOrder.LITTLE)
        again, _ = buf.read_uint32(0, ByteOrder.LITTLE)
        assert (first, second, end, again) == (7, 9, 8, 7)

    def test_uint32_past_end(self) -> None:
        with pytest.raises(MalformedBufferError, match="Need 4 byte"):
            HexBuffer(b"\x01\x02\x03").read_uint32(0, ByteOrder.LITTLE)

    def test_float64_past_end(self) -> None:
        buf = HexBuffer(struct.pack("<d", 1.0))
        with pytest.raises(MalformedBufferError):
            buf.read_float64(4, ByteOrder.LITTLE)

    def test_remaining(self) -> None:
        buf = HexBuffer(b"\x00" * 10)
        assert buf.remaining(0) == 10
        assert buf.remaining(7) == 3
        assert buf.remaining(12) == 0
