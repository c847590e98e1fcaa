"""Unit tests for bitmap encoding and decoding."""

from __future__ import annotations

import pytest

from isocodec.codec.bitmap import (
    bitmap_bits,
    bitmap_length,
    bits_to_hex,
    decode_bitmap,
    encode_bitmap,
    hex_to_bits,
    present_fields,
)
from isocodec.codec.cursor import HexCursor
from isocodec.exceptions import UnpackError


class TestBitmapLength:
    """Test bitmap sizing from the field set."""

    def test_no_fields(self) -> None:
        """Test empty field set uses a single segment."""
        assert bitmap_length([]) == 64

    def test_field_64_stays_primary(self) -> None:
        """Test highest field exactly 64 does not add a secondary bitmap."""
        assert bitmap_length([2, 64]) == 64

    def test_secondary(self) -> None:
        """Test fields 65-128 need two segments."""
        assert bitmap_length([3, 66]) == 128
        assert bitmap_length([128]) == 128

    def test_tertiary(self) -> None:
        """Test fields above 128 need three segments."""
        assert bitmap_length([129]) == 192
        assert bitmap_length([2, 192]) == 192

    def test_markers_ignored(self) -> None:
        """Test 1 and 65 do not count as data."""
        assert bitmap_length([1, 65]) == 64
        assert bitmap_length([3, 65]) == 64


class TestEncodeBitmap:
    """Test bitmap encoding."""

    def test_primary_only(self) -> None:
        """Test fields 2 and 3 set the second and third bits."""
        assert encode_bitmap([2, 3]) == "6000000000000000"

    def test_empty(self) -> None:
        """Test empty field set encodes an all-zero primary bitmap."""
        assert encode_bitmap([]) == "0" * 16

    def test_field_64(self) -> None:
        """Test last bit of the primary bitmap."""
        assert encode_bitmap([64]) == "0000000000000001"

    def test_secondary_sets_continuation_bit(self) -> None:
        """Test bit 1 is set when a secondary bitmap follows."""
        assert encode_bitmap([70]) == "8000000000000000" + "0400000000000000"

    def test_tertiary_sets_both_continuation_bits(self) -> None:
        """Test bits 1 and 65 are set when a tertiary bitmap follows."""
        assert encode_bitmap([130]) == (
            "8000000000000000" + "8000000000000000" + "4000000000000000"
        )

    def test_marker_fields_not_encoded_as_data(self) -> None:
        """Test caller-supplied 1 and 65 never set bits on their own."""
        assert encode_bitmap([1, 3, 65]) == "2000000000000000"

    def test_bits_and_hex_agree(self) -> None:
        """Test the bit string and hex forms describe the same bitmap."""
        fields = [2, 4, 11, 39, 70, 102]
        bits = bitmap_bits(fields)

        assert len(bits) == 128
        assert bits_to_hex(bits) == encode_bitmap(fields)
        assert present_fields(bits) == fields


class TestDecodeBitmap:
    """Test bitmap decoding from a cursor."""

    def test_primary(self) -> None:
        """Test decoding a single segment stops without continuation."""
        cursor = HexCursor("6000000000000000" + "ffff")
        bitmap = decode_bitmap(cursor)

        assert len(bitmap) == 64
        assert present_fields(bitmap) == [2, 3]
        assert cursor.remaining() == 4

    def test_secondary(self) -> None:
        """Test decoding follows the continuation bit."""
        cursor = HexCursor("8000000000000000" + "0400000000000000")
        bitmap = decode_bitmap(cursor)

        assert len(bitmap) == 128
        assert present_fields(bitmap) == [70]
        assert cursor.remaining() == 0

    def test_tertiary(self) -> None:
        """Test decoding three chained segments."""
        cursor = HexCursor("8000000000000000" + "8000000000000000" + "4000000000000000")
        bitmap = decode_bitmap(cursor)

        assert len(bitmap) == 192
        assert present_fields(bitmap) == [130]

    def test_stops_after_three_segments(self) -> None:
        """Test a continuation bit in the tertiary bitmap is not followed."""
        segment = "8000000000000000"
        cursor = HexCursor(segment * 4)
        bitmap = decode_bitmap(cursor)

        assert len(bitmap) == 192
        assert cursor.remaining() == 16

    def test_lowercase_and_uppercase(self) -> None:
        """Test hex digits decode regardless of case."""
        upper = decode_bitmap(HexCursor("7F00000000000000"))

        assert upper == decode_bitmap(HexCursor("7f00000000000000"))
        assert present_fields(upper) == [2, 3, 4, 5, 6, 7, 8]

    def test_uppercase_secondary(self) -> None:
        """Test an upper-case continuation bit is followed into the secondary."""
        cursor = HexCursor(("F000000000000000" + "0A00000000000000").upper())
        bitmap = decode_bitmap(cursor)

        assert len(bitmap) == 128
        assert present_fields(bitmap) == [2, 3, 4, 69, 71]
        assert cursor.remaining() == 0

    @pytest.mark.parametrize("digit", ["６", "٦", "²"])
    def test_non_ascii_digit(self, digit: str) -> None:
        """Test Unicode digits outside ASCII are not hex."""
        with pytest.raises(UnpackError, match="Invalid hex"):
            decode_bitmap(HexCursor(digit + "0" * 15))

    def test_truncated_primary(self) -> None:
        """Test error on a primary bitmap shorter than 16 hex chars."""
        with pytest.raises(UnpackError, match="bitmap segment 1"):
            decode_bitmap(HexCursor("60000000"))

    def test_truncated_secondary(self) -> None:
        """Test error when the continuation bit promises a missing segment."""
        with pytest.raises(UnpackError, match="bitmap segment 2"):
            decode_bitmap(HexCursor("8000000000000000" + "0400"))

    def test_invalid_hex(self) -> None:
        """Test error on non-hex characters."""
        with pytest.raises(UnpackError, match="Invalid hex"):
            decode_bitmap(HexCursor("60000000000000zz"))


def test_hex_to_bits_pads_each_digit() -> None:
    """Test every hex digit expands to exactly four bits."""
    assert hex_to_bits("1") == "0001"
    assert hex_to_bits("a5") == "10100101"
