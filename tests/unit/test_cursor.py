"""Unit tests for the hex read cursor."""

from __future__ import annotations

import pytest

from isocodec.codec.cursor import HexCursor
from isocodec.exceptions import UnpackError


class TestHexCursor:
    """Test HexCursor functionality."""

    def test_read_advances(self) -> None:
        """Test sequential reads consume the buffer."""
        cursor = HexCursor("30323030ff")

        assert cursor.read(8) == "30323030"
        assert cursor.position == 8
        assert cursor.remaining() == 2
        assert cursor.read(2) == "ff"
        assert cursor.remaining() == 0

    def test_read_bytes(self) -> None:
        """Test reading decoded bytes."""
        cursor = HexCursor("303230301234")

        assert cursor.read_bytes(4) == b"0200"
        assert cursor.read_bytes(2) == b"\x12\x34"

    def test_peek_does_not_consume(self) -> None:
        """Test peeking leaves the position unchanged."""
        cursor = HexCursor("abcd")

        assert cursor.peek(2) == "ab"
        assert cursor.position == 0

    def test_rest(self) -> None:
        """Test consuming the remainder."""
        cursor = HexCursor("aabbcc", position=2)

        assert cursor.rest() == "bbcc"
        assert cursor.remaining() == 0

    def test_truncation_error(self) -> None:
        """Test error on reading past end."""
        cursor = HexCursor("abcd")

        with pytest.raises(UnpackError, match="Truncated"):
            cursor.read(6)

        # Failed reads do not move the cursor
        assert cursor.position == 0

    def test_invalid_hex(self) -> None:
        """Test error on non-hex data."""
        with pytest.raises(UnpackError, match="Invalid hex"):
            HexCursor("zz").read_bytes(1)

    def test_invalid_position(self) -> None:
        """Test starting position bounds."""
        with pytest.raises(ValueError, match="position"):
            HexCursor("ab", position=3)
