"""Read cursor over a hex-encoded wire buffer.

A single HexCursor is threaded through MTI, bitmap and field decoding so that
every decoder consumes from the same position.
"""

from __future__ import annotations

import binascii

from ..exceptions import UnpackError


class HexCursor:
    """Reads hex characters sequentially from a wire buffer.

    Positions and counts passed to ``read`` are in hex characters; ``read_bytes``
    works in decoded bytes (two hex characters each).

    Example:
        >>> cursor = HexCursor("30323030")
        >>> cursor.read_bytes(4)
        b'0200'
        >>> cursor.remaining()
        0
    """

    def __init__(self, buffer: str, position: int = 0) -> None:
        """Initialize a cursor over the given hex buffer.

        Args:
            buffer: Hex-encoded wire data
            position: Starting offset in hex characters
        """
        if position < 0 or position > len(buffer):
            raise ValueError(f"position must be 0-{len(buffer)}, got {position}")
        self._buffer = buffer
        self._position = position

    @property
    def position(self) -> int:
        """Current read offset in hex characters."""
        return self._position

    def remaining(self) -> int:
        """Return the number of unread hex characters."""
        return len(self._buffer) - self._position

    def peek(self, num_chars: int) -> str:
        """Return the next ``num_chars`` hex characters without consuming them."""
        return self._buffer[self._position : self._position + num_chars]

    def read(self, num_chars: int) -> str:
        """Consume and return ``num_chars`` hex characters.

        Raises:
            UnpackError: If fewer than ``num_chars`` characters remain
        """
        if num_chars < 0:
            raise ValueError(f"num_chars must be >= 0, got {num_chars}")
        if num_chars > self.remaining():
            raise UnpackError(
                f"Truncated message: need {num_chars} hex chars at offset {self._position}, "
                f"have {self.remaining()}"
            )
        chunk = self._buffer[self._position : self._position + num_chars]
        self._position += num_chars
        return chunk

    def read_bytes(self, num_bytes: int) -> bytes:
        """Consume ``num_bytes`` bytes (``2 * num_bytes`` hex characters) and decode them.

        Raises:
            UnpackError: If the buffer is truncated or the characters are not hex
        """
        start = self._position
        chunk = self.read(num_bytes * 2)
        try:
            return binascii.unhexlify(chunk)
        except (binascii.Error, ValueError) as e:
            raise UnpackError(f"Invalid hex data at offset {start}: {chunk!r}") from e

    def rest(self) -> str:
        """Consume and return everything left in the buffer."""
        return self.read(self.remaining())
