"""Presence bitmap encoding and decoding.

A bitmap is a chain of 64-bit segments. Bit 1 of the primary segment flags a
secondary segment, bit 65 (the first bit of the secondary) flags a tertiary
one. Both are continuation markers, never data fields.
"""

from __future__ import annotations

import logging
import string
from typing import Iterable

from ..exceptions import UnpackError
from .cursor import HexCursor

logger = logging.getLogger(__name__)

SEGMENT_BITS = 64
SEGMENT_HEX_CHARS = SEGMENT_BITS // 4
MARKER_FIELDS = frozenset({1, 65})
MAX_FIELD = 3 * SEGMENT_BITS

# Another segment is only read while the accumulated bitmap is at most this long
_CONTINUATION_LIMIT = 128


def bitmap_length(field_ids: Iterable[int]) -> int:
    """Return the number of bitmap bits needed to address the given fields.

    The result is the smallest multiple of 64 that covers the highest field
    number, or 64 when there are no data fields.

    Example:
        >>> bitmap_length([2, 64])
        64
        >>> bitmap_length([2, 65, 70])
        128
    """
    data_fields = [i for i in field_ids if i not in MARKER_FIELDS]
    if not data_fields:
        return SEGMENT_BITS
    highest = max(data_fields)
    return -(-highest // SEGMENT_BITS) * SEGMENT_BITS


def bitmap_bits(field_ids: Iterable[int]) -> str:
    """Build the bitmap for a field set as a string of '0'/'1' characters.

    Args:
        field_ids: Field numbers present in the message. 1 and 65 are ignored.

    Returns:
        Bit string of length 64, 128 or 192
    """
    present = {i for i in field_ids if i not in MARKER_FIELDS}
    length = bitmap_length(present)

    bits = []
    for i in range(1, length + 1):
        if (
            i in present
            or (i == 1 and length > SEGMENT_BITS)
            or (i == 65 and length > 2 * SEGMENT_BITS)
        ):
            bits.append("1")
        else:
            bits.append("0")
    return "".join(bits)


def bits_to_hex(bits: str) -> str:
    """Render a bit string as hex, one nibble per 4 bits, MSB first."""
    return "".join(f"{int(bits[i : i + 4], 2):x}" for i in range(0, len(bits), 4))


def hex_to_bits(hex_digits: str) -> str:
    """Expand hex digits to a bit string, 4 zero-padded bits per digit.

    Raises:
        UnpackError: If a character is not a hex digit
    """
    if not all(digit in string.hexdigits for digit in hex_digits):
        raise UnpackError(f"Invalid hex in bitmap: {hex_digits!r}")
    return "".join(f"{int(digit, 16):04b}" for digit in hex_digits)


def encode_bitmap(field_ids: Iterable[int]) -> str:
    """Encode the presence bitmap for a field set as hex.

    Example:
        >>> encode_bitmap([2, 3])
        '6000000000000000'
    """
    bits = bitmap_bits(field_ids)
    logger.debug("Encoded %d-bit bitmap", len(bits))
    return bits_to_hex(bits)


def decode_bitmap(cursor: HexCursor) -> str:
    """Decode a chained bitmap from the cursor position.

    Segments are read while the latest segment's first bit is set and the
    accumulated bitmap does not exceed 128 bits, so at most three segments
    are consumed.

    Args:
        cursor: Cursor positioned at the start of the primary bitmap

    Returns:
        Bit string of length 64, 128 or 192

    Raises:
        UnpackError: If the buffer ends mid-segment or contains non-hex data
    """
    bitmap = ""
    while True:
        try:
            segment = hex_to_bits(cursor.read(SEGMENT_HEX_CHARS))
        except UnpackError as e:
            raise UnpackError(f"Cannot read bitmap segment {len(bitmap) // 64 + 1}: {e}") from e
        bitmap += segment

        if segment[0] != "1" or len(bitmap) > _CONTINUATION_LIMIT:
            break

    logger.debug("Decoded %d-bit bitmap", len(bitmap))
    return bitmap


def present_fields(bitmap: str) -> list[int]:
    """Return the data field numbers flagged in a bit string, ascending.

    Continuation markers (1 and 65) are excluded.
    """
    return [
        i
        for i, bit in enumerate(bitmap, start=1)
        if bit == "1" and i not in MARKER_FIELDS
    ]
