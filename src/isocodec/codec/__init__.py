"""Wire-level codec for isocodec.

This module provides the hex cursor, the presence bitmap engine and the
per-type field codecs used by Message to pack and unpack ISO 8583 messages.
"""

from __future__ import annotations

from .bitmap import bitmap_bits, bitmap_length, decode_bitmap, encode_bitmap, present_fields
from .cursor import HexCursor
from .mappers import (
    AlphaNumericCodec,
    BinaryCodec,
    EncodingType,
    FieldCodec,
    codec_for,
    resolve_encoding_type,
)

__all__ = [
    "HexCursor",
    "encode_bitmap",
    "decode_bitmap",
    "bitmap_bits",
    "bitmap_length",
    "present_fields",
    "FieldCodec",
    "AlphaNumericCodec",
    "BinaryCodec",
    "EncodingType",
    "codec_for",
    "resolve_encoding_type",
]
