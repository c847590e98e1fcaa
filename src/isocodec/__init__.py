"""isocodec: ISO 8583 Message Codec

A Python library for packing and unpacking ISO 8583 financial transaction
messages in their hex wire form: message type indicator (MTI), chained
presence bitmap and dictionary-driven numbered fields.

Key Features:
- Primary, secondary and tertiary bitmaps
- Fixed and variable-length (LLVAR/LLLVAR) alphanumeric and binary fields
- Pydantic-validated field dictionaries, with ISO 8583:1987 built in
- Optional decimal length-prefix framing

Quick Start:
    >>> from isocodec import Message, default_dictionary
    >>>
    >>> message = Message(default_dictionary(), length_prefix=4)
    >>> message.set_mti("0200")
    >>> message.set({2: "4111111111111111", 3: "000000", 4: "000000001000"})
    >>> wire = message.pack()
    >>>
    >>> received = Message(default_dictionary(), length_prefix=4)
    >>> received.unpack(wire)
    >>> received.get_field(4)
    '000000001000'
"""

from __future__ import annotations

import logging

from .codec import AlphaNumericCodec, BinaryCodec, EncodingType, FieldCodec, HexCursor
from .codec import decode_bitmap, encode_bitmap
from .config import MessageConfig
from .dictionary import FieldDictionary, FieldMetadata, default_dictionary
from .exceptions import (
    DictionaryError,
    FieldNotFoundError,
    FramingError,
    InvalidFieldError,
    IsoCodecError,
    PackError,
    UnknownEncodingType,
    UnpackError,
)
from .framing import frame_message, unframe_message
from .message import Message

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Core API
    "Message",
    "MessageConfig",
    # Dictionaries
    "FieldDictionary",
    "FieldMetadata",
    "default_dictionary",
    # Codecs
    "FieldCodec",
    "AlphaNumericCodec",
    "BinaryCodec",
    "EncodingType",
    "HexCursor",
    "encode_bitmap",
    "decode_bitmap",
    # Exceptions
    "IsoCodecError",
    "PackError",
    "UnpackError",
    "FramingError",
    "UnknownEncodingType",
    "FieldNotFoundError",
    "InvalidFieldError",
    "DictionaryError",
    # Framing
    "frame_message",
    "unframe_message",
    # Version
    "__version__",
]
