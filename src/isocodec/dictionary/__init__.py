"""Field dictionaries for isocodec.

This module provides the FieldDictionary lookup table and the built-in
ISO 8583:1987 field definitions.
"""

from __future__ import annotations

from .base import FieldDictionary, FieldMetadata, parse_length
from .iso1987 import ISO8583_1987_FIELDS, default_dictionary

__all__ = [
    "FieldDictionary",
    "FieldMetadata",
    "parse_length",
    "ISO8583_1987_FIELDS",
    "default_dictionary",
]
