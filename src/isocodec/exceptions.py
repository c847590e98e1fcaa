"""Exception hierarchy for isocodec.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from IsoCodecError for easy catching of any isocodec-specific error.
"""

from __future__ import annotations

from typing import Any, Optional


class IsoCodecError(Exception):
    """Base exception for all isocodec errors."""

    pass


class PackError(IsoCodecError):
    """Raised when packing a message fails.

    Examples:
        - Fixed-length field value shorter or longer than declared
        - Variable-length field value longer than the declared maximum
        - Message packed before an MTI was set
        - Body too long for the configured length prefix

    Attributes:
        field_id: Field number that failed validation (None for message-level errors)
        expected_length: Declared (or maximum) length for the field
        actual_value: Offending value
        actual_length: Length of the offending value
    """

    def __init__(
        self,
        message: str,
        *,
        field_id: Optional[int] = None,
        expected_length: Optional[int] = None,
        actual_value: Any = None,
        actual_length: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.field_id = field_id
        self.expected_length = expected_length
        self.actual_value = actual_value
        self.actual_length = actual_length


class UnpackError(IsoCodecError):
    """Raised when decoding a wire buffer fails.

    Examples:
        - MTI is not 4 numeric digits
        - Truncated buffer inside the bitmap or a field
        - Non-hex characters in the buffer
    """

    pass


class FramingError(UnpackError):
    """Raised when the length prefix of a framed message is invalid.

    Examples:
        - Prefix truncated or not decimal
        - Declared length does not match the remaining buffer
    """

    pass


class UnknownEncodingType(IsoCodecError):
    """Raised when a field dictionary names an encoding type with no registered codec."""

    def __init__(self, encoding_type: str, field_id: Optional[int] = None) -> None:
        where = f" (field {field_id})" if field_id is not None else ""
        super().__init__(f'Unknown field mapper for "{encoding_type}" type{where}')
        self.encoding_type = encoding_type
        self.field_id = field_id


class FieldNotFoundError(IsoCodecError, KeyError):
    """Raised when a field number has no entry in the field dictionary."""

    def __init__(self, field_id: int) -> None:
        super().__init__(f"Field {field_id} is not defined in the field dictionary")
        self.field_id = field_id

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class InvalidFieldError(IsoCodecError, ValueError):
    """Raised when a field number cannot be addressed by a bitmap (outside 1-192)."""

    pass


class DictionaryError(IsoCodecError):
    """Raised when field dictionary entries are malformed."""

    pass
