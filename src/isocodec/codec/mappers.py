"""Per-type field codecs ("mappers") and the encoding type registry.

Each field dictionary entry names an encoding type tag. The tag resolves to a
FieldCodec class, which is instantiated with the field's declared length and
variable-length prefix width:

- Fixed-length fields occupy exactly ``declared_length`` units on the wire.
- Variable-length fields (LLVAR, LLLVAR, ...) carry a decimal ASCII length
  prefix of ``length_digits`` digits followed by at most ``declared_length``
  units.
"""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Optional

from ..exceptions import PackError, UnknownEncodingType, UnpackError
from .cursor import HexCursor

if TYPE_CHECKING:
    from ..dictionary import FieldMetadata


class FieldCodec(ABC):
    """Abstract codec for one field value.

    Subclasses define how a value maps to bytes; this base class handles the
    length rules and the optional length prefix.

    Attributes:
        declared_length: Exact length (fixed) or maximum length (variable)
        length_digits: Width of the decimal length prefix, 0 for fixed-length
    """

    def __init__(self, declared_length: int, length_digits: int = 0) -> None:
        if declared_length < 1:
            raise ValueError(f"declared_length must be >= 1, got {declared_length}")
        if length_digits < 0:
            raise ValueError(f"length_digits must be >= 0, got {length_digits}")
        if length_digits and declared_length >= 10**length_digits:
            raise ValueError(
                f"declared_length {declared_length} does not fit a {length_digits}-digit prefix"
            )
        self.declared_length = declared_length
        self.length_digits = length_digits

    @property
    def is_variable_length(self) -> bool:
        """True when the field carries a length prefix."""
        return self.length_digits > 0

    @abstractmethod
    def to_bytes(self, value: Any) -> bytes:
        """Convert a field value to its raw wire bytes (without length prefix).

        Raises:
            PackError: If the value has the wrong type for this codec
        """

    @abstractmethod
    def from_bytes(self, data: bytes) -> Any:
        """Convert raw wire bytes back to a field value.

        Raises:
            UnpackError: If the bytes cannot be represented by this codec
        """

    def value_length(self, value: Any) -> int:
        """Length of a value in the units the declared length counts."""
        return len(value)

    def validate(self, field_id: int, value: Any) -> None:
        """Check a value against the fixed/variable length rule.

        Raises:
            PackError: If a fixed-length value is not exactly the declared length,
                or a variable-length value exceeds the declared maximum
        """
        try:
            actual = self.value_length(value)
        except TypeError as e:
            raise PackError(
                f"FIELD [{field_id}] has unsupported value type {type(value).__name__}",
                field_id=field_id,
                expected_length=self.declared_length,
                actual_value=value,
            ) from e
        too_long = actual > self.declared_length
        too_short = not self.is_variable_length and actual < self.declared_length
        if too_long or too_short:
            raise PackError(
                f"FIELD [{field_id}] should have length: {self.declared_length} "
                f'and your message "{value}" is {actual}',
                field_id=field_id,
                expected_length=self.declared_length,
                actual_value=value,
                actual_length=actual,
            )

    def pack(self, value: Any) -> str:
        """Pack a value to hex, including the length prefix for variable-length fields."""
        data = self.to_bytes(value)
        prefix = b""
        if self.is_variable_length:
            prefix = f"{len(data):0{self.length_digits}d}".encode("ascii")
        return (prefix + data).hex()

    def unpack(self, cursor: HexCursor) -> tuple[Any, int]:
        """Read one value from the cursor.

        Returns:
            Tuple of (value, bytes consumed including any length prefix)

        Raises:
            UnpackError: If the buffer is truncated or the length prefix is invalid
        """
        consumed = 0
        length = self.declared_length
        if self.is_variable_length:
            raw_prefix = cursor.read_bytes(self.length_digits)
            consumed += self.length_digits
            prefix = raw_prefix.decode("ascii", errors="replace")
            if not prefix.isdigit():
                raise UnpackError(f"Invalid length prefix {prefix!r}")
            length = int(prefix)
            if length > self.declared_length:
                raise UnpackError(
                    f"Length prefix {length} exceeds declared maximum {self.declared_length}"
                )

        data = cursor.read_bytes(length)
        consumed += length
        return self.from_bytes(data), consumed

    def __repr__(self) -> str:
        dots = "." * self.length_digits
        return f"{type(self).__name__}({dots}{self.declared_length})"


class AlphaNumericCodec(FieldCodec):
    """Text fields (``a``, ``n``, ``s``, ``an``, ``as``, ``ns``, ``ans``, ``z``).

    Values are ``str``; each character is one byte on the wire (Latin-1).
    """

    def to_bytes(self, value: Any) -> bytes:
        if not isinstance(value, str):
            raise PackError(f"expected str, got {type(value).__name__}", actual_value=value)
        try:
            return value.encode("latin-1")
        except UnicodeEncodeError as e:
            raise PackError(f"value {value!r} is not single-byte text: {e}", actual_value=value) from e

    def from_bytes(self, data: bytes) -> str:
        return data.decode("latin-1")


class BinaryCodec(FieldCodec):
    """Binary fields (``b``). Values are ``bytes``; the declared length counts bytes."""

    def to_bytes(self, value: Any) -> bytes:
        if not isinstance(value, (bytes, bytearray)):
            raise PackError(f"expected bytes, got {type(value).__name__}", actual_value=value)
        return bytes(value)

    def from_bytes(self, data: bytes) -> bytes:
        return data


class EncodingType(str, enum.Enum):
    """Encoding type tags understood by the field codecs."""

    ALPHA = "a"
    NUMERIC = "n"
    SPECIAL = "s"
    ALPHANUMERIC = "an"
    ALPHA_SPECIAL = "as"
    NUMERIC_SPECIAL = "ns"
    ALPHANUMERIC_SPECIAL = "ans"
    BINARY = "b"
    TRACK = "z"


CODECS: dict[EncodingType, type[FieldCodec]] = {
    EncodingType.ALPHA: AlphaNumericCodec,
    EncodingType.NUMERIC: AlphaNumericCodec,
    EncodingType.SPECIAL: AlphaNumericCodec,
    EncodingType.ALPHANUMERIC: AlphaNumericCodec,
    EncodingType.ALPHA_SPECIAL: AlphaNumericCodec,
    EncodingType.NUMERIC_SPECIAL: AlphaNumericCodec,
    EncodingType.ALPHANUMERIC_SPECIAL: AlphaNumericCodec,
    EncodingType.BINARY: BinaryCodec,
    EncodingType.TRACK: AlphaNumericCodec,
}


def resolve_encoding_type(tag: str, field_id: Optional[int] = None) -> EncodingType:
    """Map a dictionary type tag to an EncodingType.

    Raises:
        UnknownEncodingType: If no codec is registered for the tag
    """
    try:
        return EncodingType(tag)
    except ValueError:
        raise UnknownEncodingType(tag, field_id) from None


def codec_for(metadata: FieldMetadata, field_id: Optional[int] = None) -> FieldCodec:
    """Instantiate the codec for a field's metadata.

    Args:
        metadata: Field dictionary entry
        field_id: Field number, used only for error context

    Returns:
        Codec configured with the entry's declared length and prefix width

    Raises:
        UnknownEncodingType: If the entry's encoding type is not registered
    """
    encoding_type = resolve_encoding_type(metadata.encoding_type, field_id)
    codec_class = CODECS[encoding_type]
    return codec_class(metadata.max_length, metadata.length_digits)
