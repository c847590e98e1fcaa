"""ISO 8583 message: MTI, presence bitmap and numbered fields.

This module provides the Message class that packs a field map to the hex wire
format and unpacks a wire buffer back into fields. The wire layout is:

- [Length prefix (optional)] [MTI (4 ASCII bytes)] [Bitmap (8, 16 or 24 bytes)] [Fields]
"""

from __future__ import annotations

import binascii
import logging
import re
from typing import Any, Mapping, Optional

from .codec.bitmap import (
    MARKER_FIELDS,
    MAX_FIELD,
    bitmap_bits,
    bits_to_hex,
    decode_bitmap,
    present_fields,
)
from .codec.cursor import HexCursor
from .codec.mappers import codec_for
from .config import MessageConfig
from .dictionary import FieldDictionary
from .exceptions import InvalidFieldError, PackError, UnpackError
from .framing import frame_message, unframe_message

logger = logging.getLogger(__name__)

_MTI_PATTERN = re.compile(r"[0-9]{4}")
_MTI_HEX_CHARS = 8


class Message:
    """A single ISO 8583 message bound to a field dictionary.

    Fields are populated either by the caller (``set_mti``, ``set``,
    ``set_field``) before ``pack``, or by ``unpack`` from a wire buffer.
    Alphanumeric fields hold ``str`` values, binary fields hold ``bytes``.

    Example:
        >>> from isocodec import Message, default_dictionary
        >>> message = Message(default_dictionary())
        >>> message.set_mti("0200")
        >>> message.set({2: "4111111111111111", 3: "000000"})
        >>> wire = message.pack()
        >>> received = Message(default_dictionary())
        >>> received.unpack(wire)
        >>> received.get_fields()
        {2: '4111111111111111', 3: '000000'}
    """

    def __init__(
        self,
        dictionary: FieldDictionary,
        config: Optional[MessageConfig] = None,
        *,
        length_prefix: Optional[int] = None,
    ) -> None:
        """Initialize an empty message.

        Args:
            dictionary: Field dictionary used to resolve each field's encoding
            config: Packing options
            length_prefix: Shortcut for ``MessageConfig(length_prefix=...)``
        """
        if config is None:
            config = MessageConfig(length_prefix=length_prefix or 0)
        elif length_prefix is not None:
            raise ValueError("Pass either config or length_prefix, not both")

        self.dictionary = dictionary
        self.config = config
        self._mti: Optional[str] = None
        self._bitmap: Optional[str] = None
        self._fields: dict[int, Any] = {}

    def get_mti(self) -> Optional[str]:
        return self._mti

    def set_mti(self, mti: str) -> None:
        """Set the message type indicator.

        Raises:
            UnpackError: If ``mti`` is not a 4-digit numeric string
        """
        _check_mti(mti)
        self._mti = mti

    def set(self, fields: Mapping[int, Any]) -> None:
        """Replace all fields.

        Field numbers may be given as ints or decimal strings. Numbers up to
        192 are accepted so that fields addressed by a tertiary bitmap can be
        set; 1 and 65 are accepted but dropped by ``pack``.

        Raises:
            InvalidFieldError: If a field number is not an integer in 1-192
        """
        validated = {_field_number(number): value for number, value in fields.items()}
        self._fields = validated

    def set_field(self, field_id: int, value: Any) -> None:
        """Set a single field.

        Accepts the same field numbers as ``set`` (1-192, beyond the 2-128 of
        a primary and secondary bitmap).

        Raises:
            InvalidFieldError: If the field number is not an integer in 1-192
        """
        self._fields[_field_number(field_id)] = value

    def get_field(self, field_id: int) -> Any:
        """Return a field value, or None if the field is not set.

        Raises:
            InvalidFieldError: If the field number is not an integer in 1-192
        """
        return self._fields.get(_field_number(field_id))

    def get_field_ids(self) -> list[int]:
        return sorted(self._fields)

    def get_fields(self) -> dict[int, Any]:
        """Return a copy of the fields, ordered by field number."""
        return dict(sorted(self._fields.items()))

    def get_bitmap(self) -> Optional[str]:
        """Return the bitmap as a '0'/'1' string, or None before pack/unpack."""
        return self._bitmap

    def pack(self) -> str:
        """Pack the message to its hex wire form.

        Returns:
            Hex string: optional length prefix, MTI, bitmap and fields

        Raises:
            PackError: If no MTI is set, a field violates its length rule, or the
                message is too long for the configured length prefix
            UnknownEncodingType: If a field's encoding type has no codec
            FieldNotFoundError: If a field is missing from the dictionary
        """
        if self._mti is None:
            raise PackError("Cannot pack a message without an MTI")

        mti = self._mti.encode("ascii").hex()

        for marker in sorted(self._fields.keys() & MARKER_FIELDS):
            logger.debug("Dropping bitmap marker field %d", marker)
            del self._fields[marker]

        bits = bitmap_bits(self._fields)

        packed_fields = []
        for field_id in sorted(self._fields):
            value = self._fields[field_id]
            metadata = self.dictionary.lookup(field_id)
            codec = codec_for(metadata, field_id)
            codec.validate(field_id, value)
            try:
                packed_fields.append(codec.pack(value))
            except PackError as e:
                raise PackError(
                    f"FIELD [{field_id}]: {e}",
                    field_id=field_id,
                    expected_length=codec.declared_length,
                    actual_value=value,
                    actual_length=codec.value_length(value),
                ) from e
            logger.debug("Packed field %d with %r", field_id, codec)

        self._bitmap = bits
        message = mti + bits_to_hex(bits) + "".join(packed_fields)
        return frame_message(message, self.config.length_prefix)

    def unpack(self, message: str) -> None:
        """Populate the message from its hex wire form.

        The MTI, bitmap and fields are replaced only when the whole buffer
        decodes successfully.

        Args:
            message: Hex string as produced by ``pack``

        Raises:
            UnpackError: If the framing, MTI, bitmap or a field is malformed or truncated
            UnknownEncodingType: If a field's encoding type has no codec
            FieldNotFoundError: If a flagged field is missing from the dictionary
        """
        body = unframe_message(message, self.config.length_prefix)
        cursor = HexCursor(body)

        mti_hex = cursor.read(_MTI_HEX_CHARS)
        try:
            mti = binascii.unhexlify(mti_hex).decode("ascii")
        except (binascii.Error, ValueError) as e:
            raise UnpackError(f"Bad MTI field {mti_hex!r}: it should be a 4 digits string") from e
        _check_mti(mti)

        bitmap = decode_bitmap(cursor)
        fields: dict[int, Any] = {}
        for field_id in present_fields(bitmap):
            metadata = self.dictionary.lookup(field_id)
            codec = codec_for(metadata, field_id)
            try:
                value, consumed = codec.unpack(cursor)
            except UnpackError as e:
                raise UnpackError(f"FIELD [{field_id}]: {e}") from e
            logger.debug("Unpacked field %d (%d bytes)", field_id, consumed)
            fields[field_id] = value

        if cursor.remaining():
            logger.warning(
                "Ignoring %d trailing hex chars after field %s",
                cursor.remaining(),
                max(fields, default=None),
            )

        self._mti = mti
        self._bitmap = bitmap
        self._fields = fields

    def __repr__(self) -> str:
        return f"Message(mti={self._mti!r}, fields={self.get_field_ids()})"


def _check_mti(mti: Any) -> None:
    if not isinstance(mti, str) or not _MTI_PATTERN.fullmatch(mti):
        raise UnpackError(f"Bad MTI field {mti!r}: it should be a 4 digits string")


def _field_number(field_id: Any) -> int:
    if isinstance(field_id, str) and field_id.isascii() and field_id.isdigit():
        number = int(field_id)
    elif isinstance(field_id, int) and not isinstance(field_id, bool):
        number = field_id
    else:
        raise InvalidFieldError(f"Invalid field number: {field_id!r}")
    if not 1 <= number <= MAX_FIELD:
        raise InvalidFieldError(f"Field number must be 1-{MAX_FIELD}, got {number}")
    return number
