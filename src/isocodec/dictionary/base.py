"""Field dictionary: maps field numbers to encoding type and length.

Entries follow the compact field-table notation used by ISO 8583 references:
the length is either a plain integer (fixed-length) or a string with one
leading dot per digit of the length prefix (``"..19"`` is LLVAR up to 19,
``"...999"`` is LLLVAR up to 999).
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterator, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, model_validator

from ..exceptions import DictionaryError, FieldNotFoundError

logger = logging.getLogger(__name__)

# 1 and 65 are bitmap continuation markers and cannot carry data
RESERVED_FIELDS = frozenset({1, 65})
MAX_FIELD_NUMBER = 192


def parse_length(length: Union[int, str]) -> tuple[int, int]:
    """Split a field-table length into (max_length, length_digits).

    Example:
        >>> parse_length("..19")
        (19, 2)
        >>> parse_length(6)
        (6, 0)

    Raises:
        ValueError: If the notation is not recognized
    """
    if isinstance(length, bool):
        raise ValueError(f"Invalid field length: {length!r}")
    if isinstance(length, int):
        return length, 0

    text = str(length).strip()
    digits = len(text) - len(text.lstrip("."))
    number = text[digits:]
    if not number.isdigit():
        raise ValueError(f"Invalid field length: {length!r}")
    return int(number), digits


class FieldMetadata(BaseModel):
    """Encoding rules for one field.

    Attributes:
        encoding_type: Type tag (``n``, ``an``, ``b``, ...) resolved to a codec at pack/unpack time
        max_length: Exact length for fixed fields, maximum for variable-length ones
        length_digits: Digits in the length prefix, 0 for fixed-length fields
        description: Human-readable field name
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    encoding_type: str = Field(alias="type", min_length=1)
    max_length: int = Field(ge=1)
    length_digits: int = Field(default=0, ge=0, le=9)
    description: str = ""

    @model_validator(mode="before")
    @classmethod
    def _expand_notation(cls, data: Any) -> Any:
        # ("n", "..19", "PAN") tuples and {"type": ..., "length": ...} mappings
        if isinstance(data, (tuple, list)):
            if len(data) not in (2, 3):
                raise ValueError(f"Expected (type, length[, description]), got {data!r}")
            data = dict(zip(("type", "length", "description"), data))

        if isinstance(data, Mapping) and "length" in data:
            data = dict(data)
            max_length, length_digits = parse_length(data.pop("length"))
            data.setdefault("max_length", max_length)
            data.setdefault("length_digits", length_digits)
        return data

    @model_validator(mode="after")
    def _check_prefix_width(self) -> FieldMetadata:
        if self.length_digits and self.max_length >= 10**self.length_digits:
            raise ValueError(
                f"max_length {self.max_length} does not fit a {self.length_digits}-digit prefix"
            )
        return self

    @property
    def is_variable_length(self) -> bool:
        return self.length_digits > 0

    @property
    def notation(self) -> str:
        """Length in field-table notation, e.g. ``..19``."""
        return "." * self.length_digits + str(self.max_length)


_ENTRIES = TypeAdapter(dict[int, FieldMetadata])


class FieldDictionary:
    """Read-only table of field definitions.

    Example:
        >>> fields = FieldDictionary({2: ("n", "..19"), 3: ("n", 6)})
        >>> fields.lookup(2).max_length
        19
        >>> 4 in fields
        False
    """

    def __init__(self, entries: Mapping[Any, Any], name: str = "custom") -> None:
        """Build a dictionary from raw or already-validated entries.

        Args:
            entries: Mapping of field number to FieldMetadata, a
                ``{"type", "length"}`` mapping or a ``(type, length[, description])`` tuple
            name: Label used in logs and CLI output

        Raises:
            DictionaryError: If an entry is malformed or a field number is not addressable
        """
        try:
            fields = _ENTRIES.validate_python(dict(entries))
        except ValidationError as e:
            raise DictionaryError(f"Invalid field dictionary {name!r}: {e}") from e

        for number in fields:
            if number in RESERVED_FIELDS or not 2 <= number <= MAX_FIELD_NUMBER:
                raise DictionaryError(
                    f"Invalid field dictionary {name!r}: field {number} cannot carry data"
                )

        self.name = name
        self._fields: dict[int, FieldMetadata] = dict(sorted(fields.items()))
        logger.debug("Loaded field dictionary %r with %d fields", name, len(self._fields))

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> FieldDictionary:
        """Load a dictionary from a JSON object keyed by field number.

        Example file::

            {"2": {"type": "n", "length": "..19"}, "3": {"type": "n", "length": 6}}

        Raises:
            DictionaryError: If the file is not valid JSON or an entry is malformed
        """
        path = Path(path)
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise DictionaryError(f"Invalid JSON in {path}: {e}") from e
        if not isinstance(raw, dict):
            raise DictionaryError(f"{path}: expected a JSON object keyed by field number")
        return cls(raw, name=path.stem)

    def lookup(self, field_id: int) -> FieldMetadata:
        """Return the metadata for a field.

        Raises:
            FieldNotFoundError: If the field is not defined
        """
        try:
            return self._fields[field_id]
        except KeyError:
            raise FieldNotFoundError(field_id) from None

    def to_dict(self) -> dict[str, dict[str, Any]]:
        """Serialize back to the JSON shape accepted by ``from_file``."""
        result: dict[str, dict[str, Any]] = {}
        for number, meta in self._fields.items():
            entry: dict[str, Any] = {"type": meta.encoding_type, "length": meta.notation}
            if not meta.is_variable_length:
                entry["length"] = meta.max_length
            if meta.description:
                entry["description"] = meta.description
            result[str(number)] = entry
        return result

    def __contains__(self, field_id: object) -> bool:
        return field_id in self._fields

    def __iter__(self) -> Iterator[int]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"FieldDictionary(name={self.name!r}, fields={len(self._fields)})"
