"""Message inspection CLI commands."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..codec.bitmap import bits_to_hex
from ..codec.mappers import EncodingType, resolve_encoding_type
from ..dictionary import FieldDictionary
from ..exceptions import PackError
from ..message import Message


def describe_message(message: Message) -> None:
    """Print an unpacked message field by field.

    Args:
        message: Message populated by ``unpack``
    """
    bitmap = message.get_bitmap() or ""
    segments = len(bitmap) // 64

    print(f"{'=' * 24} MTI {message.get_mti()} {'=' * 24}")
    print(f"Bitmap ({segments} segment{'s' if segments != 1 else ''}): {bits_to_hex(bitmap)}")
    print(f"{len(message.get_field_ids())} fields present.")
    print()

    for field_id, value in message.get_fields().items():
        metadata = message.dictionary.lookup(field_id)
        encoding = f"{metadata.encoding_type} {metadata.notation}"
        label = f"{field_id:>3}. {metadata.description or 'Field ' + str(field_id)}"
        dots = "." * max(1, 52 - len(label) - len(encoding))
        print(f"{label}{dots}{encoding}  {_render(value)}")

    print()


def load_message(file_path: Path, message: Message) -> None:
    """Populate a message from a JSON description.

    The file holds ``{"mti": "0200", "fields": {"2": "4111...", "52": "0102..."}}``.
    Binary (``b``) fields are given as hex strings.

    Args:
        file_path: JSON file to read
        message: Message to populate

    Raises:
        PackError: If the description is malformed
    """
    try:
        data = json.loads(file_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise PackError(f"Invalid JSON in {file_path}: {e}") from e

    if not isinstance(data, dict) or "mti" not in data:
        raise PackError(f"{file_path}: expected an object with 'mti' and 'fields'")

    message.set_mti(data["mti"])
    message.set(
        {
            int(number): _decode_value(message.dictionary, int(number), value)
            for number, value in data.get("fields", {}).items()
        }
    )


def _decode_value(dictionary: FieldDictionary, field_id: int, value: Any) -> Any:
    if field_id not in dictionary:
        return value
    metadata = dictionary.lookup(field_id)
    if resolve_encoding_type(metadata.encoding_type, field_id) is not EncodingType.BINARY:
        return value
    try:
        return bytes.fromhex(value)
    except (TypeError, ValueError) as e:
        raise PackError(f"FIELD [{field_id}]: binary value must be hex, got {value!r}") from e


def _render(value: Any) -> str:
    if isinstance(value, bytes):
        return f"<{value.hex()}>"
    return repr(value)
