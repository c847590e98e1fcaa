"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from isocodec import FieldDictionary, Message, default_dictionary


@pytest.fixture
def card_dictionary() -> FieldDictionary:
    """Small dictionary with fixed, LLVAR and binary fields across all three bitmaps."""
    return FieldDictionary(
        {
            2: ("n", "..19", "Primary account number"),
            3: ("n", 6, "Processing code"),
            4: ("n", 12, "Amount, transaction"),
            39: ("an", 2, "Response code"),
            48: ("ans", "...999", "Additional data"),
            52: ("b", 8, "PIN data"),
            64: ("b", 8, "MAC"),
            70: ("n", 3, "Network management code"),
            102: ("ans", "..28", "Account identification"),
            130: ("an", 4, "Extension"),
            192: ("b", 8, "Extension MAC"),
        },
        name="cards",
    )


@pytest.fixture
def iso_dictionary() -> FieldDictionary:
    """Built-in ISO 8583:1987 dictionary."""
    return default_dictionary()


@pytest.fixture
def authorization(card_dictionary: FieldDictionary) -> Message:
    """0200 authorization request with a PAN and processing code."""
    message = Message(card_dictionary)
    message.set_mti("0200")
    message.set({2: "4111111111111111", 3: "000000"})
    return message


@pytest.fixture
def authorization_wire() -> str:
    """Hex wire form of the ``authorization`` fixture."""
    return (
        "30323030"  # MTI "0200"
        "6000000000000000"  # bitmap: fields 2 and 3
        "3136"  # LLVAR length "16"
        "34313131313131313131313131313131"  # "4111111111111111"
        "303030303030"  # "000000"
    )
