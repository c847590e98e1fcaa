"""Unit tests for message configuration."""

from __future__ import annotations

import pytest

from isocodec import Message, MessageConfig


class TestMessageConfig:
    """Test MessageConfig validation."""

    def test_defaults(self) -> None:
        config = MessageConfig()

        assert config.length_prefix == 0
        assert not config.framed

    def test_framed(self) -> None:
        assert MessageConfig(length_prefix=4).framed

    def test_negative(self) -> None:
        with pytest.raises(ValueError, match="length_prefix must be >= 0"):
            MessageConfig(length_prefix=-1)

    @pytest.mark.parametrize("bad", [2.0, "2", True])
    def test_not_integer(self, bad: object) -> None:
        with pytest.raises(ValueError, match="must be an integer"):
            MessageConfig(length_prefix=bad)  # type: ignore[arg-type]


class TestMessageOptions:
    """Test how Message accepts its configuration."""

    def test_length_prefix_shortcut(self, card_dictionary) -> None:
        message = Message(card_dictionary, length_prefix=2)
        assert message.config == MessageConfig(length_prefix=2)

    def test_default_unframed(self, card_dictionary) -> None:
        assert Message(card_dictionary).config.length_prefix == 0

    def test_both_rejected(self, card_dictionary) -> None:
        with pytest.raises(ValueError, match="either config or length_prefix"):
            Message(card_dictionary, MessageConfig(length_prefix=2), length_prefix=2)
