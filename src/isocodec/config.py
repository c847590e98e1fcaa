"""Configuration for message packing and unpacking."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MessageConfig:
    """Options applied to every pack/unpack of a Message.

    Attributes:
        length_prefix: Number of decimal digits in the length prefix that frames
            the whole message (default 0 = no framing). The prefix counts body
            bytes and is carried as ASCII digits, e.g. a 2-digit prefix for a
            20-byte body is ``"20"`` (hex ``3230``).

    Examples:
        ```python
        from isocodec import Message, MessageConfig, default_dictionary

        # Unframed messages
        message = Message(default_dictionary())

        # Messages framed with a 4-digit length
        message = Message(default_dictionary(), MessageConfig(length_prefix=4))
        ```
    """

    length_prefix: int = 0

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if isinstance(self.length_prefix, bool) or not isinstance(self.length_prefix, int):
            raise ValueError(f"length_prefix must be an integer, got {self.length_prefix!r}")

        if self.length_prefix < 0:
            raise ValueError(f"length_prefix must be >= 0, got {self.length_prefix}")

    @property
    def framed(self) -> bool:
        return self.length_prefix > 0
