"""Message framing utilities for isocodec.

This module provides the optional decimal length prefix that wraps a packed
message.
"""

from __future__ import annotations

from .prefix import frame_message, unframe_message

__all__ = [
    "frame_message",
    "unframe_message",
]
