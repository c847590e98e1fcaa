"""Decimal length-prefix framing.

A framed message is ``[length][body]`` where ``length`` is the body size in
bytes rendered as a zero-padded decimal ASCII string of a fixed number of
digits. Everything is carried hex-encoded, like the rest of the wire format.
"""

from __future__ import annotations

import binascii

from ..exceptions import FramingError, PackError


def frame_message(body: str, digits: int) -> str:
    """Prepend a decimal length prefix to a hex-encoded message body.

    Args:
        body: Hex-encoded message body
        digits: Width of the length prefix in decimal digits (0 returns body unchanged)

    Returns:
        Hex-encoded framed message

    Raises:
        PackError: If the body length does not fit in ``digits`` digits

    Example:
        >>> frame_message("3032303030", 2)
        '30353032303030'
    """
    if digits <= 0:
        return body

    length = len(body) // 2
    if length >= 10**digits:
        raise PackError(f"Message length {length} does not fit a {digits}-digit length prefix")

    prefix = f"{length:0{digits}d}".encode("ascii")
    return prefix.hex() + body


def unframe_message(framed: str, digits: int) -> str:
    """Strip and validate a decimal length prefix.

    Args:
        framed: Hex-encoded framed message
        digits: Width of the length prefix in decimal digits (0 returns framed unchanged)

    Returns:
        Hex-encoded message body

    Raises:
        FramingError: If the prefix is truncated or not decimal, or the body
            length does not match it

    Example:
        >>> unframe_message("30353032303030", 2)
        '3032303030'
    """
    if digits <= 0:
        return framed

    prefix_chars = digits * 2
    if len(framed) < prefix_chars:
        raise FramingError(
            f"Frame too short for {digits}-digit length prefix: {len(framed)} hex chars"
        )

    try:
        prefix = binascii.unhexlify(framed[:prefix_chars]).decode("ascii")
    except (binascii.Error, ValueError) as e:
        raise FramingError(f"Invalid length prefix: {framed[:prefix_chars]!r}") from e
    if not prefix.isdigit():
        raise FramingError(f"Length prefix is not decimal: {prefix!r}")

    expected = int(prefix)
    body = framed[prefix_chars:]
    if len(body) != expected * 2:
        raise FramingError(f"Message length is {len(body) / 2:g} and should be {expected}")

    return body
