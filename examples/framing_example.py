#!/usr/bin/env python3
"""Message framing example for isocodec.

This example demonstrates:
1. Framing messages with a decimal length prefix
2. Secondary bitmaps for fields above 64
3. Error detection when the frame length is wrong
"""

from __future__ import annotations

from isocodec import FramingError, Message, MessageConfig, default_dictionary


def main() -> None:
    """Run the framing example."""
    print("=" * 60)
    print("isocodec Message Framing Example")
    print("=" * 60)
    print()

    config = MessageConfig(length_prefix=4)

    # Network management sign-on uses field 70 (secondary bitmap)
    sign_on = Message(default_dictionary(), config)
    sign_on.set_mti("0800")
    sign_on.set({7: "1019143015", 11: "000001", 70: "001"})

    wire = sign_on.pack()
    prefix = bytes.fromhex(wire[:8]).decode("ascii")

    print("1. Framed sign-on:")
    print(f"   {wire}")
    print(f"   Length prefix: {prefix!r} ({int(prefix)} bytes follow)")
    print(f"   Bitmap: {len(sign_on.get_bitmap() or '')} bits")
    print()

    received = Message(default_dictionary(), config)
    received.unpack(wire)
    print("2. Unframed and unpacked:")
    print(f"   MTI {received.get_mti()}, fields {received.get_field_ids()}")
    print()

    # Append a stray byte to break the frame
    print("3. Unpacking a corrupted frame...")
    try:
        Message(default_dictionary(), config).unpack(wire + "00")
    except FramingError as e:
        print(f"   ✓ Framing error detected: {e}")
    print()

    print("=" * 60)


if __name__ == "__main__":
    main()
