#!/usr/bin/env python3
"""Basic usage example for isocodec.

This example demonstrates:
1. Building an authorization request
2. Packing it to the hex wire format
3. Unpacking it on the receiving side
4. Handling length violations
"""

from __future__ import annotations

from isocodec import Message, PackError, default_dictionary


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("isocodec Basic Usage Example")
    print("=" * 60)
    print()

    dictionary = default_dictionary()

    # Build a request
    request = Message(dictionary)
    request.set_mti("0200")
    request.set(
        {
            2: "4111111111111111",
            3: "000000",
            4: "000000002500",
            11: "000042",
            41: "TERM0001",
            49: "840",
        }
    )

    wire = request.pack()
    print("1. Packed request:")
    print(f"   {wire}")
    print(f"   {len(wire) // 2} bytes, bitmap {wire[8:24]}")
    print()

    # Unpack it again
    received = Message(dictionary)
    received.unpack(wire)
    print("2. Unpacked request:")
    print(f"   MTI: {received.get_mti()}")
    for field_id, value in received.get_fields().items():
        print(f"   {field_id:>3}: {value!r}")
    print()

    # Fixed-length fields must match exactly
    print("3. Packing an invalid processing code...")
    request.set_field(3, "0000")
    try:
        request.pack()
    except PackError as e:
        print(f"   ✓ Rejected: {e}")
        print(f"     field={e.field_id} expected={e.expected_length} actual={e.actual_length}")
    print()

    print("=" * 60)


if __name__ == "__main__":
    main()
