"""Main CLI entry point for isocodec."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .. import __version__
from ..cli.describe import describe_message, load_message
from ..dictionary import FieldDictionary, default_dictionary
from ..exceptions import IsoCodecError
from ..message import Message


def main() -> int:
    """Main entry point for the isocodec CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        description="isocodec: ISO 8583 Message Codec",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  isocodec --unpack 30323030600000...        Decode a hex message
  isocodec --unpack - < message.hex          Decode a hex message from stdin
  isocodec --pack message.json               Pack a JSON message description
  isocodec --pack message.json -l 4          Pack with a 4-digit length prefix
  isocodec --version                         Show version
        """,
    )

    parser.add_argument(
        "--unpack",
        metavar="HEX",
        type=str,
        help="Unpack a hex-encoded message ('-' reads stdin) and show its fields",
    )

    parser.add_argument(
        "--pack",
        metavar="FILE",
        type=str,
        help="Pack a JSON message description and print the hex message",
    )

    parser.add_argument(
        "--dictionary",
        metavar="FILE",
        type=str,
        help="JSON field dictionary (default: ISO 8583:1987)",
    )

    parser.add_argument(
        "-l",
        "--length-prefix",
        metavar="DIGITS",
        type=int,
        default=0,
        help="Digits in the message length prefix (default: 0, no prefix)",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log codec details to stderr",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"isocodec {__version__}",
    )

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if not args.unpack and not args.pack:
        parser.print_help()
        return 0

    if args.length_prefix < 0:
        print("Error: --length-prefix must be >= 0", file=sys.stderr)
        return 2

    try:
        if args.dictionary:
            dictionary_path = Path(args.dictionary)
            if not dictionary_path.exists():
                print(f"Error: File not found: {dictionary_path}", file=sys.stderr)
                return 1
            dictionary = FieldDictionary.from_file(dictionary_path)
        else:
            dictionary = default_dictionary()

        message = Message(dictionary, length_prefix=args.length_prefix)

        # Handle --pack
        if args.pack:
            file_path = Path(args.pack)
            if not file_path.exists():
                print(f"Error: File not found: {file_path}", file=sys.stderr)
                return 1
            load_message(file_path, message)
            print(message.pack())
            return 0

        # Handle --unpack
        wire = sys.stdin.read() if args.unpack == "-" else args.unpack
        message.unpack(wire.strip())
        describe_message(message)
        return 0
    except (IsoCodecError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
