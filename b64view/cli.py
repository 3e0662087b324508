"""A minimal CLI for reading a file through an `EncodingView`."""

from __future__ import annotations

import argparse
import io
import logging
import sys
from typing import BinaryIO, Sequence

from b64view.exceptions import RangeNotSatisfiable
from b64view.ranges import ByteRange, iter_range
from b64view.view import EncodingView


def _write_all(view: EncodingView, out: BinaryIO) -> int:
    total = 0
    while data := view.read(io.DEFAULT_BUFFER_SIZE):
        out.write(data)
        total += len(data)
    return total


def b64view(argv: Sequence[str] | None = None, out: BinaryIO | None = None) -> int:
    """Write the base64 encoding of a file, or a range of it, to stdout."""

    parser = argparse.ArgumentParser(
        prog="b64view",
        description="Read a file as if it were base64 encoded, without encoding all of it.",
    )
    parser.add_argument("file")
    parser.add_argument(
        "-r", "--range", help="a single encoded byte range, e.g. bytes=0-99 or bytes=-16"
    )
    parser.add_argument(
        "-l", "--length", action="store_true", help="print the encoded length and exit"
    )
    parser.add_argument(
        "-c",
        "--chunk-size",
        type=int,
        default=EncodingView.DEFAULT_CHUNK_SIZE,
        help="raw bytes read per chunk, a multiple of 3",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    if out is None:
        out = sys.stdout.buffer

    try:
        f = open(args.file, "rb")
    except FileNotFoundError as e:
        print(e, file=sys.stderr)
        return -1

    try:
        view = EncodingView(f, chunk_size=args.chunk_size)
    except ValueError as e:
        f.close()
        parser.error(str(e))

    with view:
        if args.length:
            out.write(f"{view.encoded_len}\n".encode())
            return 0

        if args.range is None:
            _write_all(view, out)
            return 0

        try:
            byte_range = ByteRange.parse(args.range, view.encoded_len)
        except RangeNotSatisfiable as e:
            print(f"{e}; encoded length is {view.encoded_len}", file=sys.stderr)
            return -1

        for chunk in iter_range(view, byte_range):
            out.write(chunk)

    return 0
