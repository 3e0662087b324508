"""Exact-count reads of byte ranges.

`EncodingView.read` may return short, so callers that must produce an exact
number of bytes, like an HTTP range responder, read through `iter_range`, or
`read_range` when the range is small enough to hold in memory.

Specification: https://www.rfc-editor.org/rfc/rfc9110#name-byte-ranges
"""

from __future__ import annotations

import io
import logging
import re
from typing import Final, Iterator

from pydantic import Field, model_validator
from pydantic.dataclasses import dataclass

from b64view.exceptions import RangeNotSatisfiable
from b64view.source import ReadSeek

logger = logging.getLogger(__name__)

_BYTE_RANGE: Final = re.compile(r"bytes=(\d*)-(\d*)")


@dataclass(frozen=True)
class ByteRange:
    """A half-open range of byte positions, `[start, stop)`."""

    start: int = Field(ge=0)
    stop: int = Field(ge=0)

    @model_validator(mode="after")
    def _check_order(self) -> 'ByteRange':
        if self.stop < self.start:
            raise ValueError(f"stop {self.stop} is before start {self.start}")
        return self

    def __len__(self) -> int:
        return self.stop - self.start

    @staticmethod
    def parse(header: str, length: int) -> 'ByteRange':
        """Parse a single range `header` value against a stream of `length` bytes.

        Accepts `bytes=first-last`, `bytes=first-` and `bytes=-suffix`.  The
        last position is inclusive and is clamped to the end of the stream.

        Raises:
            RangeNotSatisfiable: if `header` is malformed, names more than one
                range, or selects no bytes of the stream.
        """

        match = _BYTE_RANGE.fullmatch(header.strip())
        if match is None:
            raise RangeNotSatisfiable(f"Malformed or multiple range {header=}")

        first, last = match.groups()
        if first == "" and last == "":
            raise RangeNotSatisfiable(f"Range {header=} has no positions")

        if first == "":
            suffix = int(last)
            if suffix == 0 or length == 0:
                raise RangeNotSatisfiable(f"Suffix range {header=} selects no bytes of {length=}")
            return ByteRange(start=max(0, length - suffix), stop=length)

        start = int(first)
        if start >= length:
            raise RangeNotSatisfiable(f"Range {header=} starts beyond {length=}")

        if last == "":
            return ByteRange(start=start, stop=length)

        if int(last) < start:
            raise RangeNotSatisfiable(f"Range {header=} ends before it starts")

        return ByteRange(start=start, stop=min(int(last), length - 1) + 1)

    def content_range(self, length: int) -> str:
        """The `Content-Range` header value for this range of a `length` byte stream."""
        return f"bytes {self.start}-{self.stop - 1}/{length}"


def iter_range(
    stream: ReadSeek, byte_range: ByteRange, read_size: int = io.DEFAULT_BUFFER_SIZE
) -> Iterator[bytes]:
    """Yield the bytes of `byte_range` from `stream`, at most `read_size` at a time.

    Short reads are retried until the range is complete.  The range ends
    early only if `stream` ends first.
    """

    stream.seek(byte_range.start, io.SEEK_SET)

    remaining = len(byte_range)
    while remaining > 0:
        chunk = stream.read(min(remaining, read_size))
        if not chunk:
            logger.debug(f"Stream ended {remaining}B short of {byte_range}")
            return
        remaining -= len(chunk)
        yield chunk


def read_range(stream: ReadSeek, byte_range: ByteRange) -> bytes:
    """Read exactly the bytes of `byte_range` from `stream`.

    The whole range is returned at once; use `iter_range` for large ranges.
    """
    return b"".join(iter_range(stream, byte_range))
