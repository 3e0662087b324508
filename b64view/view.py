"""A base64 encoded, random access view of a seekable byte source.

The view never holds the encoded stream.  Each read maps the encoded-space
cursor back to the triplet boundary at or before it in the source, reads one
chunk of raw bytes from there, encodes it, and drops the leading characters of
the first quartet when the cursor sits mid-quartet.
"""

from __future__ import annotations

import io
import logging
from base64 import b64encode
from typing import Final

from typing_extensions import Buffer, override

from b64view.exceptions import InvalidSeek
from b64view.source import ReadSeek

logger = logging.getLogger(__name__)

MAX_POSITION: Final = 2**63 - 1
"""The largest encoded-space position the cursor may take, a signed 64-bit offset."""


def encoded_size(size: int) -> int:
    """The size of `size` raw bytes once base64 encoded, including padding."""

    if size < 0:
        raise ValueError(f"{size=} must not be negative")

    return (size + 2) // 3 * 4


class EncodingView(io.RawIOBase):
    """Present `source` as if it were already base64 encoded.

    The view takes ownership of `source`: nothing else may read or seek it
    while the view is open, and closing the view closes the source.

    Args:
        source: The raw bytes, any object satisfying `ReadSeek`.
        chunk_size: The maximum number of raw bytes read from `source` by a
            single `readinto`.  Must be a positive multiple of 3 so that a
            chunk never ends mid-triplet.

    Raises:
        ValueError: if `chunk_size` is not a positive multiple of 3.

    Example:

    ```python
    from io import BytesIO
    from b64view import EncodingView

    with EncodingView(BytesIO(b"MEOWMEOW FUZZYFACE.")) as view:
        view.seek(8)
        print(view.read(6))  # b'T1cgRl'
    ```
    """

    DEFAULT_CHUNK_SIZE: Final = 3 * 1024

    def __init__(self, source: ReadSeek, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        if chunk_size <= 0 or chunk_size % 3 != 0:
            raise ValueError(f"{chunk_size=} must be a positive multiple of 3")

        super().__init__()

        self._source: Final = source
        self._chunk_size: Final = chunk_size

        self._source_len = 0
        """Size of the source in raw bytes, as of the last length probe."""
        self._encoded_len = 0
        """Size of the encoded stream, as of the last length probe."""
        self._cursor = 0
        """The encoded-space read position."""

        self.length()

        logger.debug(f"Initialized {self.__class__.__name__} with {chunk_size=}")

    def length(self) -> int:
        """Probe the source size and return the encoded length.

        The source is rewound and the cursor is reset to 0.  Use
        `encoded_len` to get the cached length without side effects.

        Returns:
            The encoded length in bytes, always a multiple of 4.
        """
        self._check_open()

        source_len = self._source.seek(0, io.SEEK_END)
        self._source.seek(0, io.SEEK_SET)

        self._source_len = source_len
        self._encoded_len = encoded_size(source_len)
        self._cursor = 0

        logger.debug(f"encoded_len={self._encoded_len} from source_len={source_len}")
        return self._encoded_len

    @property
    def encoded_len(self) -> int:
        """The cached encoded length, as of construction or the last `length()`."""
        return self._encoded_len

    @property
    def source_len(self) -> int:
        """The cached source length in raw bytes."""
        return self._source_len

    @property
    def chunk_size(self) -> int:
        return self._chunk_size

    def is_empty(self) -> bool:
        """Return `True` if the encoded stream has no bytes."""
        return self._encoded_len == 0

    @override
    def readinto(self, buffer: Buffer, /) -> int:
        """Read encoded bytes at the cursor into `buffer`.

        At most one chunk of the source is read, so fewer bytes than
        `len(buffer)` may be returned.  0 is returned only at the end of the
        stream or when `buffer` is empty.

        Args:
            buffer: A writable bytes-like object.

        Returns:
            The number of bytes written to `buffer`.
        """
        self._check_open()

        with memoryview(buffer) as m, m.cast("B") as dst:
            want = len(dst)
            pos = self._cursor
            if want == 0 or pos >= self._encoded_len:
                return 0

            # the source position is clamped to triplets, so the encoded
            # position is clamped to quartets; skip the difference
            source_pos = pos // 4 * 3
            skip = pos - source_pos // 3 * 4

            self._source.seek(source_pos, io.SEEK_SET)
            encoded = b64encode(self._read_chunk())

            take = min(len(encoded), want + skip)
            if take <= skip:
                return 0
            advance = take - skip

            dst[:advance] = encoded[skip:take]

        self._cursor = pos + advance
        logger.debug(f"Read {advance}B at {pos=}; {source_pos=} {skip=}")
        return advance

    def _read_chunk(self) -> bytes:
        """Read `chunk_size` bytes from the source, or fewer only at its end."""

        chunk = self._source.read(self._chunk_size)
        if len(chunk) == 0 or len(chunk) == self._chunk_size:
            return chunk

        buf = bytearray(chunk)
        reads = 1
        while len(buf) < self._chunk_size:
            more = self._source.read(self._chunk_size - len(buf))
            if not more:
                break
            buf.extend(more)
            reads += 1

        if reads > 1:
            logger.debug(f"Filled {len(buf)}B chunk from {reads} short source reads")

        return bytes(buf)

    @override
    def seek(self, offset: int, whence: int = io.SEEK_SET, /) -> int:
        """Move the cursor in encoded-space.

        Seeking past the end is allowed; reads there return `b""`.

        Args:
            offset: The offset, interpreted according to `whence`.
            whence: `io.SEEK_SET`, `io.SEEK_CUR`, or `io.SEEK_END`.

        Returns:
            The new cursor position.

        Raises:
            InvalidSeek: if the position would be negative or greater than
                `MAX_POSITION`.  The cursor is not moved.
            ValueError: if `whence` is not recognized.
        """
        self._check_open()

        if whence == io.SEEK_SET:
            base = 0
        elif whence == io.SEEK_CUR:
            base = self._cursor
        elif whence == io.SEEK_END:
            base = self._encoded_len
        else:
            raise ValueError(f"invalid {whence=}")

        position = base + offset
        if not 0 <= position <= MAX_POSITION:
            raise InvalidSeek(f"invalid seek to a negative or overflowing position: {position}")

        self._cursor = position
        logger.debug(f"Seeking to {position}")
        return position

    @override
    def tell(self) -> int:
        self._check_open()
        return self._cursor

    @override
    def readable(self) -> bool:
        return True

    @override
    def seekable(self) -> bool:
        return True

    @override
    def writable(self) -> bool:
        return False

    @override
    def close(self) -> None:
        """Close the view and the source it owns."""

        if self.closed:
            return

        try:
            # absent if __init__ raised before taking the source
            source = getattr(self, "_source", None)
            close_source = getattr(source, "close", None)
            if close_source is not None:
                close_source()
                logger.debug(f"Closed {source!r}")
        finally:
            super().close()

    def _check_open(self) -> None:
        if self.closed:
            raise ValueError("I/O operation on closed view.")

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(source_len={self._source_len}, "
            f"encoded_len={self._encoded_len}, cursor={self._cursor})"
        )
