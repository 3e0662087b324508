"""The seekable byte source protocol.

Any object with `read` and `seek` methods matching the `io` semantics can be
wrapped by an `EncodingView`: `io.BytesIO`, files opened in binary mode, or
another `EncodingView`.
"""

from __future__ import annotations

import io
from typing import Protocol


class ReadSeek(Protocol):
    def read(self, size: int = -1, /) -> bytes:  # pragma: no cover
        """Read up to `size` bytes from the current position.

        Args:
            size: The maximum number of bytes to read.

        Returns:
            The bytes read; `b""` at the end of the source.
        """

    def seek(self, offset: int, whence: int = io.SEEK_SET, /) -> int:  # pragma: no cover
        """Move the current position.

        Args:
            offset: The offset, interpreted according to `whence`.
            whence: One of `io.SEEK_SET`, `io.SEEK_CUR`, or `io.SEEK_END`.

        Returns:
            The new absolute position.
        """
