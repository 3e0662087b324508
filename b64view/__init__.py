"""Random access base64 views of seekable byte sources.

`EncodingView` wraps anything with `read` and `seek` (a file, a `BytesIO`, a
network-backed range resource) and presents it as if it were already base64
encoded.  The encoded length is known up front, and reads and seeks work in
encoded-space coordinates without encoding the source from the start.

### Example

```python
import io

from b64view import EncodingView

with EncodingView(open("firmware.bin", "rb")) as view:
    print(f"{view.encoded_len=}")
    view.seek(-8, io.SEEK_END)
    print(view.read())
```

The view is an `io.RawIOBase`, so it can be handed to `io.BufferedReader`,
`shutil.copyfileobj`, or another `EncodingView`.

"""

from __future__ import annotations

from b64view.exceptions import B64ViewException, InvalidSeek, RangeNotSatisfiable
from b64view.source import ReadSeek
from b64view.view import MAX_POSITION, EncodingView, encoded_size

__all__ = [
    "B64ViewException",
    "EncodingView",
    "InvalidSeek",
    "MAX_POSITION",
    "RangeNotSatisfiable",
    "ReadSeek",
    "encoded_size",
]
