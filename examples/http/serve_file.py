"""Serving a file base64 encoded, with HTTP range requests."""

import argparse
import logging
import shutil
from functools import partial
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

from b64view import EncodingView, RangeNotSatisfiable
from b64view.ranges import ByteRange, iter_range


class EncodedFileHandler(BaseHTTPRequestHandler):
    def __init__(self, *args, path: str, **kwargs) -> None:
        self._path = path
        super().__init__(*args, **kwargs)

    def do_GET(self) -> None:
        # one view per request, views are not shared between threads
        with EncodingView(open(self._path, "rb")) as view:
            header = self.headers.get("Range")
            if header is None:
                self.send_response(HTTPStatus.OK)
                self.send_header("Content-Type", "text/plain; charset=ascii")
                self.send_header("Content-Length", str(view.encoded_len))
                self.send_header("Accept-Ranges", "bytes")
                self.end_headers()
                shutil.copyfileobj(view, self.wfile)
                return

            try:
                byte_range = ByteRange.parse(header, view.encoded_len)
            except RangeNotSatisfiable:
                self.send_response(HTTPStatus.REQUESTED_RANGE_NOT_SATISFIABLE)
                self.send_header("Content-Range", f"bytes */{view.encoded_len}")
                self.end_headers()
                return

            self.send_response(HTTPStatus.PARTIAL_CONTENT)
            self.send_header("Content-Type", "text/plain; charset=ascii")
            self.send_header("Content-Length", str(len(byte_range)))
            self.send_header("Content-Range", byte_range.content_range(view.encoded_len))
            self.end_headers()
            for chunk in iter_range(view, byte_range):
                self.wfile.write(chunk)


def main() -> None:
    parser = argparse.ArgumentParser(description="Serve a file base64 encoded over HTTP")
    parser.add_argument("file", help="The file to serve")
    parser.add_argument("--port", type=int, default=8000, help="The port to listen on")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)

    server = ThreadingHTTPServer(("", args.port), partial(EncodedFileHandler, path=args.file))
    print(f"Serving {args.file} on port {args.port}")
    server.serve_forever()


if __name__ == "__main__":
    main()
