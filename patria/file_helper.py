"""Building HTTP responses for static files."""

from __future__ import annotations

import os
from typing import Union

HTTP_RESPONSE_HEADER = (
    "HTTP/1.1 200 OK\n"
    "Vary: Origin\n"
    "Access-Control-Allow-Credentials: true\n"
    "Accept-Ranges: bytes\n"
    "Cache-Control: public, max-age=0\n"
    "Connection: keep-alive\n\n"
)
HTTP_404_HEADER = "HTTP/1.1 404 Not Found"


def not_found_response() -> bytes:
    """Return the bytes of a 404 response."""
    return HTTP_404_HEADER.encode("ascii")


def create_http_response(filename: Union[str, os.PathLike]) -> bytes:
    """Return a 200 response carrying the file's contents, or a 404 response.

    Paths that contain a hidden component ("/.") are refused.
    """
    path = os.fsdecode(filename)
    if "/." in path:
        return not_found_response()
    try:
        with open(path, "rb") as handle:
            body = handle.read()
    except OSError:
        return not_found_response()
    return HTTP_RESPONSE_HEADER.encode("ascii") + body