"""Base64 encoding and a strict group-by-group decoder."""

from __future__ import annotations

import base64
import string

_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits + "+/"
_INDEX = {char: position for position, char in enumerate(_ALPHABET)}
_GROUP = 4


class Base64DecodeError(ValueError):
    """Raised when text is not valid base64."""


def encode(data: bytes) -> str:
    """Encode bytes as padded base64 text."""
    return base64.b64encode(bytes(data)).decode("ascii")


def _sextet(char: str) -> int:
    try:
        return _INDEX[char]
    except KeyError:
        raise Base64DecodeError(f"invalid base64 character {char!r}") from None


def _decode_group(group: str) -> bytes:
    first, second, third, fourth = group
    s0 = _sextet(first)
    s1 = _sextet(second)
    if third == "=":
        if fourth != "=":
            raise Base64DecodeError("padding must end the group")
        s2 = s3 = 0
        count = 1
    else:
        s2 = _sextet(third)
        if fourth == "=":
            s3 = 0
            count = 2
        else:
            s3 = _sextet(fourth)
            count = 3
    combined = (s0 << 18) | (s1 << 12) | (s2 << 6) | s3
    return combined.to_bytes(3, "big")[:count]


def decode(text: str | bytes) -> bytes:
    """Decode base64 text; decoding stops at the first padded group."""
    if isinstance(text, (bytes, bytearray)):
        text = bytes(text).decode("latin-1")
    if len(text) % _GROUP:
        raise Base64DecodeError("length is not a multiple of four")
    out = bytearray()
    for start in range(0, len(text), _GROUP):
        chunk = _decode_group(text[start:start + _GROUP])
        out += chunk
        if len(chunk) < 3:
            break
    return bytes(out)