"""Construction of unmasked WebSocket frames."""

from __future__ import annotations

from .protocol import WsFlag

_SHORT_LIMIT = 126
_MEDIUM_LIMIT = 0xFFFF
_MASK_KEY_SIZE = 4


def frame_size(flags: int, data_len: int) -> int:
    """Return the number of bytes a frame with the given flags and body length occupies."""
    size = data_len + 2
    if data_len >= _SHORT_LIMIT:
        size += 8 if data_len > _MEDIUM_LIMIT else 2
    if flags & WsFlag.HAS_MASK:
        size += _MASK_KEY_SIZE
    return size


def build_frame(flags: int, data: bytes) -> bytes:
    """Build a frame carrying data; flags combine an opcode with frame marks.

    No mask is applied. When HAS_MASK is given, room for a mask key is
    reserved at the end of the frame and left zeroed.
    """
    payload = bytes(data)
    length = len(payload)
    flags = int(flags)

    first = 0x80 if flags & WsFlag.FINAL_FRAME else 0
    first |= flags & WsFlag.OP_MASK

    if length < _SHORT_LIMIT:
        header = bytes((first, length))
    elif length <= _MEDIUM_LIMIT:
        header = bytes((first, 126)) + length.to_bytes(2, "big")
    else:
        header = bytes((first, 127)) + length.to_bytes(8, "big")

    frame = header + payload
    return frame.ljust(frame_size(flags, length), b"\0")