"""Shared protocol constants and enumerations used by the chat server."""

from __future__ import annotations

from enum import IntEnum, IntFlag

# Static pages
MAX_FILEPATH_SIZE = 1000
PATH_TO_CLIENT_FILES = "./Client"
PATH_TO_SRC_FILE = "./Client/Z"
PATH_TO_STORAGE = "./temp/storage.txt"

# TCP connection
SERVER_PORT = 8080
MAX_REQUEST_SIZE = 8000

# HTTP request markers
HTTP_GET = "GET"
HTTP_WS = "WebSocket"
HTTP_POST = "POST"
HTTP_POST_LOGIN = "login"
HTTP_POST_RECV_MESSAGES = "recv_messages"
HTTP_POST_RECV_DIALOGS = "recv_dialogs"

# WebSocket handshake
WS_KEY_LEN = 24
WS_KEY_FIELD = "Sec-WebSocket-Key: "
GUID = "258EAFA5-E914-47DA-95CA-C5AB0DC85B11"


class RequestKind(IntEnum):
    """Kind of an incoming HTTP request."""

    UNKNOWN = 0
    GET = 1
    POST = 2


class UrlKind(IntEnum):
    """Kind of a GET request target."""

    STANDARD = 0
    WEB_SOCKET = 1


class PostKind(IntEnum):
    """Kind of a POST request."""

    UNKNOWN = 0
    LOGIN = 1
    RECEIVE_MESSAGES = 2
    RECEIVE_DIALOGS = 3


class WsErrorCode(IntEnum):
    """Result codes of WebSocket frame processing."""

    OK = 0
    RESERVED_BITS_SET = 1
    INVALID_OPCODE = 2
    INVALID_CONTINUATION = 3
    CONTROL_TOO_LONG = 4
    NON_CANONICAL_LENGTH = 5
    FRAGMENTED_CONTROL = 6
    INVALID_DATA = 7


class WsFlag(IntFlag):
    """WebSocket opcodes and frame marks."""

    CONTINUE = 0x0
    TEXT = 0x1
    BINARY = 0x2
    CLOSE = 0x8
    PING = 0x9
    PONG = 0xA
    OP_MASK = 0xF
    FINAL_FRAME = 0x10
    HAS_MASK = 0x20


_NAMED_ERRORS = {
    WsErrorCode.OK,
    WsErrorCode.RESERVED_BITS_SET,
    WsErrorCode.INVALID_OPCODE,
    WsErrorCode.INVALID_CONTINUATION,
    WsErrorCode.CONTROL_TOO_LONG,
    WsErrorCode.NON_CANONICAL_LENGTH,
    WsErrorCode.FRAGMENTED_CONTROL,
}


def error_name(code: int) -> str | None:
    """Return the printable name of a parser result code, or None if it has none."""
    try:
        member = WsErrorCode(code)
    except ValueError:
        return None
    if member not in _NAMED_ERRORS:
        return None
    return f"WS_{member.name}"