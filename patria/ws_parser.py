"""Incremental WebSocket frame parser driven by callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Optional

from .protocol import WsErrorCode, WsFlag, error_name

_CONTROL_OPCODES = (WsFlag.PING, WsFlag.PONG, WsFlag.CLOSE)
_DATA_OPCODES = (WsFlag.TEXT, WsFlag.BINARY)
_MIN_LENGTH = {2: 126, 8: 65536}


class WebSocketProtocolError(Exception):
    """Raised when a frame violates the WebSocket protocol."""

    def __init__(self, code: int) -> None:
        self.code = code
        super().__init__(error_name(code) or f"WebSocket error {int(code)}")


@dataclass
class ParserCallbacks:
    """Optional handlers called as a frame is parsed; an exception aborts parsing."""

    on_data_begin: Optional[Callable[[WsFlag], object]] = None
    on_data_payload: Optional[Callable[[bytes], object]] = None
    on_data_end: Optional[Callable[[], object]] = None
    on_control_begin: Optional[Callable[[WsFlag], object]] = None
    on_control_payload: Optional[Callable[[bytes], object]] = None
    on_control_end: Optional[Callable[[], object]] = None


class _State(Enum):
    OPCODE = auto()
    LENGTH = auto()
    EXTENDED_LENGTH = auto()
    MASK = auto()
    PAYLOAD = auto()


class WebSocketParser:
    """Parses a stream of WebSocket frames, possibly split across several calls."""

    def __init__(self) -> None:
        self._state = _State.OPCODE
        self.fragment = False
        self.fin = False
        self.control = False
        self.masked = False
        self.mask = bytes(4)
        self._mask_pos = 0
        self._mask_key = bytearray()
        self.bytes_remaining = 0
        self._length_width = 0
        self._length_read = 0

    def execute(self, callbacks: ParserCallbacks, data: bytes) -> None:
        """Feed bytes to the parser, calling callbacks for frame events."""
        buffer = bytes(data)
        pos = 0
        total = len(buffer)
        while pos < total:
            byte = buffer[pos]
            if self._state is _State.OPCODE:
                self._read_opcode(callbacks, byte)
                pos += 1
            elif self._state is _State.LENGTH:
                self._read_length(byte)
                pos += 1
                if self._state is _State.PAYLOAD and self.bytes_remaining == 0:
                    self._end_payload(callbacks)
            elif self._state is _State.EXTENDED_LENGTH:
                pos += 1
                self._read_extended_length(byte)
            elif self._state is _State.MASK:
                self._mask_key.append(byte)
                pos += 1
                if len(self._mask_key) == len(self.mask):
                    self.mask = bytes(self._mask_key)
                    self._state = _State.PAYLOAD
                    if self.bytes_remaining == 0:
                        self._end_payload(callbacks)
            else:
                size = min(total - pos, self.bytes_remaining)
                chunk = buffer[pos:pos + size]
                if self.masked:
                    chunk = self._unmask(chunk)
                handler = callbacks.on_control_payload if self.control else callbacks.on_data_payload
                if handler is not None:
                    handler(chunk)
                pos += size
                self.bytes_remaining -= size
                if self.bytes_remaining == 0:
                    self._end_payload(callbacks)

    def _read_opcode(self, callbacks: ParserCallbacks, byte: int) -> None:
        opcode = byte & 0x0F
        if byte & 0x70:
            raise WebSocketProtocolError(WsErrorCode.RESERVED_BITS_SET)
        self.fin = bool(byte & 0x80)

        if opcode == WsFlag.CONTINUE:
            if not self.fragment:
                raise WebSocketProtocolError(WsErrorCode.INVALID_CONTINUATION)
            self.control = False
        elif opcode & 0x8:
            if opcode not in _CONTROL_OPCODES:
                raise WebSocketProtocolError(WsErrorCode.INVALID_OPCODE)
            if not self.fin:
                raise WebSocketProtocolError(WsErrorCode.FRAGMENTED_CONTROL)
            self.control = True
            if callbacks.on_control_begin is not None:
                callbacks.on_control_begin(WsFlag(opcode))
        else:
            if opcode not in _DATA_OPCODES:
                raise WebSocketProtocolError(WsErrorCode.INVALID_OPCODE)
            self.control = False
            self.fragment = not self.fin
            if callbacks.on_data_begin is not None:
                callbacks.on_data_begin(WsFlag(opcode))

        self._state = _State.LENGTH

    def _read_length(self, byte: int) -> None:
        length = byte & 0x7F
        self.masked = bool(byte & 0x80)
        self._mask_pos = 0

        if self.control and length > 125:
            raise WebSocketProtocolError(WsErrorCode.CONTROL_TOO_LONG)

        if length < 126:
            self.bytes_remaining = length
            self._state = self._after_length()
        else:
            self._length_width = 2 if length == 126 else 8
            self._length_read = 0
            self.bytes_remaining = 0
            self._state = _State.EXTENDED_LENGTH

    def _read_extended_length(self, byte: int) -> None:
        self.bytes_remaining = (self.bytes_remaining << 8) | byte
        self._length_read += 1
        if self._length_read < self._length_width:
            return
        self._state = self._after_length()
        if self.bytes_remaining < _MIN_LENGTH[self._length_width]:
            raise WebSocketProtocolError(WsErrorCode.NON_CANONICAL_LENGTH)

    def _after_length(self) -> _State:
        if self.masked:
            self._mask_key.clear()
            return _State.MASK
        return _State.PAYLOAD

    def _unmask(self, chunk: bytes) -> bytes:
        start = self._mask_pos
        mask = self.mask
        result = bytes(value ^ mask[(start + offset) % 4] for offset, value in enumerate(chunk))
        self._mask_pos = (start + len(chunk)) % 4
        return result

    def _end_payload(self, callbacks: ParserCallbacks) -> None:
        if self.control:
            if callbacks.on_control_end is not None:
                callbacks.on_control_end()
        elif self.fin and callbacks.on_data_end is not None:
            callbacks.on_data_end()
        self._state = _State.OPCODE