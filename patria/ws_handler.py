"""Per-client WebSocket session: chat commands, login registry and control frames."""

from __future__ import annotations

import logging
import socket
import threading

from .bst import BinarySearchTree
from .json_parser import JsonFieldParser, JsonFormatError, format_row, format_two_rows
from .protocol import WsErrorCode, WsFlag, error_name
from .ws_builder import build_frame
from .ws_parser import ParserCallbacks, WebSocketParser, WebSocketProtocolError

logger = logging.getLogger(__name__)

WS_LOGIN = "login"
WS_SEND_MESSAGE = "send_message"
WS_SEARCH = "search_login"
WS_SENDER_LOGIN = "sender_login"

_LOGIN_ACCEPTED = "SUCCESS"
_CLOSE_REASON = b"\x03\xe8close"
_TEXT_FRAME = WsFlag.TEXT | WsFlag.FINAL_FRAME
_CLOSE_FRAME = WsFlag.CLOSE | WsFlag.FINAL_FRAME
_CONTROL_NAMES = {WsFlag.PING: "ping", WsFlag.PONG: "pong", WsFlag.CLOSE: "close"}


def _send(sock: socket.socket, data: bytes) -> None:
    try:
        sock.sendall(data)
    except OSError as exc:
        logger.warning("send failed: %s", exc)


class ClientSession:
    """State of one WebSocket connection and the handlers for its frames.

    ``clients`` maps logged-in names to their sockets and is shared by all
    sessions; every access to it happens while holding ``lock``.
    """

    def __init__(self, sock: socket.socket, clients: BinarySearchTree, lock: threading.Lock) -> None:
        self.sock = sock
        self.clients = clients
        self.lock = lock
        self.login: str | None = None

    def callbacks(self) -> ParserCallbacks:
        """Return the parser callbacks bound to this session."""
        return ParserCallbacks(
            on_control_begin=self.on_control_begin,
            on_data_payload=self.on_data_payload,
            on_control_payload=self.on_control_payload,
        )

    def on_data_payload(self, payload: bytes) -> None:
        """Dispatch a chat command carried in a data frame."""
        text = bytes(payload).decode("utf-8", errors="replace")
        parser = JsonFieldParser(text)
        try:
            name, value = parser.next_field()
        except JsonFormatError as exc:
            raise WebSocketProtocolError(WsErrorCode.INVALID_DATA) from exc
        logger.debug("'%s':'%s'", name, value)

        with self.lock:
            if name == WS_LOGIN:
                self._handle_login(value, parser)
            elif WS_SEND_MESSAGE in name:
                self._handle_send_message(value, parser)
            elif WS_SEARCH in name:
                self._handle_search(value)

    def _handle_login(self, login: str, parser: JsonFieldParser) -> None:
        try:
            parser.next_field()  # the password; any password is accepted
        except JsonFormatError:
            pass
        self.login = login
        self.clients.insert(login, self.sock)
        _send(self.sock, build_frame(_TEXT_FRAME, format_row(WS_LOGIN, _LOGIN_ACCEPTED).encode("utf-8")))

    def _handle_send_message(self, recipient: str, parser: JsonFieldParser) -> None:
        node = self.clients.search(recipient)
        if node is None:
            logger.info("Login: %s is not connected now", recipient)
            return
        try:
            _, message = parser.next_field()
        except JsonFormatError as exc:
            raise WebSocketProtocolError(WsErrorCode.INVALID_DATA) from exc
        response = format_two_rows(WS_SEND_MESSAGE, message, WS_SENDER_LOGIN, self.login or "")
        _send(node.value, build_frame(_TEXT_FRAME, response.encode("utf-8")))

    def _handle_search(self, login: str) -> None:
        node = self.clients.search(login)
        if node is None:
            return
        _send(self.sock, build_frame(_TEXT_FRAME, format_row(WS_SEARCH, node.key).encode("utf-8")))

    def on_control_begin(self, frame_type: WsFlag) -> None:
        """Log a control frame; answer a close frame with a close frame."""
        logger.info("control_begin: %s", _CONTROL_NAMES.get(frame_type, "?"))
        if frame_type == WsFlag.CLOSE:
            _send(self.sock, build_frame(_CLOSE_FRAME, _CLOSE_REASON))

    def on_control_payload(self, payload: bytes) -> None:
        """Log the payload of a control frame."""
        logger.info("control_payload: %r", bytes(payload))

    def handle_frame(self, frame: bytes) -> WsErrorCode:
        """Parse one received chunk with a fresh parser and return the result code."""
        try:
            WebSocketParser().execute(self.callbacks(), frame)
        except WebSocketProtocolError as exc:
            logger.warning("web_socket parser failed: %d %s", int(exc.code), error_name(exc.code))
            return WsErrorCode(exc.code)
        return WsErrorCode.OK

    def disconnect(self) -> None:
        """Close the socket and drop this session's login from the registry."""
        try:
            self.sock.close()
        except OSError:
            pass
        with self.lock:
            if self.login and self.login in self.clients:
                self.clients.delete(self.login)