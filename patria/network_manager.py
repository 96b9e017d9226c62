"""Accepting connections, serving HTTP requests and starting WebSocket sessions."""

from __future__ import annotations

import hashlib
import logging
import socket
import threading
from dataclasses import dataclass

from .base64_coder import encode
from .bst import BinarySearchTree
from .file_helper import create_http_response, not_found_response
from .protocol import (
    GUID,
    HTTP_GET,
    HTTP_WS,
    HTTP_POST,
    MAX_REQUEST_SIZE,
    PATH_TO_CLIENT_FILES,
    PATH_TO_SRC_FILE,
    WS_KEY_FIELD,
    WS_KEY_LEN,
    RequestKind,
    UrlKind,
)
from .ws_handler import ClientSession

logger = logging.getLogger(__name__)

WS_HEADER = (
    "HTTP/1.1 101 Switching Protocols\n"
    "Upgrade: websocket\n"
    "Connection: Upgrade\n"
    "Sec-WebSocket-Accept: "
)
_END_SEQUENCE = "\n\n"


@dataclass(frozen=True)
class ServerResponse:
    """Bytes to send back, and whether the connection becomes a WebSocket."""

    data: bytes | None
    is_websocket: bool = False


def request_kind(request: str) -> RequestKind:
    """Classify a request as GET, POST or unknown."""
    if HTTP_GET in request:
        return RequestKind.GET
    if HTTP_POST in request:
        return RequestKind.POST
    return RequestKind.UNKNOWN


def url_kind(request: str) -> UrlKind:
    """Tell a WebSocket upgrade from an ordinary GET."""
    return UrlKind.WEB_SOCKET if HTTP_WS in request else UrlKind.STANDARD


def serve_static(request: str) -> bytes:
    """Answer a GET request with the requested client file."""
    target = request[len(HTTP_GET) + 1:]
    end = target.find(" ")
    url = target if end == -1 else target[:end]
    if url.endswith("/"):
        path = PATH_TO_SRC_FILE
    else:
        path = PATH_TO_CLIENT_FILES + url
    return create_http_response(path)


def websocket_accept_key(key: str) -> str:
    """Return the Sec-WebSocket-Accept value for a client key."""
    digest = hashlib.sha1((key + GUID).encode("latin-1")).digest()
    return encode(digest)


def serve_websocket_handshake(request: str) -> bytes | None:
    """Build the 101 response for an upgrade request, or None without a key."""
    start = request.find(WS_KEY_FIELD)
    if start == -1:
        return None
    start += len(WS_KEY_FIELD)
    key = request[start:start + WS_KEY_LEN]
    return (WS_HEADER + websocket_accept_key(key) + _END_SEQUENCE).encode("latin-1")


def serve_get(request: str) -> ServerResponse:
    """Serve a GET request as a static file or a WebSocket handshake."""
    if url_kind(request) is UrlKind.WEB_SOCKET:
        return ServerResponse(serve_websocket_handshake(request), True)
    return ServerResponse(serve_static(request), False)


def respond(request: str) -> ServerResponse:
    """Return the response to any request; only GET requests are served."""
    kind = request_kind(request)
    if kind is RequestKind.GET:
        return serve_get(request)
    if kind is RequestKind.UNKNOWN:
        logger.warning("UNKNOWN REQUEST\n=================\n%s\n===================", request)
    return ServerResponse(not_found_response(), False)


class NetworkManager:
    """Serves connections arriving on a listening socket."""

    def __init__(self, listener: socket.socket) -> None:
        self.listener = listener
        self.lock = threading.Lock()
        self.clients = BinarySearchTree()
        logger.info("Network_manager: Created")

    def accept_connections(self) -> None:
        """Accept and serve clients until the listener is closed."""
        while True:
            try:
                client, _ = self.listener.accept()
            except OSError:
                break
            self.serve_client(client)

    def serve_client(self, client: socket.socket) -> threading.Thread | None:
        """Answer one request; start and return a session thread for WebSockets."""
        try:
            raw = client.recv(MAX_REQUEST_SIZE)
        except OSError:
            raw = b""
        response = respond(raw.decode("latin-1"))

        if response.data:
            try:
                client.sendall(response.data)
            except OSError as exc:
                logger.warning("send failed: %s", exc)

        if not response.is_websocket:
            client.close()
            return None

        session = ClientSession(client, self.clients, self.lock)
        logger.info("ID: %d is connected", client.fileno())
        thread = threading.Thread(target=self.serve_connection, args=(session,), daemon=True)
        thread.start()
        return thread

    def serve_connection(self, session: ClientSession) -> None:
        """Read frames from a WebSocket client until it disconnects."""
        ident = session.sock.fileno()
        while True:
            try:
                frame = session.sock.recv(MAX_REQUEST_SIZE)
            except OSError:
                frame = b""
            if not frame:
                logger.info("ID: %d is disconnected", ident)
                break
            session.handle_frame(frame)
        session.disconnect()