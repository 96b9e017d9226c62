import socket

import pytest

from patria.file_helper import create_http_response, not_found_response
from patria.json_parser import format_row
from patria.network_manager import (
    NetworkManager,
    ServerResponse,
    request_kind,
    respond,
    serve_get,
    serve_static,
    serve_websocket_handshake,
    url_kind,
    websocket_accept_key,
)
from patria.protocol import RequestKind, UrlKind, WsFlag
from patria.ws_builder import build_frame
from patria.ws_parser import ParserCallbacks, WebSocketParser

HANDSHAKE = (
    "GET /chat HTTP/1.1\r\n"
    "Upgrade: websocket\r\n"
    "Sec-WebSocket-Key: dGhlIHNhbXBsZSBub25jZQ==\r\n\r\n"
)


@pytest.fixture
def client_files(tmp_path, monkeypatch):
    client = tmp_path / "Client"
    client.mkdir()
    (client / "page.html").write_bytes(b"<p>page</p>")
    (client / "Z").write_bytes(b"<p>root</p>")
    monkeypatch.chdir(tmp_path)
    return client


@pytest.fixture
def manager():
    listener = socket.socket()
    yield NetworkManager(listener)
    listener.close()


def test_request_kind():
    assert request_kind("GET / HTTP/1.1") is RequestKind.GET
    assert request_kind("POST /login HTTP/1.1") is RequestKind.POST
    assert request_kind("PUT /x HTTP/1.1") is RequestKind.UNKNOWN


def test_url_kind():
    assert url_kind(HANDSHAKE) is UrlKind.WEB_SOCKET
    assert url_kind("GET /page.html HTTP/1.1") is UrlKind.STANDARD


def test_serve_static_file(client_files):
    response = serve_static("GET /page.html HTTP/1.1\r\n")
    assert response == create_http_response("./Client/page.html")
    assert response.endswith(b"<p>page</p>")


def test_serve_static_directory_maps_to_entry_page(client_files):
    assert serve_static("GET / HTTP/1.1\r\n").endswith(b"<p>root</p>")


def test_serve_static_hidden_and_missing(client_files):
    assert serve_static("GET /.hidden HTTP/1.1") == not_found_response()
    assert serve_static("GET /missing.html HTTP/1.1") == not_found_response()


def test_websocket_accept_key_known_value():
    assert websocket_accept_key("dGhlIHNhbXBsZSBub25jZQ==") == "s3pPLMBiTxaQ9kYGzzhZRbK+xOo="


def test_handshake_response():
    response = serve_websocket_handshake(HANDSHAKE)
    key = websocket_accept_key("dGhlIHNhbXBsZSBub25jZQ==")
    assert response.startswith(b"HTTP/1.1 101 Switching Protocols\n")
    assert response.endswith(("Sec-WebSocket-Accept: " + key + "\n\n").encode())


def test_handshake_without_key():
    assert serve_websocket_handshake("GET /WebSocket HTTP/1.1\r\n\r\n") is None


def test_serve_get_marks_websocket():
    assert serve_get(HANDSHAKE).is_websocket is True


def test_respond_refuses_post_and_unknown():
    assert respond("POST /login HTTP/1.1") == ServerResponse(not_found_response(), False)
    assert respond("BREW /pot") == ServerResponse(not_found_response(), False)


def test_serve_client_static_closes_connection(manager, client_files):
    local, peer = socket.socketpair()
    peer.settimeout(2)
    with peer:
        peer.sendall(b"GET /missing HTTP/1.1\r\n\r\n")
        assert manager.serve_client(local) is None
        assert peer.recv(1024) == not_found_response()
        assert local.fileno() == -1


def test_serve_client_websocket_session(manager):
    local, peer = socket.socketpair()
    peer.settimeout(2)
    peer.sendall(HANDSHAKE.encode())
    thread = manager.serve_client(local)
    assert peer.recv(1024) == serve_websocket_handshake(HANDSHAKE)

    login = b'{"login": "alice", "password": "password"}'
    peer.sendall(build_frame(WsFlag.TEXT | WsFlag.FINAL_FRAME, login))
    chunks = []
    WebSocketParser().execute(ParserCallbacks(on_data_payload=chunks.append), peer.recv(1024))
    assert b"".join(chunks).decode() == format_row("login", "SUCCESS")
    assert "alice" in manager.clients

    peer.close()
    thread.join(2)
    assert "alice" not in manager.clients