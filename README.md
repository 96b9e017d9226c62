# patria

A small chat server. It serves the static files of a web client over plain
HTTP and relays chat messages between logged-in clients over WebSocket.
It has no dependencies beyond the Python standard library.

## Running

```
patria-server
patria-server --port 9000
```

The server listens on all interfaces, on port 8080 unless `--port` is given.
If the listening socket cannot be created, configured, bound or put into
listening mode, the command prints the reason and exits with a non-zero
status. Progress is logged through `logging` at INFO level.

### HTTP

A request is treated as GET if its text contains `GET`, otherwise as POST if
it contains `POST`. Files are served from `./Client` relative to the working
directory: `GET /app.js` reads `./Client/app.js`. A URL ending in `/` is
answered with `./Client/Z`. A path that contains `/.`, or a file that cannot
be read, is answered with `HTTP/1.1 404 Not Found`. POST requests and
unrecognised requests also get `404`. The connection is closed after each
HTTP response.

## WebSocket protocol

A GET request whose text contains `WebSocket` is treated as an upgrade. If it
carries a `Sec-WebSocket-Key: ` header, the server answers with
`101 Switching Protocols` and the matching `Sec-WebSocket-Accept` value, and
the connection stays open in its own thread.

The client then sends text frames, each holding a flat JSON object. The name
of the first field picks the action and its value is a login:

| First field            | Second field | Effect                                                                 |
|------------------------|--------------|------------------------------------------------------------------------|
| `login`: own login     | password     | binds the connection to the login; replies `{"login": "SUCCESS"}`. Any password is accepted. |
| `send_message`: recipient | message   | sends `{"send_message": "<message>", "sender_login": "<own login>"}` to the recipient, if connected |
| `search_login`: login  | —            | replies `{"search_login": "<login>"}` if that login is connected       |

`login` must match the field name exactly; `send_message` and `search_login`
match any field name that contains them. Other field names are ignored.
A payload without a readable first field ends processing of that chunk with
`WsErrorCode.INVALID_DATA`. Each received chunk is parsed as a fresh sequence
of frames.

For example:

```json
{"login": "alice", "password": "password"}
{"send_message": "bob", "message": "hello"}
{"search_login": "bob"}
```

A close frame from the client is answered with a close frame carrying status
1000 and the reason `close`. Ping and pong frames are only logged. When the
connection ends, its login is removed from the table of connected clients.

## Using it from Python

```python
from patria.server import Server

with Server(8080) as server:
    server.start()
```

The building blocks are usable on their own:

```python
from patria.ws_builder import build_frame
from patria.ws_parser import WebSocketParser, ParserCallbacks
from patria.protocol import WsFlag
from patria.base64_coder import encode, decode
from patria.network_manager import respond, websocket_accept_key

frame = build_frame(WsFlag.TEXT | WsFlag.FINAL_FRAME, b'{"login": "alice"}')

received = []
WebSocketParser().execute(ParserCallbacks(on_data_payload=received.append), frame)
print(received)                    # [b'{"login": "alice"}']

print(encode(b"hello"))            # aGVsbG8=
print(decode("aGVsbG8="))          # b'hello'
print(websocket_accept_key("dGhlIHNhbXBsZSBub25jZQ=="))
print(respond("POST /login HTTP/1.1").data)   # b'HTTP/1.1 404 Not Found'
```

Modules:

- `patria.server` — `Server`, `ServerSetupError` and the `main` command.
- `patria.network_manager` — request classification (`request_kind`,
  `url_kind`), `serve_static`, `serve_websocket_handshake`, `serve_get`,
  `respond`, and `NetworkManager`, which accepts connections.
- `patria.ws_handler` — `ClientSession`, the per-connection chat handlers.
- `patria.ws_parser` — `WebSocketParser`, `ParserCallbacks`,
  `WebSocketProtocolError`.
- `patria.ws_builder` — `build_frame` and `frame_size` for unmasked frames.
- `patria.file_helper` — `create_http_response`, `not_found_response`.
- `patria.json_parser` — `JsonFieldParser`, `format_row`, `format_two_rows`.
- `patria.bst` — `BinarySearchTree`, the table of connected logins.
- `patria.base64_coder` — `encode`, `decode`, `Base64DecodeError`.
- `patria.protocol` — shared constants and enumerations.

## What it does not do

- Passwords are not checked and nothing is stored: there are no accounts,
  no message history and no dialog lists. Messages to a login that is not
  connected are dropped.
- POST requests are never served.
- There is no TLS; HTTP responses use bare `\n` line endings and carry no
  `Content-Type` or `Content-Length`.
- Frames sent by the server are never masked and never fragmented.

## Tests

```
pip install -e .[test]
pytest
```