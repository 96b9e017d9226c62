"""Listening TCP server and the command that runs it."""

from __future__ import annotations

import argparse
import logging
import socket
import sys
from enum import IntEnum
from types import TracebackType

from .network_manager import NetworkManager
from .protocol import SERVER_PORT

logger = logging.getLogger(__name__)

_BACKLOG = 3


class _Failure(IntEnum):
    SOCKET = 1
    BIND = 2
    LISTEN = 3
    OPTION = 4


class ServerSetupError(Exception):
    """Raised when the listening socket cannot be set up; ``code`` is the exit status."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(message)
        self.code = code


def _failure(code: _Failure, message: str, exc: OSError) -> ServerSetupError:
    return ServerSetupError(int(code), f"{message}: {exc.strerror or exc}")


class Server:
    """TCP server listening on all interfaces."""

    def __init__(self, port: int = SERVER_PORT) -> None:
        try:
            listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        except OSError as exc:
            raise _failure(_Failure.SOCKET, "Socket failed", exc) from exc
        steps = (
            (_Failure.OPTION, "Configuring socket failed",
             lambda: listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)),
            (_Failure.BIND, "Bind failed", lambda: listener.bind(("", port))),
            (_Failure.LISTEN, "Listen failed", lambda: listener.listen(_BACKLOG)),
        )
        for code, message, step in steps:
            try:
                step()
            except OSError as exc:
                listener.close()
                raise _failure(code, message, exc) from exc
        logger.info("server: setup success")
        self.address = listener.getsockname()
        self.network_manager = NetworkManager(listener)

    def start(self) -> None:
        """Serve connections until the server is closed."""
        logger.info("server: ready to serve connections")
        self.network_manager.accept_connections()

    def close(self) -> None:
        """Shut down and close the listening socket."""
        listener = self.network_manager.listener
        try:
            listener.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass
        listener.close()
        logger.info("server: shutdown")

    def __enter__(self) -> Server:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def main(argv: list[str] | None = None) -> int:
    """Run the chat server; return the exit status."""
    parser = argparse.ArgumentParser(prog="patria-server", description="Run the chat server.")
    parser.add_argument("--port", type=int, default=SERVER_PORT, help="port to listen on")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    try:
        server = Server(args.port)
    except ServerSetupError as exc:
        print(exc, file=sys.stderr)
        return exc.code

    with server:
        try:
            server.start()
        except KeyboardInterrupt:
            pass
    return 0


if __name__ == "__main__":
    sys.exit(main())