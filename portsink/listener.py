# listener.py
"""
Single-connection TCP sink:
- bind 0.0.0.0:<port> and listen
- accept exactly one client
- copy every received chunk to the output sink as it arrives
- return once the client goes away (clean close or broken connection)

Setup and accept failures raise; the end of the session never does.
"""

import os
import socket
import sys
from typing import BinaryIO, Callable, Optional, Tuple

from .config import BIND_HOST, LISTEN_BACKLOG, RECV_BUFFER_SIZE


class ListenerError(Exception):
    """A run that failed before a session could start."""

    def __init__(self, stage: str, port, cause: BaseException):
        self.stage = stage
        self.port = port
        super().__init__(f"{stage} failed on port {port}: {cause}")


class SetupError(ListenerError):
    """Creating, binding or listening on the socket failed."""


class AcceptError(ListenerError):
    """Waiting for the single client failed."""


def _open_listening_socket(port: int) -> socket.socket:
    try:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    except OSError as e:
        raise SetupError("socket", port, e) from e

    stage = "socket"
    try:
        # on Windows SO_REUSEADDR lets a second listener steal the port
        if os.name != 'nt':
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        stage = "bind"
        sock.bind((BIND_HOST, port))
        stage = "listen"
        sock.listen(LISTEN_BACKLOG)
    except (OSError, OverflowError) as e:
        sock.close()
        raise SetupError(stage, port, e) from e
    return sock


def _relay(conn: socket.socket, sink: BinaryIO, buffer_size: int):
    """Copy conn -> sink until the peer closes or the read fails."""
    while True:
        try:
            chunk = conn.recv(buffer_size)
        except OSError:
            # broken connection ends the session like a close does
            break
        if not chunk:
            break
        sink.write(chunk)
        sink.flush()


def run(port: int,
        sink: Optional[BinaryIO] = None,
        on_listening: Optional[Callable[[Tuple[str, int]], None]] = None,
        buffer_size: int = RECV_BUFFER_SIZE) -> None:
    """
    Serve one client on `port` and return when it disconnects.

    sink defaults to the process stdout (binary). on_listening, if given, is called
    with the bound (host, port) right before blocking on accept.
    Raises SetupError or AcceptError; peer close and read errors return normally.
    """
    if buffer_size < 1:
        raise ValueError("buffer_size must be >= 1")
    if sink is None:
        sink = sys.stdout.buffer

    with _open_listening_socket(port) as server:
        if on_listening:
            on_listening(server.getsockname())
        try:
            conn, _addr = server.accept()
        except OSError as e:
            raise AcceptError("accept", port, e) from e
        with conn:
            _relay(conn, sink, buffer_size)
