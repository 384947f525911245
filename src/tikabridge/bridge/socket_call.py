"""Server mode transport: one TCP connection per document.

Framing is half-duplex over a full-duplex socket: the client streams the
document, half-closes its write side to signal end-of-input, then reads
until the engine closes the connection.  The engine's server mode expects
exactly this; a length prefix would leave it waiting forever.
"""

from __future__ import annotations

from contextlib import closing, suppress
import logging
import socket

from tikabridge.bridge.timeouts import run_with_timeout


logger = logging.getLogger(__name__)

CHUNK_SIZE = 65_536


def _exchange(connection: socket.socket, data: bytes) -> bytes:
    view = memoryview(data)
    for offset in range(0, len(view), CHUNK_SIZE):
        connection.sendall(view[offset : offset + CHUNK_SIZE])

    # tell the engine we're done sending
    connection.shutdown(socket.SHUT_WR)

    chunks: list[bytes] = []
    while True:
        chunk = connection.recv(CHUNK_SIZE)
        if not chunk:
            break
        chunks.append(chunk)
    return b"".join(chunks)


def read_via_socket(
    data: bytes,
    *,
    port: int,
    host: str = "localhost",
    timeout: float | None = None,
) -> bytes:
    """Submit *data* to a running engine server and return its full response.

    Connection failures (``ConnectionRefusedError`` and friends) propagate
    unchanged.  On timeout the socket is shut down in both directions so the
    blocked exchange unwinds, then ``ExtractionTimeout`` is raised.
    """

    connection = socket.create_connection((host, port))
    logger.debug("Connected to engine server at %s:%d", host, port)

    def _abort() -> None:
        with suppress(OSError):
            connection.shutdown(socket.SHUT_RDWR)

    with closing(connection):
        return run_with_timeout(
            timeout,
            lambda: _exchange(connection, data),
            cancel=_abort,
            description=f"engine server {host}:{port}",
        )
