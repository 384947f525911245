"""Lifecycle of a long-lived, server-mode engine process.

Starting the engine's JVM dominates the cost of small extractions, so a batch
can start one server up front and route every document to it over a local
socket (see :mod:`tikabridge.bridge.socket_call`).  Each
:class:`EngineServer` owns exactly one process; nothing stops it
automatically, so callers must ``stop()`` what they start (or use the handle
as a context manager).

The readiness check opens and closes a connection without sending anything;
the engine treats that as an empty document and logs a parse error for it,
which is expected.
"""

from __future__ import annotations

import logging
import signal
import socket
import subprocess
import threading
import time

from tikabridge.bridge.command import engine_command
from tikabridge.config import BridgeSettings
from tikabridge.errors import EngineStartupError
from tikabridge.kinds import OutputKind


logger = logging.getLogger(__name__)

READINESS_POLL_SECONDS = 0.1


def _ensure_port_free(host: str, port: int) -> None:
    """Fail fast when another process already listens on *port*."""

    try:
        with socket.create_server((host, port)):
            pass
    except OSError as exc:
        raise EngineStartupError(port, f"Port already in use: {exc.strerror or exc}") from exc


class EngineServer:
    """Handle for one running engine server: its process and listening port."""

    def __init__(self, process: subprocess.Popen, *, kind: OutputKind, port: int, host: str = "localhost") -> None:
        self._process: subprocess.Popen | None = process
        self._kind = kind
        self._port = port
        self._host = host
        self._lock = threading.Lock()

    @classmethod
    def start(
        cls,
        kind: OutputKind | str,
        port: int | None = None,
        *,
        settings: BridgeSettings | None = None,
    ) -> "EngineServer":
        """Spawn a server-mode engine and block until it accepts connections.

        Raises ``EngineStartupError`` if the port is already taken, or if the
        process dies or the port never opens within
        ``settings.startup_timeout``; the process is stopped before the error
        propagates.
        """

        resolved = settings or BridgeSettings.from_env()
        output_kind = OutputKind.coerce(kind)
        server_port = port if port is not None else resolved.server_port
        command = engine_command(output_kind, resolved, server_port=server_port)

        _ensure_port_free(resolved.server_host, server_port)

        logger.debug("Spawning engine server: %s", " ".join(command))
        process = subprocess.Popen(command, stdin=subprocess.DEVNULL)
        server = cls(process, kind=output_kind, port=server_port, host=resolved.server_host)

        try:
            server._wait_until_ready(resolved.startup_timeout)
        except BaseException:
            server.stop(wait=READINESS_POLL_SECONDS * 10)
            raise

        logger.info(
            "Engine server pid=%s listening on %s:%d (%s)", process.pid, server.host, server_port, output_kind.value
        )
        return server

    @property
    def kind(self) -> OutputKind:
        return self._kind

    @property
    def port(self) -> int:
        return self._port

    @property
    def host(self) -> str:
        return self._host

    @property
    def pid(self) -> int | None:
        process = self._process
        return process.pid if process is not None else None

    @property
    def is_running(self) -> bool:
        return self._process is not None

    def serves(self, kind: OutputKind | str) -> bool:
        """Return True when this server produces the output format *kind* needs."""

        return self.is_running and OutputKind.coerce(kind).switches == self._kind.switches

    def stop(self, wait: float | None = None) -> None:
        """Interrupt the engine and forget it.

        Returns immediately by default; the port is released once the JVM
        finishes shutting down.  Pass *wait* to block until the process exits,
        killing it if it is still alive after that many seconds.
        """

        with self._lock:
            process = self._process
            self._process = None
        if process is None:
            return

        logger.info("Stopping engine server pid=%s on port %d", process.pid, self._port)
        process.send_signal(signal.SIGINT)
        if wait is None:
            threading.Thread(target=process.wait, name=f"tikabridge-reap-{process.pid}", daemon=True).start()
            return

        try:
            process.wait(timeout=wait)
        except subprocess.TimeoutExpired:
            logger.warning("Engine server pid=%s ignored SIGINT for %.3gs; killing", process.pid, wait)
            process.kill()
            process.wait()

    def __enter__(self) -> "EngineServer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    def __repr__(self) -> str:
        state = f"pid={self.pid}" if self.is_running else "stopped"
        return f"EngineServer({self._kind.value}, {self._host}:{self._port}, {state})"

    def _wait_until_ready(self, timeout: float) -> None:
        process = self._process
        assert process is not None
        deadline = time.monotonic() + timeout

        while True:
            returncode = process.poll()
            if returncode is not None:
                raise EngineStartupError(self._port, f"Engine server exited with status {returncode} during startup")
            try:
                # an empty submission; the engine logs it as a failed parse
                with socket.create_connection((self._host, self._port), timeout=READINESS_POLL_SECONDS * 10):
                    pass
            except OSError:
                if time.monotonic() >= deadline:
                    raise EngineStartupError(
                        self._port, f"Engine server did not accept connections within {timeout:g}s"
                    ) from None
                time.sleep(READINESS_POLL_SECONDS)
                continue

            if process.poll() is not None:
                raise EngineStartupError(self._port, "Engine server exited right after the port opened")
            return
